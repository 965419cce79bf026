"""Session multiplexer for the Streamable HTTP transport.

Each MCP session owns a registry bound to the credential presented when the
session was created. Sessions are kept in a mapping keyed by session id;
later requests are routed by that id alone.
"""

import json
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from datetime import UTC, datetime
from http import HTTPStatus
from uuid import uuid4

import anyio
from anyio.abc import TaskGroup, TaskStatus
from mcp.server.lowlevel import Server
from mcp.server.streamable_http import (
    MCP_SESSION_ID_HEADER,
    StreamableHTTPServerTransport,
)
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import Message, Receive, Scope, Send

from jsoncut_mcp.api.mcp_server import build_mcp_server
from jsoncut_mcp.config import parse_api_key
from jsoncut_mcp.domain.errors import (
    InvalidArgumentError,
    InvalidSessionError,
    JsoncutMCPError,
    MissingCredentialError,
)
from jsoncut_mcp.services.registry import ToolRegistry

API_KEY_HEADER = "x-api-key"

_logger = logging.getLogger(__name__)

RegistryFactory = Callable[[str], ToolRegistry]
ServerFactory = Callable[[ToolRegistry], Server]


@dataclass
class SessionRecord:
    """One live MCP session and the resources it owns."""

    session_id: str
    api_key: str
    registry: ToolRegistry
    transport: StreamableHTTPServerTransport
    created_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))
    active: bool = True


class SessionMultiplexer:
    """ASGI app that routes MCP requests to per-session servers."""

    def __init__(
        self,
        registry_factory: RegistryFactory,
        server_factory: ServerFactory = build_mcp_server,
        *,
        json_response: bool = False,
    ) -> None:
        self.registry_factory = registry_factory
        self.server_factory = server_factory
        self.json_response = json_response
        self.sessions: dict[str, SessionRecord] = {}
        self._task_group: TaskGroup | None = None

    @asynccontextmanager
    async def run(self) -> AsyncIterator[None]:
        """Own the task group that runs session servers."""
        async with anyio.create_task_group() as task_group:
            self._task_group = task_group
            try:
                yield
            finally:
                task_group.cancel_scope.cancel()
                self._task_group = None
                for record in self.sessions.values():
                    record.active = False
                self.sessions.clear()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request = Request(scope, receive)
        session_id = request.headers.get(MCP_SESSION_ID_HEADER)
        try:
            if request.method == "POST":
                await self._handle_post(request, session_id, scope, receive, send)
                return
            record = self.get_session(session_id)
            _logger.debug("MCP %s request - Session: %s", request.method, session_id)
            await record.transport.handle_request(scope, receive, send)
            if request.method == "DELETE" and record.transport.is_terminated:
                self._discard(record.session_id, reason="terminated by client")
        except MissingCredentialError as exc:
            await _rejection(HTTPStatus.UNAUTHORIZED, exc)(scope, receive, send)
        except InvalidSessionError as exc:
            _logger.info("Rejected %s: %s", request.method, exc.message)
            await _rejection(HTTPStatus.NOT_FOUND, exc)(scope, receive, send)
        except InvalidArgumentError as exc:
            await _rejection(HTTPStatus.BAD_REQUEST, exc)(scope, receive, send)

    async def open_session(self, api_key: str | None) -> SessionRecord:
        """Create a session bound to a credential and start its server."""
        resolved_key = parse_api_key(api_key)
        if resolved_key is None:
            raise MissingCredentialError("Missing X-API-Key header")
        if self._task_group is None:
            raise RuntimeError("SessionMultiplexer.run() is not active")

        session_id = uuid4().hex
        record = SessionRecord(
            session_id=session_id,
            api_key=resolved_key,
            registry=self.registry_factory(resolved_key),
            transport=StreamableHTTPServerTransport(
                mcp_session_id=session_id,
                is_json_response_enabled=self.json_response,
            ),
        )
        self.sessions[session_id] = record
        await self._task_group.start(self._serve_session, record)
        _logger.info("Created session %s", session_id)
        return record

    def get_session(self, session_id: str | None) -> SessionRecord:
        """Return a live session or raise InvalidSessionError."""
        if not session_id:
            raise InvalidSessionError("No valid session ID provided")
        record = self.sessions.get(session_id)
        if record is None or not record.active:
            raise InvalidSessionError(f"Session not found: {session_id}")
        return record

    async def close_session(self, session_id: str) -> None:
        """Terminate a session's transport and drop its record."""
        record = self.get_session(session_id)
        self._discard(session_id, reason="closed by server")
        await record.transport.terminate()

    async def _handle_post(
        self,
        request: Request,
        session_id: str | None,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        api_key = request.headers.get(API_KEY_HEADER)
        _logger.info(
            "MCP POST request - Session: %s, API Key: %s",
            session_id or "new",
            "[provided]" if api_key else "[missing]",
        )
        if session_id:
            record = self.get_session(session_id)
            await record.transport.handle_request(scope, receive, send)
            return

        body = await request.body()
        if not _is_initialize_request(body):
            raise InvalidArgumentError(
                "Bad Request: No valid session ID provided "
                "or not an initialize request"
            )
        record = await self.open_session(api_key)
        recorder = _StatusRecorder(send)
        await record.transport.handle_request(scope, _replay(body, receive), recorder)
        if not recorder.is_success:
            _logger.info(
                "Initialize for session %s rejected with status %s",
                record.session_id,
                recorder.status,
            )
            self._discard(record.session_id, reason="handshake rejected")
            await record.transport.terminate()

    async def _serve_session(
        self,
        record: SessionRecord,
        *,
        task_status: TaskStatus[None] = anyio.TASK_STATUS_IGNORED,
    ) -> None:
        server = self.server_factory(record.registry)
        try:
            async with record.transport.connect() as (read_stream, write_stream):
                task_status.started()
                await server.run(
                    read_stream,
                    write_stream,
                    server.create_initialization_options(),
                    stateless=False,
                )
        except Exception:
            _logger.exception("Session %s server crashed", record.session_id)
        finally:
            self._discard(record.session_id, reason="transport closed")

    def _discard(self, session_id: str, *, reason: str) -> None:
        record = self.sessions.pop(session_id, None)
        if record is None:
            return
        record.active = False
        _logger.info("Session %s closed (%s)", session_id, reason)


def _is_initialize_request(body: bytes) -> bool:
    try:
        payload = json.loads(body)
    except ValueError:
        return False
    return isinstance(payload, dict) and payload.get("method") == "initialize"


def _replay(body: bytes, receive: Receive) -> Receive:
    """Return a receive callable that yields an already-read body first."""
    delivered = False

    async def replay() -> Message:
        nonlocal delivered
        if not delivered:
            delivered = True
            return {"type": "http.request", "body": body, "more_body": False}
        return await receive()

    return replay


class _StatusRecorder:
    """Send wrapper that remembers the response status."""

    def __init__(self, send: Send) -> None:
        self._send = send
        self.status: int | None = None

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message["status"]
        await self._send(message)

    @property
    def is_success(self) -> bool:
        return self.status is not None and 200 <= self.status < 300  # noqa: PLR2004


def _rejection(status: HTTPStatus, error: JsoncutMCPError) -> JSONResponse:
    """Build a JSON-RPC error response for a connection-level rejection."""
    return JSONResponse(
        {
            "jsonrpc": "2.0",
            "error": {"code": -32000, "message": error.message},
            "id": None,
        },
        status_code=status,
    )
