"""Error taxonomy shared by the registry, the validator and the HTTP layer."""

import json


class JsoncutMCPError(Exception):
    """Base error with a short caller-facing message."""

    def __init__(
        self,
        message: str,
        *,
        field: str | None = None,
        status_code: int | None = None,
        details: object | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.status_code = status_code
        self.details = details


class AuthenticationError(JsoncutMCPError):
    """No credential is available for a remote call."""


class MissingCredentialError(JsoncutMCPError):
    """A session was requested without a credential."""


class InvalidSessionError(JsoncutMCPError):
    """The session id is unknown or already terminated."""


class UnknownOperationError(JsoncutMCPError):
    """The tool name or resource URI is not registered."""


class InvalidArgumentError(JsoncutMCPError):
    """Tool arguments are missing or malformed."""


class TransportError(JsoncutMCPError):
    """The remote API could not be reached."""

    def __init__(self, message: str, *, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class RemoteValidationError(JsoncutMCPError):
    """The remote API answered with a failure."""


class SchemaLoadError(JsoncutMCPError):
    """A schema document is missing or not valid JSON."""


def format_error(error: JsoncutMCPError) -> str:
    """Render an error as caller-facing text."""
    text = f"Error: {error.message}"
    if error.field:
        text += f" (field: {error.field})"
    if error.status_code is not None:
        text += f" (status: {error.status_code})"
    if error.details is not None:
        text += f"\nDetails: {json.dumps(error.details, indent=2, default=str)}"
    return text
