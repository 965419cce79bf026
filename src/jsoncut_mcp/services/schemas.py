"""Read-only store for the image and video JSON Schema documents."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

from jsoncut_mcp.domain.configs import Shape
from jsoncut_mcp.domain.errors import SchemaLoadError

SCHEMA_FILES = {
    Shape.IMAGE: "image-schema.json",
    Shape.VIDEO: "video-schema.json",
}

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SchemaStore:
    """Schema documents loaded once and shared by every session."""

    documents: Mapping[Shape, dict[str, object]]

    @classmethod
    def load(cls, schema_dir: Path) -> "SchemaStore":
        """Load both schema documents, failing if either is unusable."""
        documents: dict[Shape, dict[str, object]] = {}
        for shape, filename in SCHEMA_FILES.items():
            documents[shape] = _read_schema(schema_dir / filename)
        _logger.info("Loaded schema documents from %s", schema_dir)
        return cls(documents=MappingProxyType(documents))

    def get(self, shape: Shape) -> dict[str, object]:
        """Return the schema document for a shape."""
        return self.documents[shape]

    def to_json(self, shape: Shape) -> str:
        """Return the schema document as indented JSON text."""
        return json.dumps(self.get(shape), indent=2)


def _read_schema(path: Path) -> dict[str, object]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SchemaLoadError(f"Cannot read schema document {path}") from exc
    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SchemaLoadError(
            f"Schema document {path} is not valid JSON: {exc.msg}"
        ) from exc
    if not isinstance(document, dict):
        raise SchemaLoadError(f"Schema document {path} must be a JSON object")
    return document
