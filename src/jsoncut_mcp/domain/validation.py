"""Validation result models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem reported by the remote validator."""

    message: str
    field: str | None = None


@dataclass(frozen=True)
class DetectedResource:
    """An external file referenced by the configuration."""

    type: str
    url: str
    size: float | None = None


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a remote validation call."""

    is_valid: bool
    estimated_tokens: float | None = None
    errors: list[ValidationIssue] = field(default_factory=list)
    detected_resources: list[DetectedResource] = field(default_factory=list)
