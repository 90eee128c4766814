"""JSON envelope for machine-readable CLI output.

With ``--format json`` every command prints exactly one envelope:

    {
        "success": true|false,
        "command": "inspect",
        "data": { ... },
        "errors": [ ... ]  # Only present when success=false
    }

Datetimes in the payload are serialized as ISO 8601 strings with ``Z``.

Usage:
    from stac_entities.json_output import success_envelope, error_envelope, ErrorDetail

    print(success_envelope("rank", {"ranking": [...]}).to_json())

    errors = [ErrorDetail.from_exception(err)]
    print(error_envelope("inspect", errors).to_json())
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
    if hasattr(value, "to_dict"):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


@dataclass
class ErrorDetail:
    """A single entry of the errors array.

    Attributes:
        type: Error class name (e.g., "DocumentLoadError")
        message: Human-readable error description
        code: Structured error code for stac-entities errors (e.g., "STENT-CLI001")
    """

    type: str
    message: str
    code: str | None = None

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary, the code is only included if known."""
        result = {"type": self.type, "message": self.message}
        if self.code is not None:
            result["code"] = self.code
        return result

    @classmethod
    def from_exception(cls, err: Exception) -> ErrorDetail:
        """Create an ErrorDetail from an exception, keeping its error code."""
        return cls(
            type=type(err).__name__,
            message=getattr(err, "message", str(err)),
            code=getattr(err, "code", None),
        )


@dataclass
class OutputEnvelope:
    """Wrapper around the JSON output of a command.

    Attributes:
        success: True if the command completed without errors
        command: Name of the command (e.g., "inspect", "rank")
        data: Command-specific payload
        errors: Errors, only set when success=False
    """

    success: bool
    command: str
    data: dict[str, Any] | None
    errors: list[ErrorDetail] | None = field(default=None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, without the errors key on success."""
        result: dict[str, Any] = {
            "success": self.success,
            "command": self.command,
            "data": self.data,
        }
        if self.errors is not None:
            result["errors"] = [e.to_dict() for e in self.errors]
        return result

    def to_json(self, *, indent: int | None = 2) -> str:
        """Serialize the envelope.

        Args:
            indent: Indentation for pretty printing, None for compact output.

        Returns:
            JSON string.
        """
        return json.dumps(self.to_dict(), indent=indent, default=_json_default)


def success_envelope(command: str, data: dict[str, Any]) -> OutputEnvelope:
    """Create an envelope for a successful command."""
    return OutputEnvelope(success=True, command=command, data=data)


def error_envelope(
    command: str,
    errors: list[ErrorDetail],
    *,
    data: dict[str, Any] | None = None,
) -> OutputEnvelope:
    """Create an envelope for a failed command.

    Args:
        command: Name of the command
        errors: The errors that occurred
        data: Optional partial data (default: empty dict)

    Returns:
        OutputEnvelope with success=False
    """
    return OutputEnvelope(
        success=False,
        command=command,
        data=data if data is not None else {},
        errors=errors,
    )
