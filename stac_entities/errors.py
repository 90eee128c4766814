"""Structured error codes for stac-entities.

All errors follow the format STENT-{category}{number}:
- STENT-OBJ*: Entity construction errors
- STENT-AST*: Asset errors
- STENT-MIG*: Migration errors
- STENT-CFG*: Configuration errors
- STENT-CLI*: Command-line errors

Only construction-time problems are raised. Derived queries over missing or
malformed STAC fields return ``None`` or an empty list instead.
"""

from __future__ import annotations

from typing import Any


class StacEntityError(Exception):
    """Base class for all stac-entities errors.

    All errors have:
    - code: Structured error code (e.g., STENT-OBJ001)
    - message: Human-readable error message
    """

    code: str = "STENT-000"

    # Reserved attribute names that cannot be overwritten by context
    _RESERVED_ATTRS = frozenset({"code", "message", "context", "args"})

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize an error.

        Args:
            message: Human-readable error message.
            **context: Additional context stored as error attributes.
                Reserved keys (code, message, context, args) are ignored.
        """
        self.message = message
        self.context = context
        for key, value in context.items():
            if key not in self._RESERVED_ATTRS:
                setattr(self, key, value)
        super().__init__(f"[{self.code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """Convert error to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
        }


# Entity Errors (STENT-OBJ*)
class EntityError(StacEntityError):
    """Base class for entity construction errors."""

    code = "STENT-OBJ000"


class InvalidDataError(EntityError, TypeError):
    """Raised when an entity is constructed from something that is not a mapping.

    Error code: STENT-OBJ001
    """

    code = "STENT-OBJ001"

    def __init__(self, entity_type: str, data: Any) -> None:
        super().__init__(
            f"Cannot create {entity_type}: given data is not an object "
            f"(got {type(data).__name__})",
            entity_type=entity_type,
            data_type=type(data).__name__,
        )


# Asset Errors (STENT-AST*)
class InvalidAssetKeyError(EntityError, ValueError):
    """Raised when an asset is created without a usable key.

    Error code: STENT-AST001
    """

    code = "STENT-AST001"

    def __init__(self, key: Any) -> None:
        super().__init__(f"No valid asset key specified: {key!r}", key=key)


# Migration Errors (STENT-MIG*)
class MigrationError(StacEntityError):
    """Raised when a document cannot be migrated to the latest STAC version.

    Error code: STENT-MIG001
    """

    code = "STENT-MIG001"

    def __init__(self, reason: str) -> None:
        super().__init__(f"Cannot migrate STAC document: {reason}", reason=reason)


# Configuration Errors (STENT-CFG*)
class ConfigError(StacEntityError):
    """Raised when a configuration file cannot be read or is malformed.

    Error code: STENT-CFG001
    """

    code = "STENT-CFG001"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Invalid configuration in {path}: {reason}", path=path, reason=reason)


# CLI Errors (STENT-CLI*)
class DocumentLoadError(StacEntityError):
    """Raised when the CLI cannot read a STAC document from disk.

    Error code: STENT-CLI001
    """

    code = "STENT-CLI001"

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Cannot load STAC document from {path}: {reason}", path=path, reason=reason)
