"""covbridge error types with typed error codes.

Error code ranges:
- 1xxx: Usage
- 2xxx: Config
- 3xxx: Input (gocov JSON)
- 4xxx: Source files
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Usage (1xxx)
    USAGE_INPUT_NOT_FOUND = 1001

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Input (3xxx)
    INPUT_INVALID_JSON = 3001
    INPUT_INVALID_SHAPE = 3002

    # Source (4xxx)
    SOURCE_UNREADABLE = 4001
    SOURCE_OFFSET_OUT_OF_RANGE = 4002

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True, slots=True)
class CovBridgeError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'SOURCE_UNREADABLE')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class UsageError(CovBridgeError):
    """Command-line usage errors."""

    @classmethod
    def input_not_found(cls, path: str) -> "UsageError":
        return cls(
            code=ErrorCode.USAGE_INPUT_NOT_FOUND,
            message=f"Cannot find file {path}",
            details={"path": path},
        )


class ConfigError(CovBridgeError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class InputFormatError(CovBridgeError):
    """The gocov document is not valid JSON or has the wrong shape."""

    @classmethod
    def invalid_json(cls, path: str, reason: str) -> "InputFormatError":
        return cls(
            code=ErrorCode.INPUT_INVALID_JSON,
            message=f"Failed to parse gocov JSON at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_shape(cls, where: str, reason: str) -> "InputFormatError":
        return cls(
            code=ErrorCode.INPUT_INVALID_SHAPE,
            message=f"Unexpected gocov structure at {where}: {reason}",
            details={"where": where, "reason": reason},
        )


class SourceFileError(CovBridgeError):
    """A source file referenced by the report cannot be read as text."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "SourceFileError":
        return cls(
            code=ErrorCode.SOURCE_UNREADABLE,
            message=f"Cannot read source file {path}: {reason}",
            details={"path": path, "reason": reason},
        )


class OffsetOutOfRangeError(CovBridgeError):
    """A byte offset falls outside the source file."""

    @classmethod
    def for_offset(cls, path: str, offset: int, size: int) -> "OffsetOutOfRangeError":
        return cls(
            code=ErrorCode.SOURCE_OFFSET_OUT_OF_RANGE,
            message=f"Offset {offset} is outside {path} (size {size} bytes)",
            details={"path": path, "offset": offset, "size": size},
        )


class InternalError(CovBridgeError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
