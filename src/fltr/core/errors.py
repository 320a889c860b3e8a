"""Structured error handling for FLTR."""

import sys
from typing import Any, NoReturn

from fltr.models.error import ErrorCode, StructuredError


class FltrError(Exception):
    """Base exception for FLTR errors.

    Wraps a StructuredError for consistent error handling.
    """

    def __init__(
        self,
        code: str,
        message: str,
        remediation: str,
        retryable: bool = False,
        context: dict[str, Any] | None = None,
    ):
        self.error = StructuredError(
            code=code,
            message=message,
            remediation=remediation,
            retryable=retryable,
            context=context,
        )
        super().__init__(message)

    def to_structured(self) -> StructuredError:
        """Convert to StructuredError."""
        return self.error

    def to_structured_error(self) -> dict:
        """Convert to JSON-serializable dict for output."""
        return self.error.model_dump(mode="json", exclude_none=True)


class EventNotFoundError(FltrError):
    """Event id not present in the store."""

    def __init__(self, event_id: int):
        super().__init__(
            code=ErrorCode.EVENT_NOT_FOUND,
            message=f"Event #{event_id} not found",
            remediation="Check the event id against the current timeline",
            retryable=False,
            context={"event_id": event_id},
        )


class ParseError(FltrError):
    """Parse error."""

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(
            code=ErrorCode.PARSE_ERROR,
            message=message,
            remediation="Check the file for corruption or unsupported encoding",
            retryable=False,
            context={"file_name": file_name} if file_name else None,
        )


class IngestionError(FltrError):
    """Reading or digesting an input file failed."""

    def __init__(self, message: str, file_name: str | None = None):
        super().__init__(
            code=ErrorCode.IO_ERROR,
            message=message,
            remediation="Check file permissions and path accessibility",
            retryable=True,
            context={"file_name": file_name} if file_name else None,
        )


class ValidationError(FltrError):
    """Validation error."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(
            code=ErrorCode.VALIDATION_ERROR,
            message=message,
            remediation="Check the input parameters and try again",
            retryable=False,
            context={"field": field} if field else None,
        )


class ConfigFileError(FltrError):
    """Filter preset or bootstrap file could not be loaded."""

    def __init__(self, path: str, errors: list[str]):
        super().__init__(
            code=ErrorCode.INVALID_FORMAT,
            message=f"Invalid configuration file: {path}",
            remediation="Check the file against the documented preset or event layout",
            retryable=False,
            context={"path": path, "errors": errors},
        )


def handle_error(error: FltrError | Exception, exit_code: int = 1) -> NoReturn:
    """Handle an error by outputting it and exiting.

    Args:
        error: The error to handle
        exit_code: Exit code to use
    """
    from fltr.cli.output import output_error

    if isinstance(error, FltrError):
        output_error(error.to_structured())
    else:
        structured = StructuredError(
            code=ErrorCode.INTERNAL_ERROR,
            message=str(error),
            remediation="This is an unexpected error. Please report it.",
            retryable=False,
            context={"type": type(error).__name__},
        )
        output_error(structured)

    sys.exit(exit_code)
