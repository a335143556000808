"""Base exception classes for gofr-dotenv.

Every error carries structured information:
- code: Machine-readable error identifier
- message: Human-readable error description
- details: Additional context (file path, line number, variable name)
"""

from typing import Any, Dict, Optional


class DotenvError(Exception):
    """Base exception for all gofr-dotenv errors.

    Attributes:
        code: Machine-readable error code (e.g., "MALFORMED_LINE")
        message: Human-readable error message
        details: Optional additional context for debugging
    """

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.code}: {self.message} (details: {self.details})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization.

        Returns:
            Dictionary with code, message, and details keys.
        """
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(DotenvError):
    """Raised when loader settings are invalid or incomplete."""

    pass


# =============================================================================
# Parse errors
# =============================================================================


def _location(line: int, path: Optional[str]) -> str:
    if path:
        return f'in "{path}" at line {line}'
    return f"at line {line}"


class ParseError(DotenvError):
    """Base for errors raised while tokenizing a dotenv document.

    Attributes:
        line: 1-based line number where the problem was found
        path: Source file, when the text came from disk
    """

    def __init__(
        self,
        code: str,
        message: str,
        line: int,
        path: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.line = line
        self.path = path
        context: Dict[str, Any] = {"line": line}
        if path:
            context["path"] = path
        context.update(details or {})
        super().__init__(code=code, message=message, details=context)


class MalformedLineError(ParseError):
    """A non-blank, non-comment line is not a valid ``[export ]KEY=VALUE``."""

    def __init__(self, line: int, reason: str = "Invalid line", path: Optional[str] = None):
        self.reason = reason
        super().__init__(
            code="MALFORMED_LINE",
            message=f"{reason} {_location(line, path)}",
            line=line,
            path=path,
            details={"reason": reason},
        )


class UnterminatedQuoteError(ParseError):
    """A quoted value reached end of input without its closing quote."""

    def __init__(self, line: int, path: Optional[str] = None):
        super().__init__(
            code="UNTERMINATED_QUOTE",
            message=f"Missing quote to end the value {_location(line, path)}",
            line=line,
            path=path,
        )


# =============================================================================
# Load errors
# =============================================================================


class LoadError(DotenvError):
    """Base for errors raised while merging files from disk.

    Attributes:
        path: The file that could not be loaded
    """

    def __init__(
        self, code: str, message: str, path: str, details: Optional[Dict[str, Any]] = None
    ):
        self.path = path
        context: Dict[str, Any] = {"path": path}
        context.update(details or {})
        super().__init__(code=code, message=message, details=context)


class FileReadError(LoadError):
    """The file exists but could not be read (permissions, I/O, encoding)."""

    def __init__(self, path: str, cause: BaseException):
        self.cause = cause
        super().__init__(
            code="FILE_READ_ERROR",
            message=f'Unable to read the "{path}" environment file',
            path=path,
            details={"cause": str(cause)},
        )


class FileParseError(LoadError):
    """The file was read but its contents failed to parse."""

    def __init__(self, path: str, error: ParseError):
        self.error = error
        self.line = error.line
        super().__init__(
            code="FILE_PARSE_ERROR",
            message=error.message,
            path=path,
            details={"line": error.line, "error": error.code},
        )


# =============================================================================
# Apply errors
# =============================================================================


class ApplyError(DotenvError):
    """The platform refused to set an environment variable."""

    def __init__(self, key: str, cause: BaseException):
        self.key = key
        self.cause = cause
        super().__init__(
            code="APPLY_ERROR",
            message=f'Unable to set the "{key}" environment variable',
            details={"key": key, "cause": str(cause)},
        )
