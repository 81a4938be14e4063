"""
Timezone-related exceptions.
"""

from typing import Any, Dict, Optional


class TimeZoneError(Exception):
    """Base error for timezone operations."""

    def __init__(self, message: str, code: str = "TIMEZONE_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ParseError(TimeZoneError, ValueError):
    """Raised when timestamp, date or time text cannot be parsed."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="PARSE_ERROR", details=details)


class FormatTokenError(TimeZoneError, ValueError):
    """Raised when a display format token is not one of DisplayFormat."""

    def __init__(self, token: Any):
        super().__init__(
            f"Unknown display format token: {token!r}",
            code="FORMAT_ERROR",
            details={"token": token},
        )
        self.token = token
