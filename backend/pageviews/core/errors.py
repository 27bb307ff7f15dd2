"""Error Hierarchy — typed, categorized exceptions for every page-view failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) carry a fixed human-readable message, surfaced verbatim
    - Storage errors (500-level) always expose the generic "Internal server error."
    - to_response() produces the REST envelope: {"error": <message>}

Design Decisions:
    - Single hierarchy with PageViewsError base: FastAPI global handler catches all (ADR: uniform error shape)
    - headers travel with the error so the handler can keep CORS headers on error responses
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    UNSUPPORTED_FEATURE = "unsupported_feature"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    CONFIGURATION = "configuration"


INTERNAL_ERROR_MESSAGE = "Internal server error."


class PageViewsError(Exception):
    """Base exception for all page-view service errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status
        self.headers = headers or {}

    @property
    def is_server_error(self) -> bool:
        return self.http_status >= 500

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message}


# ─── Client Errors (400-level) ──────────────────────────────────

class MissingPathError(PageViewsError):
    """Request targeted the root path instead of a page."""
    def __init__(self, headers: dict[str, str] | None = None):
        super().__init__(
            "Please include a path to a page.",
            "MISSING_PATH", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, 400, headers,
        )


class UnsupportedMethodError(PageViewsError):
    """Analytics endpoints only accept GET and POST."""
    def __init__(self, method: str, headers: dict[str, str] | None = None):
        super().__init__(
            "Please make a GET or a POST request.",
            "UNSUPPORTED_METHOD", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, 400, headers,
        )
        self.method = method


class LiveUpdatesUnsupportedError(PageViewsError):
    """Realtime requested but the storage adapter lacks the subscribe capability."""
    def __init__(self, headers: dict[str, str] | None = None):
        super().__init__(
            "The current database adapter does not support live updates.",
            "LIVE_UPDATES_UNSUPPORTED", ErrorCategory.UNSUPPORTED_FEATURE,
            ErrorSeverity.INFO, 400, headers,
        )


class PageNotFoundError(PageViewsError):
    """Adapter read for a page that has no recorded views."""
    def __init__(self, pathname: str):
        super().__init__(
            f"Page '{pathname}' not found",
            "PAGE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.WARNING, 404,
        )
        self.pathname = pathname


# ─── Server Errors (500-level) ──────────────────────────────────

class StorageError(PageViewsError):
    """Storage adapter operation failed. Never leaks the underlying cause."""
    def __init__(
        self, operation: str = "unknown", headers: dict[str, str] | None = None,
    ):
        super().__init__(
            INTERNAL_ERROR_MESSAGE,
            "STORAGE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, 500, headers,
        )
        self.operation = operation


class UnknownAdapterError(PageViewsError):
    """Configured adapter name has no implementation."""
    def __init__(self, name: str, available: list[str]):
        super().__init__(
            f"Unknown storage adapter '{name}' (available: {', '.join(available)})",
            "UNKNOWN_ADAPTER", ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, 500,
        )
        self.name = name
