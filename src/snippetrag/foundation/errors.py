"""SnippetRAG Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints the caller can show as next steps
- Context for debugging (durations, status codes, response bodies)
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Workspace errors
        5xxx - Configuration errors
        7xxx - Backend/network errors
        8xxx - Backend HTTP errors
    """

    # 1xxx - Workspace Errors
    WORKSPACE_NOT_FOUND = 1001

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5002

    # 7xxx - Backend/Network Errors
    BACKEND_UNREACHABLE = 7001
    BACKEND_TIMEOUT = 7002

    # 8xxx - Backend HTTP Errors
    BACKEND_HTTP_ERROR = 8001
    BACKEND_ENDPOINT_MISSING = 8002
    BACKEND_RESPONSE_INVALID = 8003

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "workspace",
            5: "config",
            7: "network",
            8: "http",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether the system stays usable for the next query after this error."""
        return self is not ErrorCode.CONFIG_INVALID


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.WORKSPACE_NOT_FOUND: "No project folder is open. Open a folder to analyze.",
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",
    ErrorCode.BACKEND_UNREACHABLE: (
        "Cannot connect to backend at {url}. Make sure the backend is running."
    ),
    ErrorCode.BACKEND_TIMEOUT: "Request timeout after {timeout_ms}ms ({url}).",
    ErrorCode.BACKEND_HTTP_ERROR: "HTTP {status}: {body}",
    ErrorCode.BACKEND_ENDPOINT_MISSING: (
        "HTTP 404: Backend endpoint {endpoint} not found. The endpoint needs to be "
        "implemented in the backend. Context collected: {file_count} files."
    ),
    ErrorCode.BACKEND_RESPONSE_INVALID: "Invalid response from backend: {detail}",
}


# Recovery hints shown as next steps
RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.WORKSPACE_NOT_FOUND: [
        "Pass a project directory with --root",
        "Run the command from inside the project folder",
    ],
    ErrorCode.CONFIG_INVALID: [
        "Fix '{key}' in .snippetrag/config.yaml",
        "Unset the SNIPPETRAG_* environment variable overriding '{key}'",
    ],
    ErrorCode.BACKEND_UNREACHABLE: [
        "Ensure your backend is running (e.g. 'docker compose up')",
        "Test the connection with 'snippetrag health'",
        "Check backend.server_url in settings (currently {url})",
    ],
    ErrorCode.BACKEND_TIMEOUT: [
        "Check your network connection",
        "Increase backend.request_timeout_ms (currently {timeout_ms})",
        "Rebuild the analysis with 'snippetrag analyze --rebuild' to shrink stale context",
    ],
    ErrorCode.BACKEND_HTTP_ERROR: [
        "Check the backend logs for HTTP {status}",
        "Test the connection with 'snippetrag health'",
    ],
    ErrorCode.BACKEND_ENDPOINT_MISSING: [
        "Implement the {endpoint} endpoint in the backend",
        "Check backend.server_url points at the retrieval service ({url})",
    ],
    ErrorCode.BACKEND_RESPONSE_INVALID: [
        "Check the backend returns JSON from {endpoint}",
    ],
}


_HTTP_CODES = frozenset({
    ErrorCode.BACKEND_HTTP_ERROR,
    ErrorCode.BACKEND_ENDPOINT_MISSING,
    ErrorCode.BACKEND_RESPONSE_INVALID,
})


class SnippetRagError(Exception):
    """Base error type for all SnippetRAG errors.

    Example:
        >>> err = SnippetRagError(
        ...     code=ErrorCode.BACKEND_TIMEOUT,
        ...     context={"timeout_ms": 20000, "url": "http://localhost:8000/query"},
        ... )
        >>> print(err)
        [SR-7002] Request timeout after 20000ms (http://localhost:8000/query).
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        return self.code.is_recoverable

    @property
    def is_http_error(self) -> bool:
        """Whether the backend answered, but not with a usable result."""
        return self.code in _HTTP_CODES

    @property
    def category(self) -> str:
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'SR-7002')."""
        return f"SR-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"SnippetRagError(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging and --json output."""
        data: dict[str, Any] = {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }
        if self.cause is not None:
            data["cause"] = repr(self.cause)
        return data


# Convenience factory functions

def backend_error(
    code: ErrorCode,
    url: str,
    cause: Exception | None = None,
    **extra: Any,
) -> SnippetRagError:
    """Create a backend-related error."""
    return SnippetRagError(code=code, context={"url": url, **extra}, cause=cause)


def config_error(key: str, detail: str = "") -> SnippetRagError:
    """Create a CONFIG_INVALID error."""
    return SnippetRagError(
        code=ErrorCode.CONFIG_INVALID,
        context={"key": key, "detail": detail},
    )
