"""Foundation layer: errors, logging and configuration shared by every module."""

from snippetrag.foundation.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    ErrorCode,
    SnippetRagError,
    backend_error,
    config_error,
)

__all__ = [
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "ErrorCode",
    "SnippetRagError",
    "backend_error",
    "config_error",
]
