"""Retrieval backend contract and client."""

from snippetrag.backend.client import (
    HEALTH_ENDPOINT,
    QUERY_ENDPOINT,
    QueryClient,
    health_check,
    query,
)
from snippetrag.backend.types import Answer, QueryRequest, QueryResponse

__all__ = [
    "HEALTH_ENDPOINT",
    "QUERY_ENDPOINT",
    "Answer",
    "QueryClient",
    "QueryRequest",
    "QueryResponse",
    "health_check",
    "query",
]
