"""HTTP client for the retrieval backend.

The backend exposes two endpoints:

    GET  /health   any 2xx with a JSON body means reachable
    POST /query    QueryRequest in, {"answers": [...]} out

Every call opens its own ``httpx.AsyncClient`` inside ``async with`` and runs
under a hard wall-clock deadline (``asyncio.timeout``). When the deadline
fires the request task is cancelled and the client context closes the
connection, so overlapping calls never share a timer or a connection.
"""

import asyncio
import json
import logging
import time
from dataclasses import dataclass, field

import httpx

from snippetrag.backend.types import QueryRequest, QueryResponse
from snippetrag.foundation.errors import ErrorCode, SnippetRagError, backend_error

logger = logging.getLogger(__name__)

QUERY_ENDPOINT = "/query"
HEALTH_ENDPOINT = "/health"

# Bodies are echoed into error messages; keep them readable
_MAX_ERROR_BODY = 2000


@dataclass(slots=True)
class QueryClient:
    """Client for one backend base URL.

    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    server_url: str = "http://localhost:8000"
    timeout_ms: int = 20000
    transport: httpx.AsyncBaseTransport | None = field(default=None, repr=False)
    log: logging.Logger = field(default=logger, repr=False)

    def _url(self, endpoint: str) -> str:
        return self.server_url.rstrip("/") + endpoint

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout_ms / 1000),
            transport=self.transport,
        )

    async def _send(
        self,
        method: str,
        endpoint: str,
        payload: dict | None = None,
    ) -> httpx.Response:
        """Send one request under the deadline, translating transport failures."""
        url = self._url(endpoint)
        try:
            async with asyncio.timeout(self.timeout_ms / 1000):
                async with self._client() as client:
                    response = await client.request(
                        method,
                        url,
                        json=payload,
                        headers={"Content-Type": "application/json"},
                    )
                    await response.aread()
                    return response
        except (TimeoutError, httpx.TimeoutException) as e:
            raise backend_error(
                ErrorCode.BACKEND_TIMEOUT, url, cause=e, timeout_ms=self.timeout_ms
            ) from e
        except (httpx.ConnectError, httpx.UnsupportedProtocol) as e:
            raise backend_error(ErrorCode.BACKEND_UNREACHABLE, url, cause=e) from e
        except httpx.TransportError as e:
            # Dropped connections mid-response: the backend is not usable either
            raise backend_error(ErrorCode.BACKEND_UNREACHABLE, url, cause=e) from e

    async def query(self, request: QueryRequest) -> QueryResponse:
        """Submit a query and parse the ranked answers.

        Raises:
            SnippetRagError: BACKEND_TIMEOUT, BACKEND_UNREACHABLE,
                BACKEND_ENDPOINT_MISSING (404), BACKEND_HTTP_ERROR (other
                non-2xx) or BACKEND_RESPONSE_INVALID (body is not JSON).
        """
        analysis = request.analysis
        url = self._url(QUERY_ENDPOINT)
        payload = request.to_dict()

        self.log.info(
            "query.send url=%s query=%r files=%d fingerprint=%s active_file=%s sampled=%d",
            url,
            request.query[:100] + ("..." if len(request.query) > 100 else ""),
            analysis.file_count,
            analysis.fingerprint[:8],
            request.editor.active_file or "none",
            analysis.sampled_count,
        )

        started = time.monotonic()
        try:
            response = await self._send("POST", QUERY_ENDPOINT, payload)
        except SnippetRagError as e:
            self.log.warning("query.failed code=%s detail=%s", e.error_id, e.message)
            raise
        elapsed_ms = int((time.monotonic() - started) * 1000)

        if not response.is_success:
            body = response.text[:_MAX_ERROR_BODY]
            self.log.warning(
                "query.http_error status=%d elapsed_ms=%d files=%d payload_bytes=%d body=%r",
                response.status_code,
                elapsed_ms,
                analysis.file_count,
                len(json.dumps(payload)),
                body[:200],
            )
            if response.status_code == 404:
                raise backend_error(
                    ErrorCode.BACKEND_ENDPOINT_MISSING,
                    url,
                    status=404,
                    body=body,
                    endpoint=QUERY_ENDPOINT,
                    file_count=analysis.file_count,
                )
            raise backend_error(
                ErrorCode.BACKEND_HTTP_ERROR,
                url,
                status=response.status_code,
                body=body,
                endpoint=QUERY_ENDPOINT,
            )

        try:
            data = response.json()
        except ValueError as e:
            self.log.warning("query.malformed_response status=%d error=%s", response.status_code, e)
            raise backend_error(
                ErrorCode.BACKEND_RESPONSE_INVALID,
                url,
                cause=e,
                status=response.status_code,
                body=response.text[:_MAX_ERROR_BODY],
                endpoint=QUERY_ENDPOINT,
                detail="response body is not valid JSON",
            ) from e

        result = QueryResponse.from_payload(data)
        self.log.info(
            "query.success status=%d answers=%d elapsed_ms=%d",
            response.status_code,
            len(result),
            elapsed_ms,
        )
        return result

    async def health_check(self) -> bool:
        """Return True when the backend answers /health with 2xx and JSON."""
        url = self._url(HEALTH_ENDPOINT)
        self.log.info("health.check url=%s", url)
        try:
            response = await self._send("GET", HEALTH_ENDPOINT)
        except SnippetRagError as e:
            self.log.warning("health.failed code=%s detail=%s", e.error_id, e.message)
            return False

        if not response.is_success:
            self.log.warning("health.failed status=%d", response.status_code)
            return False
        try:
            body = response.json()
        except ValueError as e:
            self.log.warning("health.failed status=%d error=unreadable-json %s", response.status_code, e)
            return False

        self.log.info("health.ok status=%d body=%s", response.status_code, json.dumps(body)[:200])
        return True


async def query(request: QueryRequest, server_url: str, timeout_ms: int) -> QueryResponse:
    """Submit ``request`` to ``server_url`` (see :meth:`QueryClient.query`)."""
    return await QueryClient(server_url=server_url, timeout_ms=timeout_ms).query(request)


async def health_check(server_url: str, timeout_ms: int) -> bool:
    """Probe ``server_url`` (see :meth:`QueryClient.health_check`)."""
    return await QueryClient(server_url=server_url, timeout_ms=timeout_ms).health_check()
