"""Default transport: httpx.AsyncClient with retry on 429/5xx and network errors."""

import asyncio
import logging
from typing import Any

import httpx

from ledger_search.core.config import Config, config
from ledger_search.errors import RequestConstructionError, TransportExecutionError
from ledger_search.transport.interface import TransportMetadata

logger = logging.getLogger(__name__)

RETRY_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
_ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})


def _metadata(response: httpx.Response) -> TransportMetadata:
    return TransportMetadata(
        status_code=response.status_code,
        headers=dict(response.headers),
    )


def _body_preview(response: httpx.Response, limit: int = 300) -> str:
    body = response.content.decode("utf-8", errors="replace") if response.content else ""
    return body[:limit]


class HttpxTransport:
    """Talks to the search API over HTTP. Owns retry and timeout policy."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        *,
        api_key_header: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        retry_backoff: float | None = None,
        client: httpx.AsyncClient | None = None,
        settings: Config | None = None,
    ):
        cfg = settings or config
        self.base_url = (base_url or cfg.base_url).rstrip("/") + "/"
        self.api_key = (api_key if api_key is not None else cfg.api_key).strip()
        self.api_key_header = api_key_header or cfg.api_key_header
        self.max_retries = cfg.max_retries if max_retries is None else max_retries
        self.retry_backoff = cfg.retry_backoff if retry_backoff is None else retry_backoff
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else cfg.timeout,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        if self.api_key:
            headers[self.api_key_header] = self.api_key
        return headers

    def build_request(self, path: str, method: str, body: dict[str, Any]) -> httpx.Request:
        method = method.upper()
        if method not in _ALLOWED_METHODS:
            raise RequestConstructionError(f"unsupported HTTP method: {method}")
        if not path or path.startswith(("/", "http://", "https://")):
            raise RequestConstructionError(f"path must be relative to the base URL: {path!r}")
        try:
            return self.client.build_request(
                method,
                httpx.URL(self.base_url).join(path),
                json=body,
                headers=self._headers(),
            )
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestConstructionError(f"could not build request for {path!r}: {e}") from e

    def _should_retry(self, e: Exception) -> bool:
        if isinstance(e, httpx.HTTPStatusError):
            return e.response.status_code in RETRY_STATUS_CODES
        return isinstance(e, httpx.TransportError)

    async def execute(self, request: httpx.Request) -> tuple[bytes, TransportMetadata]:
        attempt = 0
        while True:
            try:
                response = await self.client.send(request)
                response.raise_for_status()
                return response.content, _metadata(response)
            except httpx.HTTPError as e:
                if attempt >= self.max_retries or not self._should_retry(e):
                    raise self._to_error(request, e) from e
                delay = self.retry_backoff * (2**attempt)
                attempt += 1
                logger.debug(
                    "Search %s %s failed (%s), retry %d/%d in %.2fs",
                    request.method,
                    request.url.path,
                    e,
                    attempt,
                    self.max_retries,
                    delay,
                )
                await asyncio.sleep(delay)

    def _to_error(self, request: httpx.Request, e: httpx.HTTPError) -> TransportExecutionError:
        if isinstance(e, httpx.HTTPStatusError):
            body = _body_preview(e.response)
            logger.debug(
                "Search %s %s returned %d: %s",
                request.method,
                request.url.path,
                e.response.status_code,
                body,
            )
            message = f"{request.method} {request.url.path} returned {e.response.status_code}"
            if body:
                message = f"{message}: {body}"
            return TransportExecutionError(message, metadata=_metadata(e.response))
        logger.debug("Search %s %s failed: %s", request.method, request.url.path, e)
        return TransportExecutionError(f"{request.method} {request.url.path} failed: {e}")

    async def close(self) -> None:
        if self._owns_client:
            await self.client.aclose()
