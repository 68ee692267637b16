"""Provider Client Base — pooled httpx client with upstream error mapping.

Invariants:
    - HTTP status >= 400 -> UpstreamError(upstream_status=<status>), 502
    - Timeout -> UpstreamError, 504; other transport errors -> UpstreamError, 502
    - Non-JSON or non-object bodies -> UpstreamError, 502
    - No retries: a failed call surfaces to the caller once
"""

import logging
from typing import Any

import httpx

from shuttle.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class ProviderClient:
    """Shared request/response handling for collaborator clients."""

    provider = "provider"

    def __init__(
        self,
        base_url: str,
        timeout_seconds: float = 30.0,
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.error(
                f"{self.provider} timeout on {method} {path}: {e}",
                extra={"provider": self.provider},
            )
            raise UpstreamError(self.provider, "request timed out", http_status=504)
        except httpx.HTTPError as e:
            logger.error(
                f"{self.provider} transport error on {method} {path}: {e}",
                extra={"provider": self.provider},
            )
            raise UpstreamError(self.provider, f"connection failed: {e}")

        if response.status_code >= 400:
            message = self._error_message(response)
            logger.error(
                f"{self.provider} returned {response.status_code}: {message}",
                extra={"provider": self.provider, "upstream_status": response.status_code},
            )
            raise UpstreamError(self.provider, message, upstream_status=response.status_code)

        try:
            body = response.json()
        except ValueError:
            raise UpstreamError(
                self.provider, "malformed response body",
                upstream_status=response.status_code,
            )
        if not isinstance(body, dict):
            raise UpstreamError(
                self.provider, "unexpected response shape",
                upstream_status=response.status_code,
            )
        logger.info(
            f"{self.provider} {method} {path} ok",
            extra={"provider": self.provider, "upstream_status": response.status_code},
        )
        return body

    def _error_message(self, response: httpx.Response) -> str:
        """Best-effort message from an error body; subclasses know the shape."""
        try:
            body = response.json()
        except ValueError:
            return response.text[:200] or response.reason_phrase
        if isinstance(body, dict):
            message = body.get("message")
            if isinstance(message, str) and message:
                return message
        return response.reason_phrase or f"HTTP {response.status_code}"
