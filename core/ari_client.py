import logging
from typing import Any, Dict, Optional

import httpx

from config.settings import AriSettings, Settings
from core.errors import TransportError


logger = logging.getLogger(__name__)


class AriClient:
    """
    Thin async wrapper around the Asterisk ARI HTTP endpoints.

    One call is one round trip: the body (if any) is sent as JSON and the
    decoded JSON response is returned. Every failure surfaces as a
    TransportError; nothing is retried here.
    """

    def __init__(
        self,
        settings: AriSettings,
        timeout: float = 10.0,
        max_connections: int = 100,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = settings.base_url.rstrip("/")
        self.auth = (settings.username, settings.password)
        limits = httpx.Limits(
            max_connections=max_connections,
            max_keepalive_connections=max_connections,
        )
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=self.auth,
            headers={"Accept": "application/json"},
            timeout=timeout,
            limits=limits,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None
    ) -> "AriClient":
        return cls(
            settings.ari,
            timeout=settings.timeouts.ari_timeout,
            max_connections=settings.timeouts.http_max_connections,
            transport=transport,
        )

    async def close(self) -> None:
        await self.client.aclose()

    async def __aenter__(self) -> "AriClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        logger.debug("ARI %s %s json=%s", method, path, json)
        extra: Dict[str, Any] = {}
        if timeout is not None:
            extra["timeout"] = timeout
        try:
            response = await self.client.request(
                method=method,
                url=path,
                json=json,
                **extra,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("ARI %s %s returned %s", method, path, status)
            raise TransportError(
                method,
                path,
                f"HTTP {status}",
                status_code=status,
                body=exc.response.text,
            ) from exc
        except httpx.RequestError as exc:
            logger.warning("ARI %s %s request error: %s", method, path, exc)
            raise TransportError(method, path, str(exc) or type(exc).__name__) from exc

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(
                method,
                path,
                "invalid JSON in response body",
                status_code=response.status_code,
                body=response.text,
            ) from exc

    async def get(self, path: str, timeout: Optional[float] = None) -> Any:
        return await self._request("GET", path, timeout=timeout)

    async def post(
        self,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Any:
        return await self._request("POST", path, json=json, timeout=timeout)

    async def delete(self, path: str, timeout: Optional[float] = None) -> Any:
        return await self._request("DELETE", path, timeout=timeout)
