from __future__ import annotations

import logging

import httpx

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .pending import PendingRequest

logger = logging.getLogger(__name__)


class HttpClient:
    """Sends PendingRequests and classifies what comes back.

    A 2xx response is returned as is. Anything else raises: ``TransportError``
    when no response was obtained, otherwise the ``ApiError`` subclass picked
    by ``map_error``. Requests are sent exactly once.
    """

    def __init__(
        self,
        config: ClientConfig,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config
        self._client = client or httpx.AsyncClient(
            base_url=config.api_base_url,
            timeout=config.timeout_seconds,
            verify=config.verify_ssl,
        )

    async def send(self, pending: PendingRequest) -> httpx.Response:
        kwargs = {}
        if pending.body is not None:
            kwargs["json"] = pending.body
        try:
            response = await self._client.request(
                pending.method,
                pending.path,
                headers=pending.headers,
                **kwargs,
            )
        except httpx.RequestError as exc:
            logger.warning(
                "request_transport_error",
                extra={"action": pending.action.value, "error_type": type(exc).__name__},
            )
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc) or type(exc).__name__,
                status_code=None,
                details={"type": type(exc).__name__},
            ) from exc

        if response.is_success:
            return response

        raise map_error(response.status_code, response.reason_phrase, details=response.text[:200] or None)

    async def aclose(self) -> None:
        await self._client.aclose()
