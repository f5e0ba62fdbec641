"""
Shared plumbing for outbound peer-service calls.

Failures are classified into two families so callers can tell them apart:
- ``PeerTransportError``: no usable response came back (refused connection,
  DNS failure, timeout, undecodable body or a redirect loop);
- ``PeerResponseError``: the peer answered with a non-2xx status or a payload
  that does not match the expected shape.

Both collapse to ``ExternalService`` through ``to_service_error``; httpx
exceptions never leave this package.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

import httpx

from catalog.core.metrics import record_peer_call
from catalog.exceptions.service_error import ExternalService

logger = logging.getLogger("catalog.clients")

DEFAULT_CONNECT_TIMEOUT = 2.0
DEFAULT_READ_TIMEOUT = 5.0
JSON_MEDIA_TYPE = "application/json"


class PeerServiceError(Exception):
    """Base class for classified peer-call failures."""

    def __init__(self, service: str, operation: str, cause: str) -> None:
        super().__init__(f"{service} failed during {operation}: {cause}")
        self.service = service
        self.operation = operation
        self.cause = cause

    def to_service_error(self) -> ExternalService:
        return ExternalService(service=self.service, operation=self.operation, cause=self.cause)


class PeerTransportError(PeerServiceError):
    """The call failed before any response was received."""


class PeerResponseError(PeerServiceError):
    """The peer answered, but not with a usable 2xx response."""

    def __init__(
        self,
        service: str,
        operation: str,
        *,
        status_code: int,
        body: str,
        cause: str | None = None,
    ) -> None:
        super().__init__(service, operation, cause or f"Received status {status_code} - {body}")
        self.status_code = status_code
        self.body = body


async def _log_request(request: httpx.Request) -> None:
    logger.info("=> Req", extra={"http_method": request.method, "url": str(request.url)})


async def _log_response(response: httpx.Response) -> None:
    logger.info(
        "<= Res",
        extra={"status_code": response.status_code, "url": str(response.request.url)},
    )


def build_http_client(
    base_url: str,
    *,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: float = DEFAULT_READ_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an AsyncClient with bounded timeouts and request/response logging."""
    return httpx.AsyncClient(
        base_url=base_url,
        timeout=httpx.Timeout(read_timeout, connect=connect_timeout),
        headers={"Content-Type": JSON_MEDIA_TYPE, "Accept": JSON_MEDIA_TYPE},
        event_hooks={"request": [_log_request], "response": [_log_response]},
        transport=transport,
    )


class PeerClient:
    """Base class for a single peer service reached over HTTP."""

    service_name: ClassVar[str]

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http

    @property
    def base_url(self) -> str:
        return str(self._http.base_url)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _send(
        self,
        method: str,
        url: str,
        *,
        operation: str,
        **kwargs: Any,
    ) -> httpx.Response:
        """Perform the call; every httpx request error becomes a PeerTransportError."""
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.ConnectTimeout as exc:
            raise self._transport_failure(operation, "Connect timeout", exc) from exc
        except httpx.ReadTimeout as exc:
            raise self._transport_failure(operation, "Read timeout", exc) from exc
        except httpx.TimeoutException as exc:
            raise self._transport_failure(operation, "Timed out", exc) from exc
        except httpx.ConnectError as exc:
            raise self._transport_failure(
                operation, "Connection refused or network issue", exc
            ) from exc
        except httpx.TransportError as exc:
            raise self._transport_failure(operation, f"Request error: {exc}", exc) from exc
        except httpx.DecodingError as exc:
            raise self._transport_failure(
                operation, f"Undecodable response body: {exc}", exc
            ) from exc
        except httpx.RequestError as exc:
            raise self._transport_failure(operation, f"Request error: {exc}", exc) from exc

        record_peer_call(self.service_name, "success" if response.is_success else "http_error")
        return response

    def _raise_for_status(self, response: httpx.Response, operation: str) -> None:
        if response.is_success:
            return
        logger.warning(
            "Peer service returned an error status",
            extra={
                "peer": self.service_name,
                "operation": operation,
                "status_code": response.status_code,
            },
        )
        raise PeerResponseError(
            self.service_name,
            operation,
            status_code=response.status_code,
            body=response.text,
        )

    def _transport_failure(
        self,
        operation: str,
        cause: str,
        exc: Exception,
    ) -> PeerTransportError:
        record_peer_call(self.service_name, "transport_error")
        logger.warning(
            "Peer service call failed before a response",
            extra={
                "peer": self.service_name,
                "operation": operation,
                "cause": cause,
                "error_type": type(exc).__name__,
            },
        )
        return PeerTransportError(self.service_name, operation, cause)


__all__ = [
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
    "PeerClient",
    "PeerResponseError",
    "PeerServiceError",
    "PeerTransportError",
    "build_http_client",
]
