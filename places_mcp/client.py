"""HTTP client for the Places API backend.

Wraps a single ``httpx.AsyncClient`` bound to the backend base URL. The
transport is either httpx's default or an x402 payment transport; the rest of
the server cannot tell the two apart except through the returned outcomes.

Calls never raise for transport, HTTP or decoding failures. Each call returns
one of three outcomes:

- ``Ok``: 2xx response with a JSON object body
- ``PaymentDemanded``: the backend answered 402 Payment Required
- ``Failure``: anything else, labelled with the exception class name
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

import httpx
from x402.http.clients import PaymentError

logger = logging.getLogger(__name__)

PAYMENT_REQUIRED_STATUS = 402


@dataclass(frozen=True)
class Ok:
    payload: dict[str, Any]


@dataclass(frozen=True)
class PaymentDemanded:
    message: str
    status_code: int = PAYMENT_REQUIRED_STATUS


@dataclass(frozen=True)
class Failure:
    kind: str
    message: str


Outcome = Union[Ok, PaymentDemanded, Failure]


def _describe(error: Exception, fallback: str) -> str:
    message = str(error).strip()
    return message or fallback


class RequestClient:
    """Backend client returning tagged outcomes instead of raising."""

    def __init__(
        self,
        base_url: str,
        timeout: httpx.Timeout,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Backend base URL every path is resolved against.
            timeout: Bound applied to every outbound call.
            transport: Optional payment-aware transport. When omitted httpx's
                default transport is used.
        """
        self.base_url = base_url
        self.payment_transport = transport is not None
        self._client = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            transport=transport,
        )

    async def get(self, path: str) -> Outcome:
        return await self._send("GET", path)

    async def post(self, path: str, json: dict[str, Any]) -> Outcome:
        return await self._send("POST", path, json=json)

    async def _send(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
    ) -> Outcome:
        logger.debug("%s %s%s", method, self.base_url, path)

        try:
            response = await self._client.request(method, path, json=json)
        except httpx.TimeoutException as e:
            logger.warning("%s %s timed out", method, path)
            return Failure(type(e).__name__, _describe(e, "Request timed out"))
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            return Failure(type(e).__name__, _describe(e, "Network error"))
        except PaymentError as e:
            logger.warning("Payment handling failed for %s %s: %s", method, path, e)
            return Failure(type(e).__name__, _describe(e, "Payment failed"))

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if response.status_code == PAYMENT_REQUIRED_STATUS:
                return PaymentDemanded(str(e))
            return Failure(type(e).__name__, str(e))

        try:
            payload = response.json()
        except ValueError as e:
            return Failure(type(e).__name__, _describe(e, "Invalid JSON response"))

        if not isinstance(payload, dict):
            return Failure(
                "MalformedResponse",
                f"Expected a JSON object from {path}, got {type(payload).__name__}",
            )

        return Ok(payload)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "RequestClient":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()
