"""Tool-call router.

Routes each ``call_tool`` request to its handler, chooses the paid or demo
path for searches from the capability fixed at startup, and renders exactly
one response envelope per call. No failure inside a call escapes as an
exception: the host always gets an envelope and the process stays available.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from .capability import Capability
from .classify import classify
from .client import Ok
from .config import Settings
from .demo import demo_payload
from .errors import InvalidArgumentError, MissingArgumentError, UnknownToolError
from .formatting import ResponseEnvelope, envelope, format_missing_query, render
from .models import Demo, ErrorResult, OperationResult, Success
from .registry import (
    CHECK_HEALTH,
    GET_SERVICE_INFO,
    MAX_RADIUS_METERS,
    SEARCH_PLACES,
    get_tool,
)

logger = logging.getLogger(__name__)

SERVICE_INFO_PATH = "/.well-known/x402"
HEALTH_PATH = "/health"

# Values some hosts send when the model omitted the argument
BLANK_QUERY_VALUES = ("undefined", "null")


def normalize_query(value: Any) -> Optional[str]:
    """Return the stripped query, or None when it is missing or a placeholder."""
    if not isinstance(value, str):
        return None
    query = value.strip()
    if not query or query.lower() in BLANK_QUERY_VALUES:
        return None
    return query


def normalize_location(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def normalize_radius(value: Any) -> Optional[float]:
    """Validate the optional search radius.

    Raises:
        InvalidArgumentError: If the radius is not a number in [0, 50000]
    """
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidArgumentError(f"radius must be a number, got {type(value).__name__}")
    if not 0 <= value <= MAX_RADIUS_METERS:
        raise InvalidArgumentError(f"radius must be between 0 and {MAX_RADIUS_METERS} meters")
    return value


def build_search_body(query: str, location: Optional[str], radius: Optional[float]) -> dict[str, Any]:
    body: dict[str, Any] = {"query": query, "location": location, "radius": radius}
    return {key: value for key, value in body.items() if value is not None}


class Dispatcher:
    """Executes tool invocations against a fixed capability."""

    def __init__(self, capability: Capability, settings: Settings) -> None:
        self.capability = capability
        self.settings = settings

    @property
    def payment_enabled(self) -> bool:
        return self.capability.payment_enabled

    async def invoke(self, name: str, arguments: Optional[dict[str, Any]] = None) -> ResponseEnvelope:
        """Run one tool call and return its single response envelope.

        Args:
            name: Tool name from the host
            arguments: Tool arguments, possibly missing

        Returns:
            One-element list of text content
        """
        arguments = arguments if isinstance(arguments, dict) else {}
        logger.info("%s called with: %s", name, ", ".join(f"{k}={v!r}" for k, v in arguments.items()))

        try:
            get_tool(name)
            if name == SEARCH_PLACES:
                result = await self._search_places(arguments)
            elif name == GET_SERVICE_INFO:
                result = await self._fetch(GET_SERVICE_INFO, SERVICE_INFO_PATH)
            elif name == CHECK_HEALTH:
                result = await self._fetch(CHECK_HEALTH, HEALTH_PATH)
            else:
                raise UnknownToolError(name)
        except MissingArgumentError:
            logger.warning("%s called without a query", name)
            return envelope(format_missing_query())
        except (UnknownToolError, InvalidArgumentError) as e:
            logger.warning("Rejected call to %s: %s", name, e)
            result = ErrorResult(kind=type(e).__name__, message=str(e))
        except Exception as e:
            logger.exception("Unexpected failure in %s", name)
            result = ErrorResult(kind=type(e).__name__, message=str(e))

        logger.debug("%s -> %s", name, type(result).__name__)
        return render(result, self.settings, self.payment_enabled)

    async def _search_places(self, arguments: dict[str, Any]) -> OperationResult:
        query = normalize_query(arguments.get("query"))
        if query is None:
            raise MissingArgumentError("query")
        location = normalize_location(arguments.get("location"))

        # Demo results ignore radius, so only the paid path validates it
        if not self.payment_enabled:
            return Demo(payload=demo_payload(), arguments=arguments)

        radius = normalize_radius(arguments.get("radius"))

        logger.info("Making paid search for: %r", query)
        outcome = await self.capability.client.post(
            self.settings.endpoint_path,
            json=build_search_body(query, location, radius),
        )
        if isinstance(outcome, Ok):
            return Success(tool=SEARCH_PLACES, payload=outcome.payload, arguments=arguments)
        return classify(SEARCH_PLACES, outcome, self.payment_enabled)

    async def _fetch(self, tool: str, path: str) -> OperationResult:
        outcome = await self.capability.client.get(path)
        if isinstance(outcome, Ok):
            return Success(tool=tool, payload=outcome.payload)
        return classify(tool, outcome, self.payment_enabled)
