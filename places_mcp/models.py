"""Upstream payload models and per-call operation results.

The Places API is not under our control, so every upstream model is lenient:
all fields are optional, unknown keys are ignored and a field that fails
validation is replaced with ``None`` instead of rejecting the whole payload.
The formatter substitutes placeholders for the ``None`` values.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

Number = Union[int, float]

M = TypeVar("M", bound="LenientModel")


class LenientModel(BaseModel):
    """Base model that degrades invalid fields to ``None``."""

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        coerce_numbers_to_str=True,
    )

    @field_validator("*", mode="wrap")
    @classmethod
    def default_invalid_fields(cls, value, handler):
        try:
            return handler(value)
        except ValidationError:
            return None


def _only_objects(value: Any) -> Any:
    if isinstance(value, list):
        return [item for item in value if isinstance(item, dict)]
    return value


# ============================================================================
# Search
# ============================================================================


class OpeningHours(LenientModel):
    open_now: Optional[bool] = None


class Place(LenientModel):
    """A single place returned by the text-search endpoint."""

    name: Optional[str] = None
    formatted_address: Optional[str] = None
    rating: Optional[Number] = None
    price_level: Optional[int] = None
    types: Optional[list[str]] = None
    formatted_phone_number: Optional[str] = None
    business_status: Optional[str] = None
    opening_hours: Optional[OpeningHours] = None


class SearchMetadata(LenientModel):
    """Payment metadata the paid endpoint attaches to its results."""

    cost: Optional[str] = None
    protocol: Optional[str] = None
    payment_method: Optional[str] = None
    network: Optional[str] = None


class SearchResponse(LenientModel):
    results: Optional[list[Place]] = None
    metadata: Optional[SearchMetadata] = None

    @field_validator("results", mode="before")
    @classmethod
    def drop_non_object_results(cls, value):
        return _only_objects(value)


# ============================================================================
# Service description (/.well-known/x402)
# ============================================================================


class ServicePayment(LenientModel):
    protocol: Optional[str] = None
    price: Optional[str] = None
    network: Optional[str] = None
    gasless: Optional[bool] = None


class ServiceEndpoint(LenientModel):
    path: Optional[str] = None
    method: Optional[str] = None
    description: Optional[str] = None
    payment_required: Optional[bool] = None


class ServiceInfo(LenientModel):
    service: Optional[str] = None
    description: Optional[str] = None
    version: Optional[str] = None
    x402_compliance: Optional[Union[bool, str]] = None
    payment: Optional[ServicePayment] = None
    endpoints: Optional[list[ServiceEndpoint]] = None

    @field_validator("endpoints", mode="before")
    @classmethod
    def drop_non_object_endpoints(cls, value):
        return _only_objects(value)


# ============================================================================
# Health (/health)
# ============================================================================


class HealthPayment(LenientModel):
    protocol: Optional[str] = None
    network: Optional[str] = None
    facilitator: Optional[str] = None
    gasless: Optional[bool] = None


class HealthStatus(LenientModel):
    status: Optional[str] = None
    service: Optional[str] = None
    version: Optional[str] = None
    deployment: Optional[str] = None
    uptime: Optional[Number] = None
    payment: Optional[HealthPayment] = None
    features: Optional[dict[str, bool]] = None


def parse(model: type[M], payload: Any) -> M:
    """Validate an upstream payload without ever raising.

    A payload that is not a JSON object yields an empty model.
    """
    if not isinstance(payload, dict):
        return model()
    try:
        return model.model_validate(payload)
    except ValidationError:
        return model()


# ============================================================================
# Operation results
# ============================================================================


@dataclass(frozen=True)
class Success:
    """A backend call that returned a usable payload."""

    tool: str
    payload: dict[str, Any]
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Demo:
    """Canned search results served while payment is disabled."""

    payload: dict[str, Any]
    arguments: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PaymentRequired:
    """The backend demanded payment and this process cannot pay."""

    tool: str
    message: str = ""


@dataclass(frozen=True)
class ErrorResult:
    """Any other failure, labelled with a stable kind."""

    kind: str
    message: str


OperationResult = Union[Success, Demo, PaymentRequired, ErrorResult]
