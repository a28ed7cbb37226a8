"""Classification of failed backend calls."""

from __future__ import annotations

from .client import Failure, Outcome, PaymentDemanded
from .models import ErrorResult, PaymentRequired

PAYMENT_REQUIRED_MARKERS = ("402", "Payment Required")


def is_payment_required(outcome: Outcome, payment_enabled: bool) -> bool:
    """Check whether a failed call should be answered with setup guidance.

    A 402 is only special while this process cannot pay. When payment is
    enabled the payment transport was expected to settle it, so a surviving
    402 is reported as an ordinary error.

    Args:
        outcome: Non-``Ok`` outcome returned by the request client
        payment_enabled: Process-wide capability state

    Returns:
        True if the guidance template should be used
    """
    if payment_enabled:
        return False
    if isinstance(outcome, PaymentDemanded):
        return True
    if isinstance(outcome, Failure):
        return any(marker in outcome.message for marker in PAYMENT_REQUIRED_MARKERS)
    return False


def classify(tool: str, outcome: Outcome, payment_enabled: bool) -> PaymentRequired | ErrorResult:
    """Turn a failed call into an operation result."""
    if is_payment_required(outcome, payment_enabled):
        return PaymentRequired(tool=tool, message=outcome.message)
    if isinstance(outcome, PaymentDemanded):
        return ErrorResult(kind="HTTPStatusError", message=outcome.message)
    if isinstance(outcome, Failure):
        return ErrorResult(kind=outcome.kind, message=outcome.message)
    return ErrorResult(kind="UnexpectedOutcome", message=repr(outcome))
