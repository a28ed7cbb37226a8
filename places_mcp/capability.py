"""Startup probe deciding whether this process can pay for requests.

The decision is made exactly once. ``probe`` returns a frozen ``Capability``
holding both the flag and the request client built to match it, so the two can
never disagree.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Optional

import httpx
from eth_account import Account
from x402 import x402Client
from x402.http.clients import x402_httpx_transport
from x402.mechanisms.evm import EthAccountSigner
from x402.mechanisms.evm.exact import register_exact_evm_client

from .client import RequestClient
from .config import Settings

if TYPE_CHECKING:
    from eth_account.signers.local import LocalAccount

logger = logging.getLogger(__name__)

PLACEHOLDER_MARKER = "<private key"

DeriveIdentity = Callable[[str], Any]
WrapTransport = Callable[[Any, str], httpx.AsyncBaseTransport]


def is_placeholder_credential(value: Optional[str]) -> bool:
    """Check whether a credential is missing or still the template placeholder."""
    if value is None or value.strip() == "":
        return True
    return PLACEHOLDER_MARKER in value.lower()


def derive_identity(credential: str) -> "LocalAccount":
    """Derive the wallet account from a hex private key."""
    return Account.from_key(credential.strip())


def wrap_transport(identity: "LocalAccount", network: str) -> httpx.AsyncBaseTransport:
    """Build an httpx transport that settles 402 responses with x402 payments.

    Args:
        identity: eth_account account used to sign payment authorizations
        network: CAIP-2 network the exact EVM scheme is registered for

    Returns:
        Payment-aware async transport
    """
    client = x402Client()
    register_exact_evm_client(client, EthAccountSigner(identity), networks=network)
    return x402_httpx_transport(client)


@dataclass(frozen=True)
class Capability:
    """Process-wide payment capability, fixed at startup."""

    payment_enabled: bool
    client: RequestClient
    address: Optional[str] = None
    failure: Optional[str] = None


def _timeout(settings: Settings) -> httpx.Timeout:
    return httpx.Timeout(settings.request_timeout, connect=settings.connect_timeout)


def probe(
    settings: Settings,
    derive: DeriveIdentity = derive_identity,
    wrap: WrapTransport = wrap_transport,
) -> Capability:
    """Decide payment capability and build the matching request client.

    Args:
        settings: Server settings carrying the credential and backend address
        derive: Credential -> identity collaborator
        wrap: Identity -> payment transport collaborator

    Returns:
        Capability with the flag and the client set together
    """
    base_url = settings.resource_server_url
    timeout = _timeout(settings)

    if is_placeholder_credential(settings.private_key):
        logger.warning("Running in demo mode - no private key provided")
        return Capability(
            payment_enabled=False,
            client=RequestClient(base_url, timeout),
        )

    try:
        identity = derive(settings.private_key)
        transport = wrap(identity, settings.network)
    except Exception as e:
        # Never log the credential itself, only the failure type
        failure = f"{type(e).__name__}: {e}"
        logger.error("Failed to initialize payment client (%s); running in demo mode", type(e).__name__)
        return Capability(
            payment_enabled=False,
            client=RequestClient(base_url, timeout),
            failure=failure,
        )

    address = getattr(identity, "address", None)
    logger.info("X402 payment client initialized with wallet %s", address)
    return Capability(
        payment_enabled=True,
        client=RequestClient(base_url, timeout, transport=transport),
        address=address,
    )
