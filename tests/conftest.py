"""Shared test fixtures for the Places MCP server."""

from types import SimpleNamespace
from typing import Any

import httpx
import pytest
import respx

from places_mcp.capability import Capability, probe
from places_mcp.config import Settings
from places_mcp.dispatcher import Dispatcher

BASE_URL = "http://places.test"
SEARCH_PATH = "/api/places/text-search"

# Hardhat account #0, never funded on a real network
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def fake_identity(credential: str) -> Any:
    """Stand-in for wallet derivation that never touches key material."""
    return SimpleNamespace(address="0xabc")


def plain_transport(identity: Any, network: str) -> httpx.AsyncBaseTransport:
    """Stand-in payment transport; respx intercepts it like the default one."""
    return httpx.AsyncHTTPTransport()


def text_of(envelope) -> str:
    """Return the text of a single-block response envelope."""
    assert len(envelope) == 1
    assert envelope[0].type == "text"
    return envelope[0].text


@pytest.fixture
def demo_settings() -> Settings:
    """Settings without a private key."""
    return Settings(resource_server_url=BASE_URL, endpoint_path=SEARCH_PATH)


@pytest.fixture
def paid_settings() -> Settings:
    """Settings with a (fake) private key."""
    return Settings(
        private_key="0xdeadbeef",
        resource_server_url=BASE_URL,
        endpoint_path=SEARCH_PATH,
        request_timeout=2.0,
    )


@pytest.fixture
def demo_capability(demo_settings: Settings) -> Capability:
    return probe(demo_settings)


@pytest.fixture
def paid_capability(paid_settings: Settings) -> Capability:
    capability = probe(paid_settings, derive=fake_identity, wrap=plain_transport)
    assert capability.payment_enabled
    return capability


@pytest.fixture
def demo_dispatcher(demo_capability: Capability, demo_settings: Settings) -> Dispatcher:
    return Dispatcher(demo_capability, demo_settings)


@pytest.fixture
def paid_dispatcher(paid_capability: Capability, paid_settings: Settings) -> Dispatcher:
    return Dispatcher(paid_capability, paid_settings)


@pytest.fixture
def respx_mock():
    """Create respx mock for httpx requests."""
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def search_payload() -> dict[str, Any]:
    return {
        "results": [
            {"name": "X", "formatted_address": "Y", "rating": 4.5},
        ],
    }


@pytest.fixture
def service_info_payload() -> dict[str, Any]:
    return {
        "service": "Places API",
        "description": "Google Places text search behind x402",
        "version": "2.1.0",
        "x402_compliance": True,
        "payment": {
            "protocol": "x402",
            "price": "$0.01",
            "network": "base",
            "gasless": True,
        },
        "endpoints": [
            {
                "path": "/api/places/text-search",
                "method": "POST",
                "description": "Text search",
                "payment_required": True,
            },
            {
                "path": "/health",
                "method": "GET",
                "description": "Health check",
                "payment_required": False,
            },
        ],
    }


@pytest.fixture
def health_payload() -> dict[str, Any]:
    return {
        "status": "healthy",
        "service": "places-api",
        "version": "2.1.0",
        "deployment": "production",
        "uptime": 3600.6,
        "payment": {
            "protocol": "x402",
            "network": "base",
            "facilitator": "https://x402.org/facilitator",
            "gasless": True,
        },
        "features": {"text_search": True, "place_details": False},
    }
