"""Text templates for every tool response.

All functions are pure and never raise: upstream payloads go through the
lenient models first, and every ``None`` is rendered as a fixed placeholder.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from mcp import types

from .config import Settings
from .demo import DEMO_LOCATION
from .models import (
    Demo,
    ErrorResult,
    HealthStatus,
    OperationResult,
    PaymentRequired,
    Place,
    SearchMetadata,
    SearchResponse,
    ServiceInfo,
    Success,
    parse,
)
from .registry import CHECK_HEALTH, GET_SERVICE_INFO

ResponseEnvelope = list[types.TextContent]

MAX_PLACES = 8
MAX_TYPES = 3
MAX_PRICE_LEVEL = 4

NOT_AVAILABLE = "Not available"

DEFAULT_COST = "$0.01"
DEFAULT_PROTOCOL = "x402 v1.0"
DEFAULT_PAYMENT_METHOD = "gasless_micropayment"
DEFAULT_NETWORK = "base"

SETUP_STEPS = """1. **Add your private key** to Claude Desktop config:
   ```json
   {{
     "mcpServers": {{
       "places-x402": {{
         "env": {{
           "PRIVATE_KEY": "{key_hint}"
         }}
       }}
     }}
   }}
   ```

2. **Ensure you have USDC** on Base network
3. **Restart Claude Desktop** to enable payments"""


def envelope(text: str) -> ResponseEnvelope:
    """Wrap text in the single content block returned to the host."""
    return [types.TextContent(type="text", text=text)]


# ============================================================================
# Field helpers
# ============================================================================


def _text(value: Any, placeholder: str = NOT_AVAILABLE) -> str:
    if value is None:
        return placeholder
    text = str(value).strip()
    return text or placeholder


def _rating(rating: Any) -> str:
    if not rating:
        return "Not rated"
    return f"{rating}/5.0"


def _price_level(level: Optional[int]) -> str:
    if not level or level < 0 or level > MAX_PRICE_LEVEL:
        return "Not specified"
    return "$" * level


def _place_types(place_types: Optional[list[str]]) -> str:
    if not place_types:
        return "General"
    return ", ".join(place_types[:MAX_TYPES])


def _open_now(place: Place) -> str:
    if place.opening_hours is None or place.opening_hours.open_now is None:
        return "Unknown"
    return "Open" if place.opening_hours.open_now else "Closed"


def _seconds(value: Any) -> int:
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return round(value)


def _yes_no(flag: Optional[bool], yes: str, no: str) -> str:
    return yes if flag else no


def format_place(index: int, place: Place) -> str:
    return f"""
**{index}. {_text(place.name, "Unnamed place")}**
- 📍 **Address**: {_text(place.formatted_address)}
- ⭐ **Rating**: {_rating(place.rating)}
- 💰 **Price Level**: {_price_level(place.price_level)}
- 🏷️ **Type**: {_place_types(place.types)}
- 📞 **Phone**: {_text(place.formatted_phone_number)}
- 🌐 **Status**: {_text(place.business_status, "Unknown")}
- 🕒 **Currently**: {_open_now(place)}
"""


def format_places(places: list[Place]) -> str:
    return "\n".join(format_place(i + 1, place) for i, place in enumerate(places[:MAX_PLACES]))


# ============================================================================
# Search templates
# ============================================================================


def format_search_results(
    query: str,
    location: Optional[str],
    response: SearchResponse,
) -> str:
    places = response.results or []
    metadata = response.metadata or SearchMetadata()
    listing = format_places(places) or "No places found matching your criteria."

    return f"""# 🗺️ Places Search Results

**Query**: "{query}"
**Location**: {_text(location, "Not specified")}
**Results Found**: {len(places)}

## 🎯 Places Found:

{listing}

---

## 💳 Payment Information
- **Cost**: {_text(metadata.cost, DEFAULT_COST)} paid automatically
- **Protocol**: {_text(metadata.protocol, DEFAULT_PROTOCOL)}
- **Payment Method**: {_text(metadata.payment_method, DEFAULT_PAYMENT_METHOD)}
- **Network**: {_text(metadata.network, DEFAULT_NETWORK)}
- **Transaction**: ✅ Payment processed successfully

*Real Google Places data retrieved with x402 micropayment*"""


def format_demo_results(
    query: str,
    location: Optional[str],
    response: SearchResponse,
) -> str:
    places = response.results or []

    return f"""# ☕ Demo: Places Search Results

**Query**: "{query}"
**Location**: {_text(location, DEMO_LOCATION)}
**Demo Results**: {len(places)} sample places

## 🎯 Sample Places (Demo Data):

{format_places(places)}

---

## 💳 Payment Required for Real Data
🔒 **This is demo mode** - To get real Google Places data:

{SETUP_STEPS.format(key_hint="0xYourWalletPrivateKeyWithUSDC")}

**Cost**: {DEFAULT_COST} USDC per search (gasless transaction)
**Network**: Base mainnet
**Payment Method**: x402 micropayments via EIP-712 signatures

*Demo shows the format of real results you'll receive after payment setup.*"""


def format_missing_query() -> str:
    return """# ❌ Missing Search Query

**Error**: No search query provided.

**What happened**: The search tool was called without a query parameter.

**How to fix**:
1. Make sure to include what you're searching for in your request
2. Try asking something like: "Find coffee shops in downtown Portland"
3. Be specific about what type of places you want to find

**Example queries**:
- "Find restaurants near me"
- "Search for gas stations in San Francisco"
- "Look for hotels in downtown Seattle"

Please try again with a specific search query."""


# ============================================================================
# Failure templates
# ============================================================================


def format_payment_required() -> str:
    return f"""# 💳 Payment Required

The API requires a {DEFAULT_COST} USDC payment for this request.

## 🔧 Setup Real Payments

To enable automatic payments and get real Google Places data:

{SETUP_STEPS.format(key_hint="0xYourActualPrivateKeyWithUSDC")}

## 💰 Payment Details
- **Cost**: {DEFAULT_COST} USDC per search
- **Network**: Base mainnet
- **Method**: Gasless EIP-712 signatures
- **Security**: Your private key stays local, facilitator pays gas

## 🎬 Demo Mode Active
Currently showing sample data. Enable payments for real Google Places results."""


def format_error(kind: str, message: str, base_url: str) -> str:
    return f"""# ❌ Error

**Error Type**: {_text(kind, "Unknown")}
**Message**: {_text(message, "No details available")}

## 🔧 Troubleshooting
- Check your internet connection
- Verify the API service is running: {base_url}/health
- Ensure your wallet has sufficient USDC balance (if payments enabled)
- Try restarting Claude Desktop

## 📞 Support
- **Production API**: {base_url}
- **Service Status**: {base_url}/health"""


# ============================================================================
# Service description and health templates
# ============================================================================


def format_service_info(info: ServiceInfo, settings: Settings, payment_enabled: bool) -> str:
    payment = info.payment
    endpoints = "\n".join(
        f"""
- **{_text(endpoint.path)}** ({_text(endpoint.method)})
  - Description: {_text(endpoint.description)}
  - Payment Required: {_yes_no(endpoint.payment_required, "Yes", "No")}
"""
        for endpoint in info.endpoints or []
    )

    text = f"""# 🔍 X402 Service Information

## 📋 Service Details
- **Service**: {_text(info.service)}
- **Description**: {_text(info.description)}
- **Version**: {_text(info.version)}
- **X402 Compliance**: {_text(info.x402_compliance)}

## 💰 Payment Configuration
- **Protocol**: {_text(payment.protocol if payment else None)}
- **Price**: {_text(payment.price if payment else None)}
- **Network**: {_text(payment.network if payment else None)}
- **Gasless**: {_yes_no(payment and payment.gasless, "Yes - Facilitator pays gas fees", "No")}

## 🛠️ Available Endpoints
{endpoints or "No endpoints listed"}

## 🔧 Current MCP Configuration
- **Payment Enabled**: {_yes_no(payment_enabled, "✅ Yes", "❌ No (demo mode)")}
- **Base URL**: {settings.resource_server_url}
- **Endpoint**: {settings.endpoint_path}
- **Client Type**: {_yes_no(payment_enabled, "httpx with x402 payment transport", "Standard httpx (demo)")}"""

    if not payment_enabled:
        text += """

## ⚠️ Setup Required
To enable real payments, add your private key to the Claude Desktop configuration and restart."""
    return text


def format_health(health: HealthStatus, base_url: str, payment_enabled: bool) -> str:
    payment = health.payment
    features = "\n".join(
        f"- **{name.replace('_', ' ')}**: {_yes_no(enabled, '✅ Enabled', '❌ Disabled')}"
        for name, enabled in (health.features or {}).items()
    )
    verdict = (
        "🎉 **All systems operational!**"
        if health.status == "healthy"
        else "⚠️ **Service issues detected**"
    )

    return f"""# 💗 Places API Health Status

## 🔧 Service Status
- **Status**: {_text(health.status, "Unknown")}
- **Service**: {_text(health.service)}
- **Version**: {_text(health.version)}
- **Deployment**: {_text(health.deployment)}
- **Uptime**: {_seconds(health.uptime)} seconds

## ⚡ Payment System
- **Protocol**: {_text(payment.protocol if payment else None)}
- **Network**: {_text(payment.network if payment else None)}
- **Facilitator**: {_text(payment.facilitator if payment else None)}
- **Gasless**: {_yes_no(payment and payment.gasless, "Enabled", "Disabled")}

## 🌟 Features
{features or "No features reported"}

## 🔗 Connectivity
- **API URL**: {base_url}
- **MCP Integration**: ✅ Working
- **Payment Client**: {_yes_no(payment_enabled, "✅ Configured", "⚠️ Demo Mode")}

{verdict}"""


# ============================================================================
# Result dispatch
# ============================================================================


def _search_arguments(arguments: dict[str, Any]) -> tuple[str, Optional[str]]:
    query = arguments.get("query")
    location = arguments.get("location")
    return (
        query if isinstance(query, str) else "",
        location if isinstance(location, str) else None,
    )


def render(result: OperationResult, settings: Settings, payment_enabled: bool) -> ResponseEnvelope:
    """Render an operation result into the response envelope."""
    base_url = settings.resource_server_url

    if isinstance(result, Demo):
        query, location = _search_arguments(result.arguments)
        return envelope(format_demo_results(query, location, parse(SearchResponse, result.payload)))

    if isinstance(result, Success):
        if result.tool == GET_SERVICE_INFO:
            info = parse(ServiceInfo, result.payload)
            return envelope(format_service_info(info, settings, payment_enabled))
        if result.tool == CHECK_HEALTH:
            health = parse(HealthStatus, result.payload)
            return envelope(format_health(health, base_url, payment_enabled))
        query, location = _search_arguments(result.arguments)
        return envelope(
            format_search_results(query, location, parse(SearchResponse, result.payload))
        )

    if isinstance(result, PaymentRequired):
        return envelope(format_payment_required())

    if isinstance(result, ErrorResult):
        return envelope(format_error(result.kind, result.message, base_url))

    return envelope(format_error("UnexpectedResult", repr(result), base_url))
