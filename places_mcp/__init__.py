"""MCP server for the Places API with automatic x402 micropayments.

Exposes ``search_places``, ``get_service_info`` and ``check_health`` to an MCP
host over stdio. When a wallet private key is configured, searches are paid for
automatically through the x402 protocol; otherwise searches return demo data.

Quick Start:
    ```bash
    PRIVATE_KEY=0x... x402-places-mcp
    ```
"""

__version__ = "1.0.0"

from .capability import Capability, probe
from .config import Settings
from .dispatcher import Dispatcher
from .errors import (
    ConfigurationError,
    InvalidArgumentError,
    MissingArgumentError,
    PlacesMCPError,
    UnknownToolError,
)
from .registry import TOOLS, ToolDescriptor, list_tools

__all__ = [
    "__version__",
    # Core
    "Capability",
    "Dispatcher",
    "Settings",
    "probe",
    # Tools
    "TOOLS",
    "ToolDescriptor",
    "list_tools",
    # Errors
    "ConfigurationError",
    "InvalidArgumentError",
    "MissingArgumentError",
    "PlacesMCPError",
    "UnknownToolError",
]
