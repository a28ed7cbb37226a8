"""Exception types raised by the Places MCP server."""


class PlacesMCPError(Exception):
    """Base class for Places MCP errors."""

    pass


class ConfigurationError(PlacesMCPError):
    """Raised when settings cannot be loaded or validated."""

    pass


class UnknownToolError(PlacesMCPError):
    """Raised when the host calls a tool that is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class MissingArgumentError(PlacesMCPError):
    """Raised when a required tool argument is absent or blank."""

    def __init__(self, argument: str):
        super().__init__(f"Missing required argument: {argument}")
        self.argument = argument


class InvalidArgumentError(PlacesMCPError):
    """Raised when a tool argument is present but out of bounds."""

    pass
