"""Process entry point for the GraphQL MCP gateway.

Configuration comes from the environment only. The process validates it,
builds the MCP server and hosts it on the configured transport until that
transport ends.
"""

import asyncio
import sys

from pydantic import ValidationError
from pydantic_settings import SettingsError

from infrastructure.logging import configure_logging
from infrastructure.mcp_dependencies import build_mcp_server
from infrastructure.observability import DefaultStartupProbe, StartupProbe
from infrastructure.settings import GatewaySettings, get_settings
from transport.domain.value_objects import TransportError
from transport.infrastructure.multiplexer import TransportMultiplexer


def check_deprecated_arguments(arguments: list[str], probe: StartupProbe) -> bool:
    """Warn when command-line arguments are passed; they are ignored.

    Returns:
        True if any arguments were present
    """
    if not arguments:
        return False
    probe.deprecated_arguments(arguments)
    return True


def load_settings(probe: StartupProbe) -> GatewaySettings | None:
    """Load settings, recording a validation failure instead of raising."""
    try:
        settings = get_settings()
    except (ValidationError, SettingsError) as e:
        probe.configuration_invalid(str(e))
        return None

    probe.configuration_loaded(
        name=settings.name,
        endpoint=settings.endpoint_url,
        transport=settings.transport.value,
        allow_mutations=settings.allow_mutations,
    )
    return settings


def run() -> None:
    configure_logging()
    probe = DefaultStartupProbe()

    check_deprecated_arguments(sys.argv[1:], probe)

    settings = load_settings(probe)
    if settings is None:
        sys.exit(1)

    mcp = build_mcp_server(settings)
    multiplexer = TransportMultiplexer(mcp, settings)
    try:
        asyncio.run(multiplexer.serve())
    except TransportError as e:
        probe.fatal_error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
