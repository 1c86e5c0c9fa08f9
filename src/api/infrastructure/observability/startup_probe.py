"""Domain probe for gateway startup events.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events during process initialization.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from infrastructure.observability.context import ObservationContext


class StartupProbe(Protocol):
    """Domain probe for gateway startup operations."""

    def configuration_loaded(
        self, name: str, endpoint: str, transport: str, allow_mutations: bool
    ) -> None:
        """Record that configuration was validated."""
        ...

    def configuration_invalid(self, error: str) -> None:
        """Record that configuration failed validation."""
        ...

    def deprecated_arguments(self, arguments: list[str]) -> None:
        """Record that command-line arguments were passed."""
        ...

    def fatal_error(self, error: str) -> None:
        """Record an error that terminates the process."""
        ...

    def with_context(self, context: ObservationContext) -> StartupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStartupProbe:
    """Default implementation of StartupProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultStartupProbe:
        """Create a new probe with observation context bound."""
        return DefaultStartupProbe(logger=self._logger, context=context)

    def configuration_loaded(
        self, name: str, endpoint: str, transport: str, allow_mutations: bool
    ) -> None:
        """Record that configuration was validated."""
        self._logger.info(
            "configuration_loaded",
            name=name,
            endpoint=endpoint,
            transport=transport,
            allow_mutations=allow_mutations,
            **self._get_context_kwargs(),
        )

    def configuration_invalid(self, error: str) -> None:
        """Record that configuration failed validation."""
        self._logger.error(
            "configuration_invalid",
            error=error,
            **self._get_context_kwargs(),
        )

    def deprecated_arguments(self, arguments: list[str]) -> None:
        """Record that command-line arguments were passed."""
        self._logger.warning(
            "command_line_arguments_deprecated",
            arguments=arguments,
            hint=(
                "Configure the server with environment variables instead: "
                "NAME, ENDPOINT, ALLOW_MUTATIONS, HEADERS, SCHEMA, TRANSPORT, PORT"
            ),
            **self._get_context_kwargs(),
        )

    def fatal_error(self, error: str) -> None:
        """Record an error that terminates the process."""
        self._logger.error(
            "fatal_error",
            error=error,
            **self._get_context_kwargs(),
        )
