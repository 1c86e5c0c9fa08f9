"""Dependency injection for the Introspection bounded context."""

import httpx

from infrastructure.settings import GatewaySettings
from introspection.application.observability import (
    DefaultSchemaResolutionProbe,
    SchemaResolutionProbe,
)
from introspection.application.services import SchemaResolutionService
from introspection.infrastructure.schema_sources import (
    EndpointIntrospectionSource,
    LocalSchemaFileSource,
    RemoteSchemaDocumentSource,
)
from shared_kernel.graphql_endpoint import IGraphQLEndpoint


def get_schema_resolution_probe() -> SchemaResolutionProbe:
    """Get SchemaResolutionProbe instance.

    Returns:
        DefaultSchemaResolutionProbe instance for observability
    """
    return DefaultSchemaResolutionProbe()


def get_schema_resolution_service(
    settings: GatewaySettings,
    endpoint: IGraphQLEndpoint,
    http_transport: httpx.AsyncBaseTransport | None = None,
) -> SchemaResolutionService:
    """Build the schema resolution service from configuration.

    Args:
        settings: Validated gateway settings.
        endpoint: Endpoint used for live introspection.
        http_transport: Optional httpx transport for remote schema fetches.

    Returns:
        SchemaResolutionService wired with the sources SCHEMA calls for
    """
    file_source = None
    remote_source = None
    if settings.schema_source is not None:
        file_source = LocalSchemaFileSource(settings.schema_source)
        if settings.schema_is_remote:
            remote_source = RemoteSchemaDocumentSource(
                settings.schema_source, transport=http_transport
            )

    return SchemaResolutionService(
        introspection_source=EndpointIntrospectionSource(endpoint),
        file_source=file_source,
        remote_source=remote_source,
        probe=get_schema_resolution_probe(),
    )
