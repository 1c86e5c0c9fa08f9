"""HTTP access to the upstream GraphQL endpoint.

Shared by the Introspection context (live schema introspection) and the
Query context (query execution). Every request yields a tagged
``UpstreamResult`` so each caller decides how to surface failures.
"""

from shared_kernel.graphql_endpoint.client import HttpGraphQLEndpoint
from shared_kernel.graphql_endpoint.ports import IGraphQLEndpoint
from shared_kernel.graphql_endpoint.value_objects import (
    UpstreamGraphQLErrors,
    UpstreamHttpError,
    UpstreamNetworkFailure,
    UpstreamOk,
    UpstreamResult,
)

__all__ = [
    "HttpGraphQLEndpoint",
    "IGraphQLEndpoint",
    "UpstreamGraphQLErrors",
    "UpstreamHttpError",
    "UpstreamNetworkFailure",
    "UpstreamOk",
    "UpstreamResult",
]
