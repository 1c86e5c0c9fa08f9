"""Shared Kernel module.

Components both GraphQL contexts depend on:

- ``graphql_endpoint``: the upstream endpoint port, its httpx client and
  the tagged ``UpstreamResult`` it returns
- ``tool_result``: the ``{isError, content}`` envelope every tool yields

Nothing here imports a bounded context.
"""
