"""Conector do relay — único ponto de IO outbound."""

from .http_client import HttpClientConfig, RelayHttpClient, create_relay_http_client

__all__ = [
    "HttpClientConfig",
    "RelayHttpClient",
    "create_relay_http_client",
]
