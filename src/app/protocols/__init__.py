"""Protocolos e contratos do core da aplicação."""

from .relay import RelayResponse, RelaySenderProtocol, RelayTransportError

__all__ = [
    "RelayResponse",
    "RelaySenderProtocol",
    "RelayTransportError",
]
