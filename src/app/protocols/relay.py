"""Protocolos de encaminhamento ao relay.

Evita dependência direta da camada api.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class RelayResponse:
    """Resposta do relay, já lida por completo."""

    status_code: int
    body: bytes = b""

    @property
    def is_success(self) -> bool:
        """True quando o status está em [200, 300)."""
        return 200 <= self.status_code < 300


class RelayTransportError(Exception):
    """Falha de transporte ao falar com o relay (sem resposta HTTP)."""


class RelaySenderProtocol(Protocol):
    """Contrato mínimo para encaminhar o body bruto ao relay.

    Raises:
        RelayTransportError: Se não houver resposta HTTP do relay.
    """

    async def forward(self, raw_body: bytes) -> RelayResponse: ...
