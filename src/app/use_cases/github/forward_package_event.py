"""Use case de filtro e encaminhamento de eventos de pacote.

Recebe um evento já autenticado e decodificado e decide, uma única vez,
entre descartar (categoria diferente de CONTAINER) e encaminhar o body
bruto ao relay. O resultado é um ForwardOutcome com o status HTTP final.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from app.constants.github import ACCEPTED_PACKAGE_TYPE
from app.observability import record_latency
from app.protocols.relay import RelayTransportError

if TYPE_CHECKING:
    from app.protocols.relay import RelaySenderProtocol

logger = logging.getLogger(__name__)


class FilterDecision(StrEnum):
    """Desfecho de uma entrega autenticada."""

    FORWARDED = "forwarded"
    FILTERED = "filtered"
    RELAY_ERROR = "relay_error"


@dataclass(frozen=True, slots=True)
class ForwardOutcome:
    """Resultado do use case, pronto para virar resposta HTTP."""

    decision: FilterDecision
    status_code: int
    message: str
    package_type: str
    relay_status_code: int | None = None


class ForwardPackageEventUseCase:
    """Aplica o filtro de categoria e encaminha ao relay quando aceito."""

    def __init__(
        self,
        relay: RelaySenderProtocol,
        accepted_package_type: str = ACCEPTED_PACKAGE_TYPE,
    ) -> None:
        self._relay = relay
        self._accepted_package_type = accepted_package_type

    async def execute(self, package_type: str, raw_body: bytes) -> ForwardOutcome:
        """Decide e, se aceito, encaminha exatamente os bytes recebidos.

        Args:
            package_type: Valor de package.package_type ("" se ausente)
            raw_body: Body bruto, o mesmo usado na verificação de assinatura

        Returns:
            ForwardOutcome com status 204, 200 ou 502.
        """
        if package_type != self._accepted_package_type:
            message = f"Filtered out package_type {package_type}! No forward to relay"
            logger.info(
                "webhook_filtered",
                extra={"package_type": package_type, "decision": FilterDecision.FILTERED},
            )
            return ForwardOutcome(
                decision=FilterDecision.FILTERED,
                status_code=204,
                message=message,
                package_type=package_type,
            )

        logger.info("webhook_passed_filter", extra={"package_type": package_type})

        started_at = time.perf_counter()
        try:
            response = await self._relay.forward(raw_body)
        except RelayTransportError as exc:
            logger.warning(
                "relay_transport_failed",
                extra={"package_type": package_type, "error_type": type(exc).__name__},
            )
            return ForwardOutcome(
                decision=FilterDecision.RELAY_ERROR,
                status_code=502,
                message="Error sending request to relay",
                package_type=package_type,
            )

        latency_ms = (time.perf_counter() - started_at) * 1000
        record_latency("relay", "forward", latency_ms, status_code=response.status_code)
        logger.info("relay_responded", extra={"status_code": response.status_code})

        if not response.is_success:
            return ForwardOutcome(
                decision=FilterDecision.RELAY_ERROR,
                status_code=502,
                message=f"Error - Relay returned status: {response.status_code}",
                package_type=package_type,
                relay_status_code=response.status_code,
            )

        return ForwardOutcome(
            decision=FilterDecision.FORWARDED,
            status_code=200,
            message=f"Forwarded package_type {package_type} to relay",
            package_type=package_type,
            relay_status_code=response.status_code,
        )
