"""Filters de logging para injeção de contexto.

Campos injetados em todo record:
- delivery_id: valor do header X-GitHub-Delivery da requisição em curso
- service: nome do serviço (ex: github-webhook-filter)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class DeliveryIdFilter(logging.Filter):
    """Injeta delivery_id e service em cada record de log.

    Nunca adicionar o secret ou o body bruto nos logs.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        delivery_id_getter: Função que retorna o delivery_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        delivery_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_delivery_id = delivery_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Adiciona delivery_id e service ao record.

        Se delivery_id já foi passado via `extra`, preserva o valor.

        Returns:
            True sempre (não filtra, apenas enriquece).
        """
        existing = getattr(record, "delivery_id", None)
        record.delivery_id = existing if existing else self._get_delivery_id()
        record.service = self._service_name
        return True
