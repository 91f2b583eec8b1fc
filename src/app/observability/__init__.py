"""Observabilidade — logs estruturados e métricas.

Uso:
    from app.observability import get_delivery_id, set_delivery_id
    from app.observability import record_latency
"""

from app.observability.delivery import (
    get_delivery_id,
    reset_delivery_id,
    set_delivery_id,
)
from app.observability.metrics import record_latency

__all__ = [
    "get_delivery_id",
    "record_latency",
    "reset_delivery_id",
    "set_delivery_id",
]
