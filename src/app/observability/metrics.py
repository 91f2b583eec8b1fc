"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e podem ser agregadas
posteriormente pelo sistema de logs (ex: Cloud Logging, Loki).

Uso:
    start = time.perf_counter()
    # ... chamada ao relay ...
    latency_ms = (time.perf_counter() - start) * 1000
    record_latency("relay", "forward", latency_ms, status_code=200)
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    status_code: int | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "relay")
        operation: Nome da operação (ex: "forward")
        latency_ms: Latência em milissegundos
        status_code: Status HTTP retornado, quando houver
    """
    logger.info(
        "metric_latency",
        extra={
            "metric_type": "latency",
            "component": component,
            "operation": operation,
            "latency_ms": round(latency_ms, 2),
            "status_code": status_code,
        },
    )
