"""Gerenciamento do delivery_id para rastreamento de requisições.

O delivery_id é o valor do header X-GitHub-Delivery e é injetado em todos
os logs emitidos durante a requisição. Usa ContextVar para ser async-safe.

Uso:
    from app.observability import get_delivery_id, set_delivery_id

    token = set_delivery_id(request.headers.get("x-github-delivery"))
    try:
        # processar request
    finally:
        reset_delivery_id(token)
"""

from __future__ import annotations

from contextvars import ContextVar, Token

_delivery_id: ContextVar[str] = ContextVar("delivery_id", default="")


def get_delivery_id() -> str:
    """Retorna o delivery_id do contexto atual (ou string vazia)."""
    return _delivery_id.get()


def set_delivery_id(delivery_id: str | None = None) -> Token[str]:
    """Define o delivery_id no contexto atual.

    Args:
        delivery_id: ID a definir. None vira string vazia: requisições sem
            o header continuam rastreáveis só pelo access log.

    Returns:
        Token para reset posterior via reset_delivery_id().
    """
    return _delivery_id.set(delivery_id or "")


def reset_delivery_id(token: Token[str]) -> None:
    """Restaura o delivery_id ao valor anterior."""
    _delivery_id.reset(token)
