"""Rotas HTTP da API — adapters de entrada.

Estrutura:
- routes/health/: liveness
- routes/webhook/: probe e entrega de webhooks do GitHub

Agregação:
- router.py: registra todos os routers no app principal
- delivery_app: entrega do webhook, montada na raiz depois dos routers
"""

from __future__ import annotations

from api.routes.router import create_api_router
from api.routes.webhook.webhook import delivery_app

__all__ = ["create_api_router", "delivery_app"]
