"""Connectors — adapters de borda para sistemas externos.

Estrutura:
- github/: entregas de webhook do GitHub (headers, assinatura, payload)
- relay/: cliente HTTP do relay de destino
"""

__all__: list[str] = []
