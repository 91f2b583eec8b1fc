"""App — orquestração, casos de uso e composition root.

Subpastas:
- bootstrap/: composition root (logging, env, settings, wiring)
- use_cases/: filtro de categoria e encaminhamento ao relay
- protocols/: contratos entre app e api
- observability/: delivery_id em logs e métricas de latência
- constants/: constantes do protocolo de webhooks do GitHub

Padrão: app executa; api adapta.
"""
