"""API — camada de borda.

Responsabilidades:
- Receber entregas de webhook do GitHub
- Validar headers, assinatura e payload
- Encaminhar o body bruto ao relay

Subpastas:
- connectors/: adapters HTTP (github, relay)
- routes/: endpoints HTTP (webhook, health)

NÃO PODE conter: regra de filtro (fica em app/use_cases).
"""
