"""Rotas do filtro de webhooks do GitHub."""
