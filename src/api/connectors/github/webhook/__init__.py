"""Recebimento de webhooks do GitHub."""
