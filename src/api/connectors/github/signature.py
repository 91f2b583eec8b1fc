"""Validação de assinatura HMAC-SHA256 de webhooks do GitHub."""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.constants.github import SIGNATURE_HEADER, SIGNATURE_PREFIX

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class SignatureResult:
    """Resultado da verificação de assinatura."""

    valid: bool
    error: str | None = None


def compute_signature(payload: bytes, secret: bytes) -> str:
    """Calcula o valor esperado do header X-Hub-Signature-256.

    Args:
        payload: Corpo bruto da requisição
        secret: Secret compartilhado em bytes

    Returns:
        String no formato "sha256=<hex>"
    """
    digest = hmac.new(secret, payload, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_PREFIX}{digest}"


def verify_github_signature(
    payload: bytes,
    headers: Mapping[str, str],
    secret: bytes,
) -> SignatureResult:
    """Valida X-Hub-Signature-256 contra o body bruto.

    A comparação é feita em tempo constante sobre bytes; tamanhos diferentes
    também são rejeitados sem curto-circuito.

    Args:
        payload: Corpo bruto da requisição
        headers: Headers recebidos (chaves case-insensitive ou minúsculas)
        secret: Secret compartilhado em bytes

    Returns:
        SignatureResult com valid=False e motivo em caso de falha.
    """
    received = headers.get(SIGNATURE_HEADER.lower()) or headers.get(SIGNATURE_HEADER) or ""
    if not received:
        return SignatureResult(valid=False, error="missing_signature")

    expected = compute_signature(payload, secret)
    if not hmac.compare_digest(expected.encode("utf-8"), received.encode("utf-8")):
        return SignatureResult(valid=False, error="signature_mismatch")

    return SignatureResult(valid=True)
