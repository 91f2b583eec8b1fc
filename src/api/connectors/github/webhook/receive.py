"""Validação inicial da entrega: headers, assinatura e parse do payload."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import ValidationError

from app.constants.github import DELIVERY_HEADER, EVENT_HEADER

from ..models import DeliveryIdentity, PackageEvent
from ..signature import SignatureResult, verify_github_signature

if TYPE_CHECKING:
    from collections.abc import Mapping


class WebhookRequestError(ValueError):
    """Erro base para falhas de webhook."""


class MissingDeliveryHeadersError(WebhookRequestError):
    """X-GitHub-Delivery ou X-GitHub-Event ausente."""


class InvalidSignatureError(WebhookRequestError):
    """Assinatura inválida do webhook."""


class InvalidJsonError(WebhookRequestError):
    """JSON inválido no payload do webhook."""


def _header(headers: Mapping[str, str], name: str) -> str:
    return headers.get(name.lower()) or headers.get(name) or ""


def read_delivery_identity(headers: Mapping[str, str]) -> DeliveryIdentity:
    """Lê os headers de identidade da entrega.

    Raises:
        MissingDeliveryHeadersError: Se qualquer um estiver ausente ou vazio
    """
    delivery_id = _header(headers, DELIVERY_HEADER)
    event_type = _header(headers, EVENT_HEADER)
    if not delivery_id or not event_type:
        raise MissingDeliveryHeadersError(
            f"Either missing requestId: ({delivery_id}) or eventType: ({event_type}) "
            "and will not process request further"
        )
    return DeliveryIdentity(delivery_id=delivery_id, event_type=event_type)


def parse_package_event(raw_body: bytes) -> PackageEvent:
    """Decodifica o body bruto na visão parcial PackageEvent.

    Raises:
        InvalidJsonError: Se o JSON estiver malformado ou fora do formato
    """
    try:
        return PackageEvent.model_validate_json(raw_body)
    except ValidationError as exc:
        raise InvalidJsonError("invalid_json") from exc


def parse_webhook_request(
    raw_body: bytes,
    headers: Mapping[str, str],
    secret: bytes,
) -> tuple[PackageEvent, SignatureResult]:
    """Valida assinatura e parseia o payload do webhook.

    O JSON só é lido depois da assinatura conferir.

    Args:
        raw_body: Corpo bruto do request
        headers: Headers recebidos
        secret: Secret do webhook em bytes

    Raises:
        InvalidSignatureError: Se assinatura for inválida
        InvalidJsonError: Se o JSON estiver inválido

    Returns:
        (PackageEvent, SignatureResult)
    """
    signature_result = verify_github_signature(raw_body, headers, secret)
    if not signature_result.valid:
        raise InvalidSignatureError(signature_result.error or "invalid_signature")

    return parse_package_event(raw_body), signature_result
