"""Endpoints do filtro de webhooks do GitHub.

Endpoints:
- GET/HEAD em qualquer path: probe — loga os headers e responde 200
- Qualquer outro método, em qualquer path: entrega de evento
  (montada na raiz por `delivery_app`, depois das demais rotas)

Fluxo da entrega:
1. Headers X-GitHub-Delivery e X-GitHub-Event (400 se ausentes)
2. Leitura do body bruto
3. Assinatura HMAC X-Hub-Signature-256 (401)
4. Parse de package.package_type (400)
5. Filtro de categoria (204 + header Message)
6. Encaminhamento ao relay, amarrado à conexão de entrada (200 / 502)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, Response, status
from starlette.requests import ClientDisconnect
from starlette.routing import request_response

from api.connectors.github.webhook.receive import (
    InvalidJsonError,
    InvalidSignatureError,
    MissingDeliveryHeadersError,
    parse_webhook_request,
    read_delivery_identity,
)
from api.routes.webhook.webhook_runtime import ClientDisconnectedError, run_bound_to_client
from app.constants.github import FILTER_MESSAGE_HEADER
from app.observability import reset_delivery_id, set_delivery_id
from app.use_cases.github import FilterDecision

if TYPE_CHECKING:
    from app.use_cases.github import ForwardOutcome, ForwardPackageEventUseCase
    from config.settings import RelaySettings

logger = logging.getLogger(__name__)

router = APIRouter()

PROBE_METHODS = ["GET", "HEAD"]

# Convenção do nginx para "cliente fechou a conexão"; ninguém lê esta resposta
CLIENT_CLOSED_REQUEST = 499


def _text(content: str, status_code: int) -> Response:
    return Response(content=content, media_type="text/plain", status_code=status_code)


def _header_safe(value: str) -> str:
    """Restringe a ASCII imprimível (package_type vem do payload)."""
    return "".join(ch if " " <= ch <= "~" else "?" for ch in value)


def _remote_addr(request: Request) -> str:
    if request.client is None:
        return ""
    return f"{request.client.host}:{request.client.port}"


def _outcome_response(outcome: ForwardOutcome) -> Response:
    if outcome.decision is FilterDecision.FILTERED:
        return Response(
            status_code=status.HTTP_204_NO_CONTENT,
            headers={FILTER_MESSAGE_HEADER: _header_safe(outcome.message)},
        )
    return _text(outcome.message, outcome.status_code)


async def _read_body(request: Request) -> bytes:
    """Lê o body inteiro; falha de leitura vira body vazio (e depois 401)."""
    try:
        return await request.body()
    except ClientDisconnect:
        logger.warning("webhook_body_read_failed", extra={"error_type": "ClientDisconnect"})
        return b""


@router.api_route("/{path:path}", methods=PROBE_METHODS)
async def probe(request: Request) -> Response:
    """Probe somente leitura — loga todos os headers, sem processar body."""
    logger.info(
        "probe_received",
        extra={"method": request.method, "remote_addr": _remote_addr(request)},
    )
    for name, value in request.headers.items():
        logger.info("probe_header", extra={"header": name, "value": value})
    return Response(status_code=status.HTTP_200_OK)


async def receive_webhook(request: Request) -> Response:
    """Recebe uma entrega do GitHub e encaminha ao relay se for CONTAINER.

    Returns:
        Response 200, 204, 400, 401 ou 502.
    """
    logger.info(
        "webhook_request_received",
        extra={"method": request.method, "remote_addr": _remote_addr(request)},
    )

    try:
        identity = read_delivery_identity(request.headers)
    except MissingDeliveryHeadersError as exc:
        logger.warning("webhook_headers_missing", extra={"error": str(exc)})
        return _text(str(exc), status.HTTP_400_BAD_REQUEST)

    token = set_delivery_id(identity.delivery_id)
    try:
        logger.info("webhook_processing", extra={"event_type": identity.event_type})

        settings: RelaySettings = request.app.state.settings
        use_case: ForwardPackageEventUseCase = request.app.state.forward_use_case

        raw_body = await _read_body(request)

        try:
            event, _signature = parse_webhook_request(
                raw_body=raw_body,
                headers=request.headers,
                secret=settings.secret_bytes,
            )
        except InvalidSignatureError as exc:
            logger.warning("webhook_signature_invalid", extra={"error": str(exc)})
            return _text("Invalid Signature", status.HTTP_401_UNAUTHORIZED)
        except InvalidJsonError as exc:
            logger.warning("webhook_json_invalid", extra={"error": str(exc)})
            return _text("Failed to parse JSON", status.HTTP_400_BAD_REQUEST)

        logger.info("webhook_signature_match", extra={"payload_size": len(raw_body)})

        try:
            outcome = await run_bound_to_client(
                request.receive,
                use_case.execute(event.package_type, raw_body),
            )
        except ClientDisconnectedError:
            return Response(status_code=CLIENT_CLOSED_REQUEST)

        return _outcome_response(outcome)

    finally:
        logger.info("webhook_request_finished")
        reset_delivery_id(token)


# Qualquer método, inclusive não padronizados (APIRoute só aceita lista fixa)
delivery_app = request_response(receive_webhook)
