"""Cliente HTTP do relay de webhooks.

Encaminha o body bruto de uma entrega aceita para o relay configurado:
- POST com os bytes originais, sem re-serialização
- User-Agent fixo e Content-Type application/json
- Sem retries; o GitHub reentrega conforme a própria política
- Resposta lida por completo e liberada antes de retornar
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

from app.protocols.relay import RelayResponse, RelayTransportError
from config.settings.relay import DEFAULT_USER_AGENT

if TYPE_CHECKING:
    from config.settings import RelaySettings

logger = logging.getLogger(__name__)


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP do relay."""

    timeout_seconds: float | None = None
    user_agent: str = DEFAULT_USER_AGENT
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class RelayHttpClient:
    """Cliente HTTP para o relay (implementa RelaySenderProtocol)."""

    def __init__(
        self,
        relay_url: str,
        config: HttpClientConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._relay_url = relay_url
        self._config = config or HttpClientConfig()
        self._client = client or httpx.AsyncClient(
            verify=self._config.verify_ssl,
            timeout=self._config.timeout_seconds,
        )

    @property
    def relay_url(self) -> str:
        return self._relay_url

    def _build_headers(self) -> dict[str, str]:
        return {
            **self._config.default_headers,
            "User-Agent": self._config.user_agent,
            "Content-Type": "application/json",
        }

    async def forward(self, raw_body: bytes) -> RelayResponse:
        """Envia o body bruto ao relay.

        Args:
            raw_body: Bytes exatamente como recebidos do GitHub

        Returns:
            RelayResponse com status e body já lidos

        Raises:
            RelayTransportError: Falha de conexão, timeout, protocolo ou decodificação
        """
        try:
            response = await self._client.post(
                self._relay_url,
                content=raw_body,
                headers=self._build_headers(),
            )
        except httpx.RequestError as exc:
            logger.warning(
                "relay_request_failed",
                extra={"error_type": type(exc).__name__},
            )
            raise RelayTransportError("relay_transport_error") from exc

        return RelayResponse(status_code=response.status_code, body=response.content)

    async def aclose(self) -> None:
        """Fecha o pool de conexões."""
        await self._client.aclose()


def create_relay_http_client(
    settings: RelaySettings,
    client: httpx.AsyncClient | None = None,
) -> RelayHttpClient:
    """Factory para criar cliente do relay a partir das settings.

    Args:
        settings: RelaySettings carregadas no startup.
        client: httpx.AsyncClient opcional (ex: com MockTransport em testes).
    """
    config = HttpClientConfig(
        timeout_seconds=settings.relay_timeout_seconds,
        user_agent=settings.user_agent,
    )
    return RelayHttpClient(settings.relay_url, config=config, client=client)
