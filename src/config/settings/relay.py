"""Settings do relay de webhooks do GitHub.

Segredo compartilhado, URL do relay e opções do processo (host, porta,
arquivo de env). Carregadas uma única vez no startup e repassadas
explicitamente para a aplicação.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

DEFAULT_USER_AGENT: str = "github-webhook-filter"
DEFAULT_ENV_FILE: str = "variables.env"
DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8080


@dataclass(frozen=True)
class RelaySettings:
    """Configurações do filtro/relay de webhooks.

    Attributes:
        webhook_secret: Secret para validação HMAC (X-Hub-Signature-256)
        relay_url: URL do relay para onde eventos aceitos são encaminhados
        user_agent: User-Agent fixo enviado ao relay
        relay_timeout_seconds: Timeout da chamada ao relay (None = sem timeout)
        host: Interface de bind do servidor HTTP
        port: Porta do servidor HTTP
    """

    # Credenciais e destino
    webhook_secret: str = ""
    relay_url: str = ""

    # Chamada outbound
    user_agent: str = DEFAULT_USER_AGENT
    relay_timeout_seconds: float | None = None

    # Servidor
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    @property
    def secret_bytes(self) -> bytes:
        """Secret como bytes, chave do HMAC."""
        return self.webhook_secret.encode("utf-8")

    def validate(self) -> list[str]:
        """Valida configurações obrigatórias.

        Returns:
            Lista de erros de validação (vazia = tudo OK).
        """
        errors: list[str] = []

        if not self.webhook_secret:
            errors.append("GITHUB_WEBHOOK_SECRET não configurado")

        if not self.relay_url:
            errors.append("WEBHOOKRELAY_URL não configurado")
        elif not self.relay_url.startswith(("http://", "https://")):
            errors.append("WEBHOOKRELAY_URL deve começar com http:// ou https://")

        if self.relay_timeout_seconds is not None and self.relay_timeout_seconds <= 0:
            errors.append("RELAY_TIMEOUT_SECONDS deve ser > 0")

        if not 0 < self.port < 65536:
            errors.append("PORT deve estar entre 1 e 65535")

        return errors


def _parse_timeout(raw: str | None) -> float | None:
    """Converte RELAY_TIMEOUT_SECONDS; vazio significa sem timeout."""
    if raw is None or not raw.strip():
        return None
    return float(raw)


def _load_from_env() -> RelaySettings:
    """Carrega RelaySettings a partir de variáveis de ambiente."""
    return RelaySettings(
        webhook_secret=os.getenv("GITHUB_WEBHOOK_SECRET", ""),
        relay_url=os.getenv("WEBHOOKRELAY_URL", ""),
        user_agent=os.getenv("RELAY_USER_AGENT", DEFAULT_USER_AGENT),
        relay_timeout_seconds=_parse_timeout(os.getenv("RELAY_TIMEOUT_SECONDS")),
        host=os.getenv("HOST", DEFAULT_HOST),
        port=int(os.getenv("PORT", str(DEFAULT_PORT))),
    )


@lru_cache(maxsize=1)
def get_relay_settings() -> RelaySettings:
    """Retorna instância cacheada de RelaySettings.

    Deve ser chamada só depois do carregamento opcional do arquivo de env,
    já que a cache congela o primeiro valor lido.
    """
    return _load_from_env()
