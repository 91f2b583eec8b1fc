"""Bootstrap da aplicação — inicialização e wiring.

Este módulo é o composition root: configura logging, carrega o arquivo de
env opcional, valida settings e conecta o cliente do relay ao use case.

Uso:
    from app.bootstrap import initialize_app, load_runtime_settings

    initialize_app()
    settings = load_runtime_settings(env_file="variables.env")
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from app.observability import get_delivery_id
from config.logging import configure_logging
from config.settings import DEFAULT_SERVICE_NAME, get_base_settings, get_relay_settings

if TYPE_CHECKING:
    import httpx

    from api.connectors.relay import RelayHttpClient
    from config.settings import RelaySettings

# Nível de log padrão (pode ser sobrescrito por env)
DEFAULT_LOG_LEVEL = "INFO"

logger = logging.getLogger(__name__)


class ConfigurationError(RuntimeError):
    """Configuração obrigatória ausente ou inválida no startup."""


def initialize_app() -> None:
    """Configura logging JSON com delivery_id.

    Deve ser chamada uma vez no início do processo.
    """
    log_level = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    service_name = os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME)

    configure_logging(
        level=log_level,
        service_name=service_name,
        delivery_id_getter=get_delivery_id,
    )


def initialize_test_app() -> None:
    """Inicializa logging para testes (DEBUG)."""
    configure_logging(
        level="DEBUG",
        service_name=f"{DEFAULT_SERVICE_NAME}_test",
        delivery_id_getter=get_delivery_id,
    )


def load_env_file(env_file: str | Path) -> bool:
    """Popula o ambiente a partir de um arquivo .env (desenvolvimento local).

    Variáveis já definidas no ambiente têm precedência. Arquivo ausente
    não é fatal.

    Returns:
        True se o arquivo existia e foi carregado.
    """
    path = Path(env_file)
    if not path.is_file():
        logger.warning("env_file_not_loaded", extra={"env_file": str(path), "reason": "not_found"})
        return False

    try:
        loaded = load_dotenv(path, override=False)
    except OSError as exc:
        logger.warning(
            "env_file_not_loaded",
            extra={"env_file": str(path), "reason": type(exc).__name__},
        )
        return False
    logger.info("env_file_loaded", extra={"env_file": str(path), "has_values": loaded})
    return True


def load_runtime_settings(env_file: str | Path | None = None) -> RelaySettings:
    """Carrega e valida as settings obrigatórias.

    Args:
        env_file: Arquivo .env opcional lido antes do ambiente.

    Raises:
        ConfigurationError: Se GITHUB_WEBHOOK_SECRET ou WEBHOOKRELAY_URL
            estiverem ausentes (ou qualquer outra setting inválida).
    """
    if env_file is not None:
        load_env_file(env_file)

    get_base_settings.cache_clear()
    get_relay_settings.cache_clear()

    try:
        settings = get_relay_settings()
    except ValueError as exc:
        raise ConfigurationError(f"Configuração inválida: {exc}") from exc

    errors = [*get_base_settings().validate(), *settings.validate()]
    if errors:
        logger.critical(
            "settings_validation_failed",
            extra={"component": "bootstrap", "error_count": len(errors), "errors": errors},
        )
        details = "\n".join(f"- {error}" for error in errors)
        raise ConfigurationError(f"Configuração inválida:\n{details}")

    logger.info("webhook_secret_loaded", extra={"component": "bootstrap"})
    logger.info("relay_url_loaded", extra={"component": "bootstrap", "relay_url": settings.relay_url})
    return settings


def create_relay_client(
    settings: RelaySettings,
    client: httpx.AsyncClient | None = None,
) -> RelayHttpClient:
    """Cria o cliente HTTP do relay a partir das settings."""
    from api.connectors.relay import create_relay_http_client

    return create_relay_http_client(settings, client=client)
