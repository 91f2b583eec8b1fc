"""Entrypoint do github-webhook-filter.

Monta a aplicação ASGI (FastAPI) a partir de settings já validadas e expõe
o CLI que carrega o ambiente e sobe o uvicorn.

Uso (produção):
    github-webhook-filter --no-load-env-file --port 8080

Uso (desenvolvimento, lê variables.env):
    github-webhook-filter

Uso (uvicorn direto, settings do ambiente):
    uvicorn app.app:create_app_from_env --factory --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from api.routes import create_api_router, delivery_app
from app.bootstrap import (
    ConfigurationError,
    create_relay_client,
    initialize_app,
    load_runtime_settings,
)
from app.use_cases.github import ForwardPackageEventUseCase
from config.logging import get_logger
from config.settings import DEFAULT_ENV_FILE, DEFAULT_HOST, DEFAULT_PORT

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    import httpx

    from config.settings import RelaySettings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Shutdown:
    - Fecha o pool de conexões do relay
    """
    logger.info("app_starting", extra={"relay_url": app.state.settings.relay_url})

    yield

    logger.info("app_shutting_down")
    await app.state.relay_client.aclose()


def create_app(
    settings: RelaySettings,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Args:
        settings: Settings validadas no startup (imutáveis).
        http_client: httpx.AsyncClient opcional para o relay
            (ex: com MockTransport em testes).

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="github-webhook-filter",
        description="Filtra webhooks de pacotes do GitHub antes do relay",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )

    relay_client = create_relay_client(settings, client=http_client)
    fastapi_app.state.settings = settings
    fastapi_app.state.relay_client = relay_client
    fastapi_app.state.forward_use_case = ForwardPackageEventUseCase(relay=relay_client)

    fastapi_app.include_router(create_api_router())
    # Por último: casa qualquer método e path que as rotas acima não atenderam
    fastapi_app.mount("/", delivery_app, name="webhook_delivery")

    logger.info("app_configured")

    return fastapi_app


def create_app_from_env() -> FastAPI:
    """Factory para `uvicorn --factory`: settings só do ambiente."""
    initialize_app()
    return create_app(load_runtime_settings())


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="github-webhook-filter",
        description="Filtra webhooks de pacotes do GitHub e encaminha CONTAINER ao relay.",
    )
    parser.add_argument(
        "--load-env-file",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Carrega variáveis do arquivo de env antes de ler o ambiente.",
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        help=f"Arquivo de env (padrão: {DEFAULT_ENV_FILE}).",
    )
    parser.add_argument("--host", default=None, help=f"Interface de bind (padrão: {DEFAULT_HOST}).")
    parser.add_argument("--port", type=int, default=None, help=f"Porta (padrão: {DEFAULT_PORT}).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Entrypoint do CLI."""
    import uvicorn

    args = parse_args(argv)
    initialize_app()

    try:
        settings = load_runtime_settings(args.env_file if args.load_env_file else None)
    except ConfigurationError as exc:
        logger.critical("startup_aborted", extra={"error": str(exc)})
        sys.exit(1)

    overrides = {
        key: value
        for key, value in (("host", args.host), ("port", args.port))
        if value is not None
    }
    settings = dataclasses.replace(settings, **overrides)
    errors = settings.validate()
    if errors:
        logger.critical("startup_aborted", extra={"error": "; ".join(errors)})
        sys.exit(1)

    logger.info(
        "server_starting",
        extra={"host": settings.host, "port": settings.port},
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
