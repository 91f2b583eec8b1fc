"""Runtime helpers do webhook: amarra a chamada ao relay à conexão de entrada."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable

    from starlette.types import Receive

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ClientDisconnectedError(Exception):
    """O cliente de entrada desconectou antes do fim do processamento."""


async def _wait_for_disconnect(receive: Receive) -> None:
    """Bloqueia até o servidor ASGI entregar http.disconnect."""
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            return


async def run_bound_to_client(receive: Receive, awaitable: Awaitable[T]) -> T:
    """Executa `awaitable` enquanto o cliente de entrada continuar conectado.

    Deve ser chamada depois do body ter sido lido por completo: a partir daí
    a única mensagem que o servidor entrega em `receive` é http.disconnect.

    Raises:
        ClientDisconnectedError: Se o cliente desconectar primeiro; a tarefa
            em andamento é cancelada.
    """
    work = asyncio.ensure_future(awaitable)
    watcher = asyncio.ensure_future(_wait_for_disconnect(receive))
    try:
        await asyncio.wait({work, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        pending = [task for task in (work, watcher) if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    if work.cancelled() or not work.done():
        logger.warning("webhook_client_disconnected")
        raise ClientDisconnectedError("client_disconnected")
    return work.result()
