"""Testes do helper que amarra a chamada ao relay à conexão de entrada."""

from __future__ import annotations

import asyncio

import pytest

from api.routes.webhook.webhook_runtime import ClientDisconnectedError, run_bound_to_client


def _receive_never_disconnects():
    async def _receive() -> dict[str, object]:
        await asyncio.Event().wait()
        return {"type": "http.disconnect"}

    return _receive


def _receive_disconnects_after(delay: float):
    async def _receive() -> dict[str, object]:
        await asyncio.sleep(delay)
        return {"type": "http.disconnect"}

    return _receive


@pytest.mark.asyncio
async def test_returns_result_when_client_stays_connected() -> None:
    async def _work() -> str:
        await asyncio.sleep(0)
        return "done"

    result = await run_bound_to_client(_receive_never_disconnects(), _work())

    assert result == "done"


@pytest.mark.asyncio
async def test_propagates_work_exception() -> None:
    async def _work() -> str:
        raise LookupError("boom")

    with pytest.raises(LookupError, match="boom"):
        await run_bound_to_client(_receive_never_disconnects(), _work())


@pytest.mark.asyncio
async def test_disconnect_cancels_work() -> None:
    cancelled = asyncio.Event()

    async def _work() -> str:
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise
        return "late"

    with pytest.raises(ClientDisconnectedError):
        await run_bound_to_client(_receive_disconnects_after(0.01), _work())

    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_ignores_non_disconnect_messages() -> None:
    messages = [{"type": "http.request", "body": b"", "more_body": False}]

    async def _receive() -> dict[str, object]:
        if messages:
            return messages.pop()
        await asyncio.Event().wait()
        return {"type": "http.disconnect"}

    async def _work() -> int:
        await asyncio.sleep(0.01)
        return 42

    assert await run_bound_to_client(_receive, _work()) == 42


@pytest.mark.asyncio
async def test_outer_cancellation_cancels_work() -> None:
    started = asyncio.Event()
    cancelled = asyncio.Event()

    async def _work() -> None:
        started.set()
        try:
            await asyncio.sleep(10)
        except asyncio.CancelledError:
            cancelled.set()
            raise

    task = asyncio.ensure_future(run_bound_to_client(_receive_never_disconnects(), _work()))
    await started.wait()
    task.cancel()

    with pytest.raises(asyncio.CancelledError):
        await task
    assert cancelled.is_set()
