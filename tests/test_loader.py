# tests/test_loader.py

from __future__ import annotations

import asyncio

import pytest

from taskflow.core.loader import LOAD_ERROR_MESSAGE, DataLoader
from taskflow.core.store import TaskStore

from .fakes import FailingSeedSource, RecordingSeedSource


@pytest.mark.asyncio
async def test_loader_populates_store_after_delay() -> None:
    store = TaskStore()
    source = RecordingSeedSource()

    async with DataLoader(store, source, delay_seconds=0.01) as loader:
        assert store.state.is_loading is True
        assert store.state.tasks == ()
        await loader.wait()

    assert source.calls == 1
    assert store.state.is_loading is False
    assert store.state.error is None
    assert len(store.state.employees) == 6
    assert len(store.state.projects) == 5
    assert len(store.state.tasks) == 12


@pytest.mark.asyncio
async def test_loader_failure_sets_error_and_clears_loading() -> None:
    store = TaskStore()
    source = FailingSeedSource()

    async with DataLoader(store, source, delay_seconds=0) as loader:
        await loader.wait()

    assert source.calls == 1
    assert store.state.error == LOAD_ERROR_MESSAGE
    assert store.state.is_loading is False
    assert store.state.tasks == ()


@pytest.mark.asyncio
async def test_leaving_scope_cancels_pending_load() -> None:
    store = TaskStore()
    source = RecordingSeedSource()

    async with DataLoader(store, source, delay_seconds=10.0) as loader:
        await asyncio.sleep(0.01)

    assert loader.closed is True
    assert source.calls == 0
    assert store.state.tasks == ()
    assert store.state.is_loading is True

    # The write must not happen later either.
    await asyncio.sleep(0.02)
    assert source.calls == 0


@pytest.mark.asyncio
async def test_wait_returns_quietly_after_close() -> None:
    store = TaskStore()
    loader = DataLoader(store, RecordingSeedSource(), delay_seconds=10.0)
    loader.start()

    waiter = asyncio.create_task(loader.wait())
    await asyncio.sleep(0.01)
    await loader.close()
    await asyncio.wait_for(waiter, timeout=1.0)
    assert waiter.exception() is None


@pytest.mark.asyncio
async def test_start_is_idempotent_and_refused_after_close() -> None:
    store = TaskStore()
    source = RecordingSeedSource()
    loader = DataLoader(store, source, delay_seconds=0)

    first = loader.start()
    assert loader.start() is first
    await loader.wait()
    assert source.calls == 1

    await loader.close()
    with pytest.raises(RuntimeError):
        loader.start()
