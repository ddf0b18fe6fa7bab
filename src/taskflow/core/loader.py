# src/taskflow/core/loader.py

from __future__ import annotations

"""
Initial data load.

Simulates a slow fetch: after delay_seconds the seed source is read and
written into the store, then is_loading is cleared.

The load runs as an asyncio task owned by the loader's scope. Leaving the
scope (or calling close()) cancels it, and a closed loader never writes
to the store, even if the delay already elapsed.
"""

import asyncio
import logging

from .ports import SeedSource
from .store import TaskStore

logger = logging.getLogger(__name__)

LOAD_ERROR_MESSAGE = "Failed to load data"


class DataLoader:
    def __init__(
            self,
            store: TaskStore,
            source: SeedSource,
            *,
            delay_seconds: float = 1.0,
    ) -> None:
        self._store = store
        self._source = source
        self._delay = max(0.0, float(delay_seconds))
        self._task: asyncio.Task[None] | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> asyncio.Task[None]:
        """Schedule the load once. Must be called from a running event loop."""
        if self._closed:
            raise RuntimeError("DataLoader is closed")
        if self._task is None:
            self._store.set_loading(True)
            self._task = asyncio.create_task(self._run(), name="taskflow-initial-load")
        return self._task

    async def wait(self) -> None:
        """Wait for the load to finish. Returns quietly if it was cancelled."""
        task = self._task if self._task is not None else self.start()
        try:
            await asyncio.shield(task)
        except asyncio.CancelledError:
            if not task.cancelled():
                raise

    async def close(self) -> None:
        self._closed = True
        task = self._task
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Initial load cancelled")

    async def __aenter__(self) -> DataLoader:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _run(self) -> None:
        await asyncio.sleep(self._delay)
        if self._closed:
            logger.debug("Loader closed before write; skipping")
            return

        try:
            seed = self._source.load()
        except Exception:
            logger.exception("Initial data load failed")
            self._store.set_error(LOAD_ERROR_MESSAGE)
            self._store.set_loading(False)
            return

        self._store.set_collections(
            employees=seed.employees,
            projects=seed.projects,
            tasks=seed.tasks,
        )
        self._store.set_loading(False)
        logger.info(
            "Initial data loaded: employees=%d projects=%d tasks=%d",
            len(seed.employees),
            len(seed.projects),
            len(seed.tasks),
        )
