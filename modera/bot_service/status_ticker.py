"""Rotating progress messages shown while a generation is running."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import Awaitable, Callable, Sequence

logger = logging.getLogger(__name__)

STUDIO_STATUS_MESSAGES = (
    "Analyzing fabric texture...",
    "Detecting clothing geometry...",
    "Setting up studio lighting...",
    "Directing the model...",
    "Applying photorealistic render...",
    "Final polishing...",
)


class StatusTicker:
    """Calls ``on_tick`` with the next message every ``interval`` seconds.

    Use as an async context manager; the periodic task is cancelled on exit
    whether the wrapped block succeeded or raised.
    """

    def __init__(
        self,
        on_tick: Callable[[str], Awaitable[object]],
        *,
        interval: float,
        messages: Sequence[str] = STUDIO_STATUS_MESSAGES,
    ) -> None:
        if not messages:
            raise ValueError("StatusTicker needs at least one message.")
        self._on_tick = on_tick
        self._interval = interval
        self._messages = list(messages)
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def __aenter__(self) -> "StatusTicker":
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.stop()

    def start(self) -> None:
        if self._task is None:
            self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task

    async def _run(self) -> None:
        index = 0
        while True:
            await asyncio.sleep(self._interval)
            index = (index + 1) % len(self._messages)
            try:
                await self._on_tick(self._messages[index])
            except Exception:  # pragma: no cover - cosmetic update only
                logger.exception("Failed to update status message")
