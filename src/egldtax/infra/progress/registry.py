"""ProgressRegistry — client id -> listening queues for server-sent progress events."""

import asyncio
import logging
from collections import defaultdict
from collections.abc import AsyncIterator

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class ProgressEvent(BaseModel):
    message: str
    done: bool = False  # terminal success/failure notice; streams close after it


class ProgressRegistry:
    """Explicit-lifecycle registry passed to request handlers.

    A stream registers a queue when it opens and removes it when it closes.
    Reporting to a client id nobody listens on is a no-op: the pipeline must
    never depend on a listener being present.
    """

    def __init__(self) -> None:
        self._listeners: dict[str, set[asyncio.Queue[ProgressEvent]]] = defaultdict(set)

    def register(self, client_id: str) -> asyncio.Queue[ProgressEvent]:
        queue: asyncio.Queue[ProgressEvent] = asyncio.Queue()
        self._listeners[client_id].add(queue)
        logger.debug("Progress listener registered for %s", client_id)
        return queue

    def unregister(self, client_id: str, queue: asyncio.Queue[ProgressEvent]) -> None:
        queues = self._listeners.get(client_id)
        if queues is None:
            return
        queues.discard(queue)
        if not queues:
            del self._listeners[client_id]
        logger.debug("Progress listener removed for %s", client_id)

    def has_listeners(self, client_id: str) -> bool:
        return bool(self._listeners.get(client_id))

    def report_progress(self, client_id: str | None, message: str, done: bool = False) -> None:
        if not client_id:
            return
        event = ProgressEvent(message=message, done=done)
        for queue in self._listeners.get(client_id, ()):
            queue.put_nowait(event)

    async def stream(self, client_id: str, idle_timeout: float) -> AsyncIterator[ProgressEvent]:
        """Yield events for client_id until a terminal event or idle_timeout of silence."""
        queue = self.register(client_id)
        try:
            while True:
                try:
                    event = await asyncio.wait_for(queue.get(), timeout=idle_timeout)
                except asyncio.TimeoutError:
                    logger.info("Progress stream for %s idle for %.0fs, closing", client_id, idle_timeout)
                    return
                yield event
                if event.done:
                    return
        finally:
            self.unregister(client_id, queue)
