"""Progress events and the bounded channel that carries them.

The orchestrator (producer) and a reporter (consumer) run as separate
asyncio tasks connected by :func:`progress_channel`.  The channel has a
fixed capacity: ``send`` suspends while it is full, so a slow consumer
applies backpressure instead of letting events pile up.  Closing the
sender ends the stream once every buffered event has been received.

Event order per batch::

    Started -> [Rendering -> RenderFailed]                       (render failure)
    Started -> [Rendering] -> (Processing -> FolderComplete | FolderFailed)* -> Completed
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import TracebackType
from typing import Annotated, Final, Literal

from pydantic import BaseModel, Field

from folco.services.result import ServiceError

DEFAULT_CHANNEL_CAPACITY: Final = 32

# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


class Started(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["started"] = "started"
    total: int


class Rendering(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["rendering"] = "rendering"


class RenderFailed(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["render_failed"] = "render_failed"
    error: ServiceError


class Processing(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["processing"] = "processing"
    path: Path


class FolderComplete(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["folder_complete"] = "folder_complete"
    path: Path


class FolderFailed(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["folder_failed"] = "folder_failed"
    path: Path
    error: ServiceError


class Completed(BaseModel):
    model_config = {"frozen": True}

    kind: Literal["completed"] = "completed"
    succeeded: int
    failed: int


ProgressEvent = Annotated[
    Started | Rendering | RenderFailed | Processing | FolderComplete | FolderFailed | Completed,
    Field(discriminator="kind"),
]

# ---------------------------------------------------------------------------
# Channel
# ---------------------------------------------------------------------------


class ProgressChannelClosed(RuntimeError):
    """Raised when sending on a channel whose sender was closed."""


_CLOSED: Final = object()


class _ChannelState:
    def __init__(self, capacity: int) -> None:
        self.queue: asyncio.Queue[object] = asyncio.Queue(maxsize=capacity)
        self.closed = False


class ProgressSender:
    """Sending half.  Use as ``async with sender:`` to close on exit."""

    def __init__(self, state: _ChannelState) -> None:
        self._state = state

    @property
    def closed(self) -> bool:
        return self._state.closed

    async def send(self, event: ProgressEvent) -> None:
        """Enqueue *event*, suspending while the channel is full."""
        if self._state.closed:
            msg = f"Cannot send {event.kind!r}: progress channel is closed"
            raise ProgressChannelClosed(msg)
        await self._state.queue.put(event)

    def close(self) -> None:
        """Close the channel.  Never blocks; idempotent."""
        if self._state.closed:
            return
        self._state.closed = True
        # When the buffer is full the receiver notices the close flag once
        # it has drained everything, so no end marker is needed.
        if not self._state.queue.full():
            self._state.queue.put_nowait(_CLOSED)

    async def __aenter__(self) -> ProgressSender:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class ProgressReceiver:
    """Receiving half.  Iterate with ``async for``; ends after close + drain."""

    def __init__(self, state: _ChannelState) -> None:
        self._state = state
        self._done = False

    async def recv(self) -> ProgressEvent | None:
        """Next event, or None once the channel is closed and drained."""
        if self._done:
            return None
        if self._state.closed and self._state.queue.empty():
            self._done = True
            return None
        item = await self._state.queue.get()
        if item is _CLOSED:
            self._done = True
            return None
        return item  # type: ignore[return-value]

    def __aiter__(self) -> ProgressReceiver:
        return self

    async def __anext__(self) -> ProgressEvent:
        event = await self.recv()
        if event is None:
            raise StopAsyncIteration
        return event


def progress_channel(
    capacity: int = DEFAULT_CHANNEL_CAPACITY,
) -> tuple[ProgressSender, ProgressReceiver]:
    """Create a bounded progress channel holding at most *capacity* events."""
    if capacity < 1:
        msg = f"Channel capacity must be at least 1, got {capacity}"
        raise ValueError(msg)
    state = _ChannelState(capacity)
    return ProgressSender(state), ProgressReceiver(state)
