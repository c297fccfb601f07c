"""FolderService: customize and reset batches of directories.

Customize renders the profile once, then installs the shared composite
into every directory.  Reset removes the custom icon from every directory.
Both report through a progress channel and never let one directory's
failure abort the rest of the batch.

Per-directory work runs in a bounded worker pool (``max_workers``
concurrent installer calls, each on a worker thread).  Events of
different directories may interleave; for a single directory
``Processing`` always precedes its ``FolderComplete``/``FolderFailed``.
With ``max_workers=1`` directories are processed strictly in input order.

INVARIANT: ``Completed.succeeded + Completed.failed == Started.total``.
INVARIANT: No install/remove is retried within a batch.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Sequence
from functools import reduce
from pathlib import Path

from pydantic import BaseModel

from folco.config.logging import batch_context
from folco.domain.errors import InstallError, RenderError
from folco.domain.profile import CustomizationProfile
from folco.services.contracts import IconInstaller, Renderer
from folco.services.progress import (
    DEFAULT_CHANNEL_CAPACITY,
    Completed,
    FolderComplete,
    FolderFailed,
    Processing,
    ProgressEvent,
    ProgressReceiver,
    ProgressSender,
    RenderFailed,
    Rendering,
    Started,
    progress_channel,
)
from folco.services.result import ServiceError

logger = logging.getLogger(__name__)

DirectoryOperation = Callable[[Path], None]


class DirectoryOutcome(BaseModel):
    """Result of one install/remove attempt."""

    model_config = {"frozen": True}

    path: Path
    error: ServiceError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class BatchTally(BaseModel):
    """``{succeeded, failed}`` accounting for one batch."""

    model_config = {"frozen": True}

    succeeded: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def record(self, outcome: DirectoryOutcome) -> BatchTally:
        if outcome.ok:
            return self.model_copy(update={"succeeded": self.succeeded + 1})
        return self.model_copy(update={"failed": self.failed + 1})

    @classmethod
    def fold(cls, outcomes: Iterable[DirectoryOutcome]) -> BatchTally:
        return reduce(lambda tally, outcome: tally.record(outcome), outcomes, cls())


class ProgressStream:
    """Async iterator over one batch's events, bound to its producer task.

    Usage::

        stream = service.start_customize(dirs, profile)
        async for event in stream:
            ...
        tally = await stream.result()
    """

    def __init__(self, receiver: ProgressReceiver, producer: asyncio.Task[BatchTally]) -> None:
        self._receiver = receiver
        self._producer = producer

    def __aiter__(self) -> ProgressStream:
        return self

    async def __anext__(self) -> ProgressEvent:
        event = await self._receiver.recv()
        if event is None:
            raise StopAsyncIteration
        return event

    async def result(self) -> BatchTally:
        """Drain any unread events, then return the producer's tally.

        Re-raises whatever the producer raised.
        """
        async for _ in self:
            pass
        return await self._producer

    def cancel(self) -> None:
        """Stop the producer; in-flight installer calls still run to completion."""
        self._producer.cancel()


class FolderService:
    """Drive render-once/install-many and remove-many batches.

    Parameters:
        renderer: Produces the composite image for a profile.
        installer: Attaches or removes a directory's custom icon.
        max_workers: Concurrent installer calls per batch.
        channel_capacity: Pending events allowed before the producer suspends.
    """

    def __init__(
        self,
        renderer: Renderer,
        installer: IconInstaller,
        *,
        max_workers: int = 4,
        channel_capacity: int = DEFAULT_CHANNEL_CAPACITY,
    ) -> None:
        if max_workers < 1:
            msg = f"max_workers must be at least 1, got {max_workers}"
            raise ValueError(msg)
        self._renderer = renderer
        self._installer = installer
        self._max_workers = max_workers
        self._channel_capacity = channel_capacity

    # ------------------------------------------------------------------
    # Entry points (spawn producer, hand back the stream)
    # ------------------------------------------------------------------

    def start_customize(
        self, directories: Iterable[Path], profile: CustomizationProfile
    ) -> ProgressStream:
        """Start a customize batch on the running loop."""
        sender, receiver = progress_channel(self._channel_capacity)
        task = asyncio.create_task(self.customize(list(directories), profile, sender))
        return ProgressStream(receiver, task)

    def start_reset(self, directories: Iterable[Path]) -> ProgressStream:
        """Start a reset batch on the running loop."""
        sender, receiver = progress_channel(self._channel_capacity)
        task = asyncio.create_task(self.reset(list(directories), sender))
        return ProgressStream(receiver, task)

    # ------------------------------------------------------------------
    # Producers
    # ------------------------------------------------------------------

    async def customize(
        self,
        directories: Sequence[Path],
        profile: CustomizationProfile,
        sender: ProgressSender,
    ) -> BatchTally:
        """Render *profile* once and install it into every directory.

        A render failure ends the batch after ``RenderFailed`` with a zero
        tally: no directory is attempted and no ``Completed`` is sent.
        """
        async with sender:
            with batch_context("customize", total=len(directories)):
                await sender.send(Started(total=len(directories)))
                logger.info("customize.start total=%d", len(directories))

                await sender.send(Rendering())
                try:
                    image = await asyncio.to_thread(self._renderer.render, profile)
                except Exception as exc:
                    error = _as_render_error(exc)
                    logger.debug("customize.render_failed: %s", error.message, exc_info=True)
                    await sender.send(RenderFailed(error=ServiceError.from_exception(error)))
                    return BatchTally()

                return await self._run_batch(
                    directories,
                    lambda path: self._installer.install(image, path),
                    sender,
                    op="customize",
                )

    async def reset(self, directories: Sequence[Path], sender: ProgressSender) -> BatchTally:
        """Remove the custom icon from every directory."""
        async with sender:
            with batch_context("reset", total=len(directories)):
                await sender.send(Started(total=len(directories)))
                logger.info("reset.start total=%d", len(directories))
                return await self._run_batch(
                    directories, self._installer.remove, sender, op="reset"
                )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _run_batch(
        self,
        directories: Sequence[Path],
        operation: DirectoryOperation,
        sender: ProgressSender,
        *,
        op: str,
    ) -> BatchTally:
        limiter = asyncio.Semaphore(self._max_workers)
        if self._max_workers == 1:
            outcomes = [
                await self._process(path, operation, sender, limiter) for path in directories
            ]
        else:
            outcomes = await asyncio.gather(
                *(self._process(path, operation, sender, limiter) for path in directories)
            )

        tally = BatchTally.fold(outcomes)
        await sender.send(Completed(succeeded=tally.succeeded, failed=tally.failed))
        logger.info("%s.complete succeeded=%d failed=%d", op, tally.succeeded, tally.failed)
        return tally

    async def _process(
        self,
        path: Path,
        operation: DirectoryOperation,
        sender: ProgressSender,
        limiter: asyncio.Semaphore,
    ) -> DirectoryOutcome:
        async with limiter:
            await sender.send(Processing(path=path))
            try:
                await asyncio.to_thread(operation, path)
            except Exception as exc:
                error = ServiceError.from_exception(_as_install_error(exc, path))
                logger.debug("folder.failed path=%s: %s", path, error.message)
                await sender.send(FolderFailed(path=path, error=error))
                return DirectoryOutcome(path=path, error=error)

            logger.debug("folder.complete path=%s", path)
            await sender.send(FolderComplete(path=path))
            return DirectoryOutcome(path=path)


def _as_render_error(exc: Exception) -> RenderError:
    if isinstance(exc, RenderError):
        return exc
    error = RenderError(f"Renderer raised {type(exc).__name__}")
    error.__cause__ = exc
    return error


def _as_install_error(exc: Exception, path: Path) -> InstallError:
    if isinstance(exc, InstallError):
        return exc
    if isinstance(exc, OSError):
        return InstallError.from_os_error(exc, path, "update icon of")
    error = InstallError(f"Unexpected failure for {path}", path=path)
    error.__cause__ = exc
    return error
