"""Progress consumer: drives a Rich progress bar from a batch's event stream.

The reporter is the consumer half of the progress channel: it suspends
on the stream, handles every event until the producer closes the
channel, and folds what it saw into a :class:`BatchReport` that the
command turns into its final ServiceResult.
"""

from __future__ import annotations

from collections.abc import AsyncIterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TaskID, TextColumn
from rich.text import Text

from folco.output.console import create_progress_console
from folco.services.progress import (
    Completed,
    FolderComplete,
    FolderFailed,
    Processing,
    ProgressEvent,
    RenderFailed,
    Rendering,
    Started,
)
from folco.services.result import ServiceError, ServiceResult

log = structlog.get_logger(__name__)


@dataclass
class BatchReport:
    """Everything the consumer observed for one batch."""

    total: int = 0
    succeeded: int = 0
    failed: int = 0
    completed: bool = False
    render_error: ServiceError | None = None
    failures: list[tuple[Path, ServiceError]] = field(default_factory=list)
    events: list[ProgressEvent] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.completed and self.render_error is None and self.failed == 0

    def to_result(self, op: str) -> ServiceResult:
        """Summarize the batch as a ServiceResult."""
        data: dict[str, Any] = {
            "total": self.total,
            "succeeded": self.succeeded,
            "failed": self.failed,
            "failures": [
                {
                    "path": str(path),
                    "code": error.code,
                    "message": error.message,
                    "chain": error.chain,
                }
                for path, error in self.failures
            ],
        }
        if self.ok:
            return ServiceResult(ok=True, op=op, data=data)
        if self.render_error is not None:
            error = self.render_error
        elif not self.completed:
            error = ServiceError(code="INCOMPLETE", message="Batch ended before completing")
        else:
            error = ServiceError(
                code="BATCH_FAILURES",
                message=f"{self.failed} of {self.total} directories failed",
                detail={"failed": self.failed, "total": self.total},
            )
        return ServiceResult(ok=False, op=op, data=data, error=error)


class ProgressReporter:
    """Render a progress stream as a Rich progress bar.

    Parameters:
        console: Where the bar and failure lines go (stderr by default).
        verbose: Print full error chains instead of short messages.
        enabled: When False nothing is drawn; events are still folded.
        action: Verb shown while a directory is being processed.
    """

    def __init__(
        self,
        *,
        console: Console | None = None,
        verbose: bool = False,
        enabled: bool = True,
        action: str = "Processing",
    ) -> None:
        self._console = console
        self._verbose = verbose
        self._enabled = enabled
        self._action = action

    async def consume(self, events: AsyncIterable[ProgressEvent]) -> BatchReport:
        """Handle events until the stream is closed and drained."""
        report = BatchReport()
        progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("{task.fields[message]}", markup=False),
            console=self._console or create_progress_console(),
            disable=not self._enabled,
        )
        with progress:
            task = progress.add_task("folco", total=None, message="Initializing...")
            async for event in events:
                report.events.append(event)
                log.debug("progress.event", kind=event.kind)
                self._handle(event, report, progress, task)
        return report

    def _handle(
        self, event: ProgressEvent, report: BatchReport, progress: Progress, task: TaskID
    ) -> None:
        match event:
            case Started(total=total):
                report.total = total
                progress.update(task, total=total, message="Starting...")
            case Rendering():
                progress.update(task, message="Rendering icon...")
            case RenderFailed(error=error):
                report.render_error = error
                self._print(progress, "Render failed", error)
            case Processing(path=path):
                progress.update(task, message=f"{self._action}: {path.name or path}")
            case FolderComplete():
                report.succeeded += 1
                progress.advance(task)
            case FolderFailed(path=path, error=error):
                report.failed += 1
                report.failures.append((path, error))
                progress.advance(task)
                self._print(progress, f"Failed {path}", error)
            case Completed(succeeded=succeeded, failed=failed):
                report.completed = True
                progress.update(
                    task, message=f"Completed: {succeeded} succeeded, {failed} failed"
                )

    def _print(self, progress: Progress, prefix: str, error: ServiceError) -> None:
        if not self._enabled:
            return
        line = Text(f"{prefix}: ", style="bold red")
        line.append(error.describe(verbose=self._verbose))
        progress.console.print(line)
