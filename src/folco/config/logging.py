"""structlog setup shared by the CLI and the batch services.

Services log through stdlib ``logging.getLogger(__name__)``; those records
pass through the same structlog processors as native structlog loggers, so
both end up as one stream on stderr (console lines, or JSON with
``--log-json``).  Context bound with :func:`batch_context` (the running op,
the batch size) is attached to every record emitted inside the batch,
including records from worker threads.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TextIO

import structlog

# Loggers that stay at WARNING even under --verbose.
_NOISY_LOGGERS = ("asyncio",)


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib logging to *stream* (default: stderr).

    Args:
        verbose: Show folco's DEBUG records; otherwise WARNING and above.
        log_json: One JSON object per line instead of console output.
        stream: Destination; replaces any handler a previous call installed.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    out = stream or sys.stderr
    handler = logging.StreamHandler(out)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json, colors=out.isatty()),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("folco").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


@contextmanager
def batch_context(op: str, **fields: Any) -> Iterator[None]:
    """Bind ``op`` and *fields* to every log record emitted in the block."""
    with structlog.contextvars.bound_contextvars(op=op, **fields):
        yield


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool, *, colors: bool) -> structlog.types.Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=colors)
