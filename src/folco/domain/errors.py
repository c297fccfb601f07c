"""Error taxonomy for folco.

Four families, each surfaced differently:

- Source resolution and profile decoding fail the command before any
  batch starts.
- Render errors are fatal to the whole batch (no directory is attempted).
- Install errors are per directory and never abort the batch.

Every error carries its offending input in ``detail`` and keeps the
underlying cause chained, so the boundary layer can show either the short
``message`` or the full ``chain()``.
"""

from __future__ import annotations

from enum import StrEnum
from pathlib import Path
from typing import Any


class FolcoError(Exception):
    """Base class for all folco errors."""

    code: str = "FOLCO_ERROR"

    def __init__(self, message: str, *, code: str | None = None, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code
        self.detail: dict[str, Any] = detail

    def chain(self) -> list[str]:
        """Messages of this error followed by each ``__cause__`` in turn."""
        return error_chain(self)


class SourceResolutionError(FolcoError):
    """A decal/overlay input matched none of the accepted forms."""

    code = "NOT_FOUND_OR_MARKUP"


class ProfileDecodeError(FolcoError):
    """A serialized profile could not be parsed or validated."""

    code = "INVALID_PROFILE"


class RenderError(FolcoError):
    """The one-time composite render failed."""

    code = "RENDER_FAILED"


class InstallErrorKind(StrEnum):
    """Distinguishable per-directory failure causes."""

    NOT_FOUND = "not_found"
    NOT_A_DIRECTORY = "not_a_directory"
    PERMISSION_DENIED = "permission_denied"
    IO_ERROR = "io_error"


class InstallError(FolcoError):
    """Installing or removing a custom icon failed for one directory."""

    code = "INSTALL_FAILED"

    def __init__(
        self,
        message: str,
        *,
        path: Path,
        kind: InstallErrorKind = InstallErrorKind.IO_ERROR,
        **detail: Any,
    ) -> None:
        super().__init__(message, path=str(path), kind=kind.value, **detail)
        self.path = path
        self.kind = kind

    @classmethod
    def from_os_error(cls, exc: OSError, path: Path, action: str) -> InstallError:
        """Classify an ``OSError`` raised while touching *path*."""
        if isinstance(exc, FileNotFoundError):
            kind = InstallErrorKind.NOT_FOUND
        elif isinstance(exc, NotADirectoryError):
            kind = InstallErrorKind.NOT_A_DIRECTORY
        elif isinstance(exc, PermissionError):
            kind = InstallErrorKind.PERMISSION_DENIED
        else:
            kind = InstallErrorKind.IO_ERROR
        error = cls(f"Failed to {action} {path}", path=path, kind=kind)
        error.__cause__ = exc
        return error


def error_chain(exc: BaseException) -> list[str]:
    """Render *exc* and its ``__cause__`` chain as a list of messages."""
    messages: list[str] = []
    current: BaseException | None = exc
    seen: set[int] = set()
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        text = str(current) or type(current).__name__
        messages.append(text)
        current = current.__cause__
    return messages
