"""Contracts for the external capabilities the orchestrator drives.

The renderer and the installer are plain blocking callables; the
orchestrator runs them off the event loop.  Implementations live in
:mod:`folco.infrastructure`, and tests substitute fakes.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel

from folco.domain.profile import CustomizationProfile


class CompositeImage(BaseModel):
    """One rendered icon, shared read-only by every directory in a batch."""

    model_config = {"frozen": True}

    data: bytes
    media_type: str = "image/svg+xml"
    extension: str = ".svg"


@runtime_checkable
class Renderer(Protocol):
    def render(self, profile: CustomizationProfile) -> CompositeImage:
        """Render *profile* once.  Raises ``RenderError`` on failure."""
        ...


@runtime_checkable
class IconInstaller(Protocol):
    def install(self, image: CompositeImage, directory: Path) -> None:
        """Attach *image* as the custom icon of *directory*.

        Raises ``InstallError``; a missing directory and a permission
        failure must be distinguishable by ``InstallError.kind``.
        """
        ...

    def remove(self, directory: Path) -> None:
        """Restore the default icon of *directory*.  Raises ``InstallError``."""
        ...
