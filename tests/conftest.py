"""Shared pytest fixtures and test helpers for folco tests."""

from __future__ import annotations

import asyncio
import threading
from collections.abc import Iterable
from pathlib import Path

import pytest
from click.testing import CliRunner

from folco.domain.errors import InstallError, InstallErrorKind, RenderError
from folco.domain.profile import CustomizationProfile
from folco.services.contracts import CompositeImage
from folco.services.folders import BatchTally, FolderService
from folco.services.progress import ProgressEvent


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no folco config in reach."""
    monkeypatch.setenv("FOLCO_CONFIG", str(tmp_path / "absent.toml"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def folders(tmp_path: Path) -> list[Path]:
    """Three existing target directories."""
    paths = [tmp_path / name for name in ("alpha", "beta", "gamma")]
    for path in paths:
        path.mkdir()
    return paths


# ---------------------------------------------------------------------------
# Fake external capabilities
# ---------------------------------------------------------------------------


class FakeRenderer:
    """Renderer that returns a fixed image or raises RenderError."""

    def __init__(self, *, fail: bool = False) -> None:
        self.fail = fail
        self.calls: list[CustomizationProfile] = []

    def render(self, profile: CustomizationProfile) -> CompositeImage:
        self.calls.append(profile)
        if self.fail:
            raise RenderError("boom", reason="test")
        return CompositeImage(data=b"<svg/>")


class RecordingInstaller:
    """Installer that records calls and fails for selected paths."""

    def __init__(self, *, failing: Iterable[Path] = (), error: Exception | None = None) -> None:
        self.failing = set(failing)
        self.error = error
        self.installed: list[tuple[CompositeImage, Path]] = []
        self.removed: list[Path] = []
        self._lock = threading.Lock()

    def _maybe_fail(self, directory: Path) -> None:
        if directory not in self.failing:
            return
        if self.error is not None:
            raise self.error
        raise InstallError(
            f"Permission denied: {directory}",
            path=directory,
            kind=InstallErrorKind.PERMISSION_DENIED,
        )

    def install(self, image: CompositeImage, directory: Path) -> None:
        self._maybe_fail(directory)
        with self._lock:
            self.installed.append((image, directory))

    def remove(self, directory: Path) -> None:
        self._maybe_fail(directory)
        with self._lock:
            self.removed.append(directory)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def collect_customize(
    service: FolderService, directories: list[Path], profile: CustomizationProfile
) -> tuple[list[ProgressEvent], BatchTally]:
    """Run a customize batch to completion, returning its events and tally."""

    async def _run() -> tuple[list[ProgressEvent], BatchTally]:
        stream = service.start_customize(directories, profile)
        events = [event async for event in stream]
        return events, await stream.result()

    return asyncio.run(_run())


def collect_reset(
    service: FolderService, directories: list[Path]
) -> tuple[list[ProgressEvent], BatchTally]:
    """Run a reset batch to completion, returning its events and tally."""

    async def _run() -> tuple[list[ProgressEvent], BatchTally]:
        stream = service.start_reset(directories)
        events = [event async for event in stream]
        return events, await stream.result()

    return asyncio.run(_run())


def kinds(events: list[ProgressEvent]) -> list[str]:
    return [event.kind for event in events]
