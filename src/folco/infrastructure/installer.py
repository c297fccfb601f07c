"""Directory icon installer using freedesktop ``.directory`` files.

``install`` writes the composite into the directory as a hidden icon file
and points the ``[Desktop Entry] Icon=`` key at it.  ``remove`` drops both
again, leaving any other ``.directory`` settings untouched.

INVARIANT: Failures are raised as ``InstallError`` with a ``kind`` that
tells a missing directory apart from a permission problem.
"""

from __future__ import annotations

import configparser
import logging
from pathlib import Path

from folco.domain.errors import InstallError, InstallErrorKind
from folco.services.contracts import CompositeImage

logger = logging.getLogger(__name__)

DIRECTORY_FILE = ".directory"
DESKTOP_SECTION = "Desktop Entry"
DEFAULT_ICON_STEM = ".folco-icon"


class DirectoryFileInstaller:
    """Attach/remove custom icons through ``.directory`` entries.

    Parameters:
        icon_stem: File name (without extension) of the icon written into
            each directory.
    """

    def __init__(self, *, icon_stem: str = DEFAULT_ICON_STEM) -> None:
        self._icon_stem = icon_stem

    def install(self, image: CompositeImage, directory: Path) -> None:
        _require_directory(directory)
        icon_path = directory / f"{self._icon_stem}{image.extension}"
        try:
            parser = _read_entry_file(directory)
            if not parser.has_section(DESKTOP_SECTION):
                parser.add_section(DESKTOP_SECTION)
            parser.set(DESKTOP_SECTION, "Icon", f"./{icon_path.name}")
            icon_path.write_bytes(image.data)
            _write_entry_file(directory, parser)
        except OSError as exc:
            raise InstallError.from_os_error(exc, directory, "install icon into") from exc
        logger.debug("Installed icon %s", icon_path)

    def remove(self, directory: Path) -> None:
        _require_directory(directory)
        try:
            parser = _read_entry_file(directory)
            icon = parser.get(DESKTOP_SECTION, "Icon", fallback=None)
            if icon is not None and self._owns(icon):
                parser.remove_option(DESKTOP_SECTION, "Icon")
                if not parser.items(DESKTOP_SECTION):
                    parser.remove_section(DESKTOP_SECTION)
                _write_entry_file(directory, parser)
            for stale in directory.glob(f"{self._icon_stem}.*"):
                stale.unlink(missing_ok=True)
        except OSError as exc:
            raise InstallError.from_os_error(exc, directory, "remove icon from") from exc
        logger.debug("Removed icon from %s", directory)

    def _owns(self, icon: str) -> bool:
        return Path(icon).name.startswith(f"{self._icon_stem}.")


def _require_directory(directory: Path) -> None:
    if not directory.exists():
        raise InstallError(
            f"Directory does not exist: {directory}",
            path=directory,
            kind=InstallErrorKind.NOT_FOUND,
        )
    if not directory.is_dir():
        raise InstallError(
            f"Not a directory: {directory}",
            path=directory,
            kind=InstallErrorKind.NOT_A_DIRECTORY,
        )


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(interpolation=None)
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _read_entry_file(directory: Path) -> configparser.ConfigParser:
    parser = _new_parser()
    path = directory / DIRECTORY_FILE
    if path.is_file():
        try:
            parser.read_string(path.read_text(encoding="utf-8"), source=str(path))
        except configparser.Error as exc:
            raise InstallError(
                f"Unreadable {DIRECTORY_FILE} in {directory}",
                path=directory,
                kind=InstallErrorKind.IO_ERROR,
            ) from exc
    return parser


def _write_entry_file(directory: Path, parser: configparser.ConfigParser) -> None:
    path = directory / DIRECTORY_FILE
    if not parser.sections():
        path.unlink(missing_ok=True)
        return
    with path.open("w", encoding="utf-8") as fh:
        parser.write(fh, space_around_delimiters=False)
