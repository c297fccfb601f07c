"""Closed enumerations shared across the profile model and the CLI."""

from __future__ import annotations

from enum import StrEnum


class AnchorPosition(StrEnum):
    """Where an overlay is anchored on the folder body."""

    BOTTOM_LEFT = "bottom-left"
    BOTTOM_RIGHT = "bottom-right"
    TOP_LEFT = "top-left"
    TOP_RIGHT = "top-right"
    CENTER = "center"


class FolderColor(StrEnum):
    """Named folder color presets (see ``folco.domain.color``)."""

    RED = "red"
    ORANGE = "orange"
    YELLOW = "yellow"
    GREEN = "green"
    TEAL = "teal"
    BLUE = "blue"
    PURPLE = "purple"
    PINK = "pink"
    BROWN = "brown"
    GRAY = "gray"
    BLACK = "black"
