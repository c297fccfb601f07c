"""Resolve user-supplied strings into vector assets.

Decals accept markup or a path to a markup file.  Overlays accept a
broader class, checked in a fixed order:

1. inline markup (leading ``<``)
2. an existing file with a ``.svg`` extension
3. a string carrying an emoji signal codepoint
4. anything else, taken as an emoji name

Each step is a total predicate; the first match wins.  A bare word that
happens to name a readable file without a ``.svg`` extension is never
read.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from folco.domain.errors import SourceResolutionError
from folco.domain.profile import (
    EmojiGlyph,
    EmojiName,
    SvgMarkup,
    from_emoji,
    from_emoji_name,
    from_svg,
)

# Inclusive codepoint ranges whose presence marks a string as an emoji.
EMOJI_SIGNAL_RANGES: tuple[tuple[int, int], ...] = (
    (0x200D, 0x200D),  # zero width joiner
    (0x20E3, 0x20E3),  # combining enclosing keycap
    (0x2600, 0x27BF),  # misc symbols, dingbats
    (0xFE00, 0xFE0F),  # variation selectors
    (0x1F000, 0x1FAFF),  # emoji planes
)


def is_markup(text: str) -> bool:
    """A leading ``<`` is the only markup signal."""
    return text.startswith("<")


def has_emoji_signal(text: str) -> bool:
    """True when any codepoint of *text* falls in an emoji signal range."""
    return any(
        low <= ord(char) <= high for char in text for low, high in EMOJI_SIGNAL_RANGES
    )


def is_svg_file(text: str) -> bool:
    return Path(text).suffix.lower() == ".svg" and _is_file(text)


def resolve_decal_source(text: str) -> SvgMarkup:
    """Resolve a decal input to raw markup.

    Raises:
        SourceResolutionError: *text* is neither markup nor an existing path.
    """
    value = text.strip()
    if is_markup(value):
        return from_svg(value)
    if _is_file(value):
        return from_svg(_read_source(value))
    msg = f"Decal source is neither SVG markup nor an existing file: {value!r}"
    raise SourceResolutionError(msg, input=value)


def resolve_overlay_source(text: str) -> SvgMarkup | EmojiGlyph | EmojiName:
    """Resolve an overlay input.

    Only empty input or an unreadable ``.svg`` file raises
    :class:`SourceResolutionError`; unmatched text becomes an emoji name.
    """
    value = text.strip()
    if not value:
        raise SourceResolutionError("Overlay source is empty", code="EMPTY_SOURCE", input=text)
    for matches, build in _OVERLAY_CHAIN:
        if matches(value):
            return build(value)
    return from_emoji_name(value)


def _is_file(path: str) -> bool:
    try:
        return Path(path).is_file()
    except (OSError, ValueError):
        return False


def _read_source(path: str) -> str:
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        msg = f"Could not read source file: {path}"
        raise SourceResolutionError(msg, code="UNREADABLE_SOURCE", input=path) from exc


_OVERLAY_CHAIN: tuple[
    tuple[Callable[[str], bool], Callable[[str], SvgMarkup | EmojiGlyph | EmojiName]], ...
] = (
    (is_markup, from_svg),
    (is_svg_file, lambda value: from_svg(_read_source(value))),
    (has_emoji_signal, from_emoji),
)
