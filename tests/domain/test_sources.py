"""Tests for decal/overlay source resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from folco.domain.errors import SourceResolutionError
from folco.domain.profile import EmojiGlyph, EmojiName, SvgMarkup
from folco.domain.sources import (
    has_emoji_signal,
    resolve_decal_source,
    resolve_overlay_source,
)

SVG = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><rect/></svg>'


class TestResolveDecalSource:
    def test_inline_markup(self) -> None:
        assert resolve_decal_source("<svg/>") == SvgMarkup(markup="<svg/>")

    def test_inline_markup_is_trimmed(self) -> None:
        assert resolve_decal_source("  <svg/>\n") == SvgMarkup(markup="<svg/>")

    def test_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "logo.svg"
        path.write_text(SVG, encoding="utf-8")
        assert resolve_decal_source(str(path)) == SvgMarkup(markup=SVG)

    def test_existing_file_without_svg_extension(self, tmp_path: Path) -> None:
        path = tmp_path / "logo.txt"
        path.write_text(SVG, encoding="utf-8")
        assert resolve_decal_source(str(path)) == SvgMarkup(markup=SVG)

    def test_missing_path(self) -> None:
        with pytest.raises(SourceResolutionError) as info:
            resolve_decal_source("/no/such/file")
        assert info.value.code == "NOT_FOUND_OR_MARKUP"
        assert info.value.detail["input"] == "/no/such/file"

    def test_directory_is_not_a_source(self, tmp_path: Path) -> None:
        with pytest.raises(SourceResolutionError):
            resolve_decal_source(str(tmp_path))

    def test_emoji_is_not_a_decal(self) -> None:
        with pytest.raises(SourceResolutionError):
            resolve_decal_source("🦆")

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "binary.svg"
        path.write_bytes(b"\xff\xfe\x00\x80")
        with pytest.raises(SourceResolutionError) as info:
            resolve_decal_source(str(path))
        assert info.value.code == "UNREADABLE_SOURCE"
        assert info.value.__cause__ is not None


class TestResolveOverlaySource:
    def test_inline_markup(self) -> None:
        assert resolve_overlay_source(" <svg/> ") == SvgMarkup(markup="<svg/>")

    def test_svg_file(self, tmp_path: Path) -> None:
        path = tmp_path / "icon.svg"
        path.write_text(SVG, encoding="utf-8")
        assert resolve_overlay_source(str(path)) == SvgMarkup(markup=SVG)

    def test_svg_extension_is_case_insensitive(self, tmp_path: Path) -> None:
        path = tmp_path / "ICON.SVG"
        path.write_text(SVG, encoding="utf-8")
        assert resolve_overlay_source(str(path)) == SvgMarkup(markup=SVG)

    def test_missing_svg_file_falls_through_to_name(self) -> None:
        assert resolve_overlay_source("/no/such/icon.svg") == EmojiName(name="/no/such/icon.svg")

    def test_emoji_char(self) -> None:
        assert resolve_overlay_source("🦆") == EmojiGlyph(grapheme="🦆")

    @pytest.mark.parametrize(
        "text",
        [
            "❤️",  # heart + variation selector
            "👩‍💻",  # ZWJ sequence
            "1️⃣",  # keycap
            "☀",  # misc symbols block
            "✂",  # dingbats block
        ],
    )
    def test_emoji_signals(self, text: str) -> None:
        assert resolve_overlay_source(text) == EmojiGlyph(grapheme=text)

    def test_plain_word_is_emoji_name(self) -> None:
        assert resolve_overlay_source("duck") == EmojiName(name="duck")

    def test_readable_non_svg_file_is_not_read(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / "star").write_text(SVG, encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        assert resolve_overlay_source("star") == EmojiName(name="star")

    def test_markup_wins_over_emoji(self) -> None:
        source = resolve_overlay_source("<svg><text>🦆</text></svg>")
        assert isinstance(source, SvgMarkup)

    def test_empty_input(self) -> None:
        with pytest.raises(SourceResolutionError) as info:
            resolve_overlay_source("   ")
        assert info.value.code == "EMPTY_SOURCE"


class TestEmojiSignal:
    @pytest.mark.parametrize("text", ["duck", "red_heart", "café", "→", ""])
    def test_no_signal(self, text: str) -> None:
        assert has_emoji_signal(text) is False

    def test_signal_anywhere_in_string(self) -> None:
        assert has_emoji_signal("go 🚀") is True
