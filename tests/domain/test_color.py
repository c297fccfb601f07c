"""Tests for HSL mutations and the color palette table."""

from __future__ import annotations

import colorsys

import pytest
from pydantic import ValidationError

from folco.domain.color import (
    FOLDER_COLOR_MUTATIONS,
    HslMutation,
    format_hex,
    mutation_for,
    parse_hex,
)
from folco.domain.types import FolderColor

BASE = "#5294e2"


def _hls(hex_color: str) -> tuple[float, float, float]:
    return colorsys.rgb_to_hls(*parse_hex(hex_color))


class TestPalette:
    def test_every_color_has_a_mutation(self) -> None:
        assert set(FOLDER_COLOR_MUTATIONS) == set(FolderColor)

    def test_mapping_is_deterministic(self) -> None:
        assert mutation_for(FolderColor.RED) == mutation_for(FolderColor.RED)
        assert mutation_for(FolderColor.RED) is FOLDER_COLOR_MUTATIONS[FolderColor.RED]

    def test_blue_is_identity(self) -> None:
        assert mutation_for(FolderColor.BLUE).apply(BASE) == BASE

    def test_gray_is_desaturated(self) -> None:
        _, _, saturation = _hls(mutation_for(FolderColor.GRAY).apply(BASE))
        assert saturation == pytest.approx(0.0, abs=0.01)

    def test_black_is_darker_than_base(self) -> None:
        _, base_lightness, _ = _hls(BASE)
        _, lightness, _ = _hls(mutation_for(FolderColor.BLACK).apply(BASE))
        assert lightness < base_lightness


class TestHslMutation:
    def test_identity(self) -> None:
        assert HslMutation().apply("#336699") == "#336699"

    def test_full_hue_turn_is_identity(self) -> None:
        assert HslMutation(hue_shift=360.0).apply("#336699") == "#336699"

    def test_lightness_clamps(self) -> None:
        assert HslMutation(lightness_shift=1.0).apply("#336699") == "#ffffff"
        assert HslMutation(lightness_shift=-1.0).apply("#336699") == "#000000"

    def test_shift_bounds(self) -> None:
        with pytest.raises(ValidationError):
            HslMutation(saturation_shift=1.5)
        with pytest.raises(ValidationError):
            HslMutation(lightness_shift=-2.0)

    def test_rejects_non_finite(self) -> None:
        with pytest.raises(ValidationError):
            HslMutation(hue_shift=float("inf"))


class TestHexHelpers:
    def test_round_trip(self) -> None:
        assert format_hex(*parse_hex("#A0b1C2")) == "#a0b1c2"

    def test_invalid(self) -> None:
        with pytest.raises(ValueError):
            parse_hex("#abc")
