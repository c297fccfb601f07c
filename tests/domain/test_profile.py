"""Tests for the customization profile model and its JSON encoding."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from folco.domain.color import HslMutation
from folco.domain.errors import ProfileDecodeError
from folco.domain.profile import (
    CustomizationProfile,
    DecalSettings,
    EmojiGlyph,
    EmojiName,
    OverlaySettings,
    SvgMarkup,
    from_emoji,
    from_emoji_name,
    from_svg,
    profile_json_schema,
)
from folco.domain.types import AnchorPosition


def _full_profile() -> CustomizationProfile:
    return (
        CustomizationProfile()
        .with_hsl_mutation(HslMutation(hue_shift=120.0, saturation_shift=-0.1))
        .with_decal(DecalSettings(source=from_svg("<svg/>"), scale=0.7))
        .with_overlay(
            OverlaySettings(
                source=from_emoji("🦆"),
                position=AnchorPosition.TOP_LEFT,
                scale=0.35,
                enabled=False,
            )
        )
    )


class TestVectorAsset:
    def test_constructors_tag_variants(self) -> None:
        assert from_svg("<svg/>") == SvgMarkup(markup="<svg/>")
        assert from_emoji("🦆").kind == "emoji"
        assert from_emoji_name("duck").kind == "emoji_name"

    def test_tags_distinguish_equal_contents(self) -> None:
        assert from_emoji("x") != from_emoji_name("x")
        assert from_svg("x") != from_emoji("x")

    def test_serialized_form_carries_tag(self) -> None:
        settings = OverlaySettings(
            source=from_emoji_name("duck"), position=AnchorPosition.CENTER, scale=0.5
        )
        data = json.loads(settings.model_dump_json())
        assert data["source"] == {"kind": "emoji_name", "name": "duck"}
        assert data["position"] == "center"


class TestBuilder:
    def test_empty_profile_is_noop(self) -> None:
        profile = CustomizationProfile()
        assert profile.is_noop
        assert profile.hsl_mutation is None
        assert profile.decal is None
        assert profile.overlay is None

    def test_builder_returns_new_instances(self) -> None:
        base = CustomizationProfile()
        colored = base.with_hsl_mutation(HslMutation(hue_shift=10.0))
        assert base.hsl_mutation is None
        assert colored.hsl_mutation == HslMutation(hue_shift=10.0)
        assert colored is not base

    def test_frozen(self) -> None:
        profile = CustomizationProfile()
        with pytest.raises(ValidationError):
            profile.decal = None  # type: ignore[misc]

    def test_disabled_settings_are_inactive(self) -> None:
        profile = _full_profile()
        assert profile.overlay is not None
        assert profile.active_overlay() is None
        assert profile.active_decal() == profile.decal

    def test_only_disabled_settings_is_noop(self) -> None:
        profile = CustomizationProfile().with_decal(
            DecalSettings(source=from_svg("<svg/>"), scale=1.0, enabled=False)
        )
        assert profile.is_noop

    def test_overlay_position_required(self) -> None:
        with pytest.raises(ValidationError):
            OverlaySettings(source=from_emoji("🦆"), scale=0.5)  # type: ignore[call-arg]


class TestScaleBounds:
    @pytest.mark.parametrize("scale", [0.0, -0.5, 1.0001, 2.0, float("nan"), float("inf")])
    def test_out_of_range_rejected(self, scale: float) -> None:
        with pytest.raises(ValidationError):
            DecalSettings(source=from_svg("<svg/>"), scale=scale)

    @pytest.mark.parametrize("scale", [0.0001, 0.5, 1.0])
    def test_in_range_accepted(self, scale: float) -> None:
        assert DecalSettings(source=from_svg("<svg/>"), scale=scale).scale == scale

    def test_out_of_range_in_json_is_decode_error(self) -> None:
        text = json.dumps(
            {"decal": {"source": {"kind": "svg", "markup": "<svg/>"}, "scale": 1.5}}
        )
        with pytest.raises(ProfileDecodeError) as info:
            CustomizationProfile.from_json(text)
        assert any("decal.scale" in line for line in info.value.detail["errors"])


class TestJsonRoundTrip:
    @pytest.mark.parametrize(
        "profile",
        [
            CustomizationProfile(),
            _full_profile(),
            CustomizationProfile().with_overlay(
                OverlaySettings(
                    source=from_svg('<svg viewBox="0 0 1 1"/>'),
                    position=AnchorPosition.BOTTOM_RIGHT,
                    scale=1.0,
                )
            ),
            CustomizationProfile().with_decal(
                DecalSettings(source=from_emoji_name("star"), scale=0.1, enabled=False)
            ),
        ],
    )
    def test_round_trip(self, profile: CustomizationProfile) -> None:
        assert CustomizationProfile.from_json(profile.to_json()) == profile

    def test_round_trip_keeps_variant_types(self) -> None:
        decoded = CustomizationProfile.from_json(_full_profile().to_json())
        assert decoded.overlay is not None
        assert isinstance(decoded.overlay.source, EmojiGlyph)
        assert decoded.decal is not None
        assert isinstance(decoded.decal.source, SvgMarkup)

    def test_emoji_name_decodes(self) -> None:
        text = (
            '{"overlay": {"source": {"kind": "emoji_name", "name": "duck"},'
            ' "position": "bottom-left", "scale": 0.5}}'
        )
        profile = CustomizationProfile.from_json(text)
        assert profile.overlay is not None
        assert profile.overlay.source == EmojiName(name="duck")
        assert profile.overlay.enabled is True

    def test_malformed_json(self) -> None:
        with pytest.raises(ProfileDecodeError) as info:
            CustomizationProfile.from_json("{not json")
        assert info.value.code == "INVALID_PROFILE"
        assert isinstance(info.value.__cause__, ValidationError)

    def test_unknown_kind_rejected(self) -> None:
        text = '{"decal": {"source": {"kind": "png", "data": ""}, "scale": 0.5}}'
        with pytest.raises(ProfileDecodeError):
            CustomizationProfile.from_json(text)

    def test_unknown_field_rejected(self) -> None:
        with pytest.raises(ProfileDecodeError):
            CustomizationProfile.from_json('{"sticker": {}}')

    def test_unknown_nested_field_rejected(self) -> None:
        with pytest.raises(ProfileDecodeError):
            CustomizationProfile.from_json('{"hsl_mutation": {"hue": 120}}')


class TestSchema:
    def test_schema_is_json(self) -> None:
        schema = json.loads(profile_json_schema())
        assert schema["title"] == "CustomizationProfile"
        assert set(schema["properties"]) == {"hsl_mutation", "decal", "overlay"}

    def test_schema_describes_variants(self) -> None:
        schema = profile_json_schema()
        for name in ("SvgMarkup", "EmojiGlyph", "EmojiName", "AnchorPosition"):
            assert name in schema
