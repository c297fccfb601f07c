"""Customization profile: the declarative description of an icon change.

A profile has three independently optional axes:

- ``hsl_mutation``: recolors the base folder shape.
- ``decal``: vector art centered on the folder body, tinted darker.
- ``overlay``: vector art or an emoji anchored at a corner or the center.

Profiles are frozen value objects.  The ``with_*`` builder methods return
a new profile each time; nothing is mutated in place.  The JSON encoding
is stable: ``CustomizationProfile.from_json(p.to_json()) == p``.
"""

from __future__ import annotations

import json
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from folco.domain.color import HslMutation
from folco.domain.errors import ProfileDecodeError
from folco.domain.types import AnchorPosition

Scale = Annotated[float, Field(gt=0.0, le=1.0, allow_inf_nan=False)]

# ---------------------------------------------------------------------------
# Vector assets (tagged union on ``kind``)
# ---------------------------------------------------------------------------


class SvgMarkup(BaseModel):
    """Raw SVG markup."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["svg"] = "svg"
    markup: str


class EmojiGlyph(BaseModel):
    """A literal emoji grapheme (may span several codepoints)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["emoji"] = "emoji"
    grapheme: str


class EmojiName(BaseModel):
    """An emoji referenced by name (e.g. ``"duck"``), looked up at render time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["emoji_name"] = "emoji_name"
    name: str


VectorAsset = Annotated[SvgMarkup | EmojiGlyph | EmojiName, Field(discriminator="kind")]


def from_svg(markup: str) -> SvgMarkup:
    """Build a raw-markup asset."""
    return SvgMarkup(markup=markup)


def from_emoji(grapheme: str) -> EmojiGlyph:
    """Build an emoji-grapheme asset."""
    return EmojiGlyph(grapheme=grapheme)


def from_emoji_name(name: str) -> EmojiName:
    """Build a named-emoji asset."""
    return EmojiName(name=name)


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


class DecalSettings(BaseModel):
    """A centered decal.  ``enabled=False`` stages it without rendering it."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: VectorAsset
    scale: Scale
    enabled: bool = True


class OverlaySettings(BaseModel):
    """An anchored overlay.  ``position`` has no default at this level."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: VectorAsset
    position: AnchorPosition
    scale: Scale
    enabled: bool = True


class CustomizationProfile(BaseModel):
    """What to change about a folder icon.  An empty profile is a no-op."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    hsl_mutation: HslMutation | None = None
    decal: DecalSettings | None = None
    overlay: OverlaySettings | None = None

    # --- builder ---

    def with_hsl_mutation(self, mutation: HslMutation | None) -> CustomizationProfile:
        return self.model_copy(update={"hsl_mutation": mutation})

    def with_decal(self, decal: DecalSettings | None) -> CustomizationProfile:
        return self.model_copy(update={"decal": decal})

    def with_overlay(self, overlay: OverlaySettings | None) -> CustomizationProfile:
        return self.model_copy(update={"overlay": overlay})

    # --- rendering view ---

    def active_decal(self) -> DecalSettings | None:
        """The decal to render, or None when unset or disabled."""
        if self.decal is None or not self.decal.enabled:
            return None
        return self.decal

    def active_overlay(self) -> OverlaySettings | None:
        """The overlay to render, or None when unset or disabled."""
        if self.overlay is None or not self.overlay.enabled:
            return None
        return self.overlay

    @property
    def is_noop(self) -> bool:
        return (
            self.hsl_mutation is None
            and self.active_decal() is None
            and self.active_overlay() is None
        )

    # --- serialization ---

    def to_json(self, *, indent: int | None = None) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> CustomizationProfile:
        """Decode a profile, raising :class:`ProfileDecodeError` on bad input."""
        try:
            return cls.model_validate_json(text)
        except ValidationError as exc:
            msg = f"Invalid customization profile: {exc.error_count()} error(s)"
            raise ProfileDecodeError(msg, errors=_summarize(exc)) from exc


def profile_json_schema() -> str:
    """JSON Schema describing the profile encoding, for external tooling."""
    return json.dumps(CustomizationProfile.model_json_schema(), indent=2)


def _summarize(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
        for err in exc.errors()
    ]
