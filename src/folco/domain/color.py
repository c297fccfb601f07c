"""HSL mutation model and the fixed folder color palette.

Colors are expressed as mutations of the base folder color rather than as
absolute values, so a preset stays meaningful when the base color is
changed in ``folco.toml``.  The palette table is static data: it is never
derived from the base color at runtime.
"""

from __future__ import annotations

import colorsys

from pydantic import BaseModel, ConfigDict, Field

from folco.domain.types import FolderColor


class HslMutation(BaseModel):
    """Hue/saturation/lightness adjustment applied to the base folder color.

    Attributes:
        hue_shift: Rotation in degrees (wraps around the color wheel).
        saturation_shift: Additive delta in ``[-1, 1]``; result is clamped.
        lightness_shift: Additive delta in ``[-1, 1]``; result is clamped.
    """

    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="forbid")

    hue_shift: float = 0.0
    saturation_shift: float = Field(default=0.0, ge=-1.0, le=1.0)
    lightness_shift: float = Field(default=0.0, ge=-1.0, le=1.0)

    def apply(self, hex_color: str) -> str:
        """Return *hex_color* (``#rrggbb``) with this mutation applied."""
        r, g, b = parse_hex(hex_color)
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        h = (h + self.hue_shift / 360.0) % 1.0
        l = _clamp(l + self.lightness_shift)
        s = _clamp(s + self.saturation_shift)
        return format_hex(*colorsys.hls_to_rgb(h, l, s))


# Base color is #5294e2 (hue ~213 degrees); shifts are relative to it.
FOLDER_COLOR_MUTATIONS: dict[FolderColor, HslMutation] = {
    FolderColor.RED: HslMutation(hue_shift=147.0, saturation_shift=0.05, lightness_shift=-0.05),
    FolderColor.ORANGE: HslMutation(hue_shift=-182.0, saturation_shift=0.1),
    FolderColor.YELLOW: HslMutation(hue_shift=-165.0, saturation_shift=0.1, lightness_shift=0.05),
    FolderColor.GREEN: HslMutation(hue_shift=-93.0, saturation_shift=-0.15, lightness_shift=-0.05),
    FolderColor.TEAL: HslMutation(hue_shift=-37.0, saturation_shift=-0.1, lightness_shift=-0.05),
    FolderColor.BLUE: HslMutation(),
    FolderColor.PURPLE: HslMutation(hue_shift=57.0, saturation_shift=-0.1),
    FolderColor.PINK: HslMutation(hue_shift=117.0, lightness_shift=0.08),
    FolderColor.BROWN: HslMutation(hue_shift=-186.0, saturation_shift=-0.35, lightness_shift=-0.2),
    FolderColor.GRAY: HslMutation(saturation_shift=-1.0),
    FolderColor.BLACK: HslMutation(saturation_shift=-1.0, lightness_shift=-0.45),
}


def mutation_for(color: FolderColor) -> HslMutation:
    """Look up the fixed mutation for a palette entry."""
    return FOLDER_COLOR_MUTATIONS[color]


def parse_hex(hex_color: str) -> tuple[float, float, float]:
    """Parse ``#rrggbb`` into unit-range RGB floats."""
    value = hex_color.strip().lstrip("#")
    if len(value) != 6:
        msg = f"Expected a #rrggbb color, got {hex_color!r}"
        raise ValueError(msg)
    return tuple(int(value[i : i + 2], 16) / 255.0 for i in (0, 2, 4))  # type: ignore[return-value]


def format_hex(r: float, g: float, b: float) -> str:
    """Format unit-range RGB floats as ``#rrggbb``."""
    return "#" + "".join(f"{round(_clamp(c) * 255):02x}" for c in (r, g, b))


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))
