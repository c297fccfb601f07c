"""SVG composite renderer.

Builds a single SVG document from a profile:

- the folder shape, filled with the (optionally HSL-mutated) base color
- the active decal, centered on the folder's front panel and tinted darker
- the active overlay, anchored at a corner or the center of the panel

Markup assets are parsed and nested as child ``<svg>`` viewports; emoji
assets become ``<text>`` glyphs.  Rasterizing the result is left to the
consumer of the composite.
"""

from __future__ import annotations

import re
import unicodedata
import xml.etree.ElementTree as ET

from folco.domain.color import HslMutation
from folco.domain.errors import RenderError
from folco.domain.profile import (
    CustomizationProfile,
    EmojiGlyph,
    EmojiName,
    SvgMarkup,
)
from folco.domain.types import AnchorPosition
from folco.services.contracts import CompositeImage

SVG_NS = "http://www.w3.org/2000/svg"
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", "http://www.w3.org/1999/xlink")

DEFAULT_BASE_COLOR = "#5294e2"
VIEWBOX = 256

# Front panel of the folder shape, in viewBox units.
_PANEL_X, _PANEL_Y, _PANEL_W, _PANEL_H = 16.0, 80.0, 224.0, 144.0
_MARGIN = 10.0

_FOLDER_BACK = (
    "M16 56a8 8 0 0 1 8-8h72l16 16h120a8 8 0 0 1 8 8v144"
    "a8 8 0 0 1-8 8H24a8 8 0 0 1-8-8Z"
)
_PANEL_LIGHTEN = HslMutation(lightness_shift=0.06)
_DECAL_TINT = HslMutation(lightness_shift=-0.18, saturation_shift=-0.05)
_NUMBER = re.compile(r"^\s*([0-9]*\.?[0-9]+)")
_PAINT_PROPERTIES = ("fill", "stroke")


def _q(tag: str) -> str:
    return f"{{{SVG_NS}}}{tag}"


class SvgCompositeRenderer:
    """Render profiles into SVG composites.

    Parameters:
        size: Pixel width/height written on the root ``<svg>``.
        base_color: Unmutated folder color as ``#rrggbb``.
    """

    def __init__(self, *, size: int = VIEWBOX, base_color: str = DEFAULT_BASE_COLOR) -> None:
        self._size = size
        self._base_color = base_color

    def render(self, profile: CustomizationProfile) -> CompositeImage:
        color = self._base_color
        if profile.hsl_mutation is not None:
            color = profile.hsl_mutation.apply(color)

        root = ET.Element(
            _q("svg"),
            {
                "width": str(self._size),
                "height": str(self._size),
                "viewBox": f"0 0 {VIEWBOX} {VIEWBOX}",
            },
        )
        ET.SubElement(root, _q("path"), {"d": _FOLDER_BACK, "fill": color})
        ET.SubElement(
            root,
            _q("rect"),
            {
                "x": _fmt(_PANEL_X),
                "y": _fmt(_PANEL_Y),
                "width": _fmt(_PANEL_W),
                "height": _fmt(_PANEL_H),
                "rx": "8",
                "fill": _PANEL_LIGHTEN.apply(color),
            },
        )

        decal = profile.active_decal()
        if decal is not None:
            side = min(_PANEL_W, _PANEL_H) * decal.scale
            x = _PANEL_X + (_PANEL_W - side) / 2
            y = _PANEL_Y + (_PANEL_H - side) / 2
            node = _asset_viewport(decal.source, x, y, side)
            _tint(node, _DECAL_TINT.apply(color))
            root.append(node)

        overlay = profile.active_overlay()
        if overlay is not None:
            side = min(_PANEL_W, _PANEL_H) * overlay.scale
            x, y = _anchor(overlay.position, side)
            root.append(_asset_viewport(overlay.source, x, y, side))

        body = ET.tostring(root, encoding="unicode")
        return CompositeImage(data=f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'.encode())


def lookup_emoji_name(name: str) -> str:
    """Resolve ``"duck"`` / ``":duck:"`` / ``"red_heart"`` to its glyph.

    Raises:
        RenderError: No Unicode character carries that name.
    """
    key = name.strip().strip(":").replace("_", " ").replace("-", " ").upper()
    try:
        return unicodedata.lookup(key)
    except KeyError as exc:
        raise RenderError(f"Unknown emoji name: {name!r}", name=name) from exc


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _anchor(position: AnchorPosition, side: float) -> tuple[float, float]:
    left = _PANEL_X + _MARGIN
    right = _PANEL_X + _PANEL_W - _MARGIN - side
    top = _PANEL_Y + _MARGIN
    bottom = _PANEL_Y + _PANEL_H - _MARGIN - side
    match position:
        case AnchorPosition.BOTTOM_LEFT:
            x, y = left, bottom
        case AnchorPosition.BOTTOM_RIGHT:
            x, y = right, bottom
        case AnchorPosition.TOP_LEFT:
            x, y = left, top
        case AnchorPosition.TOP_RIGHT:
            x, y = right, top
        case AnchorPosition.CENTER:
            x = _PANEL_X + (_PANEL_W - side) / 2
            y = _PANEL_Y + (_PANEL_H - side) / 2
    return max(0.0, x), max(0.0, y)


def _asset_viewport(
    source: SvgMarkup | EmojiGlyph | EmojiName, x: float, y: float, side: float
) -> ET.Element:
    match source:
        case SvgMarkup(markup=markup):
            node = _parse_markup(markup)
        case EmojiGlyph(grapheme=grapheme):
            node = _glyph(grapheme)
        case EmojiName(name=name):
            node = _glyph(lookup_emoji_name(name))
    node.set("x", _fmt(x))
    node.set("y", _fmt(y))
    node.set("width", _fmt(side))
    node.set("height", _fmt(side))
    return node


def _parse_markup(markup: str) -> ET.Element:
    try:
        node = ET.fromstring(markup)
    except ET.ParseError as exc:
        raise RenderError("SVG markup could not be parsed") from exc
    if node.tag not in ("svg", _q("svg")):
        raise RenderError(f"Expected an <svg> root element, got <{node.tag}>")
    if "viewBox" not in node.attrib:
        width = _length(node.get("width"))
        height = _length(node.get("height"))
        if width and height:
            node.set("viewBox", f"0 0 {_fmt(width)} {_fmt(height)}")
    node.set("preserveAspectRatio", "xMidYMid meet")
    return node


def _glyph(text: str) -> ET.Element:
    node = ET.Element(_q("svg"), {"viewBox": "0 0 100 100"})
    glyph = ET.SubElement(
        node,
        _q("text"),
        {
            "x": "50",
            "y": "50",
            "font-size": "84",
            "text-anchor": "middle",
            "dominant-baseline": "central",
        },
    )
    glyph.text = text
    return node


def _tint(node: ET.Element, color: str) -> None:
    """Repaint every explicit fill/stroke in *node* and default its fill.

    Paint set through ``style`` declarations is repainted too.
    """
    node.set("fill", color)
    for element in node.iter():
        for attr in _PAINT_PROPERTIES:
            value = element.get(attr)
            if value is not None and value != "none":
                element.set(attr, color)
        style = element.get("style")
        if style:
            element.set("style", _restyle(style, color))


def _restyle(style: str, color: str) -> str:
    declarations = []
    for declaration in style.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            if declaration.strip():
                declarations.append(declaration.strip())
            continue
        name, value = name.strip(), value.strip()
        if name in _PAINT_PROPERTIES and value != "none":
            value = color
        declarations.append(f"{name}:{value}")
    return ";".join(declarations)


def _length(value: str | None) -> float | None:
    if value is None:
        return None
    match = _NUMBER.match(value)
    return float(match.group(1)) if match else None


def _fmt(value: float) -> str:
    return f"{value:.2f}".rstrip("0").rstrip(".")
