from .colorTools import (
    COLOR_KINDS,
    CssColorString,
    UnsupportedFormatError,
    clamp,
    color_to_hex,
    contrast_ratio,
    darken,
    decompose,
    emphasize,
    fade,
    hex_to_rgb_string,
    hsl_to_rgb_string,
    is_canonical_color,
    is_color_kind,
    lighten,
    recompose,
    relative_luminance,
    set_alpha,
)
from schemas import CanonicalColor, ColorKind, ColorObject

__all__ = [
    "COLOR_KINDS",
    "CanonicalColor",
    "ColorKind",
    "ColorObject",
    "CssColorString",
    "UnsupportedFormatError",
    "clamp",
    "color_to_hex",
    "contrast_ratio",
    "darken",
    "decompose",
    "emphasize",
    "fade",
    "hex_to_rgb_string",
    "hsl_to_rgb_string",
    "is_canonical_color",
    "is_color_kind",
    "lighten",
    "recompose",
    "relative_luminance",
    "set_alpha",
]
