"""
CSS color decomposition, conversion and tonal adjustment.
Supported: hex 3/4/6/8, rgb(), rgba(), hsl(), hsla() in legacy comma syntax.
Excludes: named colors, percentage rgb channels, CSS4 space-separated syntax.

Every operation accepts either a CSS string or an already decomposed
CanonicalColor and returns a new value; inputs are never mutated.
"""

import logging
import math
import re
from collections.abc import Mapping
from typing import Annotated, Any, List, Union

from pydantic import AfterValidator, ValidationError

from schemas.color import CanonicalColor, ColorKind

logger = logging.getLogger(__name__)

ColorInput = Union[CanonicalColor, Mapping, str]

COLOR_KINDS = ("rgb", "rgba", "hsl", "hsla")
SUPPORTED_FORMATS = "#nnn, #nnnnnn, rgb(), rgba(), hsl(), hsla()"

# WCAG 2.0 relative luminance (https://www.w3.org/TR/WCAG20-TECHS/G17.html)
LUMA_R, LUMA_G, LUMA_B = 0.2126, 0.7152, 0.0722
SRGB_LINEAR_THRESHOLD = 0.03928
WCAG_LUMINANCE_OFFSET = 0.05

DEFAULT_EMPHASIS = 0.15

# Regular expression patterns
num = r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?"
NUM_PREFIX_RE = re.compile(f"^\\s*({num})")
HEX_BODY_RE = re.compile(r"[0-9a-f]+", re.IGNORECASE)


class UnsupportedFormatError(ValueError):
    """Raised when a color string is not one of the supported notations."""

    def __init__(self, color: Any, reason: str = ""):
        self.color = color
        message = (
            f"Unsupported '{color}' color.\n"
            f"We support the following formats: {SUPPORTED_FORMATS}."
        )
        if reason:
            message += f"\n{reason}"
        super().__init__(message)


# Helpers ---------------------------------------------------------

def clamp(value: float, lo: float = 0, hi: float = 1) -> float:
    """Clamp value between lo and hi."""
    return min(max(lo, value), hi)

def round_half_up(x: float) -> int:
    """Round to the nearest integer, halves rounding up. NaN is returned as-is."""
    if math.isnan(x):
        return x
    return math.floor(x + 0.5)

def round3(x: float) -> float:
    """Round to 3 decimal places."""
    return round(x * 1000) / 1000

def parse_number(s: str) -> float:
    """Parse the leading number of s, ignoring trailing units such as '%'.

    Returns NaN when s does not start with a number.
    """
    m = NUM_PREFIX_RE.match(s)
    if not m:
        return math.nan
    return float(m.group(1))

def format_number(n: float) -> str:
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return repr(n)

def truncate(n: float) -> float:
    # NaN has no integer part; keep it so it shows up in the output
    if math.isnan(n) or math.isinf(n):
        return n
    return int(n)


# Type guards -----------------------------------------------------

def is_color_kind(value: Any) -> bool:
    return isinstance(value, str) and value in COLOR_KINDS

def is_canonical_color(value: Any) -> bool:
    """Structural check: a string kind plus a sequence of components."""
    if isinstance(value, CanonicalColor):
        return True
    return (
        isinstance(value, Mapping)
        and isinstance(value.get("kind"), str)
        and isinstance(value.get("components"), (list, tuple))
    )


# HEX -------------------------------------------------------------

def hex_to_rgb_string(color: str) -> str:
    """Convert #nnn, #nnnn, #nnnnnn or #nnnnnnnn to rgb() / rgba().

    Returns an empty string when the hex body does not split into 3 or 4 groups.
    """
    body = color[1:]
    width = 2 if len(body) >= 6 else 1
    groups = [body[i:i + width] for i in range(0, len(body), width)]

    if (
        not HEX_BODY_RE.fullmatch(body)
        or len(groups) not in (3, 4)
        or any(len(g) != width for g in groups)
    ):
        logger.debug("Rejected malformed hex color %r", color)
        return ""

    if width == 1:
        groups = [g + g for g in groups]

    values = [int(g, 16) for g in groups]
    entries = [str(v) for v in values[:3]]
    if len(values) == 4:
        entries.append(format_number(round3(values[3] / 255)))
        return f"rgba({', '.join(entries)})"
    return f"rgb({', '.join(entries)})"

def color_to_hex(color: ColorInput) -> str:
    """Convert a color to #rrggbb, or #rrggbbaa when it carries alpha.

    Hex strings are returned unchanged. hsl()/hsla() colors are converted
    to rgb first and the alpha component is rescaled from 0-1 to a byte.
    """
    if isinstance(color, str) and color.startswith("#"):
        return color

    c = decompose(color)
    if c.kind in ("hsl", "hsla"):
        c = decompose(hsl_to_rgb_string(c))

    def h(n: int) -> str:
        return format(n, "02x")

    channels = [round_half_up(clamp(v, 0, 255)) for v in c.components[:3]]
    if c.has_alpha:
        channels.append(round_half_up(clamp(c.components[3]) * 255))
    return "#" + "".join(h(n) for n in channels)


# HSL -------------------------------------------------------------

def hsl_to_rgb_string(color: ColorInput) -> str:
    """Convert an hsl()/hsla() color to rgb()/rgba()."""
    c = decompose(color)
    values = c.components
    h = values[0]
    s = values[1] / 100
    l = values[2] / 100
    a = s * min(l, 1 - l)

    def f(n: int) -> float:
        k = (n + h / 30) % 12
        return l - a * clamp(min(k - 3, 9 - k, 1), -1, 1)

    kind: ColorKind = "rgb"
    rgb: List[float] = [
        round_half_up(f(0) * 255),
        round_half_up(f(8) * 255),
        round_half_up(f(4) * 255),
    ]

    alpha = values[3] if c.has_alpha else 0
    if c.kind == "hsla" and alpha and not math.isnan(alpha):
        kind = "rgba"
        rgb.append(alpha)

    return recompose(CanonicalColor(kind=kind, components=rgb))


# Decompose / recompose -------------------------------------------

def decompose(color: ColorInput) -> CanonicalColor:
    """Parse a CSS color into a CanonicalColor.

    Note: rgb() percentage channels are not supported; the % sign is dropped.
    """
    if isinstance(color, CanonicalColor):
        return color

    if is_canonical_color(color):
        try:
            return CanonicalColor.model_validate(
                {"kind": color["kind"], "components": tuple(color["components"])}
            )
        except ValidationError as exc:
            raise UnsupportedFormatError(color, str(exc)) from exc

    if not isinstance(color, str):
        raise TypeError(f"CSS color string or CanonicalColor required, got {type(color).__name__}")

    color = color.strip()
    if color.startswith("#"):
        return decompose(hex_to_rgb_string(color))

    marker = color.find("(")
    kind = color[:marker] if marker >= 0 else ""
    if not is_color_kind(kind):
        logger.debug("Unsupported color format %r", color)
        raise UnsupportedFormatError(color)

    components = tuple(parse_number(v) for v in color[marker + 1:-1].split(","))
    try:
        return CanonicalColor(kind=kind, components=components)
    except ValidationError as exc:
        raise UnsupportedFormatError(color, str(exc)) from exc

def recompose(color: CanonicalColor) -> str:
    """Render a CanonicalColor back to CSS functional notation."""
    if not isinstance(color, CanonicalColor):
        color = decompose(color)
    kind, values = color.kind, color.components

    if kind in ("rgb", "rgba"):
        # Only the channels are truncated, alpha is kept as-is
        entries = [format_number(truncate(n) if i < 3 else n) for i, n in enumerate(values)]
    else:
        entries = [format_number(n) for n in values]
        entries[1] += "%"
        entries[2] += "%"

    return f"{kind}({', '.join(entries)})"


# Luminance / contrast --------------------------------------------

def relative_luminance(color: ColorInput) -> float:
    """The relative brightness of a color, 0 for black and 1 for white.

    Rounded to 3 decimal places.
    """
    c = decompose(color)
    if c.kind in ("hsl", "hsla"):
        c = decompose(hsl_to_rgb_string(c))

    def linear(val: float) -> float:
        val /= 255
        if val <= SRGB_LINEAR_THRESHOLD:
            return val / 12.92
        return ((val + 0.055) / 1.055) ** 2.4

    r, g, b = (linear(v) for v in c.components[:3])
    return round(LUMA_R * r + LUMA_G * g + LUMA_B * b, 3)

def contrast_ratio(foreground: ColorInput, background: ColorInput) -> float:
    """WCAG contrast ratio between two colors, in the range 1 - 21."""
    lum_a = relative_luminance(foreground)
    lum_b = relative_luminance(background)
    return (max(lum_a, lum_b) + WCAG_LUMINANCE_OFFSET) / (min(lum_a, lum_b) + WCAG_LUMINANCE_OFFSET)


# Tonal adjustment ------------------------------------------------
# Hex input comes back in rgb()/rgba() notation.

def set_alpha(color: ColorInput, value: float) -> str:
    """Set the absolute transparency of a color, overwriting any existing alpha."""
    c = decompose(color)
    value = clamp(value)

    kind = c.kind
    if kind == "rgb":
        kind = "rgba"
    elif kind == "hsl":
        kind = "hsla"

    components = (*c.components[:3], value)
    return recompose(CanonicalColor(kind=kind, components=components))

fade = set_alpha

def darken(color: ColorInput, coefficient: float) -> str:
    c = decompose(color)
    coefficient = clamp(coefficient)
    values = list(c.components)

    if c.kind in ("hsl", "hsla"):
        values[2] *= 1 - coefficient
    else:
        for i in range(3):
            values[i] *= 1 - coefficient

    return recompose(CanonicalColor(kind=c.kind, components=values))

def lighten(color: ColorInput, coefficient: float) -> str:
    c = decompose(color)
    coefficient = clamp(coefficient)
    values = list(c.components)

    if c.kind in ("hsl", "hsla"):
        values[2] += (100 - values[2]) * coefficient
    else:
        for i in range(3):
            values[i] += (255 - values[i]) * coefficient

    return recompose(CanonicalColor(kind=c.kind, components=values))

def emphasize(color: ColorInput, coefficient: float = DEFAULT_EMPHASIS) -> str:
    """Darken light colors and lighten dark ones."""
    if relative_luminance(color) > 0.5:
        return darken(color, coefficient)
    return lighten(color, coefficient)


# Pydantic validation wrapper
def _validate_css_color(v: str) -> str:
    try:
        decompose(v)
    except UnsupportedFormatError as exc:
        raise ValueError(str(exc)) from exc
    return v

CssColorString = Annotated[str, AfterValidator(_validate_css_color)]
