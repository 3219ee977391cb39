import math

import pytest

from colortools import (
    CanonicalColor,
    UnsupportedFormatError,
    decompose,
    is_canonical_color,
    is_color_kind,
    recompose,
)


@pytest.mark.parametrize("kind", ["rgb", "rgba", "hsl", "hsla"])
def test_is_color_kind(kind):
    assert is_color_kind(kind)


@pytest.mark.parametrize("value", ["RGB", "hwb", "", None, 3, ["rgb"]])
def test_is_color_kind_rejects(value):
    assert not is_color_kind(value)


def test_is_canonical_color():
    assert is_canonical_color(CanonicalColor(kind="rgb", components=[1, 2, 3]))
    assert is_canonical_color({"kind": "rgb", "components": [1, 2, 3]})
    assert not is_canonical_color({"kind": "rgb", "components": "1,2,3"})
    assert not is_canonical_color({"components": [1, 2, 3]})
    assert not is_canonical_color("rgb(1, 2, 3)")


def test_decompose_rgb():
    c = decompose("rgb(255, 128, 0)")
    assert c.kind == "rgb"
    assert c.components == (255, 128, 0)


def test_decompose_hsla_strips_percent():
    c = decompose("hsla(210, 50%, 40%, 0.25)")
    assert c.kind == "hsla"
    assert c.components == (210, 50, 40, 0.25)


def test_decompose_hex():
    assert decompose("#fff") == CanonicalColor(kind="rgb", components=(255, 255, 255))
    assert decompose("#1a2b3c80").kind == "rgba"


def test_decompose_passes_canonical_color_through():
    c = CanonicalColor(kind="hsl", components=(1, 2, 3))
    assert decompose(c) is c


def test_decompose_validates_mapping():
    c = decompose({"kind": "rgba", "components": [1, 2, 3, 0.5]})
    assert c == CanonicalColor(kind="rgba", components=(1, 2, 3, 0.5))
    with pytest.raises(UnsupportedFormatError):
        decompose({"kind": "cmyk", "components": [1, 2, 3, 4]})


def test_decompose_unsupported():
    with pytest.raises(UnsupportedFormatError) as excinfo:
        decompose("unsupported(1,2,3)")
    assert excinfo.value.color == "unsupported(1,2,3)"
    assert "#nnn, #nnnnnn, rgb(), rgba(), hsl(), hsla()" in str(excinfo.value)


@pytest.mark.parametrize("color", ["red", "", "#zzz", "rgb(1, 2)", "hsla(1, 2%, 3%)"])
def test_decompose_malformed(color):
    with pytest.raises(UnsupportedFormatError):
        decompose(color)


def test_decompose_requires_string():
    with pytest.raises(TypeError):
        decompose(42)


def test_decompose_percentage_rgb_keeps_number_only():
    c = decompose("rgb(50%, 20%, 10%)")
    assert c.components == (50, 20, 10)


def test_decompose_non_numeric_is_nan():
    assert all(math.isnan(v) for v in decompose("rgb(a, b, c)").components)


def test_recompose_truncates_rgb_channels():
    c = CanonicalColor(kind="rgba", components=(10.9, 20.2, 30.999, 0.75))
    assert recompose(c) == "rgba(10, 20, 30, 0.75)"


def test_recompose_hsl_percentages():
    assert recompose(CanonicalColor(kind="hsl", components=(120, 50, 25))) == "hsl(120, 50%, 25%)"
    assert recompose(CanonicalColor(kind="hsla", components=(0, 12.5, 40, 0.3))) == "hsla(0, 12.5%, 40%, 0.3)"


@pytest.mark.parametrize(
    "color",
    [
        CanonicalColor(kind="rgb", components=(0, 128, 255)),
        CanonicalColor(kind="rgba", components=(1, 2, 3, 0.5)),
        CanonicalColor(kind="hsl", components=(200, 40, 60)),
        CanonicalColor(kind="hsla", components=(359, 100, 0, 1)),
    ],
)
def test_decompose_recompose(color):
    assert decompose(recompose(color)) == color
