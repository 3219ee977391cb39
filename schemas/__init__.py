from .color import CanonicalColor, ColorKind, ColorObject

__all__ = ["CanonicalColor", "ColorKind", "ColorObject"]
