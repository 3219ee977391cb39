from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing import Literal, Tuple

ColorKind = Literal["rgb", "rgba", "hsl", "hsla"]

class CanonicalColor(BaseModel):
    """A decomposed CSS color: its functional-notation kind and numeric components."""

    model_config = ConfigDict(frozen=True)

    kind: ColorKind = Field(..., description="The functional notation the components belong to")
    components: Tuple[float, ...] = Field(..., description="r, g, b[, a] or h, s%, l%[, a]")

    @model_validator(mode="after")
    def check_component_count(self):
        expected = 4 if self.kind.endswith("a") else 3
        if len(self.components) != expected:
            raise ValueError(f"'{self.kind}' takes {expected} components, got {len(self.components)}")
        return self

    @property
    def has_alpha(self) -> bool:
        return len(self.components) == 4

# Alias kept for callers using the ColorObject name
ColorObject = CanonicalColor
