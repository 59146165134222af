"""
Shader metadata produced by the extractor.

A ShaderMetadata holds the sliders harvested from the params block, in
declaration order, plus the still-image flag. Sliders are plain mutable
dataclasses: a GUI writes edited values back into `value` every frame.

Slider kinds:
    FloatSlider  numeric drag control, bounded by min/max
    Vec3Slider   three-component drag control
    ColorSlider  vec3 shown as a color picker
    BoolSlider   checkbox; never produced by extraction, kept for direct use
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

Vec3 = Tuple[float, float, float]


@dataclass
class Slider:
    """
    Base class for all slider kinds.

    Attributes:
        name: field name in the params block
    """
    name: str = None

    # GLSL type of the block member this slider feeds
    glsl_type = None


@dataclass
class FloatSlider(Slider):
    """
    Bounded float parameter.

    `min <= value <= max` is not enforced: an `init` outside the bounds is
    kept as written. Use clamped() when the bound must hold.
    """
    min: float = 0.0
    max: float = 1.0
    value: float = 0.0

    glsl_type = 'float'

    def clamped(self) -> float:
        return max(self.min, min(self.max, self.value))


@dataclass
class Vec3Slider(Slider):
    """Three-component float vector parameter."""
    value: Vec3 = (0.0, 0.0, 0.0)

    glsl_type = 'vec3'


@dataclass
class ColorSlider(Slider):
    """
    RGB color parameter.

    Same storage as a Vec3Slider. Editors assign a new (r, g, b) tuple.
    """
    value: Vec3 = (0.0, 0.0, 0.0)

    glsl_type = 'vec3'


@dataclass
class BoolSlider(Slider):
    """On/off parameter stored as 0 or 1."""
    value: int = 0

    glsl_type = 'bool'


@dataclass
class ShaderMetadata:
    """
    Parameter surface of one shader.

    Attributes:
        sliders: sliders in params block declaration order
        still_image: True if the shader defines NUANCE_STILL_IMAGE
    """
    sliders: List[Slider] = field(default_factory=list)
    still_image: bool = False

    def find(self, name: str) -> Optional[Slider]:
        """Return the first slider called `name`, or None."""
        for slider in self.sliders:
            if slider.name == name:
                return slider
        return None

    def float_sliders(self) -> Iterator[FloatSlider]:
        for slider in self.sliders:
            if isinstance(slider, FloatSlider):
                yield slider
