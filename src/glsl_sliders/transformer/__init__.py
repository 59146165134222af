"""Slider metadata, constant coercion and the slider builder."""

from .coercion import LiteralKind, NumericType, coerce, literal_kind
from .shader_metadata import (
    BoolSlider,
    ColorSlider,
    FloatSlider,
    ShaderMetadata,
    Slider,
    Vec3Slider,
)
from .slider_builder import build_slider

__all__ = [
    'LiteralKind', 'NumericType', 'coerce', 'literal_kind',
    'Slider', 'FloatSlider', 'Vec3Slider', 'ColorSlider', 'BoolSlider',
    'ShaderMetadata', 'build_slider',
]
