"""
glsl_sliders - slider metadata extraction for GLSL fragment shaders.

Reads the `layout(params)` block of a shader, returns one slider per field,
and rewrites the source into GLSL a standard compiler accepts.

Usage:
    from glsl_sliders import extract

    metadata, source = extract(glsl_source)
    for slider in metadata.sliders:
        ...
"""

from .errors import (
    ExtractError,
    NonConstantExpressionError,
    ParamFieldError,
    ParseError,
    UnsupportedFieldTypeError,
)
from .transformer import (
    BoolSlider,
    ColorSlider,
    FloatSlider,
    ShaderMetadata,
    Slider,
    Vec3Slider,
)
from .transformer.metadata_extractor import MetadataExtractor, extract
from .codegen import pack_params, params_layout

__version__ = '0.1.0'

__all__ = [
    'extract', 'MetadataExtractor',
    'ShaderMetadata', 'Slider', 'FloatSlider', 'Vec3Slider', 'ColorSlider', 'BoolSlider',
    'pack_params', 'params_layout',
    'ExtractError', 'ParseError', 'ParamFieldError',
    'UnsupportedFieldTypeError', 'NonConstantExpressionError',
]
