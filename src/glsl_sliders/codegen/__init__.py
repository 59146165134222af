"""Rendering rewritten trees and packing slider values."""

from .glsl_emitter import GLSLEmitter, float_literal, format_float
from .params_buffer import FieldLayout, pack_params, params_layout, params_size

__all__ = [
    'GLSLEmitter', 'float_literal', 'format_float',
    'FieldLayout', 'pack_params', 'params_layout', 'params_size',
]
