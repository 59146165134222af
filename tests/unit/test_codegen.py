"""
Unit tests for code generation: float literal formatting and params buffer
packing.

Test coverage:
- format_float / float_literal
- std140 layout of slider values
- Byte packing
"""

import math
import struct

import pytest
from glsl_sliders import extract
from glsl_sliders.codegen import (
    GLSLEmitter,
    float_literal,
    format_float,
    pack_params,
    params_layout,
    params_size,
)
from glsl_sliders.transformer import (
    BoolSlider,
    ColorSlider,
    FloatSlider,
    Vec3Slider,
)
from glsl_sliders.transformer.coercion import to_f32


# ============================================================================
# Float literals
# ============================================================================

@pytest.mark.parametrize('value, text', [
    (10.0, '10.0'),
    (0.0, '0.0'),
    (0.25, '0.25'),
    (to_f32(0.1), '0.1'),
    (to_f32(1.0 / 3.0), '0.33333334'),
    (1e-06, '1e-06'),
    (-2.5, '-2.5'),
])
def test_format_float(value, text):
    """Test the shortest single-precision spelling is used."""
    assert format_float(value) == text


def test_format_float_reads_back():
    """Test formatted literals parse back to the same f32."""
    for value in (to_f32(0.7), to_f32(123.456), to_f32(3e-5)):
        assert to_f32(float(format_float(value))) == value


def test_format_float_always_float():
    """Test integral values keep a decimal point."""
    assert '.' in format_float(3.0)


def test_format_float_non_finite():
    """Test non-finite values become constant expressions."""
    assert format_float(math.inf) == '(1.0 / 0.0)'
    assert format_float(-math.inf) == '(-1.0 / 0.0)'


def test_float_literal_negative_parenthesized():
    """Test negative literals are wrapped in parentheses."""
    node = float_literal(-1.5)
    assert node.type == 'parenthesized_expression'
    assert GLSLEmitter().emit(node) == '(-1.5)'


def test_float_literal_positive():
    """Test positive literals are a single token."""
    node = float_literal(2.0)
    assert node.type == 'number_literal'
    assert node.text == '2.0'


# ============================================================================
# Params buffer layout
# ============================================================================

def test_layout_floats_packed_tight():
    """Test consecutive floats are 4 bytes apart."""
    sliders = [FloatSlider('a'), FloatSlider('b'), FloatSlider('c')]
    assert [f.offset for f in params_layout(sliders)] == [0, 4, 8]
    assert params_size(sliders) == 16


def test_layout_vec3_aligned_to_16():
    """Test vec3 members start on a 16-byte boundary."""
    sliders = [FloatSlider('speed'), ColorSlider('tint'), FloatSlider('gain')]
    layout = params_layout(sliders)
    assert [(f.name, f.offset, f.size) for f in layout] == [
        ('speed', 0, 4),
        ('tint', 16, 12),
        ('gain', 28, 4),
    ]
    assert params_size(sliders) == 32


def test_layout_empty():
    """Test an empty block has no bytes."""
    assert params_layout([]) == []
    assert params_size([]) == 0


def test_pack_values():
    """Test values land at their offsets."""
    sliders = [
        FloatSlider('speed', 0.0, 10.0, 5.0),
        Vec3Slider('dir', (1.0, 2.0, 3.0)),
        BoolSlider('on', 1),
    ]
    data = pack_params(sliders)
    assert len(data) == 32
    assert struct.unpack_from('<f', data, 0) == (5.0,)
    assert struct.unpack_from('<3f', data, 16) == (1.0, 2.0, 3.0)
    assert struct.unpack_from('<I', data, 28) == (1,)


def test_pack_extracted_sliders():
    """Test packing follows the order of the rewritten block."""
    source = """
layout(params) uniform Params {
    layout(color, init = vec3(0.5, 0.25, 1.0)) vec3 tint;
    layout(max = 10, init = 7) float speed;
};
"""
    metadata, _ = extract(source)
    data = pack_params(metadata.sliders)
    assert struct.unpack_from('<3f', data, 0) == (0.5, 0.25, 1.0)
    assert struct.unpack_from('<f', data, 12) == (7.0,)


def test_pack_unknown_slider_type():
    """Test sliders without a buffer layout are rejected."""
    with pytest.raises(TypeError):
        params_layout([object()])
