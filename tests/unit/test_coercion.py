"""
Unit tests for constant coercion.

Tests literal kind detection and the native cast semantics of coerce()
for every target width. Literal nodes are built directly so these tests do
not depend on the parser.

Test coverage:
- Literal kinds (int, uint, float, double, hex, octal)
- Casts to f32, f64, i32, u32
- Signed literals
- Non-constant expressions
"""

import math

import pytest
from glsl_sliders.errors import NonConstantExpressionError
from glsl_sliders.parser import ASTNode
from glsl_sliders.transformer.coercion import (
    LiteralKind,
    NumericType,
    cast,
    coerce,
    literal_kind,
    to_f32,
)


def number(text):
    """Build a number literal node."""
    return ASTNode.leaf('number_literal', text)


def negated(text):
    """Build `-<text>` as a unary expression."""
    return ASTNode.branch('unary_expression', [
        ASTNode.leaf('-', field_name='operator'),
        ASTNode.leaf('number_literal', text, field_name='argument'),
    ])


# ============================================================================
# Literal kinds
# ============================================================================

@pytest.mark.parametrize('text, kind', [
    ('5', LiteralKind.INT),
    ('0x1F', LiteralKind.INT),
    ('017', LiteralKind.INT),
    ('5u', LiteralKind.UINT),
    ('0xFFU', LiteralKind.UINT),
    ('1.0', LiteralKind.FLOAT),
    ('1.', LiteralKind.FLOAT),
    ('.5', LiteralKind.FLOAT),
    ('1e3', LiteralKind.FLOAT),
    ('2.5f', LiteralKind.FLOAT),
    ('1.0lf', LiteralKind.DOUBLE),
    ('3.0LF', LiteralKind.DOUBLE),
])
def test_literal_kind(text, kind):
    """Test kind detection from literal text."""
    assert literal_kind(number(text)) == kind


def test_octal_and_hex_values():
    """Test non-decimal integer literals."""
    assert coerce(number('017'), NumericType.I32) == 15
    assert coerce(number('0x1F'), NumericType.I32) == 31
    assert coerce(number('0'), NumericType.I32) == 0


# ============================================================================
# Casts
# ============================================================================

def test_int_to_f32():
    """Test integers widen to float."""
    assert coerce(number('5'), NumericType.F32) == 5.0
    assert coerce(number('7u'), NumericType.F32) == 7.0


def test_float_to_f32_rounds_to_single():
    """Test f32 targets round to single precision."""
    value = coerce(number('0.1'), NumericType.F32)
    assert value == to_f32(0.1)
    assert value != 0.1


def test_double_to_f64_exact():
    """Test f64 targets keep double precision."""
    assert coerce(number('0.1lf'), NumericType.F64) == 0.1


def test_float_to_int_truncates():
    """Test float to int truncates toward zero."""
    assert coerce(number('2.9'), NumericType.I32) == 2
    assert coerce(negated('2.9'), NumericType.I32) == -2
    assert coerce(number('2.9'), NumericType.U32) == 2


def test_float_to_int_saturates():
    """Test out-of-range floats clamp to the target range."""
    assert coerce(number('1e20'), NumericType.I32) == 2**31 - 1
    assert coerce(negated('1e20'), NumericType.I32) == -2**31
    assert coerce(negated('1.0'), NumericType.U32) == 0


def test_int_to_int_wraps():
    """Test integer casts wrap modulo 2**32."""
    assert coerce(negated('1'), NumericType.U32) == 2**32 - 1
    assert coerce(number('4294967295u'), NumericType.I32) == -1
    assert coerce(number('5u'), NumericType.U32) == 5


def test_special_float_casts():
    """Test NaN and infinity casts to integers."""
    assert cast(math.nan, NumericType.I32) == 0
    assert cast(math.inf, NumericType.U32) == 2**32 - 1
    assert cast(-math.inf, NumericType.I32) == -2**31


def test_f32_overflow_is_infinite():
    """Test values beyond the f32 range become infinity."""
    assert coerce(number('1e300'), NumericType.F32) == math.inf


# ============================================================================
# Signed literals
# ============================================================================

def test_unary_minus_literal():
    """Test -<literal> is accepted as a constant."""
    assert coerce(negated('1.5'), NumericType.F32) == -1.5
    assert literal_kind(negated('3')) == LiteralKind.INT


def test_sign_inside_literal_token():
    """Test a sign lexed into the literal token."""
    assert coerce(number('-0.5'), NumericType.F32) == -0.5
    assert coerce(number('-017'), NumericType.I32) == -15


# ============================================================================
# Non-constant expressions
# ============================================================================

def test_identifier_rejected():
    """Test a variable reference is not a constant."""
    with pytest.raises(NonConstantExpressionError) as excinfo:
        coerce(ASTNode.leaf('identifier', 'speed'), NumericType.F32)
    assert 'speed' in str(excinfo.value)


def test_call_rejected():
    """Test a call expression is not a constant."""
    call = ASTNode.branch('call_expression', [
        ASTNode.leaf('identifier', 'sin', field_name='function'),
        ASTNode.branch('argument_list', [
            ASTNode.leaf('('),
            ASTNode.leaf('number_literal', '1.0'),
            ASTNode.leaf(')'),
        ], field_name='arguments'),
    ])
    with pytest.raises(NonConstantExpressionError):
        coerce(call, NumericType.F32)


def test_negated_identifier_rejected():
    """Test -<variable> is not a constant."""
    node = ASTNode.branch('unary_expression', [
        ASTNode.leaf('-', field_name='operator'),
        ASTNode.leaf('identifier', 'x', field_name='argument'),
    ])
    with pytest.raises(NonConstantExpressionError):
        coerce(node, NumericType.F32)


def test_malformed_literal_rejected():
    """Test digits invalid for the base are reported."""
    with pytest.raises(NonConstantExpressionError):
        coerce(number('09'), NumericType.I32)
