"""
Constant coercion of numeric literal nodes.

GLSL has four numeric literal kinds; this module reads a literal node and
converts its value to one of four target widths, the way a native numeric
cast does:

    float -> int     truncates toward zero, saturates at the target range,
                     NaN becomes 0
    int   -> int     wraps modulo 2**32
    any   -> f32     rounds to the nearest IEEE single-precision value
    any   -> f64     exact for every literal kind except huge integers

There is no other rounding mode. Anything that is not a literal (a variable,
a call, arithmetic) raises NonConstantExpressionError.
"""

import math
import struct
from enum import Enum
from typing import Tuple, Union

from ..errors import NonConstantExpressionError
from ..parser.ast_nodes import ASTNode


class LiteralKind(Enum):
    INT = 'int'
    UINT = 'uint'
    FLOAT = 'float'
    DOUBLE = 'double'


class NumericType(Enum):
    F32 = 'f32'
    F64 = 'f64'
    I32 = 'i32'
    U32 = 'u32'


INTEGER_RANGES = {
    NumericType.I32: (-2**31, 2**31 - 1),
    NumericType.U32: (0, 2**32 - 1),
}

Number = Union[int, float]


def to_f32(value: float) -> float:
    """Round a Python float to the nearest single-precision value."""
    try:
        return struct.unpack('<f', struct.pack('<f', value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def literal_value(node: ASTNode) -> Tuple[LiteralKind, Number]:
    """
    Read the kind and value of a numeric literal.

    A literal under unary minus or plus counts as a signed literal.

    Args:
        node: Expression node

    Returns:
        (kind, value) with value an int for integer kinds, a float otherwise

    Raises:
        NonConstantExpressionError: If node is not a numeric literal
    """
    if node.type == 'unary_expression':
        operator = node.child_by_field_name('operator') or node.children[0]
        operand = node.child_by_field_name('argument') or node.children[-1]
        if operator.text in ('-', '+') and operand.type == 'number_literal':
            kind, value = _parse_number(operand)
            return kind, -value if operator.text == '-' else value

    if node.type != 'number_literal':
        raise NonConstantExpressionError(
            f"Expected a numeric constant, got '{node.text}'",
            node.start_point
        )
    return _parse_number(node)


def literal_kind(node: ASTNode) -> LiteralKind:
    """Detect the literal kind of a numeric literal node."""
    return literal_value(node)[0]


def coerce(node: ASTNode, target: NumericType = NumericType.F32) -> Number:
    """
    Convert a numeric literal node to the target type.

    Args:
        node: Literal expression node
        target: Numeric width to convert to

    Returns:
        float for F32/F64, int for I32/U32

    Raises:
        NonConstantExpressionError: If node is not a numeric literal

    Examples:
        coerce(<5>, F32) -> 5.0
        coerce(<2.9>, I32) -> 2
        coerce(<-1>, U32) -> 4294967295
    """
    _, value = literal_value(node)
    return cast(value, target)


def cast(value: Number, target: NumericType) -> Number:
    """Native numeric cast of an int or float to the target type."""
    if target is NumericType.F64:
        return float(value)
    if target is NumericType.F32:
        return to_f32(float(value))

    low, high = INTEGER_RANGES[target]
    if isinstance(value, float):
        if math.isnan(value):
            return 0
        if math.isinf(value):
            return high if value > 0 else low
        return max(low, min(high, int(value)))

    wrapped = value & 0xFFFFFFFF
    if target is NumericType.I32 and wrapped > high:
        wrapped -= 2**32
    return wrapped


def _parse_number(node: ASTNode) -> Tuple[LiteralKind, Number]:
    """Parse the text of a 'number_literal' token."""
    text = node.text
    # The grammar may lex a leading sign into the literal
    if text[:1] in ('-', '+'):
        unsigned = ASTNode.leaf('number_literal', text[1:])
        unsigned.start_point = node.start_point
        kind, value = _parse_number(unsigned)
        return kind, -value if text[0] == '-' else value
    lowered = text.lower()
    try:
        if lowered.endswith('lf'):
            return LiteralKind.DOUBLE, float(text[:-2])
        if lowered.startswith('0x'):
            if lowered.endswith('u'):
                return LiteralKind.UINT, int(text[2:-1], 16)
            return LiteralKind.INT, int(text[2:], 16)
        if lowered.endswith('u'):
            return LiteralKind.UINT, _parse_int(text[:-1])
        if lowered.endswith('f') or '.' in text or 'e' in lowered:
            return LiteralKind.FLOAT, float(text.rstrip('fF'))
        return LiteralKind.INT, _parse_int(text)
    except ValueError:
        raise NonConstantExpressionError(
            f"Malformed numeric literal '{text}'",
            node.start_point
        ) from None


def _parse_int(text: str) -> int:
    # GLSL octal literals start with 0
    if len(text) > 1 and text.startswith('0'):
        return int(text, 8)
    return int(text, 10)
