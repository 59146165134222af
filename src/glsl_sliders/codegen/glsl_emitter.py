"""
GLSL Code Generator.

Renders a (possibly rewritten) syntax tree back to GLSL source. Every token
is written with the whitespace and comments that preceded it in the input,
so untouched regions of the shader come out byte-for-byte identical and
only rewritten nodes change.

Also formats float constants for nodes created during rewriting.
"""

import math

from ..parser.ast_nodes import ASTNode
from ..transformer.coercion import to_f32


class GLSLEmitter:
    """
    GLSL code generator.

    Usage:
        emitter = GLSLEmitter()
        glsl_code = emitter.emit(ast)
    """

    def emit(self, node: ASTNode) -> str:
        """
        Emit GLSL code for a syntax tree.

        Args:
            node: Root of the tree (or any subtree)

        Returns:
            GLSL source code string
        """
        if node is None:
            return ""
        parts = [leaf.leading_trivia + leaf.text for leaf in node.leaves()]
        parts.append(node.trailing)
        return ''.join(parts)


def format_float(value: float) -> str:
    """
    Format a single-precision value as a GLSL float literal.

    Uses the shortest decimal that reads back as the same f32, and always
    includes a '.' or an exponent so the literal is not an int.

    Examples:
        10.0 -> '10.0'
        0.25 -> '0.25'
        to_f32(0.1) -> '0.1'
        1e-6 -> '1e-06'
    """
    if math.isnan(value):
        return '(0.0 / 0.0)'
    if math.isinf(value):
        return '(1.0 / 0.0)' if value > 0 else '(-1.0 / 0.0)'

    single = to_f32(value)
    for precision in range(1, 18):
        candidate = float(f"{value:.{precision}g}")
        if to_f32(candidate) == single:
            return repr(candidate)
    return repr(value)


def float_literal(value: float) -> ASTNode:
    """
    Build a float literal node for `value`.

    Negative values are parenthesized so `x-speed.min` cannot turn into `x--1.0`.
    """
    text = format_float(value)
    if not text.startswith('-'):
        return ASTNode.leaf('number_literal', text)
    return ASTNode.branch('parenthesized_expression', [
        ASTNode.leaf('('),
        ASTNode.branch('unary_expression', [
            ASTNode.leaf('-', field_name='operator'),
            ASTNode.leaf('number_literal', text[1:], field_name='argument'),
        ]),
        ASTNode.leaf(')'),
    ])
