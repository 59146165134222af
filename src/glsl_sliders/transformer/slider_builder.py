"""
Slider Builder - turns one params block field into a Slider.

Recognized settings, read from the field's layout qualifier:

    float   min=<const>   lower bound, default 0.0
            max=<const>   upper bound, default 1.0
            init=<const>  initial value, default 0.0
    vec3    color         show as a color picker
            init=vec3(<const>, <const>, <const>)

Unknown settings and malformed vec3 initializers are logged and skipped.
Any other field type is fatal, and so is a field declaring several names or
an array.
"""

import logging
from typing import List, Optional

from ..errors import ParamFieldError, UnsupportedFieldTypeError
from ..parser.ast_nodes import ASTNode
from ..parser.qualifiers import (
    TYPE_NODES,
    LayoutEntry,
    as_layout,
    layout_entries,
    qualifier_nodes,
)
from .coercion import NumericType, coerce
from .shader_metadata import ColorSlider, FloatSlider, Slider, Vec3Slider

log = logging.getLogger(__name__)

IDENTIFIER_NODES = ('field_identifier', 'identifier')


def build_slider(field: ASTNode) -> Slider:
    """
    Create the slider described by a field declaration.

    Args:
        field: 'field_declaration' node from the params block

    Returns:
        FloatSlider, Vec3Slider or ColorSlider

    Raises:
        UnsupportedFieldTypeError: If the field type has no slider kind
        NonConstantExpressionError: If a numeric setting is not a literal
        ParamFieldError: If a numeric setting has no value, or the field
            declares more than one name or an array
    """
    name = field_name(field)
    check_single_declarator(field, name)
    type_name = field_type(field)
    settings = field_settings(field)

    if type_name == 'float':
        return _build_float(name, settings)
    if type_name == 'vec3':
        return _build_vec3(name, settings)

    raise UnsupportedFieldTypeError(
        f"Unsupported type '{type_name}' for params field '{name}'",
        field.start_point
    )


def field_name(field: ASTNode) -> str:
    """Identifier of the first declarator of a field."""
    declarator = field.child_by_field_name('declarator')
    if declarator is not None:
        ident = declarator if declarator.type in IDENTIFIER_NODES else declarator.find_first(*IDENTIFIER_NODES)
        if ident is not None:
            return ident.text
    for child in field.children:
        if child.type in IDENTIFIER_NODES:
            return child.text
    raise ParamFieldError("Params field has no name", field.start_point)


def check_single_declarator(field: ASTNode, name: str):
    """
    Reject `float a, b;` and `float a[4];`.

    Each field maps to exactly one buffer member; several declarators or an
    array would shift every later member of the packed buffer.
    """
    qualifiers = field_qualifiers(field)
    declaration = [child for child in field.children if child not in qualifiers]

    if any(child.type == ',' for child in declaration):
        raise ParamFieldError(
            f"Params field '{name}' declares more than one name",
            field.start_point
        )
    for child in declaration:
        if child.type == 'array_declarator' or any(leaf.type == '[' for leaf in child.leaves()):
            raise ParamFieldError(
                f"Params field '{name}' cannot be an array",
                child.start_point
            )


def field_type(field: ASTNode) -> str:
    type_node = field.child_by_field_name('type')
    if type_node is None:
        type_node = next((c for c in field.children if c.type in TYPE_NODES), None)
    if type_node is None:
        raise ParamFieldError("Params field has no type", field.start_point)
    return type_node.text


def field_qualifiers(field: ASTNode) -> List[ASTNode]:
    return qualifier_nodes(field.children)


def field_settings(field: ASTNode) -> List[LayoutEntry]:
    """Entries of the field's first qualifier, empty unless it is a layout."""
    qualifiers = field_qualifiers(field)
    layout = as_layout(qualifiers[0]) if qualifiers else None
    if layout is None:
        return []
    return layout_entries(layout)


def strip_qualifiers(field: ASTNode):
    """Remove every qualifier from a field, leaving `type name;`."""
    for qualifier in field_qualifiers(field):
        qualifier.remove()


# ============================================================================
# Slider kinds
# ============================================================================

def _build_float(name: str, settings: List[LayoutEntry]) -> FloatSlider:
    bounds = {'min': 0.0, 'max': 1.0, 'init': 0.0}
    for setting in settings:
        if setting.name not in bounds:
            log.warning("Unsupported setting '%s' on float param '%s'", setting.name, name)
            continue
        if setting.value is None:
            raise ParamFieldError(
                f"Setting '{setting.name}' of param '{name}' needs a value",
                setting.node.start_point
            )
        bounds[setting.name] = coerce(setting.value, NumericType.F32)

    return FloatSlider(name=name, min=bounds['min'], max=bounds['max'], value=bounds['init'])


def _build_vec3(name: str, settings: List[LayoutEntry]) -> Slider:
    value = (0.0, 0.0, 0.0)
    color = False
    for setting in settings:
        if setting.name == 'color':
            color = True
        elif setting.name == 'init':
            initial = _vec3_initializer(name, setting.value)
            if initial is not None:
                value = initial
        else:
            log.warning("Unsupported setting '%s' on vec3 param '%s'", setting.name, name)

    if color:
        return ColorSlider(name=name, value=value)
    return Vec3Slider(name=name, value=value)


def _vec3_initializer(name: str, expr: Optional[ASTNode]):
    """Read `vec3(a, b, c)`; None (and a warning) for anything else."""
    if expr is None or expr.type != 'call_expression':
        log.warning("Invalid initializer for param '%s', expected vec3(x, y, z)", name)
        return None

    function = expr.child_by_field_name('function') or expr.named_children[0]
    arguments = expr.child_by_field_name('arguments') or expr.named_children[-1]
    args = [arg for arg in arguments.named_children if arg.type != 'comment']
    if function.text != 'vec3' or len(args) != 3:
        log.warning(
            "Invalid initializer for param '%s': %s with %d arguments",
            name, function.text, len(args)
        )
        return None

    return tuple(coerce(arg, NumericType.F32) for arg in args)
