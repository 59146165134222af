"""
Helpers for reading type qualifiers off declarations.

The GLSL grammar nests layout qualifiers a little differently depending on
where they appear (plain declarations, interface blocks, struct fields), and
`location = 0` may be parsed either as a dedicated qualifier node or as an
assignment. These helpers hide that variation behind two views:

- the ordered qualifier nodes written before a declaration's type or block
  name (`qualifier_nodes`)
- the entries of one `layout(...)` list as (name, value) pairs
  (`layout_entries`)
"""

from dataclasses import dataclass
from typing import List, Optional

from .ast_nodes import ASTNode


QUALIFIER_KEYWORDS = {
    # Storage
    'const', 'in', 'out', 'inout', 'uniform', 'buffer', 'shared',
    'attribute', 'varying',
    # Auxiliary and interpolation
    'centroid', 'sample', 'patch', 'flat', 'smooth', 'noperspective',
    # Memory
    'coherent', 'volatile', 'restrict', 'readonly', 'writeonly',
    # Precision and invariance
    'highp', 'mediump', 'lowp', 'invariant', 'precise',
}

# Node types that only wrap one or more qualifiers
QUALIFIER_WRAPPERS = {
    'type_qualifier',
    'storage_class_specifier',
    'extension_storage_class',
    'precision_qualifier',
    'interpolation_qualifier',
}

TYPE_NODES = {'primitive_type', 'type_identifier', 'sized_type_specifier'}

TRIVIA_NODES = {'comment'}


@dataclass
class LayoutEntry:
    """
    One `name` or `name = value` item of a layout qualifier list.

    Attributes:
        name: setting identifier ('min', 'set', 'color', ...)
        value: value expression node, None for value-less settings
        node: the first node of the entry, for error locations
    """
    name: str = None
    value: Optional[ASTNode] = None
    node: Optional[ASTNode] = None


def is_qualifier(node: ASTNode) -> bool:
    """Check if a declaration child is a type qualifier."""
    if node.type == 'layout_specification' or node.type in QUALIFIER_WRAPPERS:
        return True
    return node.is_leaf and node.text in QUALIFIER_KEYWORDS


def qualifier_nodes(nodes: List[ASTNode]) -> List[ASTNode]:
    """
    Collect the qualifiers written in front of a declaration.

    Args:
        nodes: children of the declaration, in source order

    Returns:
        Qualifier nodes, stopping at the type specifier or block
    """
    found = []
    for node in nodes:
        if node.type in TRIVIA_NODES:
            continue
        if node.type in TYPE_NODES or node.type == 'field_declaration_list':
            break
        if is_qualifier(node):
            found.append(node)
    return found


def as_layout(qualifier: Optional[ASTNode]) -> Optional[ASTNode]:
    """
    Return the layout specification a qualifier node stands for.

    A wrapper counts as a layout qualifier only when its own first qualifier
    is one; `uniform` or `highp` give None.
    """
    if qualifier is None:
        return None
    if qualifier.type == 'layout_specification':
        return qualifier
    if qualifier.type in QUALIFIER_WRAPPERS:
        inner = [c for c in qualifier.children if c.type not in TRIVIA_NODES]
        if inner:
            return as_layout(inner[0])
    return None


def layout_entries(layout: ASTNode) -> List[LayoutEntry]:
    """
    Split a `layout(...)` specification into its entries.

    Args:
        layout: 'layout_specification' node

    Returns:
        Entries in source order
    """
    node = layout
    # Descend to the node holding the parentheses
    while not any(child.type == '(' for child in node.children):
        branches = [child for child in node.children if not child.is_leaf]
        if not branches:
            return []
        node = branches[-1]

    groups = []
    current = []
    inside = False
    for child in node.children:
        if child.type == '(':
            inside = True
        elif child.type == ')':
            break
        elif child.type == ',':
            groups.append(current)
            current = []
        elif inside and child.type not in TRIVIA_NODES:
            current.append(child)
    groups.append(current)

    entries = []
    for group in groups:
        if not group:
            continue
        if len(group) == 1 and not group[0].is_leaf:
            # 'qualifier' or 'assignment_expression' wrapping name = value
            group = [c for c in group[0].children if c.type not in TRIVIA_NODES]
        value = None
        if len(group) >= 3 and group[1].type == '=':
            value = group[2]
        entries.append(LayoutEntry(name=group[0].text, value=value, node=group[0]))
    return entries


def canonical_layout(set_index: int = 0, binding_index: int = 0) -> ASTNode:
    """Build `layout(set = <set>, binding = <binding>)`."""

    def entry(name: str, value: int) -> ASTNode:
        return ASTNode.branch('qualifier', [
            ASTNode.leaf('identifier', name),
            ASTNode.leaf('=', leading=' '),
            ASTNode.leaf('number_literal', str(value), leading=' '),
        ])

    return ASTNode.branch('layout_specification', [
        ASTNode.leaf('layout'),
        ASTNode.branch('layout_qualifiers', [
            ASTNode.leaf('('),
            entry('set', set_index),
            ASTNode.leaf(','),
            _with_leading(entry('binding', binding_index), ' '),
            ASTNode.leaf(')'),
        ]),
    ])


def _with_leading(node: ASTNode, leading: str) -> ASTNode:
    node.leading = leading
    return node
