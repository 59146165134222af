"""
Mutable GLSL syntax tree.

tree-sitter trees are read-only, so the parser copies every node into an
ASTNode. The copy keeps the same vocabulary as tree-sitter nodes (type,
text, children, named_children, start_point, child_by_field_name) and adds
in-place mutation: a subtree can be replaced or removed and the tree can be
rendered back to source text.

Whitespace and comments are kept as the `leading` trivia of the leaf that
follows them. Rendering concatenates `leading + text` for every leaf, so an
untouched tree renders back to the exact input.

Usage:
    root = GLSLParser().parse(source)
    for node in root.walk():
        if node.type == 'field_expression':
            node.replace_with(ASTNode.leaf('number_literal', '1.0'))
"""

from typing import Iterator, List, Optional


class ASTNode:
    """
    One node of the mutable syntax tree.

    Leaves (tokens) carry `text`; branches carry `children`. Anonymous nodes
    such as punctuation and keywords have `is_named` False, like in
    tree-sitter.

    Attributes:
        type: tree-sitter node type ('declaration', 'identifier', ';', ...)
        field_name: grammar field this node fills in its parent, if any
        leading: trivia (whitespace, comments) preceding a leaf
        trailing: trivia after the last leaf, only set on the root
        start_point: (row, column) in the original source, None if synthetic
    """

    def __init__(
        self,
        type: str,
        text: Optional[str] = None,
        children: Optional[List['ASTNode']] = None,
        field_name: Optional[str] = None,
        is_named: Optional[bool] = None,
        leading: str = '',
        start_point: Optional[tuple] = None,
    ):
        self.type = type
        self.field_name = field_name
        self.leading_trivia = leading
        self.trailing = ''
        self.start_point = start_point
        self.parent: Optional[ASTNode] = None
        self._text = text
        self.children: List[ASTNode] = []
        for child in children or []:
            self.append(child)
        if is_named is None:
            # tree-sitter anonymous nodes are named after their own text
            is_named = text is None or type != text
        self.is_named = is_named

    # ========================================================================
    # Construction
    # ========================================================================

    @classmethod
    def leaf(cls, type: str, text: Optional[str] = None, leading: str = '', field_name: Optional[str] = None) -> 'ASTNode':
        """Create a synthetic token. `text` defaults to `type` (punctuation)."""
        return cls(type, text=type if text is None else text, leading=leading, field_name=field_name)

    @classmethod
    def branch(cls, type: str, children: List['ASTNode'], field_name: Optional[str] = None) -> 'ASTNode':
        """Create a synthetic inner node."""
        return cls(type, children=children, field_name=field_name)

    @classmethod
    def from_tree_sitter(cls, tree, source: bytes) -> 'ASTNode':
        """
        Copy a tree-sitter tree.

        Args:
            tree: tree_sitter.Tree produced from `source`
            source: the exact bytes that were parsed

        Returns:
            Root ASTNode (usually 'translation_unit')
        """
        cursor = tree.walk()
        offset = 0

        def build(field_name: Optional[str]) -> ASTNode:
            nonlocal offset
            ts_node = cursor.node
            if ts_node.child_count == 0:
                leading = source[offset:ts_node.start_byte].decode('utf-8')
                offset = ts_node.end_byte
                return cls(
                    ts_node.type,
                    text=source[ts_node.start_byte:ts_node.end_byte].decode('utf-8'),
                    field_name=field_name,
                    is_named=ts_node.is_named,
                    leading=leading,
                    start_point=tuple(ts_node.start_point),
                )

            children = []
            cursor.goto_first_child()
            while True:
                children.append(build(cursor.field_name))
                if not cursor.goto_next_sibling():
                    break
            cursor.goto_parent()
            return cls(
                ts_node.type,
                children=children,
                field_name=field_name,
                is_named=ts_node.is_named,
                start_point=tuple(ts_node.start_point),
            )

        root = build(None)
        root.trailing = source[offset:].decode('utf-8')
        return root

    # ========================================================================
    # Navigation
    # ========================================================================

    @property
    def is_leaf(self) -> bool:
        return self._text is not None

    @property
    def named_children(self) -> List['ASTNode']:
        return [child for child in self.children if child.is_named]

    @property
    def text(self) -> str:
        """Source text of this subtree, without the trivia before its first token."""
        if self.is_leaf:
            return self._text
        parts = []
        for leaf in self.leaves():
            if parts:
                parts.append(leaf.leading_trivia)
            parts.append(leaf._text)
        return ''.join(parts)

    @property
    def leading(self) -> str:
        """Trivia rendered before this subtree."""
        first = self.first_leaf()
        return first.leading_trivia if first is not None else ''

    @leading.setter
    def leading(self, value: str):
        first = self.first_leaf()
        if first is not None:
            first.leading_trivia = value

    def child_by_field_name(self, name: str) -> Optional['ASTNode']:
        for child in self.children:
            if child.field_name == name:
                return child
        return None

    def walk(self) -> Iterator['ASTNode']:
        """Pre-order iteration over this subtree (snapshot, safe to mutate)."""
        yield self
        for child in list(self.children):
            yield from child.walk()

    def leaves(self) -> Iterator['ASTNode']:
        if self.is_leaf:
            yield self
            return
        for child in self.children:
            yield from child.leaves()

    def first_leaf(self) -> Optional['ASTNode']:
        return next(self.leaves(), None)

    def next_leaf(self) -> Optional['ASTNode']:
        """First leaf after this subtree in document order."""
        node = self
        while node.parent is not None:
            siblings = node.parent.children
            for sibling in siblings[siblings.index(node) + 1:]:
                leaf = sibling.first_leaf()
                if leaf is not None:
                    return leaf
            node = node.parent
        return None

    def find_first(self, *types: str) -> Optional['ASTNode']:
        for node in self.walk():
            if node.type in types:
                return node
        return None

    # ========================================================================
    # Mutation
    # ========================================================================

    def append(self, child: 'ASTNode'):
        child.parent = self
        self.children.append(child)

    def replace_with(self, node: 'ASTNode') -> 'ASTNode':
        """
        Put `node` where this subtree is.

        The replacement inherits this node's leading trivia and grammar field.
        """
        if self.parent is None:
            raise ValueError("Cannot replace the root node")
        parent = self.parent
        node.leading = self.leading
        if node.field_name is None:
            node.field_name = self.field_name
        parent.children[parent.children.index(self)] = node
        node.parent = parent
        self.parent = None
        return node

    def remove(self):
        """
        Detach this subtree.

        The following token takes over the removed subtree's leading trivia,
        so `    layout(min=0) float x;` becomes `    float x;`.
        """
        if self.parent is None:
            raise ValueError("Cannot remove the root node")
        following = self.next_leaf()
        if following is not None:
            following.leading_trivia = self.leading
        self.parent.children.remove(self)
        self.parent = None

    def __repr__(self) -> str:
        if self.is_leaf:
            return f"ASTNode({self.type!r}, {self._text!r})"
        return f"ASTNode({self.type!r}, children={len(self.children)})"
