"""
GLSL front end.

Parses shader source with tree-sitter and the tree-sitter-glsl grammar, and
hands back a mutable ASTNode copy of the tree. Sources that do not parse
cleanly are rejected: tree-sitter recovers from errors by inserting ERROR and
MISSING nodes, and rewriting such a tree would only hide the problem.
"""

import logging
from typing import Optional

import tree_sitter_glsl
from tree_sitter import Language, Parser

from ..errors import ParseError
from .ast_nodes import ASTNode

log = logging.getLogger(__name__)

GLSL_LANGUAGE = Language(tree_sitter_glsl.language())


class GLSLParser:
    """
    Parses GLSL source into a mutable syntax tree.

    Usage:
        parser = GLSLParser()
        root = parser.parse("void main() {}")
        root.type  # 'translation_unit'
    """

    def __init__(self):
        self._parser = Parser(GLSL_LANGUAGE)

    def parse(self, source: str) -> ASTNode:
        """
        Parse GLSL source.

        Args:
            source: GLSL source code string

        Returns:
            Root ASTNode ('translation_unit'). A missing final newline is
            added, so the tree renders with one.

        Raises:
            ParseError: If the source contains syntax errors
        """
        data = source.encode('utf-8')
        if not data.endswith(b'\n'):
            # Preprocessor directives are terminated by a newline
            data += b'\n'
        tree = self._parser.parse(data)

        if tree.root_node.has_error:
            bad = _first_error(tree.root_node)
            if bad is None:
                raise ParseError("Invalid GLSL source")
            if bad.is_missing:
                raise ParseError(f"Invalid GLSL source: missing '{bad.type}'", tuple(bad.start_point))
            raise ParseError("Invalid GLSL source: syntax error", tuple(bad.start_point))

        root = ASTNode.from_tree_sitter(tree, data)
        log.debug("Parsed %d bytes of GLSL", len(data))
        return root


def _first_error(node) -> Optional[object]:
    """Find the first ERROR or MISSING tree-sitter node in document order."""
    if node.type == 'ERROR' or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None
