"""GLSL parsing: tree-sitter front end and the mutable syntax tree."""

from .ast_nodes import ASTNode
from .glsl_parser import GLSLParser

__all__ = ['ASTNode', 'GLSLParser']
