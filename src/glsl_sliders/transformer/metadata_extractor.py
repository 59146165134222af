"""
Metadata Extractor - harvests sliders and rewrites the shader.

A shader declares its tunable parameters in one interface block tagged with
the `params` layout marker:

    layout(params) uniform Params {
        layout(min = 0, max = 10, init = 5) float speed;
        layout(color) vec3 tint;
    };

Extraction walks the syntax tree once, depth first, and on the way:
1. Turns every field of the params block into a slider, strips the field's
   settings, and rewrites the block qualifier to `layout(set = 0, binding = 0)`
2. Replaces `speed.min` / `speed.max` with the bound as a float literal, for
   float sliders already seen
3. Notes `#define NUANCE_STILL_IMAGE`

The walk is a single forward pass, so `speed.max` written above the params
block is left as is.

Usage:
    metadata, source = extract(glsl_source)
"""

import logging
from typing import Optional, Tuple

from ..codegen.glsl_emitter import GLSLEmitter, float_literal
from ..parser.ast_nodes import ASTNode
from ..parser.glsl_parser import GLSLParser
from ..parser.qualifiers import (
    as_layout,
    canonical_layout,
    layout_entries,
    qualifier_nodes,
)
from .shader_metadata import FloatSlider, ShaderMetadata
from .slider_builder import build_slider, strip_qualifiers

log = logging.getLogger(__name__)

PARAMS_MARKER = 'params'
STILL_IMAGE_MACRO = 'NUANCE_STILL_IMAGE'
BOUND_FIELDS = ('min', 'max')


class MetadataExtractor:
    """
    Extracts slider metadata and produces standard GLSL.

    An extractor holds no per-shader state and can be reused.

    Usage:
        extractor = MetadataExtractor()
        metadata, source = extractor.extract(glsl_source)

    Configuration:
        marker: layout identifier tagging the params block (default: 'params')
        still_image_macro: macro switching still-image mode on
        set_index, binding_index: qualifiers given to the rewritten block
    """

    def __init__(
        self,
        parser: Optional[GLSLParser] = None,
        emitter: Optional[GLSLEmitter] = None,
        marker: str = PARAMS_MARKER,
        still_image_macro: str = STILL_IMAGE_MACRO,
        set_index: int = 0,
        binding_index: int = 0,
    ):
        self.parser = parser or GLSLParser()
        self.emitter = emitter or GLSLEmitter()
        self.marker = marker
        self.still_image_macro = still_image_macro
        self.set_index = set_index
        self.binding_index = binding_index

    def extract(self, source: str) -> Tuple[ShaderMetadata, str]:
        """
        Extract slider metadata and transpile the source.

        Args:
            source: GLSL fragment shader source

        Returns:
            (metadata, transpiled source). Without a params block the source
            is returned unchanged.

        Raises:
            ParseError: If the source is not valid GLSL
            ParamFieldError: If a params field cannot become a slider
        """
        ast = self.parser.parse(source)
        visitor = _ExtractionPass(self)
        visitor.visit(ast)

        if not visitor.found_block:
            log.debug("No params block, source left unchanged")
            return visitor.metadata, source

        log.debug(
            "Extracted %d sliders (still image: %s)",
            len(visitor.metadata.sliders), visitor.metadata.still_image
        )
        return visitor.metadata, self.emitter.emit(ast)

    def params_block_layout(self, node: ASTNode) -> Optional[ASTNode]:
        """
        Return the layout qualifier of `node` if it is the params block.

        Only the block's first qualifier, and only the first entry of that
        layout list, are looked at.
        """
        if not any(child.type == 'field_declaration_list' for child in node.children):
            return None
        if any(child.type == 'struct' for child in node.children):
            return None

        qualifiers = qualifier_nodes(node.children)
        if not qualifiers and node.parent is not None:
            # Block parsed as a specifier nested in its declaration
            siblings = node.parent.children
            qualifiers = qualifier_nodes(siblings[:siblings.index(node)])
        if not qualifiers:
            return None

        layout = as_layout(qualifiers[0])
        if layout is None:
            return None
        entries = layout_entries(layout)
        if entries and entries[0].name == self.marker:
            return layout
        return None


class _ExtractionPass:
    """One depth-first walk over a tree, accumulating metadata."""

    def __init__(self, extractor: MetadataExtractor):
        self.extractor = extractor
        self.metadata = ShaderMetadata()
        self.found_block = False

    def visit(self, node: ASTNode):
        layout = self.extractor.params_block_layout(node)
        if layout is not None and self.found_block:
            log.warning("Ignoring extra params block at line %d", node.start_point[0] + 1)
            return
        if layout is not None:
            self._convert_block(node, layout)
            return

        if node.type == 'field_expression' and self._substitute_bound(node):
            return

        if node.type == 'preproc_def':
            self._check_define(node)

        for child in list(node.children):
            self.visit(child)

    # ========================================================================
    # Params block
    # ========================================================================

    def _convert_block(self, block: ASTNode, layout: ASTNode):
        field_list = next(c for c in block.children if c.type == 'field_declaration_list')
        fields = [c for c in field_list.children if c.type == 'field_declaration']

        # Build every slider before touching the tree
        sliders = [build_slider(field) for field in fields]
        for field, slider in zip(fields, sliders):
            self.metadata.sliders.append(slider)
            strip_qualifiers(field)

        layout.replace_with(canonical_layout(self.extractor.set_index, self.extractor.binding_index))
        self.found_block = True
        log.debug("Params block with fields %s", [s.name for s in sliders])

    # ========================================================================
    # Bound substitution
    # ========================================================================

    def _substitute_bound(self, node: ASTNode) -> bool:
        """Replace `name.min` / `name.max` of a known float slider."""
        argument = node.child_by_field_name('argument') or node.named_children[0]
        member = node.child_by_field_name('field') or node.named_children[-1]
        if argument.type != 'identifier' or member.text not in BOUND_FIELDS:
            return False

        slider = self._float_slider(argument.text)
        if slider is None:
            return False

        bound = slider.min if member.text == 'min' else slider.max
        node.replace_with(float_literal(bound))
        return True

    def _float_slider(self, name: str) -> Optional[FloatSlider]:
        for slider in self.metadata.float_sliders():
            if slider.name == name:
                return slider
        return None

    # ========================================================================
    # Macros
    # ========================================================================

    def _check_define(self, node: ASTNode):
        name = node.child_by_field_name('name')
        if name is not None and name.text == self.extractor.still_image_macro:
            self.metadata.still_image = True


def extract(source: str) -> Tuple[ShaderMetadata, str]:
    """Extract metadata with the default extractor. See MetadataExtractor.extract."""
    return MetadataExtractor().extract(source)
