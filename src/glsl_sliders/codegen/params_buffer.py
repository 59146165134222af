"""
Params buffer packing.

The rewritten params block is a `layout(set = 0, binding = 0) uniform`
block, laid out with std140 rules. The bytes uploaded for it must follow the
block's members field for field, in declaration order:

    float, bool    4 bytes, 4-byte aligned
    vec3 (color)   12 bytes, 16-byte aligned
    block size     rounded up to 16 bytes

A mismatch shows up as wrong colors and values on screen, not as an error.

Usage:
    data = pack_params(metadata.sliders)
    queue.write_buffer(params_buffer, 0, data)
"""

import struct
from dataclasses import dataclass
from typing import List, Sequence

from ..transformer.shader_metadata import (
    BoolSlider,
    ColorSlider,
    FloatSlider,
    Slider,
    Vec3Slider,
)

BLOCK_ALIGNMENT = 16


@dataclass(frozen=True)
class FieldLayout:
    """
    Placement of one block member.

    Attributes:
        name: slider name
        offset: byte offset from the start of the block
        size: byte size of the member
    """
    name: str = None
    offset: int = 0
    size: int = 0


def _align(offset: int, alignment: int) -> int:
    return (offset + alignment - 1) // alignment * alignment


def _size_and_alignment(slider: Slider):
    if isinstance(slider, (FloatSlider, BoolSlider)):
        return 4, 4
    if isinstance(slider, (Vec3Slider, ColorSlider)):
        return 12, 16
    raise TypeError(f"No buffer layout for {type(slider).__name__}")


def params_layout(sliders: Sequence[Slider]) -> List[FieldLayout]:
    """
    Compute the std140 offset of every slider.

    Args:
        sliders: sliders in block declaration order

    Returns:
        One FieldLayout per slider, same order
    """
    fields = []
    offset = 0
    for slider in sliders:
        size, alignment = _size_and_alignment(slider)
        offset = _align(offset, alignment)
        fields.append(FieldLayout(name=slider.name, offset=offset, size=size))
        offset += size
    return fields


def params_size(sliders: Sequence[Slider]) -> int:
    """Byte size of the whole block, padding included."""
    fields = params_layout(sliders)
    if not fields:
        return 0
    end = fields[-1].offset + fields[-1].size
    return _align(end, BLOCK_ALIGNMENT)


def pack_params(sliders: Sequence[Slider]) -> bytes:
    """
    Serialize slider values into the params buffer.

    Float values are written as they are (no clamping); callers that want
    bounded values should clamp the sliders first.

    Returns:
        Little-endian bytes, params_size(sliders) long
    """
    data = bytearray(params_size(sliders))
    for slider, field in zip(sliders, params_layout(sliders)):
        if isinstance(slider, FloatSlider):
            struct.pack_into('<f', data, field.offset, slider.value)
        elif isinstance(slider, BoolSlider):
            struct.pack_into('<I', data, field.offset, 1 if slider.value else 0)
        else:
            struct.pack_into('<3f', data, field.offset, *slider.value)
    return bytes(data)
