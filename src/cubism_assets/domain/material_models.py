from __future__ import annotations

"""
Rendering Resource Domain Models.

Describes the in-memory resources the bootstrapper hands to the resource
factory: materials (shader selection, integer properties, shader keywords)
and the shared mask texture. These objects carry no I/O; persistence is the
factory's job.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Dict, List


class BlendMode(IntEnum):
    """Blend factors, numbered as the engine's rendering API numbers them."""
    Zero = 0
    One = 1
    DstColor = 2
    SrcColor = 3
    OneMinusDstColor = 4
    SrcAlpha = 5
    OneMinusSrcColor = 6
    DstAlpha = 7
    OneMinusDstAlpha = 8
    SrcAlphaSaturate = 9
    OneMinusSrcAlpha = 10


class BuiltinShader(str, Enum):
    """Shaders shipped with the SDK that the builtin materials are based on."""
    MASK = "Live2D Cubism/Mask"
    UNLIT = "Live2D Cubism/Unlit"


@dataclass
class Material:
    """
    Mutable material description built up by the blending helpers.

    Attributes:
        name: Asset name, also used as the file stem.
        shader: Base shader selection.
        int_properties: Shader property name to integer value, in set order.
        shader_keywords: Enabled shader keywords, in enable order.
    """
    name: str
    shader: BuiltinShader
    int_properties: Dict[str, int] = field(default_factory=dict)
    shader_keywords: List[str] = field(default_factory=list)

    def set_int(self, property_name: str, value: int) -> None:
        self.int_properties[property_name] = int(value)

    def get_int(self, property_name: str, default: int = 0) -> int:
        return self.int_properties.get(property_name, default)


@dataclass
class MaskTexture:
    """Shared render target that all masked drawables draw their masks into."""
    name: str
    size: int = 1024
    subdivisions: int = 3
