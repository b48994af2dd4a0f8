from __future__ import annotations

"""
Builtin Resources Catalog.

The fixed, ordered list of material presets the SDK expects to find in its
resources folder, plus the shared mask texture. The catalog states what must
exist; it holds no runtime state.
"""

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from cubism_assets.core.resources.blending import (
    ADDITIVE_BLENDING,
    MULTIPLICATIVE_BLENDING,
    NORMAL_BLENDING,
    apply_blending,
    enable_masking,
)
from cubism_assets.domain import constants as const
from cubism_assets.domain.material_models import BlendMode, BuiltinShader, Material


@dataclass(frozen=True)
class MaterialPreset:
    """
    One catalog entry.

    Attributes:
        name: Material name and file stem.
        shader: Base shader selection.
        blending: Blend factors to apply, None for the plain mask material.
        masked: Whether masking is enabled.
    """
    name: str
    shader: BuiltinShader
    blending: Optional[Dict[str, BlendMode]] = None
    masked: bool = False

    @property
    def file_name(self) -> str:
        return self.name + const.MATERIAL_EXTENSION


MATERIAL_CATALOG: Tuple[MaterialPreset, ...] = (
    MaterialPreset("Mask", BuiltinShader.MASK),

    MaterialPreset("Unlit", BuiltinShader.UNLIT, NORMAL_BLENDING),
    MaterialPreset("UnlitAdditive", BuiltinShader.UNLIT, ADDITIVE_BLENDING),
    MaterialPreset("UnlitMultiply", BuiltinShader.UNLIT, MULTIPLICATIVE_BLENDING),

    MaterialPreset("UnlitMasked", BuiltinShader.UNLIT, NORMAL_BLENDING, masked=True),
    MaterialPreset("UnlitAdditiveMasked", BuiltinShader.UNLIT, ADDITIVE_BLENDING, masked=True),
    MaterialPreset("UnlitMultiplyMasked", BuiltinShader.UNLIT, MULTIPLICATIVE_BLENDING, masked=True),
)

GLOBAL_MASK_TEXTURE_FILE = const.GLOBAL_MASK_TEXTURE_NAME + const.ASSET_EXTENSION


def configure_material(material: Material, preset: MaterialPreset) -> Material:
    """Apply a preset's blending and masking to a freshly created material."""
    if preset.blending is not None:
        apply_blending(material, preset.blending)
    if preset.masked:
        enable_masking(material)
    return material
