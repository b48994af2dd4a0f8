from __future__ import annotations

"""
Material Blending and Masking Setup.

Applies the SDK's blend factor presets and the masking toggle to a
Material description.
"""

from typing import Dict

from cubism_assets.domain.material_models import BlendMode, Material

MASK_TOGGLE_PROPERTY = "cubism_MaskOn"
MASK_ON_KEYWORD = "CUBISM_MASK_ON"
MASK_OFF_KEYWORD = "CUBISM_MASK_OFF"

# src-color, dst-color, src-alpha, dst-alpha
NORMAL_BLENDING: Dict[str, BlendMode] = {
    "_SrcColor": BlendMode.One,
    "_DstColor": BlendMode.OneMinusSrcAlpha,
    "_SrcAlpha": BlendMode.One,
    "_DstAlpha": BlendMode.OneMinusSrcAlpha,
}

ADDITIVE_BLENDING: Dict[str, BlendMode] = {
    "_SrcColor": BlendMode.One,
    "_DstColor": BlendMode.One,
    "_SrcAlpha": BlendMode.Zero,
    "_DstAlpha": BlendMode.One,
}

MULTIPLICATIVE_BLENDING: Dict[str, BlendMode] = {
    "_SrcColor": BlendMode.DstColor,
    "_DstColor": BlendMode.OneMinusSrcAlpha,
    "_SrcAlpha": BlendMode.Zero,
    "_DstAlpha": BlendMode.One,
}


def apply_blending(material: Material, blending: Dict[str, BlendMode]) -> None:
    """Write a blend preset into the material's integer properties."""
    for prop, mode in blending.items():
        material.set_int(prop, mode)


def enable_masking(material: Material) -> None:
    """
    Enables Cubism-style masking for a material.

    Safe to call repeatedly: the off keyword is dropped and the on keyword
    is present exactly once afterwards.
    """
    material.set_int(MASK_TOGGLE_PROPERTY, 1)

    keywords = [k for k in material.shader_keywords if k != MASK_OFF_KEYWORD]
    if MASK_ON_KEYWORD not in keywords:
        keywords.append(MASK_ON_KEYWORD)

    material.shader_keywords = keywords
