from __future__ import annotations

"""
Unit tests for the YAML Resource Factory.

Verifies:
1. Asset document layout (header, class tag, body).
2. Exclusive creation: existing files are never overwritten by default.
3. Reading documents back with load_asset.
"""

from pathlib import Path

import pytest

from cubism_assets.core.resources.catalog import MATERIAL_CATALOG, configure_material
from cubism_assets.core.resources.factory import YamlResourceFactory, dump_asset, load_asset
from cubism_assets.domain.material_models import BuiltinShader, MaskTexture


@pytest.fixture
def factory() -> YamlResourceFactory:
    return YamlResourceFactory()


def test_material_document_layout(factory: YamlResourceFactory) -> None:
    """TC-01: Verify the header lines and the material class tag."""
    material = factory.create_material(BuiltinShader.UNLIT, "Unlit")
    text = dump_asset(material)

    lines = text.splitlines()
    assert lines[0] == "%YAML 1.1"
    assert lines[1].startswith("%TAG !u! ")
    assert lines[2] == "--- !u!21 &2100000"
    assert lines[3] == "Material:"


def test_mask_texture_document_layout(factory: YamlResourceFactory) -> None:
    """TC-02: Verify the mask texture is written as a scriptable object."""
    texture = factory.create_mask_texture()
    assert isinstance(texture, MaskTexture)

    text = dump_asset(texture)
    assert "--- !u!114 &11400000" in text
    assert "m_Name: GlobalMaskTexture" in text


def test_dump_rejects_unknown_resource() -> None:
    """TC-03: Verify unsupported objects raise TypeError."""
    with pytest.raises(TypeError):
        dump_asset(object())


def test_save_and_load_material(factory: YamlResourceFactory, tmp_path: Path) -> None:
    """TC-04: Verify a saved preset reads back with its properties and keywords."""
    preset = next(p for p in MATERIAL_CATALOG if p.name == "UnlitMultiplyMasked")
    material = configure_material(factory.create_material(preset.shader, preset.name), preset)
    target = tmp_path / preset.file_name

    assert factory.save_asset(material, str(target)) is True

    body = load_asset(str(target))["Material"]
    assert body["m_Name"] == "UnlitMultiplyMasked"
    assert body["m_Shader"] == {"name": "Live2D Cubism/Unlit"}
    assert body["m_ShaderKeywords"] == "CUBISM_MASK_ON"

    floats = {k: v for entry in body["m_SavedProperties"]["m_Floats"] for k, v in entry.items()}
    assert floats == {"_SrcColor": 2, "_DstColor": 10, "_SrcAlpha": 0, "_DstAlpha": 1, "cubism_MaskOn": 1}


def test_save_never_overwrites_by_default(factory: YamlResourceFactory, tmp_path: Path) -> None:
    """TC-05: Verify an existing file is left byte-identical."""
    target = tmp_path / "Unlit.mat"
    target.write_text("user edited", encoding="utf-8")

    material = factory.create_material(BuiltinShader.UNLIT, "Unlit")

    assert factory.save_asset(material, str(target)) is False
    assert target.read_text(encoding="utf-8") == "user edited"


def test_save_overwrite_replaces_file(factory: YamlResourceFactory, tmp_path: Path) -> None:
    """TC-06: Verify overwrite=True replaces the content."""
    target = tmp_path / "Unlit.mat"
    target.write_text("stale", encoding="utf-8")

    material = factory.create_material(BuiltinShader.UNLIT, "Unlit")

    assert factory.save_asset(material, str(target), overwrite=True) is True
    assert load_asset(str(target))["Material"]["m_Name"] == "Unlit"


def test_save_into_missing_directory_raises(factory: YamlResourceFactory, tmp_path: Path) -> None:
    """TC-07: Verify write failures other than 'exists' propagate."""
    material = factory.create_material(BuiltinShader.UNLIT, "Unlit")

    with pytest.raises(OSError):
        factory.save_asset(material, str(tmp_path / "missing" / "Unlit.mat"))
