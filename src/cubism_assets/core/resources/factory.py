from __future__ import annotations

"""
Resource Factory.

Constructs material and mask texture resources and persists them as
engine-style YAML asset documents. The bootstrapper only talks to the
abstract ResourceFactory so that a host can plug in its own asset database.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

import yaml

from cubism_assets.domain import constants as const
from cubism_assets.domain.material_models import BuiltinShader, MaskTexture, Material

logger = logging.getLogger(__name__)

Resource = Union[Material, MaskTexture]

# Class ids and local file ids used in serialized asset headers
_MATERIAL_CLASS_ID = 21
_MATERIAL_FILE_ID = 2100000
_SCRIPTABLE_CLASS_ID = 114
_SCRIPTABLE_FILE_ID = 11400000

_YAML_HEADER = "%YAML 1.1\n%TAG !u! tag:unity3d.com,2011:\n"
_MASK_TEXTURE_SCRIPT = "Live2D.Cubism.Rendering.Masking.CubismMaskTexture"


class ResourceFactory(ABC):
    """
    Abstract factory and persistence gateway for builtin resources.
    """

    @abstractmethod
    def create_material(self, shader: BuiltinShader, name: str) -> Material:
        """Construct an unsaved material based on a builtin shader."""
        pass

    @abstractmethod
    def create_mask_texture(self) -> Optional[MaskTexture]:
        """Construct an unsaved mask texture, or None if the type is unavailable."""
        pass

    @abstractmethod
    def save_asset(self, resource: Resource, path: str, *, overwrite: bool = False) -> bool:
        """
        Persist a resource at 'path'.

        Args:
            resource: Material or mask texture to write.
            path: Target file path.
            overwrite: Replace an existing file instead of leaving it alone.

        Returns:
            bool: True if written, False if a file already existed and
                  overwrite was not requested.

        Raises:
            OSError: On any other write failure.
        """
        pass


class YamlResourceFactory(ResourceFactory):
    """
    Writes resources as YAML documents with the engine's asset header.
    """

    def create_material(self, shader: BuiltinShader, name: str) -> Material:
        return Material(name=name, shader=shader)

    def create_mask_texture(self) -> Optional[MaskTexture]:
        return MaskTexture(name=const.GLOBAL_MASK_TEXTURE_NAME)

    def save_asset(self, resource: Resource, path: str, *, overwrite: bool = False) -> bool:
        text = dump_asset(resource)

        # 'x' fails if the file appeared after the caller's existence check
        mode = "w" if overwrite else "x"
        try:
            with open(path, mode, encoding="utf-8", newline="\n") as f:
                f.write(text)
        except FileExistsError:
            logger.debug(f"Asset already exists, not overwritten: {path}")
            return False

        logger.debug(f"Asset written: {path}")
        return True


# -----------------------------------------------------------------------------
# SERIALIZATION
# -----------------------------------------------------------------------------

def dump_asset(resource: Resource) -> str:
    """
    Serialize a resource to the YAML asset text format.

    Args:
        resource: Material or MaskTexture.

    Returns:
        str: Full document including the '%YAML' header.
    """
    if isinstance(resource, Material):
        class_id, file_id = _MATERIAL_CLASS_ID, _MATERIAL_FILE_ID
        body: Dict[str, Any] = {"Material": _material_to_dict(resource)}
    elif isinstance(resource, MaskTexture):
        class_id, file_id = _SCRIPTABLE_CLASS_ID, _SCRIPTABLE_FILE_ID
        body = {"MonoBehaviour": _mask_texture_to_dict(resource)}
    else:
        raise TypeError(f"Unsupported resource type: {type(resource).__name__}")

    document = yaml.safe_dump(body, sort_keys=False, default_flow_style=False, allow_unicode=True)
    return f"{_YAML_HEADER}--- !u!{class_id} &{file_id}\n{document}"


def load_asset(path: str) -> Dict[str, Any]:
    """
    Read a YAML asset document written by dump_asset.

    Args:
        path: Asset file path.

    Returns:
        Dict[str, Any]: The parsed body, e.g. {'Material': {...}}.

    Raises:
        OSError: If the file cannot be read.
        yaml.YAMLError: If the body is not valid YAML.
    """
    with open(path, "r", encoding="utf-8") as f:
        lines = f.readlines()

    body_lines = []
    for line in lines:
        if line.startswith("%"):
            continue
        if line.startswith("--- "):
            body_lines.append("---\n")
            continue
        body_lines.append(line)

    data = yaml.safe_load("".join(body_lines))
    return data if isinstance(data, dict) else {}


def _material_to_dict(material: Material) -> Dict[str, Any]:
    return {
        "m_Name": material.name,
        "m_Shader": {"name": material.shader.value},
        "m_ShaderKeywords": " ".join(material.shader_keywords),
        "m_SavedProperties": {
            "m_Floats": [{k: v} for k, v in material.int_properties.items()],
        },
    }


def _mask_texture_to_dict(texture: MaskTexture) -> Dict[str, Any]:
    return {
        "m_Name": texture.name,
        "m_EditorClassIdentifier": _MASK_TEXTURE_SCRIPT,
        "_size": texture.size,
        "_subdivisions": texture.subdivisions,
    }
