from __future__ import annotations

"""
Builtin Resources Bootstrap Service.

Locates the SDK installation inside the asset tree and makes sure the
builtin material presets and the shared mask texture exist on disk,
creating what is missing and leaving existing assets untouched.

Gating:
- 'directory' (default): the presence of the materials directory is the
  sole completeness signal. If it exists, no preset is created, even if
  some files are missing.
- 'per_file': every preset is checked and created on its own, the same
  way the mask texture always is.
"""

import logging
import os
from typing import List, Optional

from cubism_assets.core.resources.catalog import (
    GLOBAL_MASK_TEXTURE_FILE,
    MATERIAL_CATALOG,
    MaterialPreset,
    configure_material,
)
from cubism_assets.core.resources.factory import ResourceFactory
from cubism_assets.domain import constants as const
from cubism_assets.domain.bootstrap_models import (
    BootstrapResult,
    create_error_result,
    create_success_result,
)
from cubism_assets.infra.fs import list_subdirectories

logger = logging.getLogger(__name__)


# ==============================================================================
# INSTALLATION DISCOVERY
# ==============================================================================

def find_install_root(search_root: str, marker_name: str) -> Optional[str]:
    """
    Depth-first search for the first directory whose path contains a marker.

    Starts from the immediate subdirectories of 'search_root' (the root
    itself is never a candidate). Each directory is tested before its
    children and siblings are visited in the order the filesystem lists
    them, so the result is the first match in pre-order, neither the
    shortest nor the alphabetically smallest path.

    The marker is looked up in the path relative to 'search_root', so the
    location of the project on disk cannot produce a match by itself.
    Unlike the editor plugin this replaces, which matched against the path
    including the search root prefix, a marker inside the root's own name
    never matches.

    Args:
        search_root: Directory to search under.
        marker_name: Substring the directory path must contain.

    Returns:
        Optional[str]: Matching directory path, or None.
    """
    # Reversed so that popping yields siblings in listing order
    stack: List[str] = list(reversed(list_subdirectories(search_root)))

    while stack:
        dir_path = stack.pop()
        rel_path = os.path.relpath(dir_path, search_root).replace(os.sep, "/")
        if marker_name in rel_path:
            return dir_path

        children = list_subdirectories(dir_path)
        stack.extend(reversed(children))

    return None


# ==============================================================================
# BOOTSTRAPPER
# ==============================================================================

class ResourceBootstrapper:
    """
    Ensures the builtin resources catalog exists under the SDK installation.
    """

    def __init__(self, factory: ResourceFactory, gating: str = const.GATING_DIRECTORY) -> None:
        if gating not in const.GATING_MODES:
            raise ValueError(f"Unknown material gating mode: {gating}")
        self._factory = factory
        self._gating = gating

    @property
    def gating(self) -> str:
        return self._gating

    def ensure_builtin_resources(
            self,
            search_root: str = const.DEFAULT_SEARCH_ROOT,
            marker_name: str = const.DEFAULT_MARKER_NAME,
    ) -> BootstrapResult:
        """
        Create any missing builtin resources.

        Args:
            search_root: Directory searched for the SDK installation.
            marker_name: Folder name identifying the installation.

        Returns:
            BootstrapResult: Outcome, including created and skipped paths.

        Raises:
            OSError: If a directory or asset cannot be written. Assets created
                     before the failure are kept.
        """
        # 1. Installation discovery
        install_root = find_install_root(search_root, marker_name)
        if not install_root:
            msg = f"Failed to find {marker_name} installed folder under '{search_root}'."
            logger.error(msg)
            return create_error_result(const.STATUS_INSTALL_ROOT_NOT_FOUND, msg)

        logger.debug(f"Installation folder detected: {install_root}")

        # 2. Resources directory
        resource_path = os.path.join(install_root, *const.RESOURCES_RELATIVE_PATH.split("/"))
        if not os.path.isdir(resource_path):
            msg = f"Failed to detect Resources folder path: {resource_path}"
            logger.warning(msg)
            return create_error_result(
                const.STATUS_RESOURCES_FOLDER_MISSING, msg, install_root=install_root
            )

        created: List[str] = []
        skipped: List[str] = []

        # 3. Material presets
        materials_path = os.path.join(resource_path, const.MATERIALS_DIR_NAME)
        materials_dir_created = self._ensure_materials(materials_path, created, skipped)

        # 4. Shared mask texture (always gated per file)
        texture = self._factory.create_mask_texture()
        if texture is None:
            msg = "Failed to create the global mask texture resource."
            logger.error(msg)
            return create_error_result(
                const.STATUS_MASK_TEXTURE_UNAVAILABLE, msg,
                install_root=install_root,
                resource_path=resource_path,
                materials_dir_created=materials_dir_created,
                created=created,
                skipped=skipped,
            )

        texture_path = os.path.join(resource_path, GLOBAL_MASK_TEXTURE_FILE)
        if not os.path.exists(texture_path) and self._factory.save_asset(texture, texture_path):
            created.append(texture_path)
        else:
            skipped.append(texture_path)

        if created:
            logger.info(f"Builtin resources: {len(created)} created, {len(skipped)} already present.")

        return create_success_result(
            install_root, resource_path, materials_dir_created, created, skipped
        )

    # --------------------------------------------------------------------------
    # PRIVATE HELPERS
    # --------------------------------------------------------------------------

    def _ensure_materials(self, materials_path: str, created: List[str], skipped: List[str]) -> bool:
        """Create the materials directory and presets as the gating mode allows."""
        dir_existed = os.path.isdir(materials_path)

        if dir_existed and self._gating == const.GATING_DIRECTORY:
            logger.debug(f"Materials folder present, presets left untouched: {materials_path}")
            return False

        if not dir_existed:
            os.makedirs(materials_path)
            logger.info(f"Materials folder created: {materials_path}")

        for preset in MATERIAL_CATALOG:
            target = os.path.join(materials_path, preset.file_name)
            if dir_existed and os.path.exists(target):
                skipped.append(target)
                continue

            if self._create_material(preset, target):
                created.append(target)
            else:
                skipped.append(target)

        return not dir_existed

    def _create_material(self, preset: MaterialPreset, target: str) -> bool:
        material = self._factory.create_material(preset.shader, preset.name)
        configure_material(material, preset)
        return self._factory.save_asset(material, target)
