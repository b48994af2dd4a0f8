from __future__ import annotations

"""
Domain Constants.

Centralizes the names, relative paths and markers that describe the
managed asset tree: where the SDK installation lives, where its builtin
resources are materialized, and which build descriptors get patched.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# INSTALLATION DISCOVERY
# -----------------------------------------------------------------------------

DEFAULT_SEARCH_ROOT = "Assets"
DEFAULT_MARKER_NAME = "Live2D"

# -----------------------------------------------------------------------------
# BUILTIN RESOURCES LAYOUT
# -----------------------------------------------------------------------------

RESOURCES_RELATIVE_PATH = "Cubism/Rendering/Resources/Live2D/Cubism"
MATERIALS_DIR_NAME = "Materials"

MATERIAL_EXTENSION = ".mat"
ASSET_EXTENSION = ".asset"

GLOBAL_MASK_TEXTURE_NAME = "GlobalMaskTexture"

# Material gating strategies
GATING_DIRECTORY = "directory"
GATING_PER_FILE = "per_file"
GATING_MODES: Tuple[str, ...] = (GATING_DIRECTORY, GATING_PER_FILE)

# -----------------------------------------------------------------------------
# BOOTSTRAP STATUS CODES
# -----------------------------------------------------------------------------

STATUS_OK = "ok"
STATUS_INSTALL_ROOT_NOT_FOUND = "install_root_not_found"
STATUS_RESOURCES_FOLDER_MISSING = "resources_folder_missing"
STATUS_MASK_TEXTURE_UNAVAILABLE = "mask_texture_unavailable"

# -----------------------------------------------------------------------------
# HANDLER OPERATIONS
# -----------------------------------------------------------------------------

OPERATION_IMPORT = "import"
OPERATION_DELETE = "delete"

# -----------------------------------------------------------------------------
# BUILD DESCRIPTOR PATCHING
# -----------------------------------------------------------------------------

PROJECT_FILE_SUFFIX = ".csproj"
EDITOR_PROJECT_SUFFIX = ".Editor.csproj"

SECTION_MARKERS: Tuple[str, ...] = ("PropertyGroup", "$(Configuration)|$(Platform)")
UNSAFE_FLAG_NAME = "AllowUnsafeBlocks"
FLAG_TRUE_VALUE = "true"
