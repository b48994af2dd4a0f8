from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures building a project tree with an SDK installation and
   a complete configuration dictionary.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

RESOURCES_PARTS = ("Cubism", "Rendering", "Resources", "Live2D", "Cubism")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """
    Create a project with the SDK installed under its asset tree.

    Structure:
    /project
      /Assets
        /Live2D
          /Cubism/Rendering/Resources/Live2D/Cubism
        /Models
    """
    project = tmp_path / "project"
    assets = project / "Assets"
    (assets / "Models").mkdir(parents=True)
    (assets / "Live2D").joinpath(*RESOURCES_PARTS).mkdir(parents=True)
    return project


@pytest.fixture
def search_root(project_dir: Path) -> Path:
    return project_dir / "Assets"


@pytest.fixture
def resources_dir(search_root: Path) -> Path:
    return (search_root / "Live2D").joinpath(*RESOURCES_PARTS)


@pytest.fixture
def mock_config_dict(project_dir: Path) -> Dict[str, Any]:
    """
    Return a valid, complete configuration dictionary for testing.

    Reflects the structure defined in 'cubism_assets.domain.config'.

    Returns:
        Dict[str, Any]: A sample configuration dictionary.
    """
    return {
        # Installation discovery
        "search_root": "Assets",
        "marker_name": "Live2D",
        "working_dir": str(project_dir),

        # Builtin resources
        "material_gating": "directory",

        # Diagnostics
        "log_level": "INFO",
        "log_file": "",
    }
