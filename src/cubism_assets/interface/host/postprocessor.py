from __future__ import annotations

"""
Host Asset Postprocessor Adapter.

Bridges the host's asset pipeline callbacks to the core services:
- on_postprocess_all_assets: four path arrays per cycle -> ChangeDispatcher.
- on_generated_project_files: project descriptors rewritten -> project patcher.

Neither callback lets an exception escape into the host; failures are
logged and reflected in the returned result.
"""

import logging
import os
from typing import Any, Dict, Iterable, Mapping, Optional

from cubism_assets.core.project.patcher import patch_all_project_files
from cubism_assets.core.resources.factory import ResourceFactory, YamlResourceFactory
from cubism_assets.core.services.bootstrapper import ResourceBootstrapper
from cubism_assets.core.services.classifier import HandlerRegistry, PathClassifier
from cubism_assets.core.services.dispatcher import ChangeDispatcher
from cubism_assets.domain.change_models import ChangeSet, DispatchResult
from cubism_assets.domain.patch_models import PatchResult
from cubism_assets.infra.fs import normalize_path, resolve_under

logger = logging.getLogger(__name__)


class CubismAssetPostprocessor:
    """
    Receives host pipeline events for one project.
    """

    def __init__(self, dispatcher: ChangeDispatcher, working_dir: str) -> None:
        self._dispatcher = dispatcher
        self._working_dir = working_dir

    @property
    def working_dir(self) -> str:
        return self._working_dir

    def on_postprocess_all_assets(
            self,
            imported: Optional[Iterable[str]] = None,
            deleted: Optional[Iterable[str]] = None,
            moved_to: Optional[Iterable[str]] = None,
            moved_from: Optional[Iterable[str]] = None,
    ) -> DispatchResult:
        """Called by the host after every asset pipeline pass."""
        change_set = ChangeSet.from_sequences(imported, deleted, moved_to, moved_from)
        return self._dispatcher.process_change_set(change_set)

    def on_generated_project_files(self) -> Optional[PatchResult]:
        """
        Called by the host after it (re)generated the project descriptors.

        Returns:
            Optional[PatchResult]: The patch outcome, or None if a descriptor
                                   could not be read or written.
        """
        try:
            return patch_all_project_files(self._working_dir)
        except OSError:
            logger.exception(f"Failed to patch project files in '{self._working_dir}'")
            return None


def create_postprocessor(
        config: Dict[str, Any],
        importers: Optional[Mapping[str, Any]] = None,
        deleters: Optional[Mapping[str, Any]] = None,
        factory: Optional[ResourceFactory] = None,
) -> CubismAssetPostprocessor:
    """
    Wire a postprocessor from a validated configuration.

    Args:
        config: Output of validate_config.
        importers: Suffix to import handler factory mapping.
        deleters: Suffix to delete handler factory mapping.
        factory: Resource factory; defaults to YAML asset files.

    Returns:
        CubismAssetPostprocessor: Ready to receive host events.
    """
    working_dir = normalize_path(config.get("working_dir"), os.getcwd())
    search_root = resolve_under(working_dir, config["search_root"])

    classifier = PathClassifier(HandlerRegistry(importers), HandlerRegistry(deleters))
    bootstrapper = ResourceBootstrapper(
        factory or YamlResourceFactory(),
        gating=config["material_gating"],
    )
    dispatcher = ChangeDispatcher(
        classifier,
        bootstrapper,
        search_root=search_root,
        marker_name=config["marker_name"],
    )
    return CubismAssetPostprocessor(dispatcher, working_dir)
