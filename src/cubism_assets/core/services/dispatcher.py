from __future__ import annotations

"""
Asset Change Dispatcher.

Entry point for one asset-change cycle:
1. Ensures the builtin resources exist (once per cycle, unconditionally).
2. Runs the import handler of every imported path, in input order.
3. Runs the delete handler of every deleted path, in input order.

A handler that raises, or fails to resolve, is logged and recorded; the
remaining paths of the cycle are still processed. A failing bootstrap is
recorded too and never prevents dispatch. Moved paths are accepted and
counted only.
"""

import logging
from typing import List, Optional, Tuple

from cubism_assets.core.services.bootstrapper import ResourceBootstrapper
from cubism_assets.core.services.classifier import PathClassifier
from cubism_assets.domain import constants as const
from cubism_assets.domain.bootstrap_models import BootstrapResult
from cubism_assets.domain.change_models import ChangeSet, DispatchResult, HandlerFailure

logger = logging.getLogger(__name__)


class ChangeDispatcher:
    """
    Routes the paths of a ChangeSet to their registered handlers.
    """

    def __init__(
            self,
            classifier: PathClassifier,
            bootstrapper: ResourceBootstrapper,
            search_root: str = const.DEFAULT_SEARCH_ROOT,
            marker_name: str = const.DEFAULT_MARKER_NAME,
    ) -> None:
        self._classifier = classifier
        self._bootstrapper = bootstrapper
        self._search_root = search_root
        self._marker_name = marker_name

    def process_change_set(self, change_set: ChangeSet) -> DispatchResult:
        """
        Process one change cycle.

        Args:
            change_set: Paths reported by the host.

        Returns:
            DispatchResult: Bootstrap outcome plus per-path dispatch records.
        """
        bootstrap, bootstrap_error = self._run_bootstrap()

        imported: List[str] = []
        deleted: List[str] = []
        skipped: List[str] = []
        failures: List[HandlerFailure] = []

        for asset_path in change_set.imported:
            try:
                importer = self._classifier.resolve_import_handler(asset_path)
                if importer is None:
                    skipped.append(asset_path)
                    continue
                importer.import_asset()
            except Exception as e:
                logger.exception(f"Import handler failed for '{asset_path}'")
                failures.append(_failure(asset_path, const.OPERATION_IMPORT, e))
                continue
            imported.append(asset_path)

        for asset_path in change_set.deleted:
            try:
                deleter = self._classifier.resolve_delete_handler(asset_path)
                if deleter is None:
                    skipped.append(asset_path)
                    continue
                deleter.delete_asset()
            except Exception as e:
                logger.exception(f"Delete handler failed for '{asset_path}'")
                failures.append(_failure(asset_path, const.OPERATION_DELETE, e))
                continue
            deleted.append(asset_path)

        if imported or deleted or failures:
            logger.info(
                f"Change cycle: {len(imported)} imported, {len(deleted)} deleted, "
                f"{len(failures)} failed, {len(skipped)} ignored."
            )

        return DispatchResult(
            bootstrap=bootstrap,
            bootstrap_error=bootstrap_error,
            imported=imported,
            deleted=deleted,
            skipped=skipped,
            failures=failures,
            moved_count=len(change_set.moved_to),
        )

    def _run_bootstrap(self) -> Tuple[Optional[BootstrapResult], str]:
        """Run the bootstrap, containing any failure to this cycle."""
        try:
            result = self._bootstrapper.ensure_builtin_resources(self._search_root, self._marker_name)
        except OSError as e:
            logger.exception("Builtin resources could not be written")
            return None, str(e)
        except Exception as e:
            logger.exception("Builtin resources bootstrap failed")
            return None, f"{type(e).__name__}: {e}"
        return result, ""


def _failure(path: str, operation: str, exc: Exception) -> HandlerFailure:
    return HandlerFailure(path=path, operation=operation, error=f"{type(exc).__name__}: {exc}")
