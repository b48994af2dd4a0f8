from __future__ import annotations

"""
Unit tests for the Asset Change Dispatcher.

Verifies:
1. The bootstrap runs once per cycle, including empty cycles.
2. Routing of imported and deleted paths in input order.
3. Fault isolation between handlers of the same cycle.
4. Containment of any failure raised by the bootstrap.
5. Containment of failures raised while resolving a handler.
"""

from typing import List
from unittest.mock import MagicMock

import pytest

from cubism_assets.core.services.classifier import (
    AssetDeleter,
    AssetImporter,
    HandlerRegistry,
    PathClassifier,
)
from cubism_assets.core.services.dispatcher import ChangeDispatcher
from cubism_assets.domain import constants as const
from cubism_assets.domain.bootstrap_models import create_error_result, create_success_result
from cubism_assets.domain.change_models import ChangeSet

CALLS: List[str] = []


class LoggingImporter(AssetImporter):
    def import_asset(self) -> None:
        CALLS.append(f"import:{self.asset_path}")


class FailingImporter(AssetImporter):
    def import_asset(self) -> None:
        CALLS.append(f"fail:{self.asset_path}")
        raise RuntimeError("corrupt moc")


class LoggingDeleter(AssetDeleter):
    def delete_asset(self) -> None:
        CALLS.append(f"delete:{self.asset_path}")


class HeaderCheckingImporter(LoggingImporter):
    """Reads the asset header on construction, as real importers do."""

    def __init__(self, asset_path: str) -> None:
        if asset_path.startswith("bad"):
            raise ValueError("corrupt header")
        super().__init__(asset_path)


def rejecting_signature(path: str) -> bool:
    raise OSError(f"cannot open {path}")


@pytest.fixture(autouse=True)
def clear_calls() -> None:
    CALLS.clear()


@pytest.fixture
def bootstrapper() -> MagicMock:
    mock = MagicMock()
    mock.ensure_builtin_resources.return_value = create_success_result(
        "Assets/Live2D", "Assets/Live2D/Res", False, [], []
    )
    return mock


def make_dispatcher(bootstrapper: MagicMock, importers=None, deleters=None) -> ChangeDispatcher:
    classifier = PathClassifier(HandlerRegistry(importers), HandlerRegistry(deleters))
    return ChangeDispatcher(classifier, bootstrapper, search_root="Assets", marker_name="Live2D")

# -----------------------------------------------------------------------------
# BOOTSTRAP INVOCATION
# -----------------------------------------------------------------------------

def test_empty_change_set_still_bootstraps(bootstrapper: MagicMock) -> None:
    """TC-01: Verify the bootstrap runs exactly once even with no paths."""
    dispatcher = make_dispatcher(bootstrapper)

    result = dispatcher.process_change_set(ChangeSet())

    bootstrapper.ensure_builtin_resources.assert_called_once_with("Assets", "Live2D")
    assert result.ok is True
    assert result.imported == []
    assert result.skipped == []


def test_bootstrap_failure_result_is_reported(bootstrapper: MagicMock) -> None:
    """TC-02: Verify a failed bootstrap does not stop dispatching."""
    bootstrapper.ensure_builtin_resources.return_value = create_error_result(
        const.STATUS_INSTALL_ROOT_NOT_FOUND, "not found"
    )
    dispatcher = make_dispatcher(bootstrapper, importers={".moc3": LoggingImporter})

    result = dispatcher.process_change_set(ChangeSet(imported=("a.moc3",)))

    assert result.ok is False
    assert result.bootstrap.status == const.STATUS_INSTALL_ROOT_NOT_FOUND
    assert result.imported == ["a.moc3"]


def test_bootstrap_os_error_is_contained(bootstrapper: MagicMock) -> None:
    """TC-03: Verify a write failure in the bootstrap is recorded, not raised."""
    bootstrapper.ensure_builtin_resources.side_effect = PermissionError("read-only volume")
    dispatcher = make_dispatcher(bootstrapper, importers={".moc3": LoggingImporter})

    result = dispatcher.process_change_set(ChangeSet(imported=("a.moc3",)))

    assert result.bootstrap is None
    assert "read-only volume" in result.bootstrap_error
    assert result.ok is False
    assert CALLS == ["import:a.moc3"]

# -----------------------------------------------------------------------------
# ROUTING
# -----------------------------------------------------------------------------

def test_routes_registered_paths_in_input_order(bootstrapper: MagicMock) -> None:
    """TC-04: Verify handlers run for registered types only, in order, imports first."""
    dispatcher = make_dispatcher(
        bootstrapper,
        importers={".moc3": LoggingImporter, ".model3.json": LoggingImporter},
        deleters={".moc3": LoggingDeleter},
    )
    change_set = ChangeSet(
        imported=("b.moc3", "notes.txt", "a.model3.json"),
        deleted=("old.moc3", "old.png"),
    )

    result = dispatcher.process_change_set(change_set)

    assert CALLS == ["import:b.moc3", "import:a.model3.json", "delete:old.moc3"]
    assert result.imported == ["b.moc3", "a.model3.json"]
    assert result.deleted == ["old.moc3"]
    assert result.skipped == ["notes.txt", "old.png"]
    assert result.ok is True


def test_moved_paths_are_counted_not_dispatched(bootstrapper: MagicMock) -> None:
    """TC-05: Verify moved paths invoke no handler."""
    dispatcher = make_dispatcher(
        bootstrapper,
        importers={".moc3": LoggingImporter},
        deleters={".moc3": LoggingDeleter},
    )
    change_set = ChangeSet(moved_to=("new/a.moc3",), moved_from=("old/a.moc3",))

    result = dispatcher.process_change_set(change_set)

    assert CALLS == []
    assert result.moved_count == 1

# -----------------------------------------------------------------------------
# FAULT ISOLATION
# -----------------------------------------------------------------------------

def test_failing_handler_does_not_block_later_paths(bootstrapper: MagicMock) -> None:
    """TC-06: Verify paths after a raising handler are still processed."""
    dispatcher = make_dispatcher(
        bootstrapper,
        importers={".bad": FailingImporter, ".moc3": LoggingImporter},
        deleters={".moc3": LoggingDeleter},
    )
    change_set = ChangeSet(
        imported=("a.moc3", "broken.bad", "c.moc3"),
        deleted=("d.moc3",),
    )

    result = dispatcher.process_change_set(change_set)

    assert CALLS == ["import:a.moc3", "fail:broken.bad", "import:c.moc3", "delete:d.moc3"]
    assert result.imported == ["a.moc3", "c.moc3"]
    assert result.deleted == ["d.moc3"]
    assert len(result.failures) == 1

    failure = result.failures[0]
    assert failure.path == "broken.bad"
    assert failure.operation == const.OPERATION_IMPORT
    assert failure.error == "RuntimeError: corrupt moc"
    assert result.ok is False


def test_bootstrap_unexpected_error_is_contained(bootstrapper: MagicMock) -> None:
    """TC-07: Verify a non-I/O error from the resource factory still lets handlers run."""
    bootstrapper.ensure_builtin_resources.side_effect = KeyError("shader")
    dispatcher = make_dispatcher(
        bootstrapper,
        importers={".moc3": LoggingImporter},
        deleters={".moc3": LoggingDeleter},
    )

    result = dispatcher.process_change_set(ChangeSet(imported=("a.moc3",), deleted=("b.moc3",)))

    assert result.bootstrap is None
    assert result.bootstrap_error.startswith("KeyError")
    assert result.ok is False
    assert CALLS == ["import:a.moc3", "delete:b.moc3"]


def test_failing_handler_construction_does_not_block_later_paths(bootstrapper: MagicMock) -> None:
    """TC-08: Verify a handler that cannot be built is recorded and the batch continues."""
    dispatcher = make_dispatcher(bootstrapper, importers={".moc3": HeaderCheckingImporter})

    result = dispatcher.process_change_set(ChangeSet(imported=("a.moc3", "bad.moc3", "c.moc3")))

    assert CALLS == ["import:a.moc3", "import:c.moc3"]
    assert result.imported == ["a.moc3", "c.moc3"]
    assert [(f.path, f.operation, f.error) for f in result.failures] == [
        ("bad.moc3", const.OPERATION_IMPORT, "ValueError: corrupt header"),
    ]


def test_failing_signature_check_on_delete_is_recorded(bootstrapper: MagicMock) -> None:
    """TC-09: Verify a signature check that raises is isolated to its own path."""
    dispatcher = make_dispatcher(
        bootstrapper,
        deleters={".moc3": (LoggingDeleter, rejecting_signature), ".json": LoggingDeleter},
    )

    result = dispatcher.process_change_set(ChangeSet(deleted=("gone.moc3", "gone.json")))

    assert CALLS == ["delete:gone.json"]
    assert result.deleted == ["gone.json"]
    assert result.failures[0].path == "gone.moc3"
    assert result.failures[0].operation == const.OPERATION_DELETE
    assert result.failures[0].error == "OSError: cannot open gone.moc3"
