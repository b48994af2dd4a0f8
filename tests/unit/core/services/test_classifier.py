from __future__ import annotations

"""
Unit tests for the Path Classification Service.

Verifies:
1. Suffix normalization and duplicate registration rejection.
2. Case-insensitive, longest-suffix-first matching.
3. Optional content-signature checks.
4. Handler construction per resolved path.
"""

import pytest

from cubism_assets.core.services.classifier import (
    AssetDeleter,
    AssetImporter,
    HandlerRegistry,
    PathClassifier,
)


class RecordingImporter(AssetImporter):
    def import_asset(self) -> None:
        pass


class JsonImporter(AssetImporter):
    def import_asset(self) -> None:
        pass


class RecordingDeleter(AssetDeleter):
    def delete_asset(self) -> None:
        pass


# -----------------------------------------------------------------------------
# REGISTRY CONSTRUCTION
# -----------------------------------------------------------------------------

def test_registry_normalizes_suffixes() -> None:
    """TC-01: Verify suffixes are lower-cased and dot-prefixed."""
    registry = HandlerRegistry({"MOC3": RecordingImporter, ".Model3.Json": RecordingImporter})

    assert len(registry) == 2
    assert ".moc3" in registry
    assert "model3.json" in registry
    assert registry.suffixes == (".model3.json", ".moc3")


def test_registry_rejects_duplicate_suffix() -> None:
    """TC-02: Verify two spellings of the same suffix cannot both be registered."""
    with pytest.raises(ValueError):
        HandlerRegistry({".moc3": RecordingImporter, "MOC3": RecordingImporter})


def test_registry_rejects_invalid_entries() -> None:
    """TC-03: Verify empty suffixes and non-callable handlers are refused."""
    with pytest.raises(ValueError):
        HandlerRegistry({"  ": RecordingImporter})

    with pytest.raises(TypeError):
        HandlerRegistry({".moc3": "not a factory"})


def test_empty_registry_matches_nothing() -> None:
    """TC-04: Verify a registry built from None is empty."""
    registry = HandlerRegistry(None)

    assert len(registry) == 0
    assert registry.match("Assets/a.moc3") is None

# -----------------------------------------------------------------------------
# MATCHING
# -----------------------------------------------------------------------------

def test_longest_suffix_wins() -> None:
    """TC-05: Verify a compound suffix takes priority over its tail."""
    registry = HandlerRegistry({".json": JsonImporter, ".model3.json": RecordingImporter})

    assert registry.match("Assets/Hiyori/hiyori.model3.json").factory is RecordingImporter
    assert registry.match("Assets/Hiyori/pose.json").factory is JsonImporter


def test_matching_is_case_insensitive() -> None:
    """TC-06: Verify the path's case does not affect the lookup."""
    registry = HandlerRegistry({".moc3": RecordingImporter})

    assert registry.match("Assets/Model/MODEL.MOC3") is not None
    assert registry.match("Assets/Model/model.moc") is None


def test_signature_check_filters_entries() -> None:
    """TC-07: Verify an entry whose signature rejects the path falls through."""
    registry = HandlerRegistry({
        ".json": (JsonImporter, lambda p: "motions" in p),
    })

    assert registry.match("Assets/m/motions/idle.json") is not None
    assert registry.match("Assets/m/other/idle.json") is None

# -----------------------------------------------------------------------------
# CLASSIFIER
# -----------------------------------------------------------------------------

def test_classifier_builds_handler_for_path() -> None:
    """TC-08: Verify a resolved handler is constructed with the asset path."""
    classifier = PathClassifier(
        HandlerRegistry({".moc3": RecordingImporter}),
        HandlerRegistry({".moc3": RecordingDeleter}),
    )

    importer = classifier.resolve_import_handler("Assets/a/model.moc3")
    deleter = classifier.resolve_delete_handler("Assets/a/model.moc3")

    assert isinstance(importer, RecordingImporter)
    assert importer.asset_path == "Assets/a/model.moc3"
    assert isinstance(deleter, RecordingDeleter)


def test_classifier_returns_none_for_unknown_or_empty_path() -> None:
    """TC-09: Verify 'no handler' for unregistered types and empty paths."""
    classifier = PathClassifier(HandlerRegistry({".moc3": RecordingImporter}))

    assert classifier.resolve_import_handler("Assets/readme.txt") is None
    assert classifier.resolve_import_handler("") is None
    assert classifier.resolve_delete_handler("Assets/a/model.moc3") is None


def test_classification_is_deterministic() -> None:
    """TC-10: Verify repeated lookups resolve to the same handler type."""
    classifier = PathClassifier(HandlerRegistry({".moc3": RecordingImporter, ".json": JsonImporter}))

    kinds = {type(classifier.resolve_import_handler("Assets/x.moc3")) for _ in range(5)}
    assert kinds == {RecordingImporter}
