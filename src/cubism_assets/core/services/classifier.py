from __future__ import annotations

"""
Asset Path Classification Service.

Maps an asset path to the import or delete handler registered for it.
Handlers are registered by file suffix (compound suffixes such as
'.model3.json' are supported) with an optional content-signature check,
and the registries are frozen at construction so classification stays
deterministic for the lifetime of the process.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# HANDLER CAPABILITIES
# -----------------------------------------------------------------------------

class AssetImporter(ABC):
    """
    Import capability resolved for a single asset path.
    """

    def __init__(self, asset_path: str) -> None:
        self.asset_path = asset_path

    @abstractmethod
    def import_asset(self) -> None:
        """
        Import the asset at 'asset_path'.

        Success is the absence of an exception.
        """
        pass


class AssetDeleter(ABC):
    """
    Delete capability resolved for a single asset path.
    """

    def __init__(self, asset_path: str) -> None:
        self.asset_path = asset_path

    @abstractmethod
    def delete_asset(self) -> None:
        """Clean up whatever was generated from the removed asset."""
        pass


HandlerFactory = Callable[[str], object]
SignatureCheck = Callable[[str], bool]


@dataclass(frozen=True)
class HandlerEntry:
    """
    A registered handler factory.

    Attributes:
        suffix: Lower-cased path suffix including the leading dot.
        factory: Callable building the handler for a path.
        signature: Optional content check; the entry only matches if it returns True.
    """
    suffix: str
    factory: HandlerFactory
    signature: Optional[SignatureCheck] = None


# -----------------------------------------------------------------------------
# REGISTRY
# -----------------------------------------------------------------------------

class HandlerRegistry:
    """
    Immutable mapping from path suffix to handler factory.

    Values may be a bare factory or a (factory, signature_check) pair.
    """

    def __init__(
            self,
            handlers: Optional[Mapping[str, Union[HandlerFactory, Tuple[HandlerFactory, SignatureCheck]]]] = None,
    ) -> None:
        entries: Dict[str, HandlerEntry] = {}
        for raw_suffix, value in (handlers or {}).items():
            suffix = _normalize_suffix(raw_suffix)
            if suffix in entries:
                raise ValueError(f"Suffix {suffix} already registered")

            if isinstance(value, tuple):
                factory, signature = value
            else:
                factory, signature = value, None

            if not callable(factory):
                raise TypeError(f"Handler for {suffix} is not callable")

            entries[suffix] = HandlerEntry(suffix=suffix, factory=factory, signature=signature)

        self._entries: Mapping[str, HandlerEntry] = MappingProxyType(entries)
        # Longest suffix first so '.model3.json' wins over '.json'
        self._lookup_order: Tuple[HandlerEntry, ...] = tuple(
            sorted(entries.values(), key=lambda e: (-len(e.suffix), e.suffix))
        )

    @property
    def suffixes(self) -> Tuple[str, ...]:
        return tuple(e.suffix for e in self._lookup_order)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, suffix: object) -> bool:
        return isinstance(suffix, str) and _normalize_suffix(suffix) in self._entries

    def match(self, path: str) -> Optional[HandlerEntry]:
        """
        Find the entry whose suffix ends the path and whose signature accepts it.

        Args:
            path: Asset path in host notation.

        Returns:
            Optional[HandlerEntry]: The matching entry, or None.
        """
        lowered = path.lower()
        for entry in self._lookup_order:
            if not lowered.endswith(entry.suffix):
                continue
            if entry.signature is not None and not entry.signature(path):
                continue
            return entry
        return None


# -----------------------------------------------------------------------------
# CLASSIFIER
# -----------------------------------------------------------------------------

class PathClassifier:
    """
    Resolves import and delete handlers for asset paths.

    'No handler' is a valid outcome meaning the path is not ours to handle.
    """

    def __init__(
            self,
            import_registry: Optional[HandlerRegistry] = None,
            delete_registry: Optional[HandlerRegistry] = None,
    ) -> None:
        self._import_registry = import_registry or HandlerRegistry()
        self._delete_registry = delete_registry or HandlerRegistry()

    def resolve_import_handler(self, path: str) -> Optional[AssetImporter]:
        """Build the import handler registered for 'path', or None."""
        return self._resolve(self._import_registry, path)

    def resolve_delete_handler(self, path: str) -> Optional[AssetDeleter]:
        """Build the delete handler registered for 'path', or None."""
        return self._resolve(self._delete_registry, path)

    @staticmethod
    def _resolve(registry: HandlerRegistry, path: str):
        if not path:
            return None
        entry = registry.match(path)
        if entry is None:
            return None
        return entry.factory(path)


def _normalize_suffix(suffix: str) -> str:
    """Lower-case a suffix and make sure it starts with a dot."""
    s = suffix.strip().lower()
    if not s:
        raise ValueError("Empty suffix cannot be registered")
    if not s.startswith("."):
        s = "." + s
    return s
