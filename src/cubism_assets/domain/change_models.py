from __future__ import annotations

"""
Change Notification Domain Models.

Defines the value object that carries one asset-change cycle from the host
into the dispatcher, and the records the dispatcher hands back.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from cubism_assets.domain.bootstrap_models import BootstrapResult

# -----------------------------------------------------------------------------
# INPUT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ChangeSet:
    """
    Paths reported by the host for a single processing cycle.

    Attributes:
        imported: Paths of newly imported or re-imported assets.
        deleted: Paths of removed assets.
        moved_to: Destination paths of moved assets.
        moved_from: Source paths of moved assets, parallel to moved_to.
    """
    imported: Tuple[str, ...] = ()
    deleted: Tuple[str, ...] = ()
    moved_to: Tuple[str, ...] = ()
    moved_from: Tuple[str, ...] = ()

    @classmethod
    def from_sequences(
            cls,
            imported: Optional[Iterable[str]] = None,
            deleted: Optional[Iterable[str]] = None,
            moved_to: Optional[Iterable[str]] = None,
            moved_from: Optional[Iterable[str]] = None,
    ) -> "ChangeSet":
        """Build a ChangeSet from any iterables, treating None as empty."""
        return cls(
            imported=tuple(imported or ()),
            deleted=tuple(deleted or ()),
            moved_to=tuple(moved_to or ()),
            moved_from=tuple(moved_from or ()),
        )

    def is_empty(self) -> bool:
        return not (self.imported or self.deleted or self.moved_to or self.moved_from)

# -----------------------------------------------------------------------------
# OUTPUT MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HandlerFailure:
    """
    Encapsulates a handler that raised while processing one path.

    Attributes:
        path: Asset path the handler was resolved for.
        operation: 'import' or 'delete'.
        error: Exception type and message.
    """
    path: str
    operation: str
    error: str


@dataclass(frozen=True)
class DispatchResult:
    """
    Outcome of one dispatch cycle.

    Attributes:
        bootstrap: Result of the builtin resources check, None if it raised.
        bootstrap_error: Message of the persistence failure that aborted bootstrap.
        imported: Paths whose import handler ran to completion, in order.
        deleted: Paths whose delete handler ran to completion, in order.
        skipped: Paths with no registered handler.
        failures: Handlers that raised.
        moved_count: Number of moved paths received (not acted upon).
    """
    bootstrap: Optional[BootstrapResult]
    bootstrap_error: str = ""
    imported: List[str] = field(default_factory=list)
    deleted: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    failures: List[HandlerFailure] = field(default_factory=list)
    moved_count: int = 0

    @property
    def ok(self) -> bool:
        bootstrap_ok = self.bootstrap is not None and self.bootstrap.ok
        return bootstrap_ok and not self.failures
