from __future__ import annotations

"""
Project Patching Domain Models.
"""

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class PatchError:
    """
    A descriptor file that could not be parsed and was left untouched.

    Attributes:
        path: Absolute descriptor path.
        error: Parser message.
    """
    path: str
    error: str


@dataclass(frozen=True)
class PatchResult:
    """
    Outcome of patching every descriptor of a working directory.

    Attributes:
        patched: Descriptor files rewritten, in name order.
        excluded: Editor-only descriptors that were skipped.
        sections: Total number of qualifying sections forced to the flag value.
        errors: Descriptors skipped because they could not be parsed.
    """
    patched: List[str] = field(default_factory=list)
    excluded: List[str] = field(default_factory=list)
    sections: int = 0
    errors: List[PatchError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors
