from __future__ import annotations

"""
Bootstrap Domain Data Models.

Defines the result object returned by the builtin resources bootstrapper and
the factory functions used to build it, so the dispatcher, the host adapter
and the CLI all report outcomes the same way.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from cubism_assets.domain import constants as const

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class BootstrapResult:
    """
    Result of one ensure-builtin-resources call.

    Attributes:
        ok: Flag indicating success or failure.
        status: One of the STATUS_* codes in domain.constants.
        error: Descriptive message in case of failure.
        install_root: Discovered installation directory ('' if not found).
        resource_path: Builtin resources directory ('' if not computed).
        materials_dir_created: Whether this call created the materials directory.
        created: Paths written by this call, in creation order.
        skipped: Paths that already existed and were left untouched.
    """
    ok: bool
    status: str
    error: str = ""

    install_root: str = ""
    resource_path: str = ""

    materials_dir_created: bool = False
    created: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        status: str,
        error: str,
        install_root: str = "",
        resource_path: str = "",
        materials_dir_created: bool = False,
        created: Optional[List[str]] = None,
        skipped: Optional[List[str]] = None,
) -> BootstrapResult:
    """
    Create a failed bootstrap result.

    Args:
        status: Failure code (STATUS_* constant).
        error: Detailed error description.
        install_root: Installation directory, if it was found.
        resource_path: Resources directory, if it was computed.
        materials_dir_created: Whether the materials directory was created first.
        created: Assets already written before the failure.
        skipped: Assets found already present before the failure.

    Returns:
        BootstrapResult: An immutable error result object.
    """
    return BootstrapResult(
        ok=False,
        status=status,
        error=error,
        install_root=install_root,
        resource_path=resource_path,
        materials_dir_created=materials_dir_created,
        created=list(created or []),
        skipped=list(skipped or []),
    )


def create_success_result(
        install_root: str,
        resource_path: str,
        materials_dir_created: bool,
        created: List[str],
        skipped: List[str],
) -> BootstrapResult:
    """
    Create a successful bootstrap result.

    Returns:
        BootstrapResult: An immutable success result object.
    """
    return BootstrapResult(
        ok=True,
        status=const.STATUS_OK,
        install_root=install_root,
        resource_path=resource_path,
        materials_dir_created=materials_dir_created,
        created=list(created),
        skipped=list(skipped),
    )
