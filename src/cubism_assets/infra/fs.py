from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, directory listing and per-user data directory
resolution shared by the bootstrapper, the project patcher and the
configuration store. Wraps 'os' so every caller sees the same ordering and
normalization rules on Windows and Unix-like systems.
"""

import os
from typing import List, Optional, Tuple

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "CubismAssetProcessor"
UNIX_APP_DIR_NAME = ".cubism_assets"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/CubismAssetProcessor
    - Linux/Mac: ~/.cubism_assets

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is blank.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def resolve_under(base_dir: str, path: str) -> str:
    """
    Anchor a relative path to a base directory, leaving absolute paths alone.
    """
    if os.path.isabs(path):
        return path
    return os.path.join(base_dir, path)

# -----------------------------------------------------------------------------
# DIRECTORY LISTING API
# -----------------------------------------------------------------------------

def list_subdirectories(path: str) -> List[str]:
    """
    List the immediate subdirectories of a directory.

    Entries come back in the order the filesystem enumerates them; callers
    that need name order sort the result themselves. Symlinked directories
    are not followed. Unreadable directories are treated as leaves.

    Args:
        path: Directory to inspect.

    Returns:
        List[str]: Child directory paths joined onto 'path'.
    """
    try:
        with os.scandir(path) as it:
            return [os.path.join(path, e.name) for e in it if e.is_dir(follow_symlinks=False)]
    except OSError:
        return []


def list_files_matching_suffix(directory: str, suffix: str) -> List[str]:
    """
    List the top-level regular files of a directory whose name ends with a suffix.

    Args:
        directory: Directory to inspect (not recursed).
        suffix: Case-sensitive file name suffix, e.g. '.csproj'.

    Returns:
        List[str]: Absolute file paths sorted by name.
    """
    out: List[str] = []
    with os.scandir(directory) as it:
        for entry in it:
            if entry.is_file() and entry.name.endswith(suffix):
                out.append(os.path.abspath(entry.path))
    out.sort()
    return out


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
