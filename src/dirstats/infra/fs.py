from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides relative path construction for the analysis report, the switch
into the scan target, and the user data directory used for persistent
configuration.
"""

import os

from dirstats.domain.constants import PATH_SEPARATOR, ROOT_DIR

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "dirstats"
UNIX_APP_DIR_NAME = ".dirstats"

_CURRENT_DIR_PREFIX = ROOT_DIR + PATH_SEPARATOR

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/dirstats
    - Linux/Mac: ~/.dirstats

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


# -----------------------------------------------------------------------------
# REPORT PATHS
# -----------------------------------------------------------------------------

def clean_path(path: str) -> str:
    """Strip a leading './' marker from a relative path."""
    if path.startswith(_CURRENT_DIR_PREFIX):
        return path[len(_CURRENT_DIR_PREFIX):]
    return path


def join_relative(rel_dir: str, name: str) -> str:
    """
    Build the report path of an entry inside a relative directory.

    Children of the root are reported by bare name; deeper entries are
    joined with '/' regardless of the host separator.

    Args:
        rel_dir: Relative path of the containing directory ('.' for the root).
        name: Entry name.

    Returns:
        str: Relative path of the entry, never starting with './'.
    """
    if rel_dir == ROOT_DIR:
        return name
    return clean_path(rel_dir) + PATH_SEPARATOR + name


def to_fs_path(root: str, rel_path: str) -> str:
    """Map a report path back onto the filesystem below the scan root."""
    if rel_path == ROOT_DIR:
        return root
    return os.path.join(root, *rel_path.split(PATH_SEPARATOR))

# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def enter_directory(path: str) -> bool:
    """
    Switch the process working directory to the scan target.

    Args:
        path: Target directory.

    Returns:
        bool: True on success, False if the directory cannot be entered.
    """
    try:
        os.chdir(path)
    except OSError:
        return False
    return True
