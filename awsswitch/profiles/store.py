"""
Profile Store

A store is a directory holding one subdirectory per AWS profile. Each
profile directory is expected to contain a ``config`` and a ``credentials``
file in the AWS CLI's native format. Nothing here validates those files;
a missing file only surfaces when the switch engine tries to read it.
"""

import os
from pathlib import Path
from typing import List, Union

from ..errors import ProfileNotFound, StoreUnavailable

__all__ = [
    'Profile',
    'list_profiles',
    'load_profiles',
    'get_profile',
]

CONFIG_FILENAME = "config"
CREDENTIALS_FILENAME = "credentials"


class Profile:
    """A stored profile directory."""
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self.name = self.path.name

    @property
    def config_path(self) -> Path:
        return self.path / CONFIG_FILENAME

    @property
    def credentials_path(self) -> Path:
        return self.path / CREDENTIALS_FILENAME

    def __eq__(self, other) -> bool:
        return isinstance(other, Profile) and self.path == other.path

    def __hash__(self) -> int:
        return hash(self.path)

    def __repr__(self) -> str:
        return f"Profile({str(self.path)!r})"

    def __str__(self) -> str:
        return self.name


def list_profiles(root: Union[str, Path]) -> List[str]:
    """
    List the profile names in a store.

    Only immediate subdirectories count; regular files and symlinks are
    skipped. Names come back in filesystem enumeration order.

    Args:
        root: Store root directory

    Returns:
        List of profile directory names (empty if the root does not exist)

    Raises:
        StoreUnavailable: If the root exists but cannot be read
    """
    root = Path(root)
    try:
        with os.scandir(root) as entries:
            return [entry.name for entry in entries
                    if entry.is_dir(follow_symlinks=False)]
    except FileNotFoundError:
        return []
    except OSError as e:
        raise StoreUnavailable(f"cannot read {root}: {e.strerror or e}",
                               step="list profiles") from e


def load_profiles(root: Union[str, Path]) -> List[Profile]:
    """Return a Profile for every directory in the store."""
    root = Path(root)
    return [Profile(root / name) for name in list_profiles(root)]


def get_profile(root: Union[str, Path], name: str) -> Profile:
    """
    Look up a profile by name.

    Args:
        root: Store root directory
        name: Profile directory name

    Returns:
        The matching Profile

    Raises:
        ProfileNotFound: If there is no such directory in the store
    """
    path = Path(root) / name
    if name in ("", ".", "..") or Path(name).name != name or not path.is_dir():
        raise ProfileNotFound(f"no profile named '{name}' in {root}",
                              step="select profile")
    return Profile(path)
