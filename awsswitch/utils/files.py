"""
Byte-level file helpers used by the switch engine.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Union

__all__ = ['write_bytes', 'stage_bytes', 'commit_staged', 'discard_staged']


def write_bytes(path: Union[str, Path], data: bytes,
                mode_from: Optional[Union[str, Path]] = None) -> None:
    """
    Write data to path, replacing any existing content in place.

    If mode_from is given, its permission bits are copied onto path.
    """
    with open(path, "wb") as f:
        if mode_from is not None:
            shutil.copymode(str(mode_from), str(path))
        f.write(data)


def stage_bytes(target: Union[str, Path], data: bytes) -> Path:
    """
    Write data to a temporary file next to target.

    The temp file lives in the target's directory so a later rename stays on
    the same filesystem. If target exists its permission bits are copied.

    Args:
        target: Final destination of the data
        data: Bytes to write

    Returns:
        Path of the staged temp file
    """
    target = Path(target)
    fd, temp_path = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".staged",
                                     dir=str(target.parent))
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
            handle.flush()
            os.fsync(handle.fileno())
        if target.exists():
            shutil.copymode(str(target), temp_path)
    except BaseException:
        discard_staged(temp_path)
        raise
    return Path(temp_path)


def commit_staged(staged: Union[str, Path], target: Union[str, Path]) -> None:
    os.replace(str(staged), str(target))


def discard_staged(staged: Union[str, Path]) -> None:
    if os.path.exists(staged):
        os.unlink(staged)
