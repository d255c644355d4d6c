"""
Advisory lock guarding the live AWS configuration during a switch.
"""

import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator, Union

from ..errors import SwitchLocked

__all__ = ['switch_lock']

logger = logging.getLogger(__name__)


def _flock(handle: IO[str], exclusive: bool) -> None:
    if os.name == "nt":
        import msvcrt

        msvcrt.locking(handle.fileno(), msvcrt.LK_NBLCK if exclusive else msvcrt.LK_UNLCK, 1)
    else:
        import fcntl

        fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB if exclusive else fcntl.LOCK_UN)


@contextmanager
def switch_lock(path: Union[str, Path]) -> Iterator[Path]:
    """
    Hold an exclusive, non-blocking lock on a lock file for a ``with`` block.

    The lock file is created if missing, but its directory must already
    exist; nothing else is created on the way.

    Args:
        path: Lock file path

    Raises:
        SwitchLocked: If another switch currently holds the lock
        OSError: If the lock file cannot be opened
    """
    path = Path(path)
    handle = path.open("a+", encoding="utf-8")
    try:
        _flock(handle, exclusive=True)
    except OSError as e:
        handle.close()
        raise SwitchLocked(f"another switch is in progress (lock held on {path})",
                           step="lock") from e

    logger.debug("Acquired switch lock %s", path)
    try:
        yield path
    finally:
        try:
            _flock(handle, exclusive=False)
        except OSError as e:
            logger.debug("Releasing lock %s failed: %s", path, e)
        finally:
            handle.close()
        logger.debug("Released switch lock %s", path)
