"""
Switch Engine

Promotes a stored profile to the live AWS configuration. The live config and
credentials files are backed up to ``<live>.backup`` first, then replaced by
the profile's files, with the profile's credentials section renamed to
``[default]``.

Two modes are available:

* sequential (default): backup config, backup credentials, install config,
  install credentials. The first failing step aborts the rest and nothing is
  rolled back, so a failure in the last step leaves a new config next to the
  old credentials. The ``.backup`` files are the way back.
* atomic: everything is read and rewritten in memory before any file is
  touched, then both new files are staged beside their targets and renamed
  into place.
"""

import logging
from pathlib import Path
from typing import Optional, Type, Union

from ..errors import (
    LiveConfigMissing,
    LiveCredentialsMissing,
    ProfileFileMissing,
    ReadFailure,
    SwitchError,
    WriteFailure,
)
from ..utils.files import commit_staged, discard_staged, stage_bytes, write_bytes
from ..utils.lock import switch_lock
from ..utils.paths import backup_path_for, lock_path_for
from .credentials import (
    REWRITE_MODES,
    decode_credentials,
    encode_credentials,
    rewrite_credentials,
)
from .store import CONFIG_FILENAME, CREDENTIALS_FILENAME

__all__ = [
    'SwitchResult',
    'backup_file',
    'install_config',
    'install_credentials',
    'switch_to',
]

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class SwitchResult:
    """Outcome of a committed switch."""
    def __init__(self, profile_name: str, live_config_path: Path,
                 live_credentials_path: Path, header_rewritten: bool,
                 atomic: bool = False):
        self.profile_name = profile_name
        self.live_config_path = live_config_path
        self.live_credentials_path = live_credentials_path
        self.header_rewritten = header_rewritten
        self.atomic = atomic

    @property
    def config_backup_path(self) -> Path:
        return backup_path_for(self.live_config_path)

    @property
    def credentials_backup_path(self) -> Path:
        return backup_path_for(self.live_credentials_path)

    def __str__(self) -> str:
        mode = "atomic" if self.atomic else "sequential"
        header = "" if self.header_rewritten else " (credentials header not rewritten)"
        return f"{self.profile_name} -> {self.live_config_path.parent} [{mode}]{header}"


def _read(path: PathLike, missing: Type[SwitchError], step: str) -> bytes:
    try:
        return Path(path).read_bytes()
    except FileNotFoundError as e:
        raise missing(f"{path} does not exist", step=step) from e
    except OSError as e:
        raise ReadFailure(f"cannot read {path}: {e.strerror or e}", step=step) from e


def _write(path: PathLike, data: bytes, step: str,
           mode_from: Optional[PathLike] = None) -> None:
    try:
        write_bytes(path, data, mode_from=mode_from)
    except OSError as e:
        raise WriteFailure(f"cannot write {path}: {e.strerror or e}", step=step) from e


def backup_file(live_path: PathLike, missing: Type[SwitchError] = LiveConfigMissing,
                step: str = "backup") -> Path:
    """
    Copy a live file to ``<live_path>.backup``, overwriting any older backup.

    Args:
        live_path: Live file to protect
        missing: Error raised when the live file does not exist
        step: Step name recorded on errors

    Returns:
        Path of the backup file
    """
    data = _read(live_path, missing, step)
    backup_path = backup_path_for(live_path)
    _write(backup_path, data, step, mode_from=live_path)
    logger.debug("Backed up %s to %s", live_path, backup_path)
    return backup_path


def install_config(profile_dir: PathLike, live_config_path: PathLike) -> None:
    """Copy the profile's config verbatim over the live config."""
    step = "install config"
    data = _read(Path(profile_dir) / CONFIG_FILENAME, ProfileFileMissing, step)
    _write(live_config_path, data, step)
    logger.debug("Installed %s config into %s", Path(profile_dir).name, live_config_path)


def _render_credentials(profile_dir: Path, rewrite: str, strict_header: bool):
    step = "install credentials"
    raw = _read(profile_dir / CREDENTIALS_FILENAME, ProfileFileMissing, step)
    text, replaced = rewrite_credentials(decode_credentials(raw), profile_dir.name,
                                         mode=rewrite, strict=strict_header)
    return encode_credentials(text), replaced


def install_credentials(profile_dir: PathLike, live_credentials_path: PathLike,
                        rewrite: str = "literal", strict_header: bool = False) -> bool:
    """
    Install the profile's credentials with its section renamed to default.

    Args:
        profile_dir: Profile directory; its final component is the section name
        live_credentials_path: Live credentials file to replace
        rewrite: Header rewrite mode, "literal" or "section"
        strict_header: Fail instead of installing an unrewritten file

    Returns:
        True if the header was rewritten
    """
    data, replaced = _render_credentials(Path(profile_dir), rewrite, strict_header)
    _write(live_credentials_path, data, "install credentials")
    logger.debug("Installed %s credentials into %s", Path(profile_dir).name,
                 live_credentials_path)
    return replaced


def _switch_sequential(profile_dir: Path, live_config: Path, live_credentials: Path,
                       rewrite: str, strict_header: bool) -> bool:
    backup_file(live_config, LiveConfigMissing, "backup config")
    backup_file(live_credentials, LiveCredentialsMissing, "backup credentials")
    install_config(profile_dir, live_config)
    return install_credentials(profile_dir, live_credentials, rewrite, strict_header)


def _switch_atomic(profile_dir: Path, live_config: Path, live_credentials: Path,
                   rewrite: str, strict_header: bool) -> bool:
    old_config = _read(live_config, LiveConfigMissing, "backup config")
    old_credentials = _read(live_credentials, LiveCredentialsMissing, "backup credentials")
    new_config = _read(profile_dir / CONFIG_FILENAME, ProfileFileMissing, "install config")
    new_credentials, replaced = _render_credentials(profile_dir, rewrite, strict_header)

    _write(backup_path_for(live_config), old_config, "backup config", mode_from=live_config)
    _write(backup_path_for(live_credentials), old_credentials, "backup credentials",
           mode_from=live_credentials)

    staged = []
    try:
        try:
            staged.append((stage_bytes(live_config, new_config), live_config))
            staged.append((stage_bytes(live_credentials, new_credentials), live_credentials))
        except OSError as e:
            raise WriteFailure(f"cannot stage new files: {e.strerror or e}",
                               step="stage") from e
        try:
            for temp_path, target in staged:
                commit_staged(temp_path, target)
        except OSError as e:
            raise WriteFailure(f"cannot move staged files into place: {e.strerror or e}",
                               step="commit") from e
    finally:
        for temp_path, _ in staged:
            discard_staged(temp_path)
    return replaced


def switch_to(profile_dir: PathLike, live_config_path: PathLike,
              live_credentials_path: PathLike, *, rewrite: str = "literal",
              strict_header: bool = False, atomic: bool = False,
              lock: bool = True, lock_path: Optional[PathLike] = None) -> SwitchResult:
    """
    Make a stored profile the live AWS configuration.

    Args:
        profile_dir: Directory of the selected profile
        live_config_path: Live AWS config file
        live_credentials_path: Live AWS credentials file
        rewrite: Credentials header rewrite mode, "literal" or "section"
        strict_header: Raise SectionNotFound when the credentials have no
            section named after the profile
        atomic: Read everything first and rename staged files into place
        lock: Hold an advisory lock beside the live config while switching
        lock_path: Override the lock file location

    Returns:
        SwitchResult describing the committed switch

    Raises:
        SwitchError: On the first failing step; earlier steps are not undone
            in sequential mode
    """
    if rewrite not in REWRITE_MODES:
        raise ValueError(f"unknown rewrite mode '{rewrite}', expected one of {REWRITE_MODES}")

    profile_dir = Path(profile_dir)
    live_config = Path(live_config_path)
    live_credentials = Path(live_credentials_path)
    run = _switch_atomic if atomic else _switch_sequential

    # No directory or lock file is created for a live config that is not there.
    if not live_config.parent.is_dir():
        raise LiveConfigMissing(f"{live_config.parent} does not exist", step="backup config")

    logger.info("Switching to profile %s (%s)", profile_dir.name,
                "atomic" if atomic else "sequential")
    if lock:
        with switch_lock(lock_path or lock_path_for(live_config)):
            replaced = run(profile_dir, live_config, live_credentials, rewrite, strict_header)
    else:
        replaced = run(profile_dir, live_config, live_credentials, rewrite, strict_header)

    logger.info("Profile %s is now the live configuration", profile_dir.name)
    return SwitchResult(profile_dir.name, live_config, live_credentials, replaced, atomic)
