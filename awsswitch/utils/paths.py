"""
Locations of the profile store and the live AWS configuration files.

Defaults follow the AWS CLI layout under the user's home directory. The
live paths honour the same environment variables the AWS CLI reads, so the
identity check after a switch looks at the files the switch just wrote.
"""

import os
from pathlib import Path
from typing import Optional, Union

__all__ = [
    'STORE_DIRNAME',
    'BACKUP_SUFFIX',
    'LOCK_SUFFIX',
    'get_store_root',
    'get_aws_config_path',
    'get_aws_credentials_path',
    'backup_path_for',
    'lock_path_for',
    'ensure_store_root',
    'get_env_profile',
]

STORE_DIRNAME = ".awsconfigs"
BACKUP_SUFFIX = ".backup"
LOCK_SUFFIX = ".lock"

STORE_ENV = "AWSSWITCH_HOME"
CONFIG_ENV = "AWS_CONFIG_FILE"
CREDENTIALS_ENV = "AWS_SHARED_CREDENTIALS_FILE"


def _from_env(name: str) -> Optional[Path]:
    value = os.environ.get(name, "").strip()
    return Path(value).expanduser() if value else None


def get_store_root() -> Path:
    """Get the directory holding one subdirectory per stored profile."""
    return _from_env(STORE_ENV) or Path.home() / STORE_DIRNAME


def get_aws_config_path() -> Path:
    """Get the path to the live AWS config file."""
    return _from_env(CONFIG_ENV) or Path.home() / ".aws" / "config"


def get_aws_credentials_path() -> Path:
    """Get the path to the live AWS credentials file."""
    return _from_env(CREDENTIALS_ENV) or Path.home() / ".aws" / "credentials"


def backup_path_for(live_path: Union[str, Path]) -> Path:
    """Backup location for a live file: the live path plus ``.backup``."""
    return Path(f"{live_path}{BACKUP_SUFFIX}")


def lock_path_for(live_path: Union[str, Path]) -> Path:
    return Path(f"{live_path}{LOCK_SUFFIX}")


def ensure_store_root(root: Union[str, Path]) -> bool:
    """
    Create the store root if it does not exist yet.

    Args:
        root: Store root directory

    Returns:
        True if the directory was created, False if it already existed

    Raises:
        OSError: If the directory cannot be created
    """
    root = Path(root)
    if root.exists():
        return False
    root.mkdir(mode=0o755, parents=True)
    return True


def get_env_profile() -> Optional[str]:
    """
    Get the profile selected through the environment, if any.

    When AWS_PROFILE or AWS_DEFAULT_PROFILE is set, the AWS CLI ignores the
    default section that a switch installs.
    """
    return os.environ.get("AWS_PROFILE") or os.environ.get("AWS_DEFAULT_PROFILE") or None
