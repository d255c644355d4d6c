"""
Utility functions for paths, locking, selection and identity checks.
"""

from .paths import (
    get_store_root,
    get_aws_config_path,
    get_aws_credentials_path,
    backup_path_for,
    ensure_store_root,
)
from .lock import switch_lock
from .selection import select_profile
from .identity import get_caller_identity, get_caller_identity_sdk, format_identity

__all__ = [
    'get_store_root',
    'get_aws_config_path',
    'get_aws_credentials_path',
    'backup_path_for',
    'ensure_store_root',
    'switch_lock',
    'select_profile',
    'get_caller_identity',
    'get_caller_identity_sdk',
    'format_identity',
]
