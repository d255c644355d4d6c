"""
Errors raised while listing, selecting and switching AWS config profiles.

Every error records the step that failed so the CLI can tell the operator
where a switch stopped.
"""

from typing import Optional

__all__ = [
    'SwitchError',
    'StoreUnavailable',
    'ProfileNotFound',
    'ProfileFileMissing',
    'LiveConfigMissing',
    'LiveCredentialsMissing',
    'ReadFailure',
    'WriteFailure',
    'SectionNotFound',
    'SwitchLocked',
    'SelectionCancelled',
    'IdentityCheckFailed',
]


class SwitchError(Exception):
    """Base class for all profile switching errors."""

    def __init__(self, message: str, step: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.step = step

    def __str__(self) -> str:
        if self.step:
            return f"{self.step}: {self.message}"
        return self.message


class StoreUnavailable(SwitchError):
    """The profile store root could not be read."""


class ProfileNotFound(SwitchError):
    """No profile directory with the requested name exists in the store."""


class ProfileFileMissing(SwitchError):
    """The selected profile lacks its config or credentials file."""


class LiveConfigMissing(SwitchError):
    """There is no live config file to back up."""


class LiveCredentialsMissing(SwitchError):
    """There is no live credentials file to back up."""


class ReadFailure(SwitchError):
    """A file exists but could not be read."""


class WriteFailure(SwitchError):
    """A backup or install write failed."""


class SectionNotFound(SwitchError):
    """The profile's credentials have no section named after the profile."""


class SwitchLocked(SwitchError):
    """Another switch holds the lock on the live configuration."""


class SelectionCancelled(SwitchError):
    """No profile was chosen."""


class IdentityCheckFailed(SwitchError):
    """The caller identity query failed."""
