"""
Profile store and switch engine.
"""

from .store import Profile, list_profiles, load_profiles, get_profile
from .credentials import rewrite_credentials, rewrite_literal, rewrite_section
from .engine import SwitchResult, switch_to

__all__ = [
    'Profile',
    'list_profiles',
    'load_profiles',
    'get_profile',
    'rewrite_credentials',
    'rewrite_literal',
    'rewrite_section',
    'SwitchResult',
    'switch_to',
]
