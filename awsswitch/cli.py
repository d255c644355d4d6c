"""
AWS Config Switcher CLI

Pick one of the profiles kept under ~/.awsconfigs and make it the live AWS
configuration. The previous ~/.aws/config and ~/.aws/credentials are kept
as .backup files next to them.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .errors import SelectionCancelled, SwitchError
from .profiles import Profile, get_profile, list_profiles, switch_to
from .profiles.credentials import REWRITE_MODES
from .utils.identity import format_identity, get_caller_identity, get_caller_identity_sdk
from .utils.logging_config import LEVEL_MAP, configure_logging
from .utils.paths import (
    ensure_store_root,
    get_aws_config_path,
    get_aws_credentials_path,
    get_env_profile,
    get_store_root,
)
from .utils.selection import select_profile

logger = logging.getLogger(__name__)

SEPARATOR = "####################"


def _store_root(args) -> Path:
    return Path(args.store).expanduser() if args.store else get_store_root()


def _ensure_store(root: Path) -> None:
    try:
        if not root.exists():
            print(f"Creating directory for AWS configs: {root}")
        ensure_store_root(root)
    except OSError as e:
        raise SwitchError(f"cannot create {root}: {e.strerror or e}",
                          step="create config directory") from e


def _choose_profile(root: Path, name: Optional[str]) -> Profile:
    if name:
        return get_profile(root, name)

    names = list_profiles(root)
    if not names:
        raise SwitchError(f"no profiles found in {root}; add one directory per "
                          f"profile holding 'config' and 'credentials'",
                          step="list profiles")
    index = select_profile(names)
    if index is None:
        raise SelectionCancelled("no profile chosen", step="select profile")
    return Profile(root / names[index])


def _check_identity(args) -> str:
    if args.sdk:
        return get_caller_identity_sdk()
    return get_caller_identity()


def _print_identity(identity: str, color: bool) -> None:
    print("Current AWS Identity:")
    print(format_identity(identity, color=color))


def handle_switch(args) -> int:
    """Handle the switch command (also the default when no command is given)."""
    root = _store_root(args)
    _ensure_store(root)
    profile = _choose_profile(root, args.profile)

    result = switch_to(
        profile.path,
        get_aws_config_path(),
        get_aws_credentials_path(),
        rewrite=args.rewrite,
        strict_header=args.strict_header,
        atomic=args.atomic,
        lock=not args.no_lock,
    )
    if not result.header_rewritten:
        print(f"Warning: no [{profile.name}] section found in {profile.credentials_path}; "
              f"credentials were installed without a [default] section rename")

    identity = None if args.skip_identity else _check_identity(args)

    print("AWS configuration switched successfully!")
    print(f"Switched AWS configuration to profile: {profile.name}")
    env_profile = get_env_profile()
    if env_profile:
        print(f"Note: AWS_PROFILE/AWS_DEFAULT_PROFILE is set to '{env_profile}', "
              f"so this shell does not use the default profile")
    if identity is not None:
        print(SEPARATOR)
        _print_identity(identity, color=not args.no_color)
    return 0


def handle_list(args) -> int:
    """Handle the list command."""
    root = _store_root(args)
    names = list_profiles(root)
    if not names:
        print(f"No profiles found in {root}")
        return 0

    print(f"AWS config profiles in {root}:")
    for name in names:
        profile = Profile(root / name)
        missing = [p.name for p in (profile.config_path, profile.credentials_path)
                   if not p.exists()]
        suffix = f" (missing {', '.join(missing)})" if missing else ""
        print(f"  {name}{suffix}")
    return 0


def handle_whoami(args) -> int:
    """Handle the whoami command."""
    _print_identity(_check_identity(args), color=not args.no_color)
    return 0


def _add_identity_options(parser: argparse.ArgumentParser, shared: bool = False) -> None:
    # Subcommand copies must not reset values already given before the subcommand.
    defaults = {"default": argparse.SUPPRESS} if shared else {}
    parser.add_argument("--sdk", action="store_true", **defaults,
                        help="Query the identity with boto3 instead of the aws CLI")


def _add_switch_options(parser: argparse.ArgumentParser, shared: bool = False) -> None:
    defaults = {"default": argparse.SUPPRESS} if shared else {}
    parser.add_argument("--atomic", action="store_true", **defaults,
                        help="Read everything first, then rename both files into place")
    parser.add_argument("--rewrite", choices=REWRITE_MODES,
                        default=argparse.SUPPRESS if shared else "literal",
                        help="How to turn the profile's section into [default]")
    parser.add_argument("--strict-header", action="store_true", **defaults,
                        help="Fail if the credentials have no section named after the profile")
    parser.add_argument("--no-lock", action="store_true", **defaults,
                        help="Do not take the advisory lock beside the live config")
    parser.add_argument("--skip-identity", action="store_true", **defaults,
                        help="Do not query the caller identity after switching")
    _add_identity_options(parser, shared)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="awsswitch",
        description="AWS Config Switcher - promote a stored profile to the default AWS configuration"
    )
    parser.add_argument("--store", help="Profile store directory (default: $AWSSWITCH_HOME or ~/.awsconfigs)")
    parser.add_argument("--no-color", action="store_true", help="Do not highlight the identity ARN")
    parser.add_argument("--log-level", choices=list(LEVEL_MAP), default="WARNING",
                        help="Logging verbosity")
    _add_switch_options(parser)
    parser.set_defaults(func=handle_switch, profile=None)

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Switch command
    switch_parser = subparsers.add_parser("switch", help="Switch to a stored profile")
    switch_parser.add_argument("profile", nargs="?",
                               help="Profile name (interactive selection if omitted)")
    _add_switch_options(switch_parser, shared=True)
    switch_parser.set_defaults(func=handle_switch)

    # List command
    list_parser = subparsers.add_parser("list", help="List stored profiles")
    list_parser.set_defaults(func=handle_list)

    # Whoami command
    whoami_parser = subparsers.add_parser("whoami", help="Show the current AWS caller identity")
    _add_identity_options(whoami_parser, shared=True)
    whoami_parser.set_defaults(func=handle_whoami)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        return args.func(args)
    except SelectionCancelled:
        print("No selection made")
        return 0
    except SwitchError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
