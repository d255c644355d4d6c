"""
Caller identity check

After a switch the operator wants to see which AWS identity the new default
configuration resolves to. This runs ``aws sts get-caller-identity`` (or the
equivalent boto3 STS call) and highlights the ARN line.
"""

import json
import logging
import subprocess
from typing import Any, Dict, Optional, Sequence

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..errors import IdentityCheckFailed

__all__ = [
    'IDENTITY_COMMAND',
    'get_caller_identity',
    'get_caller_identity_sdk',
    'format_identity',
]

logger = logging.getLogger(__name__)

IDENTITY_COMMAND = ("aws", "sts", "get-caller-identity")

ORANGE = "\033[38;5;214m"
RESET = "\033[0m"


def get_caller_identity(command: Sequence[str] = IDENTITY_COMMAND,
                        timeout: Optional[float] = None) -> str:
    """
    Run the AWS CLI identity query and return its standard output.

    Args:
        command: Command line to run
        timeout: Seconds to wait for the command, None waits indefinitely

    Returns:
        The command's standard output

    Raises:
        IdentityCheckFailed: If the command is missing, times out or exits non-zero
    """
    step = "get AWS caller identity"
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(list(command), capture_output=True, text=True,
                                check=True, timeout=timeout)
    except FileNotFoundError as e:
        raise IdentityCheckFailed(f"'{command[0]}' not found on PATH", step=step) from e
    except subprocess.TimeoutExpired as e:
        raise IdentityCheckFailed(f"timed out after {timeout}s", step=step) from e
    except subprocess.CalledProcessError as e:
        detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
        raise IdentityCheckFailed(detail, step=step) from e
    return result.stdout


def get_caller_identity_sdk(session: Optional[Any] = None) -> str:
    """
    Query the caller identity through boto3 instead of the AWS CLI.

    Output mirrors the CLI's JSON so it can be displayed the same way.

    Args:
        session: boto3 Session to use; a fresh one reads the live files

    Returns:
        JSON text with UserId, Account and Arn

    Raises:
        IdentityCheckFailed: On any botocore error
    """
    step = "get AWS caller identity"
    try:
        session = session or boto3.Session()
        response: Dict[str, Any] = session.client("sts").get_caller_identity()
    except (BotoCoreError, ClientError) as e:
        raise IdentityCheckFailed(str(e), step=step) from e
    identity = {k: v for k, v in response.items() if k != "ResponseMetadata"}
    return json.dumps(identity, indent=4) + "\n"


def format_identity(identity: str, token: str = "Arn", color: bool = True) -> str:
    """
    Highlight lines of the identity output that contain token.

    Args:
        identity: Identity text as returned by the check
        token: Substring marking lines to highlight
        color: Wrap matching lines in ANSI orange; plain text if False

    Returns:
        Text ready for printing
    """
    if not color:
        return identity
    lines = []
    for line in identity.split("\n"):
        if token in line:
            lines.append(f"{ORANGE}{line}{RESET}")
        else:
            lines.append(line)
    return "\n".join(lines)
