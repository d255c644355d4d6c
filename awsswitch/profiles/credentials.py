"""
Credentials header rewriting.

A stored profile keeps its credentials under a section named after the
profile directory, e.g. ``[staging]``. Before the file becomes the live
``~/.aws/credentials`` that section has to become ``[default]`` so the AWS
CLI and SDKs pick it up without ``--profile``.

Two strategies are provided:

* ``literal``: replace the first occurrence of the exact token
  ``[<profile>]`` anywhere in the text. Everything else is untouched.
* ``section``: parse the text into section blocks, rename the block whose
  header names the profile and drop any existing ``[default]`` block.
"""

import logging
from typing import List, Optional, Tuple

from ..errors import SectionNotFound

__all__ = [
    'DEFAULT_SECTION',
    'REWRITE_MODES',
    'rewrite_literal',
    'rewrite_section',
    'rewrite_credentials',
    'decode_credentials',
    'encode_credentials',
]

logger = logging.getLogger(__name__)

DEFAULT_SECTION = "default"
REWRITE_MODES = ("literal", "section")

# Keep undecodable bytes intact through a decode/encode cycle.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def decode_credentials(data: bytes) -> str:
    return data.decode(_ENCODING, _ERRORS)


def encode_credentials(text: str) -> bytes:
    return text.encode(_ENCODING, _ERRORS)


def rewrite_literal(text: str, profile_name: str) -> Tuple[str, bool]:
    """
    Replace the first ``[<profile_name>]`` token with ``[default]``.

    Args:
        text: Raw credentials text
        profile_name: Name of the profile whose section becomes default

    Returns:
        Tuple of (rewritten text, whether a replacement happened)
    """
    token = f"[{profile_name}]"
    if token not in text:
        return text, False
    return text.replace(token, f"[{DEFAULT_SECTION}]", 1), True


class _Block:
    """One section of a credentials file: its header line plus body lines."""
    def __init__(self, header: Optional[str], name: Optional[str]):
        self.header = header
        self.name = name
        self.lines: List[str] = []

    def render(self) -> str:
        head = self.header if self.header is not None else ""
        return head + "".join(self.lines)


def _split_line_ending(line: str) -> Tuple[str, str]:
    stripped = line.rstrip("\r\n")
    return stripped, line[len(stripped):]


def _parse_header(line: str) -> Optional[str]:
    content, _ = _split_line_ending(line)
    content = content.strip()
    if len(content) >= 2 and content.startswith("[") and content.endswith("]"):
        return content[1:-1].strip()
    return None


def _parse_blocks(text: str) -> List[_Block]:
    blocks = [_Block(None, None)]
    for line in text.splitlines(keepends=True):
        name = _parse_header(line)
        if name is None:
            blocks[-1].lines.append(line)
        else:
            blocks.append(_Block(line, name))
    return blocks


def rewrite_section(text: str, profile_name: str) -> Tuple[str, bool]:
    """
    Rename the section called ``profile_name`` to ``default``.

    Header names are compared case-sensitively after stripping whitespace
    inside the brackets. Only the first matching block is renamed. An
    existing ``[default]`` block is removed so the result has exactly one.

    Args:
        text: Raw credentials text
        profile_name: Name of the profile whose section becomes default

    Returns:
        Tuple of (rewritten text, whether a matching section was found)
    """
    blocks = _parse_blocks(text)
    target = next((b for b in blocks[1:] if b.name == profile_name), None)
    if target is None:
        return text, False

    if profile_name != DEFAULT_SECTION:
        blocks = [b for b in blocks if b is target or b.name != DEFAULT_SECTION]
    _, ending = _split_line_ending(target.header)
    target.header = f"[{DEFAULT_SECTION}]{ending}"
    target.name = DEFAULT_SECTION
    return "".join(b.render() for b in blocks), True


_REWRITERS = {
    "literal": rewrite_literal,
    "section": rewrite_section,
}


def rewrite_credentials(text: str, profile_name: str, mode: str = "literal",
                        strict: bool = False) -> Tuple[str, bool]:
    """
    Rewrite a profile's credentials so its section becomes the default one.

    Args:
        text: Raw credentials text
        profile_name: Name of the profile
        mode: "literal" or "section"
        strict: Raise instead of returning the text unchanged when no
            section matches the profile name

    Returns:
        Tuple of (rewritten text, whether a replacement happened)

    Raises:
        ValueError: If mode is unknown
        SectionNotFound: If strict and nothing matched
    """
    try:
        rewriter = _REWRITERS[mode]
    except KeyError:
        raise ValueError(f"unknown rewrite mode '{mode}', expected one of {REWRITE_MODES}")

    result, replaced = rewriter(text, profile_name)
    if not replaced:
        if strict:
            raise SectionNotFound(
                f"no [{profile_name}] section in the profile's credentials",
                step="install credentials")
        logger.warning("No [%s] section found in credentials; installing without a "
                       "[%s] rewrite", profile_name, DEFAULT_SECTION)
    return result, replaced
