"""
Interactive profile picker.

Shows a numbered list and reads one answer at a time. An exact profile name
picks that profile, a number picks that entry, and any other text narrows the list to names containing it (ignoring
case). A blank answer, EOF or Ctrl-C means no selection.
"""

from typing import Callable, List, Optional, Sequence

__all__ = ['select_profile', 'filter_names']

PROMPT = "Select profile (number or filter, blank to cancel): "


def filter_names(names: Sequence[str], query: str) -> List[int]:
    """Indexes of names containing query, case-insensitively."""
    needle = query.lower()
    return [i for i, name in enumerate(names) if needle in name.lower()]


def _show(names: Sequence[str], indexes: Sequence[int], output: Callable[[str], None]) -> None:
    for pos, i in enumerate(indexes, 1):
        output(f"  {pos:>2}) {names[i]}")


def select_profile(names: Sequence[str],
                   input_func: Callable[[str], str] = input,
                   output: Callable[[str], None] = print) -> Optional[int]:
    """
    Let the operator pick one profile name.

    Args:
        names: Profile names in display order
        input_func: Reads one line of input given a prompt
        output: Writes one line of output

    Returns:
        Index into names of the chosen entry, or None if nothing was chosen
    """
    if not names:
        return None

    shown = list(range(len(names)))
    _show(names, shown, output)
    while True:
        try:
            answer = input_func(PROMPT).strip()
        except (EOFError, KeyboardInterrupt):
            output("")
            return None
        if not answer:
            return None

        # Exact names win over numbers ("2024") and substrings ("dev" vs "dev-admin").
        exact = [i for i in shown if names[i] == answer]
        if exact:
            return exact[0]

        if answer.isdigit():
            pos = int(answer)
            if 1 <= pos <= len(shown):
                return shown[pos - 1]
            output(f"No entry {pos}, choose 1-{len(shown)}")
            continue

        hits = set(filter_names(names, answer))
        matches = [i for i in shown if i in hits]
        if len(matches) == 1:
            return matches[0]
        if not matches:
            output(f"No profiles match '{answer}'")
            continue
        shown = matches
        _show(names, shown, output)
