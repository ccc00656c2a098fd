"""
Conflict resolution and rewriting.

Candidates from every rule are pooled, ordered by start offset, and walked
once. Each candidate is applied, skipped because it overlaps an accepted span,
voided because an escape touches it, or left alone because it has no value.
"""

import logging
from typing import List, Optional, Sequence

from .substitution import Substitution, sort_substitutions


logger = logging.getLogger(__name__)


def is_actual_escape(substitutions: Sequence[Substitution], index: int) -> bool:
    """
    Decide whether the escape at `index` defuses something.

    An escape is real when the next candidate touches it and is either a
    token or another escape that is itself real. Runs of escapes are walked
    iteratively so long runs cannot exhaust the stack.

    Args:
        substitutions: Candidates in sorted order
        index: Position of an escape candidate

    Returns:
        True if the escape chain ends on a token it touches
    """
    current = substitutions[index]
    for following in substitutions[index + 1:]:
        if not following.is_after(current):
            return False
        if not following.is_escape:
            return True
        current = following
    return False


def rewrite(text: str, substitutions: Sequence[Substitution]) -> str:
    """
    Apply the winning substitutions to `text`.

    Args:
        text: The original input
        substitutions: Candidates from all rules, in pool order

    Returns:
        The rewritten string
    """
    ordered = sort_substitutions(substitutions)
    segments: List[str] = []
    cursor = 0
    last_end = 0
    last_escape: Optional[Substitution] = None
    applied = 0

    for index, sub in enumerate(ordered):
        if sub.start < last_end:
            continue

        if sub.is_escape:
            if last_escape is not None and sub.is_after(last_escape):
                # Second half of an escaped escape, kept as literal text
                continue
            if not is_actual_escape(ordered, index):
                continue
            last_escape = sub
        elif last_escape is not None and sub.is_after(last_escape):
            # Defused by the escape in front of it
            last_end = sub.end
            continue

        if sub.value is None:
            continue

        segments.append(text[cursor:sub.start])
        segments.append(sub.value)
        cursor = sub.end
        last_end = sub.end
        applied += 1

    if not applied:
        return text

    segments.append(text[cursor:])
    logger.debug(f"Applied {applied} of {len(ordered)} candidate substitution(s)")
    return ''.join(segments)
