"""
Substitution record shared by every rule.

Spans always index the original, unmodified input string.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional


@dataclass(frozen=True)
class Substitution:
    """
    A candidate replacement found in the input.

    Attributes:
        found: Exact text matched in the input
        value: Replacement text, or None when no value exists for the match
        start: Offset of the first matched character
        end: Offset one past the last matched character
        is_escape: True only for matches produced by the escape rule
        captured: Name handed to the substitutor (empty for escapes)
    """
    found: str
    value: Optional[str]
    start: int
    end: int
    is_escape: bool = False
    captured: str = ""

    def __post_init__(self):
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid substitution span [{self.start}, {self.end})")

    def is_after(self, other: 'Substitution') -> bool:
        """True when this span begins exactly where `other` ends."""
        return self.start == other.end


def sort_substitutions(substitutions: Iterable[Substitution]) -> List[Substitution]:
    """Order by start offset; equal starts keep their pool order."""
    return sorted(substitutions, key=lambda sub: sub.start)
