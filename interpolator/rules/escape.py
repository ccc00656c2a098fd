"""Escape marker rule."""

import re
from typing import Generic, List

from interpolator.substitution import Substitution

from .base import Rule, T, require_delimiter


class EscapeRule(Rule, Generic[T]):
    """
    Reports every literal occurrence of the escape token.

    Each occurrence is a candidate deletion; whether it actually defuses
    anything is decided by the resolver, which can see what follows it.
    """

    def __init__(self, escape: str):
        self.escape = require_delimiter(escape, "Escape token")
        self._pattern = re.compile(re.escape(escape))

    def interpolate(self, text: str, context: T) -> List[Substitution]:
        return [
            Substitution(found=self.escape, value="", start=m.start(), end=m.end(), is_escape=True)
            for m in self._pattern.finditer(text)
        ]

    def __repr__(self) -> str:
        return f"EscapeRule({self.escape!r})"
