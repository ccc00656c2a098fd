"""Prefixed tokens such as `:name`."""

import re
from typing import Iterator, Optional

from .base import OpenCheck, RawMatch, SubstitutionHandler, compile_character_class, require_delimiter


# A prefixed name with no configured class runs until whitespace.
DEFAULT_PREFIX_CHARACTER_CLASS = r'\S'


class PrefixHandler(SubstitutionHandler):
    """
    Finds `prefix` followed immediately by one or more class characters.

    The capture is the trailing run, taken greedily. Matches never overlap.
    """

    def __init__(self, prefix: str, character_class: Optional[str] = None,
                 check_open: Optional[OpenCheck] = None):
        super().__init__(check_open)
        self.prefix = require_delimiter(prefix, "Prefix")
        self.character_class = character_class
        run = compile_character_class(character_class, DEFAULT_PREFIX_CHARACTER_CLASS)
        self._pattern = re.compile(f"{re.escape(prefix)}({run.pattern})")

    def _matches(self, text: str) -> Iterator[RawMatch]:
        for m in self._pattern.finditer(text):
            yield RawMatch(m.group(0), m.group(1), m.start(), m.end())

    def describe(self) -> str:
        return f"prefix '{self.prefix}'"
