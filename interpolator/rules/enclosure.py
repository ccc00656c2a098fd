"""
Enclosed tokens such as `{name}` or `*[0]`.

Every occurrence of the opening delimiter is tried, including occurrences that
sit inside another candidate, and each is paired with the nearest closing
delimiter that follows it. For `{ {name} }` both `{ {name}` and `{name}` are
reported; the resolver decides which one survives.
"""

import re
from typing import Iterator, Optional

from interpolator.exceptions import ConfigurationError

from .base import OpenCheck, RawMatch, SubstitutionHandler, compile_character_class, require_delimiter


# Anything at all may sit between the delimiters when no class is configured.
DEFAULT_ENCLOSURE_CHARACTER_CLASS = r'[\s\S]'


class EnclosureHandler(SubstitutionHandler):
    """Finds `opening ... closing` pairs whose interior satisfies the class."""

    def __init__(self, opening: str, closing: str, character_class: Optional[str] = None,
                 check_open: Optional[OpenCheck] = None):
        super().__init__(check_open)
        self.opening = require_delimiter(opening, "Opening delimiter")
        self.closing = require_delimiter(closing, "Closing delimiter")
        self.character_class = character_class
        self._interior = compile_character_class(character_class, DEFAULT_ENCLOSURE_CHARACTER_CLASS)
        # Zero-width so that overlapping openings are all reported
        self._openings = re.compile(f"(?={re.escape(opening)})")

    def _matches(self, text: str) -> Iterator[RawMatch]:
        for m in self._openings.finditer(text):
            start = m.start()
            interior_start = start + len(self.opening)
            close = text.find(self.closing, interior_start)
            if close == -1:
                # No closing delimiter follows this or any later opening
                return
            captured = text[interior_start:close]
            if not captured or not self._interior.fullmatch(captured):
                continue
            end = close + len(self.closing)
            yield RawMatch(text[start:end], captured, start, end)

    def describe(self) -> str:
        return f"enclosure '{self.opening}'...'{self.closing}'"


class EnclosureOpening:
    """
    Half-configured enclosure waiting for its closing delimiter.

    Returned by `TokenRule.enclosed_by(opening)`; `and_(closing)` completes it.
    """

    def __init__(self, opening: str, character_class: Optional[str] = None,
                 check_open: Optional[OpenCheck] = None):
        self.opening = require_delimiter(opening, "Opening delimiter")
        self.character_class = character_class
        self._check_open = check_open
        self.handler: Optional[EnclosureHandler] = None

    def and_(self, closing: str) -> EnclosureHandler:
        if self._check_open is not None:
            self._check_open()
        if self.handler is not None:
            raise ConfigurationError(
                f"Enclosure opened by '{self.opening}' already closed by '{self.handler.closing}'"
            )
        self.handler = EnclosureHandler(self.opening, closing, self.character_class, self._check_open)
        return self.handler
