"""
Shared machinery for rules.

Every rule exposes `interpolate(text, context)` returning the substitutions it
found. Token rules delegate matching to a handler and resolve each raw match
through the caller's substitutor.
"""

import logging
import re
from abc import ABC, abstractmethod
from typing import Callable, Generic, Iterator, List, NamedTuple, Optional, Pattern, TypeVar

from interpolator.exceptions import ConfigurationError
from interpolator.substitution import Substitution


logger = logging.getLogger(__name__)

T = TypeVar('T')

Substitutor = Callable[[str, T], Optional[str]]

# Raises ConfigurationError once the owning registry is sealed
OpenCheck = Callable[[], None]


class RawMatch(NamedTuple):
    """A match before its substitutor has been consulted."""
    found: str
    captured: str
    start: int
    end: int


def require_delimiter(value: str, what: str) -> str:
    """Reject missing or empty delimiter text at registration."""
    if not isinstance(value, str):
        raise ConfigurationError(f"{what} must be a string, got {type(value).__name__}")
    if not value:
        raise ConfigurationError(f"{what} cannot be empty")
    return value


def compile_character_class(character_class: Optional[str], default: Optional[str] = None) -> Pattern:
    """
    Compile a one-or-more run of the given character class.

    Args:
        character_class: Regex matching a single legal character, e.g. '[a-z0-9_]'
        default: Class used when none is configured

    Raises:
        ConfigurationError: If the class is not a valid regex or matches
            the empty string
    """
    source = character_class if character_class is not None else default
    if not source:
        raise ConfigurationError("Character class cannot be empty")
    try:
        single = re.compile(source)
    except re.error as e:
        raise ConfigurationError(f"Invalid character class '{source}': {e}") from e
    # Captures are one-or-more characters, so an empty match is never legal
    if single.fullmatch(""):
        raise ConfigurationError(f"Character class '{source}' matches the empty string")
    return re.compile(f"(?:{source})+")


class Rule(ABC, Generic[T]):
    """A configured rule able to report substitutions for an input."""

    @abstractmethod
    def interpolate(self, text: str, context: T) -> List[Substitution]:
        """Return every substitution this rule finds in `text`."""

    def validate(self) -> List[str]:
        """Return configuration problems (empty when complete)."""
        return []


class SubstitutionHandler(ABC, Generic[T]):
    """
    Matches one kind of token and resolves each match with a substitutor.

    Subclasses provide `_matches(text)`; this class owns the substitutor and
    turns raw matches into Substitution records.
    """

    def __init__(self, check_open: Optional[OpenCheck] = None):
        self._substitutor: Optional[Substitutor] = None
        self._check_open = check_open

    @property
    def substitutor(self) -> Optional[Substitutor]:
        return self._substitutor

    def handle_with(self, substitutor: Substitutor) -> None:
        """Attach the function that maps a captured name to its replacement."""
        if self._check_open is not None:
            self._check_open()
        if not callable(substitutor):
            raise ConfigurationError(
                f"Substitutor must be callable, got {type(substitutor).__name__}"
            )
        if self._substitutor is not None:
            raise ConfigurationError(f"{self.describe()} already has a substitutor")
        self._substitutor = substitutor

    @abstractmethod
    def _matches(self, text: str) -> Iterator[RawMatch]:
        """Yield raw matches in left-to-right order."""

    def describe(self) -> str:
        return type(self).__name__

    def interpolate(self, text: str, context: T) -> List[Substitution]:
        substitutions: List[Substitution] = []
        if self._substitutor is None:
            return substitutions

        for match in self._matches(text):
            value = self._substitutor(match.captured, context)
            if value is not None and not isinstance(value, str):
                value = str(value)
            substitutions.append(Substitution(
                found=match.found,
                value=value,
                start=match.start,
                end=match.end,
                captured=match.captured,
            ))

        logger.debug(f"{self.describe()}: {len(substitutions)} match(es)")
        return substitutions
