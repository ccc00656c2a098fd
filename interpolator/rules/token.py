"""Token rule builder returned by `Interpolator.when(...)`."""

import logging
from typing import Generic, List, Optional, Union

from interpolator.exceptions import ConfigurationError
from interpolator.substitution import Substitution

from .base import OpenCheck, Rule, T, compile_character_class
from .enclosure import DEFAULT_ENCLOSURE_CHARACTER_CLASS, EnclosureHandler, EnclosureOpening
from .prefix import PrefixHandler


logger = logging.getLogger(__name__)


class TokenRule(Rule, Generic[T]):
    """
    A token rule: an optional character class plus exactly one token shape.

    Usage:
        interpolator.when("[a-z]").prefixed_by(":").handle_with(fn)
        interpolator.when().enclosed_by("{").and_("}").handle_with(fn)
    """

    def __init__(self, character_class: Optional[str] = None, check_open: Optional[OpenCheck] = None):
        if character_class is not None:
            # Fail fast on a malformed class before any delimiter is chosen
            compile_character_class(character_class, DEFAULT_ENCLOSURE_CHARACTER_CLASS)
        self.character_class = character_class
        self._prefix: Optional[PrefixHandler] = None
        self._enclosure: Optional[EnclosureOpening] = None
        self._check_open = check_open

    def _check_unconfigured(self):
        if self._check_open is not None:
            self._check_open()
        if self._prefix is not None or self._enclosure is not None:
            raise ConfigurationError(f"Token rule already configured as {self.describe()}")

    def prefixed_by(self, prefix: str) -> PrefixHandler:
        self._check_unconfigured()
        self._prefix = PrefixHandler(prefix, self.character_class, self._check_open)
        logger.debug(f"Registered token rule: {self.describe()}")
        return self._prefix

    def enclosed_by(self, opening: str) -> EnclosureOpening:
        self._check_unconfigured()
        self._enclosure = EnclosureOpening(opening, self.character_class, self._check_open)
        return self._enclosure

    @property
    def handler(self) -> Optional[Union[PrefixHandler, EnclosureHandler]]:
        if self._prefix is not None:
            return self._prefix
        if self._enclosure is not None:
            return self._enclosure.handler
        return None

    def validate(self) -> List[str]:
        if self._prefix is None and self._enclosure is None:
            return ["Token rule has neither a prefix nor an enclosure"]
        if self._enclosure is not None and self._enclosure.handler is None:
            return [f"Enclosure opened by '{self._enclosure.opening}' has no closing delimiter"]
        return []

    def describe(self) -> str:
        if self._prefix is not None:
            shape = self._prefix.describe()
        elif self._enclosure is not None and self._enclosure.handler is not None:
            shape = self._enclosure.handler.describe()
        elif self._enclosure is not None:
            shape = f"enclosure '{self._enclosure.opening}'...?"
        else:
            shape = "unconfigured"
        if self.character_class is not None:
            shape += f" of {self.character_class}"
        return shape

    def interpolate(self, text: str, context: T) -> List[Substitution]:
        handler = self.handler
        if handler is None:
            return []
        return handler.interpolate(text, context)

    def __repr__(self) -> str:
        return f"TokenRule({self.describe()})"
