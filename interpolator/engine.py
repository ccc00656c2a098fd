"""
Rule registry.

`Interpolator` holds the configured rules, asks each one for its candidate
substitutions and hands the pooled list to the resolver.
"""

import logging
from typing import Generic, List, Optional, Tuple

from .exceptions import ConfigurationError
from .resolver import rewrite
from .rules import EscapeRule, Rule, TokenRule
from .rules.base import T
from .substitution import Substitution


logger = logging.getLogger(__name__)


class Interpolator(Generic[T]):
    """
    Configurable template substitution engine.

    Rules are registered up front:

        interpolator = Interpolator()
        interpolator.when("[a-zA-Z0-9_]").prefixed_by(":").handle_with(lookup)
        interpolator.when().enclosed_by("{").and_("}").handle_with(lookup)
        interpolator.escape_with("^")

    and the registry is then used for any number of `interpolate` calls.
    The first call validates and seals the configuration; registering more
    rules afterwards is an error, which keeps a shared registry read-only.
    """

    def __init__(self):
        self._rules: List[Rule] = []
        self._escape: Optional[EscapeRule] = None
        self._sealed = False

    @property
    def rules(self) -> Tuple[Rule, ...]:
        return tuple(self._rules)

    @property
    def escape(self) -> Optional[str]:
        return self._escape.escape if self._escape is not None else None

    @property
    def sealed(self) -> bool:
        return self._sealed

    def _check_open(self):
        if self._sealed:
            raise ConfigurationError("Cannot register rules after the first interpolate call")

    def when(self, character_class: Optional[str] = None) -> TokenRule:
        """
        Register a token rule.

        Args:
            character_class: Regex for one legal captured-name character;
                None captures the default run for the token shape

        Returns:
            The rule, to be completed with prefixed_by or enclosed_by
        """
        self._check_open()
        rule: TokenRule = TokenRule(character_class, self._check_open)
        self._rules.append(rule)
        return rule

    def escape_with(self, escape: str) -> None:
        """Register the escape token. At most one may be registered."""
        self._check_open()
        if self._escape is not None:
            raise ConfigurationError(f"Escape token already registered: '{self._escape.escape}'")
        self._escape = EscapeRule(escape)
        self._rules.append(self._escape)
        logger.debug(f"Registered escape token: {escape}")

    def validate(self) -> None:
        """
        Check that every registered rule is complete.

        Raises:
            ConfigurationError: If a token rule lacks its prefix or enclosure
        """
        errors = []
        for i, rule in enumerate(self._rules):
            for problem in rule.validate():
                errors.append(f"rules[{i}]: {problem}")
        if errors:
            raise ConfigurationError("; ".join(errors))

    def collect(self, text: str, context: T) -> List[Substitution]:
        """Pool the candidate substitutions of every rule, in registration order."""
        substitutions: List[Substitution] = []
        for rule in self._rules:
            substitutions.extend(rule.interpolate(text, context))
        return substitutions

    def interpolate(self, text: str, context: T = None) -> str:
        """
        Rewrite `text`, resolving each token through its substitutor.

        Args:
            text: Input string
            context: Value passed unchanged to every substitutor

        Returns:
            The rewritten string; tokens without a value are left as they are
        """
        if not self._sealed:
            self.validate()
            self._sealed = True
            logger.debug(f"Sealed interpolator with {len(self._rules)} rule(s)")

        if not isinstance(text, str):
            raise TypeError(f"interpolate expects a str, got {type(text).__name__}")

        return rewrite(text, self.collect(text, context))
