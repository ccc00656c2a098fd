"""Rule-set loader with strict validation of the YAML document."""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from .engine import Interpolator
from .exceptions import ConfigurationError, RuleSetValidationError, ValidationError
from .rules.base import compile_character_class
from .substitutors import BUILTIN_SUBSTITUTORS


logger = logging.getLogger(__name__)


class RuleSetLoader:
    """
    Loads a rule set from YAML and builds an Interpolator from it.

    Document shape:

        version: "1"
        escape: "^"
        rules:
          - prefix: ":"
            character_class: "[a-zA-Z0-9_]"
            substitutor: lookup
          - enclosure: ["{", "}"]
            substitutor: lookup

    Every problem in the document is collected before raising.
    """

    SUPPORTED_VERSIONS = {"1"}
    TOP_LEVEL_FIELDS = {'version', 'name', 'escape', 'rules'}
    RULE_FIELDS = {'prefix', 'enclosure', 'character_class', 'substitutor'}

    def __init__(self, substitutors: Optional[Dict[str, Callable]] = None):
        """Initialize loader with the substitutors rules may name."""
        self.substitutors = dict(BUILTIN_SUBSTITUTORS)
        if substitutors:
            self.substitutors.update(substitutors)
        self.errors: List[ValidationError] = []

    def load(self, rules_path: Path) -> Interpolator:
        """Load and validate a rule-set file."""
        self.errors = []
        try:
            with open(rules_path, 'r') as f:
                document = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load rule set: {e}")
            self._raise_validation_errors()

        return self._build(document)

    def load_string(self, content: str) -> Interpolator:
        """Load and validate a rule set held in memory."""
        self.errors = []
        try:
            document = yaml.safe_load(content)
        except yaml.YAMLError as e:
            self._add_error(f"Failed to parse rule set: {e}")
            self._raise_validation_errors()

        return self._build(document)

    def _build(self, document: Any) -> Interpolator:
        if document is None or not isinstance(document, dict):
            self._add_error("Rule set must be a YAML object/dictionary")
            self._raise_validation_errors()

        self._validate_top_level(document)

        rules = document.get('rules')
        if rules is None:
            rules = []
        elif not isinstance(rules, list):
            self._add_error("'rules' must be a list", "rules")
            rules = []

        for i, rule in enumerate(rules):
            self._validate_rule(rule, f"rules[{i}]")

        if self.errors:
            self._raise_validation_errors()

        interpolator: Interpolator = Interpolator()
        try:
            for rule in rules:
                self._register(interpolator, rule)
            if 'escape' in document:
                interpolator.escape_with(document['escape'])
            interpolator.validate()
        except ConfigurationError as e:
            self._add_error(str(e))
            self._raise_validation_errors()

        logger.debug(f"Loaded rule set with {len(interpolator.rules)} rule(s)")
        return interpolator

    def _validate_top_level(self, document: Dict[str, Any]):
        for key in document.keys():
            if key not in self.TOP_LEVEL_FIELDS:
                self._add_error(f"Unknown field '{key}'", str(key))

        version = document.get('version')
        if not version:
            self._add_error("'version' field is required", "version")
        elif not isinstance(version, str):
            self._add_error(f"'version' field must be a string, got {type(version).__name__}", "version")
        elif version not in self.SUPPORTED_VERSIONS:
            self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}", "version")

        if 'escape' in document:
            escape = document['escape']
            if not isinstance(escape, str) or not escape:
                self._add_error("'escape' must be a non-empty string", "escape")

    def _validate_rule(self, rule: Any, path: str):
        if not isinstance(rule, dict):
            self._add_error("Rule must be a dictionary", path)
            return

        for key in rule.keys():
            if key not in self.RULE_FIELDS:
                self._add_error(f"Unknown rule field '{key}'", path)

        has_prefix = 'prefix' in rule
        has_enclosure = 'enclosure' in rule
        if has_prefix and has_enclosure:
            self._add_error("'prefix' and 'enclosure' are mutually exclusive", path)
        elif not has_prefix and not has_enclosure:
            self._add_error("Rule requires either 'prefix' or 'enclosure'", path)

        if has_prefix:
            prefix = rule['prefix']
            if not isinstance(prefix, str) or not prefix:
                self._add_error("'prefix' must be a non-empty string", f"{path}.prefix")

        if has_enclosure:
            enclosure = rule['enclosure']
            if (not isinstance(enclosure, list) or len(enclosure) != 2
                    or not all(isinstance(d, str) and d for d in enclosure)):
                self._add_error(
                    "'enclosure' must be a list of two non-empty strings [opening, closing]",
                    f"{path}.enclosure"
                )

        character_class = rule.get('character_class')
        if character_class is not None:
            if not isinstance(character_class, str) or not character_class:
                self._add_error("'character_class' must be a non-empty string", f"{path}.character_class")
            else:
                try:
                    compile_character_class(character_class)
                except ConfigurationError as e:
                    self._add_error(str(e), f"{path}.character_class")

        substitutor = rule.get('substitutor')
        if substitutor is None:
            self._add_error("'substitutor' field is required", path)
        elif not isinstance(substitutor, str) or substitutor not in self.substitutors:
            self._add_error(
                f"Unknown substitutor '{substitutor}'. Available: {sorted(self.substitutors)}",
                f"{path}.substitutor"
            )

    def _register(self, interpolator: Interpolator, rule: Dict[str, Any]):
        token = interpolator.when(rule.get('character_class'))
        if 'prefix' in rule:
            handler = token.prefixed_by(rule['prefix'])
        else:
            opening, closing = rule['enclosure']
            handler = token.enclosed_by(opening).and_(closing)
        handler.handle_with(self.substitutors[rule['substitutor']])

    def _add_error(self, message: str, path: str = ""):
        self.errors.append(ValidationError(message=message, path=path))

    def _raise_validation_errors(self):
        raise RuleSetValidationError(self.errors)
