"""Tests for rule-set loading and strict validation."""

import tempfile
from pathlib import Path

import pytest
import yaml

from interpolator.exceptions import RuleSetValidationError
from interpolator.loader import RuleSetLoader
from interpolator.rules import EscapeRule, TokenRule


STANDARD_RULES = {
    "version": "1",
    "escape": "^",
    "rules": [
        {"prefix": ":", "character_class": "[a-zA-Z0-9_]", "substitutor": "lookup"},
        {"enclosure": ["*[", "]"], "character_class": "[0-9]", "substitutor": "positional"},
        {"enclosure": ["{", "}"], "substitutor": "lookup"},
    ],
}


class TestRuleSetLoader:
    """Loading rule sets from YAML files."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.workspace = Path(self.temp_dir)
        self.loader = RuleSetLoader()

    def write_rules(self, content: dict) -> Path:
        """Helper to write a rule-set YAML."""
        path = self.workspace / "rules.yaml"
        with open(path, 'w') as f:
            yaml.dump(content, f)
        return path

    def errors_for(self, content) -> list:
        with pytest.raises(RuleSetValidationError) as exc_info:
            self.loader.load_string(yaml.dump(content))
        assert exc_info.value.exit_code == 2
        return [error.message for error in exc_info.value.errors]

    def test_loads_standard_rules(self):
        interpolator = self.loader.load(self.write_rules(STANDARD_RULES))

        assert len(interpolator.rules) == 4
        assert all(isinstance(rule, TokenRule) for rule in interpolator.rules[:3])
        assert isinstance(interpolator.rules[3], EscapeRule)
        assert interpolator.escape == "^"

        context = {'name': 'Tim', 'args': ['zero', 'one'], 'user': {'first': 'Ada'}}
        text = "Hi :name *[1] {user.first} ^:name"
        assert interpolator.interpolate(text, context) == "Hi Tim one Ada :name"

    def test_escape_is_optional(self):
        content = dict(STANDARD_RULES)
        del content['escape']
        interpolator = self.loader.load_string(yaml.dump(content))
        assert interpolator.escape is None
        assert interpolator.interpolate("^:name", {'name': 'Tim'}) == "^Tim"

    def test_empty_rule_list(self):
        interpolator = self.loader.load_string('version: "1"\n')
        assert interpolator.interpolate(":name", {'name': 'x'}) == ":name"

    def test_custom_substitutor(self):
        loader = RuleSetLoader(substitutors={'shout': lambda captured, context: captured.upper()})
        interpolator = loader.load_string(
            'version: "1"\nrules:\n  - prefix: "!"\n    character_class: "[a-z]"\n    substitutor: shout\n'
        )
        assert interpolator.interpolate("say !hi", None) == "say HI"

    def test_missing_file(self):
        with pytest.raises(RuleSetValidationError) as exc_info:
            self.loader.load(self.workspace / "missing.yaml")
        assert "Failed to load rule set" in exc_info.value.errors[0].message

    def test_malformed_yaml(self):
        with pytest.raises(RuleSetValidationError) as exc_info:
            self.loader.load_string("rules: [unclosed")
        assert "Failed to parse rule set" in exc_info.value.errors[0].message

    def test_document_must_be_mapping(self):
        assert self.errors_for(["not", "a", "mapping"]) == ["Rule set must be a YAML object/dictionary"]

    def test_version_required(self):
        messages = self.errors_for({"rules": []})
        assert "'version' field is required" in messages

    def test_unsupported_version(self):
        messages = self.errors_for({"version": "2"})
        assert any("Unsupported version '2'" in m for m in messages)

    def test_unknown_fields_rejected(self):
        messages = self.errors_for({
            "version": "1",
            "extra": True,
            "rules": [{"prefix": ":", "substitutor": "lookup", "greedy": True}],
        })
        assert "Unknown field 'extra'" in messages
        assert "Unknown rule field 'greedy'" in messages

    def test_prefix_and_enclosure_exclusive(self):
        messages = self.errors_for({
            "version": "1",
            "rules": [{"prefix": ":", "enclosure": ["{", "}"], "substitutor": "lookup"}],
        })
        assert "'prefix' and 'enclosure' are mutually exclusive" in messages

    def test_rule_requires_shape(self):
        messages = self.errors_for({"version": "1", "rules": [{"substitutor": "lookup"}]})
        assert "Rule requires either 'prefix' or 'enclosure'" in messages

    @pytest.mark.parametrize("enclosure", [["{"], ["{", ""], "{}", ["{", "}", "]"], [1, 2]])
    def test_enclosure_shape(self, enclosure):
        messages = self.errors_for({
            "version": "1",
            "rules": [{"enclosure": enclosure, "substitutor": "lookup"}],
        })
        assert any("'enclosure' must be a list of two non-empty strings" in m for m in messages)

    def test_empty_prefix_and_escape(self):
        messages = self.errors_for({
            "version": "1",
            "escape": "",
            "rules": [{"prefix": "", "substitutor": "lookup"}],
        })
        assert "'escape' must be a non-empty string" in messages
        assert "'prefix' must be a non-empty string" in messages

    def test_unknown_substitutor(self):
        messages = self.errors_for({
            "version": "1",
            "rules": [{"prefix": ":", "substitutor": "nope"}, {"prefix": "$"}],
        })
        assert any("Unknown substitutor 'nope'" in m for m in messages)
        assert "'substitutor' field is required" in messages

    def test_errors_carry_paths(self):
        with pytest.raises(RuleSetValidationError) as exc_info:
            self.loader.load_string(yaml.dump({
                "version": "1",
                "rules": [{"prefix": ":", "substitutor": "lookup"}, {"prefix": ""}],
            }))
        paths = [error.path for error in exc_info.value.errors]
        assert "rules[1].prefix" in paths
        assert "rules[1]" in paths
        assert "rules[1].prefix" in str(exc_info.value)

    def test_invalid_character_class_reported(self):
        messages = self.errors_for({
            "version": "1",
            "rules": [{"prefix": ":", "character_class": "[a-z", "substitutor": "lookup"}],
        })
        assert any("Invalid character class" in m for m in messages)

    def test_character_class_errors_collected_with_others(self):
        with pytest.raises(RuleSetValidationError) as exc_info:
            self.loader.load_string(yaml.dump({
                "version": "1",
                "rules": [
                    {"prefix": ":", "character_class": "[a-z", "substitutor": "lookup"},
                    {"enclosure": ["{", "}"], "character_class": "a*", "substitutor": "nope"},
                ],
            }))
        errors = {error.path: error.message for error in exc_info.value.errors}
        assert "Invalid character class" in errors["rules[0].character_class"]
        assert "matches the empty string" in errors["rules[1].character_class"]
        assert "Unknown substitutor" in errors["rules[1].substitutor"]

    def test_rules_must_be_list(self):
        messages = self.errors_for({"version": "1", "rules": {"prefix": ":"}})
        assert "'rules' must be a list" in messages

    def test_loader_is_reusable_after_failure(self):
        with pytest.raises(RuleSetValidationError):
            self.loader.load_string(yaml.dump({"rules": []}))
        interpolator = self.loader.load_string(yaml.dump(STANDARD_RULES))
        assert len(interpolator.rules) == 4
