"""Interpolator exceptions."""

from typing import List
from dataclasses import dataclass


class ConfigurationError(ValueError):
    """Raised when a rule is registered or completed incorrectly.

    Configuration faults are reported while the registry is being built,
    never deferred to a rewrite.
    """


@dataclass
class ValidationError:
    """Single rule-set validation error."""
    message: str
    path: str = ""
    exit_code: int = 2


class RuleSetValidationError(Exception):
    """Raised when a rule-set document fails validation.

    The loader collects every problem it finds before raising, so the CLI
    can report them all and map them to an exit code.
    """

    def __init__(self, errors: List[ValidationError]):
        self.errors = errors
        self.exit_code = 2

        messages = []
        for error in errors:
            if error.path:
                messages.append(f"Validation error at {error.path}: {error.message}")
            else:
                messages.append(f"Validation error: {error.message}")

        super().__init__("\n".join(messages))
