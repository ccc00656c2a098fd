"""
Pluggable template substitution.

Prefixed tokens, enclosed tokens and an escape marker are matched
independently and merged into one left-to-right rewrite.
"""

from .engine import Interpolator
from .exceptions import ConfigurationError, RuleSetValidationError, ValidationError
from .substitution import Substitution

__all__ = [
    "Interpolator",
    "ConfigurationError",
    "RuleSetValidationError",
    "ValidationError",
    "Substitution",
]

__version__ = "0.1.0"
