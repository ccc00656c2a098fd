"""
Rule types for the interpolator.

Token rules (prefixed or enclosed) and the escape rule all report
substitutions through `interpolate(text, context)`.
"""

from .base import Rule, RawMatch, Substitutor, SubstitutionHandler
from .prefix import PrefixHandler
from .enclosure import EnclosureHandler, EnclosureOpening
from .escape import EscapeRule
from .token import TokenRule

__all__ = [
    "Rule",
    "RawMatch",
    "Substitutor",
    "SubstitutionHandler",
    "PrefixHandler",
    "EnclosureHandler",
    "EnclosureOpening",
    "EscapeRule",
    "TokenRule",
]
