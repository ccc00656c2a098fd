"""CLI command handlers."""

from .render import render_template
from .check import check_rules

__all__ = ['render_template', 'check_rules']
