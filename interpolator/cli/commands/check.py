"""Check command: validate a rule set and list its rules."""

import logging
from argparse import Namespace
from pathlib import Path

from interpolator.exceptions import RuleSetValidationError
from interpolator.loader import RuleSetLoader

from .render import configure_logging


logger = logging.getLogger(__name__)


def check_rules(args: Namespace) -> int:
    configure_logging(args)

    rules_path = Path(args.rules)
    if not rules_path.exists():
        logger.error(f"Rule set not found: {rules_path}")
        return 1

    try:
        interpolator = RuleSetLoader().load(rules_path)
    except RuleSetValidationError as e:
        for error in e.errors:
            location = f" ({error.path})" if error.path else ""
            logger.error(f"Validation error{location}: {error.message}")
        return e.exit_code

    for i, rule in enumerate(interpolator.rules):
        print(f"{i}: {rule!r}")
    return 0
