"""Render command implementation."""

import json
import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import Any, Dict

from interpolator.exceptions import RuleSetValidationError
from interpolator.loader import RuleSetLoader


logger = logging.getLogger(__name__)


def configure_logging(args: Namespace) -> None:
    log_level = getattr(logging, args.log_level.upper())
    if args.debug:
        log_level = logging.DEBUG
    elif args.quiet:
        log_level = logging.ERROR

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def parse_context(args: Namespace) -> Dict[str, Any]:
    """Parse context variables from command line arguments."""
    context: Dict[str, Any] = {}

    # JSON file first so KEY=VALUE pairs can override it
    if args.context_file:
        context_file = Path(args.context_file)
        if not context_file.exists():
            raise FileNotFoundError(f"Context file not found: {context_file}")

        with open(context_file, 'r') as f:
            file_context = json.load(f)
            if not isinstance(file_context, dict):
                raise ValueError(f"Context file must contain a JSON object, got {type(file_context).__name__}")
            context.update(file_context)

    if args.context:
        for item in args.context:
            if '=' not in item:
                raise ValueError(f"Invalid context format: {item}. Expected KEY=VALUE")
            key, value = item.split('=', 1)
            if not key:
                raise ValueError(f"Invalid KEY in pair: {item}")
            context[key] = value

    return context


def render_template(args: Namespace) -> int:
    """
    Render a template with a rule set and a context.

    Returns:
        0 on success, 1 on missing files, 2 on validation errors
    """
    configure_logging(args)

    try:
        rules_path = Path(args.rules)
        if not rules_path.exists():
            logger.error(f"Rule set not found: {rules_path}")
            return 1

        template_path = Path(args.template)
        if not template_path.exists():
            logger.error(f"Template not found: {template_path}")
            return 1

        try:
            interpolator = RuleSetLoader().load(rules_path)
        except RuleSetValidationError as e:
            for error in e.errors:
                location = f" ({error.path})" if error.path else ""
                logger.error(f"Validation error{location}: {error.message}")
            return e.exit_code

        context = parse_context(args)
        text = template_path.read_text(encoding='utf-8')
        logger.info(f"Rendering {template_path} with {len(interpolator.rules)} rule(s)")

        result = interpolator.interpolate(text, context)

        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(result, encoding='utf-8')
            logger.info(f"Wrote {out_path}")
        else:
            sys.stdout.write(result)

        return 0

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2
