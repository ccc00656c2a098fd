"""Main CLI entry point for interpolate."""

import argparse
import sys
from typing import Optional

from .commands import check_rules, render_template


def add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Suppress non-error output'
    )
    parser.add_argument(
        '--log-level',
        choices=['debug', 'info', 'warn', 'error'],
        default='warn',
        help='Set log level'
    )


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the interpolate CLI."""
    parser = argparse.ArgumentParser(
        prog='interpolate',
        description='Template substitution with prefixed, enclosed and escaped tokens'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Render command
    render_parser = subparsers.add_parser('render', help='Render a template file')
    render_parser.add_argument(
        'template',
        type=str,
        help='Path to template file'
    )
    render_parser.add_argument(
        '--rules',
        type=str,
        required=True,
        help='Path to rule-set YAML file'
    )
    render_parser.add_argument(
        '--context',
        action='append',
        metavar='KEY=VALUE',
        help='Context variables (can be specified multiple times)'
    )
    render_parser.add_argument(
        '--context-file',
        type=str,
        help='Path to JSON file containing context variables'
    )
    render_parser.add_argument(
        '--out',
        type=str,
        help='Write the result here instead of stdout'
    )
    add_logging_arguments(render_parser)

    # Check command
    check_parser = subparsers.add_parser('check', help='Validate a rule-set file')
    check_parser.add_argument(
        'rules',
        type=str,
        help='Path to rule-set YAML file'
    )
    add_logging_arguments(check_parser)

    return parser


def main(args: Optional[list] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    if not parsed_args.command:
        parser.print_help()
        return 1

    if parsed_args.command == 'render':
        return render_template(parsed_args)
    elif parsed_args.command == 'check':
        return check_rules(parsed_args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
