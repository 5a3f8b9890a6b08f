"""
FilterKit config command.

SUMMARY: Show the merged configuration
"""

from __future__ import annotations

import argparse
import sys

import yaml

from filterkit.cli import OutputFormatter, add_json_flag, get_config_manager

SUMMARY = "Show the merged configuration"

_MISSING = object()


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--key",
        type=str,
        default=None,
        help="Dot-notation key to print (e.g. codec.indent)",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        manager = get_config_manager(args)
        config = manager.load_config(validate=True)
        value = config if not args.key else manager.get(args.key, _MISSING)
        if value is _MISSING:
            raise ValueError(f"Unknown config key: {args.key}")

        if formatter.json_mode:
            formatter.json_output(value)
        elif isinstance(value, (dict, list)):
            formatter.text(yaml.safe_dump(value, allow_unicode=True, sort_keys=True).rstrip())
        else:
            formatter.text(str(value))
        return 0
    except Exception as e:
        formatter.error(e, error_code="config_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
