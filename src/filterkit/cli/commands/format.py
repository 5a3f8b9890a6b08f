"""
FilterKit format command.

SUMMARY: Normalize a rule file (parse and re-serialize)
"""

from __future__ import annotations

import argparse
import sys

from filterkit.cli import OutputFormatter, add_file_arg, add_json_flag, add_write_flag, get_store
from filterkit.core.codec import parse, serialize

SUMMARY = "Normalize a rule file (parse and re-serialize)"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_file_arg(parser)
    add_write_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        store = get_store(args)
        original = store.read(args.file)
        document = parse(original, options=store.options)
        formatted = serialize(document, options=store.options)
        changed = formatted != original

        if args.write:
            path = store.write(args.file, formatted) if changed else store.resolve(args.file)
            formatter.success(
                {"path": str(path), "changed": changed, "blocks": len(document)},
                f"{'Formatted' if changed else 'Unchanged'}: {path}",
            )
        elif formatter.json_mode:
            formatter.json_output({"changed": changed, "blocks": len(document), "content": formatted})
        else:
            sys.stdout.write(formatted)
        return 0
    except Exception as e:
        formatter.error(e, error_code="format_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
