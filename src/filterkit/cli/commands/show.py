"""
FilterKit show command.

SUMMARY: List the blocks of a rule file
"""

from __future__ import annotations

import argparse
import sys

from filterkit.cli import OutputFormatter, add_file_arg, add_json_flag, get_store

SUMMARY = "List the blocks of a rule file"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_file_arg(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        store = get_store(args)
        document = store.load(args.file)

        if formatter.json_mode:
            formatter.json_output({"blocks": [block.to_dict() for block in document]})
            return 0

        if not document:
            formatter.text("No blocks found")
            return 0
        for index, block in enumerate(document):
            label = " - ".join(p for p in (block.category, block.name, block.priority) if p) or "(no header)"
            formatter.text(
                f"{index:>4}  line {block.start_line + 1:>5}  {block.type.value:<8} "
                f"{label}  [{len(block.lines)} line(s)]"
            )
        return 0
    except Exception as e:
        formatter.error(e, error_code="show_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
