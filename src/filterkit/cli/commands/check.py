"""
FilterKit check command.

SUMMARY: Verify a rule file survives a parse/serialize round trip

The check passes when re-parsing the serialized document yields the same
blocks and a second serialization is byte-identical to the first.
"""

from __future__ import annotations

import argparse
import sys
from typing import Any, List, Tuple

from filterkit.cli import OutputFormatter, add_file_arg, add_json_flag, get_store
from filterkit.core.codec import Document, RuleBlock, parse, serialize
from filterkit.core.codec.options import CodecOptions

SUMMARY = "Verify a rule file survives a parse/serialize round trip"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_file_arg(parser)
    add_json_flag(parser)


def block_content(block: RuleBlock) -> Tuple[Any, ...]:
    """Comparable view of a block, ignoring identity, raw text and indentation."""
    return (
        block.type,
        block.category,
        block.name,
        block.priority,
        tuple((line.key, line.operator, tuple(line.values)) for line in block.lines),
        tuple((c.before_index, c.text.strip()) for c in block.inline_comments),
    )


def round_trip_issues(document: Document, options: CodecOptions) -> List[str]:
    """Return human-readable differences found by a round trip (empty when stable)."""
    issues: List[str] = []
    first = serialize(document, options=options)
    reparsed = parse(first, options=options)

    if len(reparsed) != len(document):
        issues.append(f"block count changed: {len(document)} -> {len(reparsed)}")
    for index, (before, after) in enumerate(zip(document, reparsed)):
        if block_content(before) != block_content(after):
            issues.append(f"block {index} (line {before.start_line + 1}) changed after re-parse")

    second = serialize(reparsed, options=options)
    if second != first:
        issues.append("second serialization differs from the first")
    return issues


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        store = get_store(args)
        document = store.load(args.file)
        issues = round_trip_issues(document, store.options)
        path = str(store.resolve(args.file))

        if formatter.json_mode:
            formatter.json_output(
                {"path": path, "blocks": len(document), "stable": not issues, "issues": issues}
            )
        elif issues:
            formatter.text(f"❌ {path} is not round-trip stable:")
            for issue in issues:
                formatter.text(f"   - {issue}")
        else:
            formatter.text(f"✅ {path}: {len(document)} block(s), round trip stable")
        return 0 if not issues else 1
    except Exception as e:
        formatter.error(e, error_code="check_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
