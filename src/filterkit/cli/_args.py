"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_file_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional rule-file argument."""
    parser.add_argument(
        "file",
        type=str,
        help="Path to a rule file (relative paths resolve against the current directory)",
    )


def add_write_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--write",
        "-w",
        action="store_true",
        help="Write the result back to the file instead of printing it",
    )


__all__ = ["add_json_flag", "add_file_arg", "add_write_flag"]
