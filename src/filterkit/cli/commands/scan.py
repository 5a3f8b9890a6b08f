"""
FilterKit scan command.

SUMMARY: List rule files under the storage directory
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from filterkit.cli import OutputFormatter, add_json_flag, get_settings_store, get_store

SUMMARY = "List rule files under the storage directory"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=None,
        help="Directory to scan (default: filterStoragePath from settings)",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        root = args.root
        if not root:
            root = get_settings_store(args).load().filter_storage_path
        if not root:
            raise ValueError(
                "No directory given and filterStoragePath is not set "
                "(run `filterkit settings --storage-path DIR`)"
            )
        store = get_store(args, Path(root))
        files = store.scan()

        if formatter.json_mode:
            formatter.json_output({"root": str(store.root), "files": [str(p) for p in files]})
        elif not files:
            formatter.text(f"No {store.extension} files under {store.root}")
        else:
            for path in files:
                formatter.text(str(path))
        return 0
    except Exception as e:
        formatter.error(e, error_code="scan_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
