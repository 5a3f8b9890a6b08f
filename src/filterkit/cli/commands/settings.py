"""
FilterKit settings command.

SUMMARY: Show or update application settings
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from filterkit.cli import OutputFormatter, add_json_flag, get_settings_store

SUMMARY = "Show or update application settings"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--storage-path",
        type=str,
        default=None,
        help="Set the directory scanned for rule files",
    )
    parser.add_argument(
        "--last-selected",
        type=str,
        default=None,
        help="Set the last selected rule file",
    )
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    try:
        store = get_settings_store(args)
        settings = store.load()

        changes = {}
        if args.storage_path is not None:
            changes["filter_storage_path"] = str(Path(args.storage_path).expanduser().resolve())
        if args.last_selected is not None:
            changes["last_selected_filter"] = args.last_selected
        if changes:
            settings = store.save(**changes)

        data = settings.to_json()
        if formatter.json_mode:
            formatter.json_output({"path": str(store.path), "settings": data})
        else:
            formatter.text(f"Settings file: {store.path}")
            for key, value in data.items():
                formatter.text_kv(key, value)
        return 0
    except Exception as e:
        formatter.error(e, error_code="settings_error")
        return 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    cli_args = parser.parse_args()
    sys.exit(main(cli_args))
