"""
FilterKit CLI package.

Provides the command-line interface with auto-discovery of commands from
``cli/commands``. Each command module exposes ``SUMMARY``,
``register_args(parser)`` and ``main(args) -> int``.
"""
from ._output import OutputFormatter
from ._args import add_file_arg, add_json_flag, add_write_flag
from ._utils import get_codec_options, get_config_manager, get_settings_store, get_store

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_file_arg",
    "add_write_flag",
    "get_config_manager",
    "get_codec_options",
    "get_store",
    "get_settings_store",
]
