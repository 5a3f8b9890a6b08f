"""File I/O utilities for FilterKit.

Single source of truth for safe file access patterns:
- Atomic writes (temp file in the same directory + fsync + replace)
- Text reads that accept a UTF-8 byte-order mark
- YAML and JSON helpers with consistent error handling
"""
from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Callable, Iterator, TextIO, Union

import yaml

PathLike = Union[str, Path]

_BOM = "\ufeff"


def ensure_directory(path: PathLike) -> Path:
    """Create ``path`` (and parents) if missing and return it."""
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory


def _atomic_write(path: Path, write_fn: Callable[[TextIO], None], *, encoding: str = "utf-8") -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, then atomically replaced
    - Any leftover temp file is cleaned up on failure
    """
    path = Path(path)
    ensure_directory(path.parent)

    tmp_path: Path | None = None
    try:
        # newline="" writes text verbatim (no \n -> \r\n translation on Windows).
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            newline="",
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())
        os.replace(str(tmp_path), str(path))
        tmp_path = None
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def write_text_atomic(path: PathLike, text: str, *, encoding: str = "utf-8") -> None:
    """Atomically write ``text`` to ``path`` exactly as given."""
    _atomic_write(Path(path), lambda f: f.write(text), encoding=encoding)


def read_text(path: PathLike, *, encoding: str = "utf-8") -> str:
    """Read a text file, dropping a leading byte-order mark.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    with open(Path(path), "r", encoding=encoding, newline="") as f:
        text = f.read()
    if text.startswith(_BOM):
        text = text[len(_BOM):]
    return text


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns ``default`` if the file is missing, empty, or invalid, unless
    ``raise_on_error`` is True.
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def iter_yaml_files(directory: PathLike) -> Iterator[Path]:
    """Yield ``*.yaml`` and ``*.yml`` files in ``directory`` in name order."""
    d = Path(directory)
    if not d.is_dir():
        return
    files = [p for p in d.iterdir() if p.is_file() and p.suffix in (".yaml", ".yml")]
    yield from sorted(files, key=lambda p: p.name)


def read_json(path: PathLike) -> Any:
    """Read JSON; raises FileNotFoundError on missing files."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"JSON file not found: {path}")
    return json.loads(read_text(path))


def write_json_atomic(path: PathLike, data: Any, *, indent: int = 2) -> None:
    """Atomically write ``data`` as JSON (UTF-8, non-ASCII kept as is)."""

    def _writer(f: TextIO) -> None:
        json.dump(data, f, indent=indent, ensure_ascii=False)
        f.write("\n")

    _atomic_write(Path(path), _writer)


__all__ = [
    "PathLike",
    "ensure_directory",
    "write_text_atomic",
    "read_text",
    "read_yaml",
    "iter_yaml_files",
    "read_json",
    "write_json_atomic",
]
