"""Filter file store.

Thin filesystem layer around the codec: discovers rule files under a storage
root, reads and writes their text verbatim, and manages the folders and
sound files that live beside them. The codec never touches storage itself.
"""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List, Optional

from .codec import CodecOptions, Document, DEFAULT_OPTIONS, IdentityFactory, parse, serialize, uuid_identity
from .exceptions import FilterFileNotFoundError, FilterPathConflictError, FilterStoreError
from .io import PathLike, ensure_directory, read_text, write_text_atomic

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".filter"


class FilterStore:
    """Read/write access to rule files under ``root``.

    Relative paths passed to any method resolve against ``root``; absolute
    paths are used as given.
    """

    def __init__(
        self,
        root: PathLike,
        *,
        extension: str = DEFAULT_EXTENSION,
        options: CodecOptions = DEFAULT_OPTIONS,
    ) -> None:
        self.root = Path(root).expanduser()
        self.extension = extension
        self.options = options

    def resolve(self, path: PathLike) -> Path:
        candidate = Path(path).expanduser()
        return candidate if candidate.is_absolute() else self.root / candidate

    # ---------- Discovery ----------
    def scan(self) -> List[Path]:
        """Return every rule file under ``root`` (recursive, sorted)."""
        if not self.root.is_dir():
            raise FilterFileNotFoundError(
                f"Filter storage directory not found: {self.root}",
                path=str(self.root),
                operation="scan",
            )
        found = sorted(
            p.resolve()
            for p in self.root.rglob(f"*{self.extension}")
            if p.is_file() and p.suffix == self.extension
        )
        logger.info("Found %d filter file(s) under %s", len(found), self.root)
        return found

    def exists(self, path: PathLike) -> bool:
        return self.resolve(path).exists()

    # ---------- Text I/O ----------
    def read(self, path: PathLike) -> str:
        target = self.resolve(path)
        try:
            return read_text(target)
        except FileNotFoundError as exc:
            raise FilterFileNotFoundError(
                f"Filter file not found: {target}", path=str(target), operation="read"
            ) from exc
        except OSError as exc:
            raise FilterStoreError(
                f"Cannot read {target}: {exc}", path=str(target), operation="read"
            ) from exc

    def write(self, path: PathLike, text: str) -> Path:
        target = self.resolve(path)
        try:
            write_text_atomic(target, text)
        except OSError as exc:
            raise FilterStoreError(
                f"Cannot write {target}: {exc}", path=str(target), operation="write"
            ) from exc
        logger.info("Wrote %s (%d chars)", target, len(text))
        return target

    def load(self, path: PathLike, *, new_id: IdentityFactory = uuid_identity) -> Document:
        """Read and parse a rule file."""
        return parse(self.read(path), new_id=new_id, options=self.options)

    def save(self, path: PathLike, document: Document) -> str:
        """Serialize ``document`` (updating start lines) and write it."""
        text = serialize(document, options=self.options)
        self.write(path, text)
        return text

    # ---------- File management ----------
    def delete_file(self, path: PathLike) -> None:
        target = self.resolve(path)
        if not target.is_file():
            raise FilterFileNotFoundError(
                f"File not found: {target}", path=str(target), operation="delete_file"
            )
        target.unlink()
        logger.info("Deleted %s", target)

    def delete_folder(self, path: PathLike) -> None:
        target = self.resolve(path)
        if not target.is_dir():
            raise FilterFileNotFoundError(
                f"Folder not found: {target}", path=str(target), operation="delete_folder"
            )
        shutil.rmtree(target)
        logger.info("Deleted folder %s", target)

    def create_folder(self, path: PathLike) -> Path:
        target = self.resolve(path)
        ensure_directory(target)
        return target

    def rename(self, old: PathLike, new: PathLike) -> Path:
        """Rename ``old`` to ``new``; never overwrites an existing target."""
        source = self.resolve(old)
        target = self.resolve(new)
        if not source.exists():
            raise FilterFileNotFoundError(
                f"Path not found: {source}", path=str(source), operation="rename"
            )
        if target.exists():
            raise FilterPathConflictError(
                f"Target already exists: {target}", path=str(target), operation="rename"
            )
        ensure_directory(target.parent)
        source.rename(target)
        logger.info("Renamed %s -> %s", source, target)
        return target

    def copy_file(self, src: PathLike, dest: PathLike, *, dest_name: Optional[str] = None) -> Path:
        """Copy ``src`` into ``dest``.

        ``dest`` may be a directory (the file keeps its name, or ``dest_name``)
        or a full file path. Used for custom alert sounds next to a filter.
        """
        source = Path(src).expanduser()
        if not source.is_file():
            raise FilterFileNotFoundError(
                f"File not found: {source}", path=str(source), operation="copy_file"
            )
        target = self.resolve(dest)
        if target.is_dir():
            target = target / (dest_name or source.name)
        ensure_directory(target.parent)
        shutil.copy2(source, target)
        return target


__all__ = ["FilterStore", "DEFAULT_EXTENSION"]
