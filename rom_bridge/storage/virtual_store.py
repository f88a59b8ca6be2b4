"""Virtual File Store.

In-process hierarchical byte store shared by the UI bridge and the emulation
core. Every single operation is atomic under one re-entrant lock; there is no
transaction spanning several operations, so a read/act/clear sequence done
by a caller can interleave with writes from the core.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ..exceptions import EntryKindError, InvalidDataError, InvalidNameError, NotEmptyError, NotFoundError
from ..models import DirectoryLike, EntryKind, StoredEntry, directory_key

logger = logging.getLogger(__name__)

# Pre-seeded hierarchy of the browser sandbox at page load.
SANDBOX_DEFAULT_DIRECTORIES: Tuple[str, ...] = ("home", "home/web_user", "tmp")


@dataclass
class _Node:
    kind: EntryKind
    data: bytes = b""
    children: Dict[str, "_Node"] = field(default_factory=dict)

    @property
    def is_dir(self) -> bool:
        return self.kind is EntryKind.DIRECTORY


def _split_path(path: str) -> List[str]:
    parts = [part for part in str(path).strip().split("/") if part]
    for part in parts:
        if part in (".", ".."):
            raise InvalidNameError(f"Relative path components are not allowed: {path}", name=str(path))
    return parts


def _validate_name(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise InvalidNameError("Entry name must be a non-empty string", name=str(name))
    if "/" in name or "\x00" in name:
        raise InvalidNameError(f"Entry name must be a single path component: {name}", name=name)
    if name in (".", ".."):
        raise InvalidNameError(f"Reserved entry name: {name}", name=name)
    return name


class VirtualFileStore:
    """Hierarchical byte store with directory and file entries."""

    def __init__(self) -> None:
        self._root = _Node(EntryKind.DIRECTORY)
        self._lock = threading.RLock()

    # ------------------------------------------------------------------
    # lookup helpers (call with the lock held)
    # ------------------------------------------------------------------

    def _find(self, path: str) -> Optional[_Node]:
        node = self._root
        for part in _split_path(path):
            if not node.is_dir:
                return None
            child = node.children.get(part)
            if child is None:
                return None
            node = child
        return node

    def _directory(self, directory: DirectoryLike) -> _Node:
        key = directory_key(directory)
        node = self._find(key)
        if node is None:
            raise NotFoundError(f"Directory not found: {key}", path=key)
        if not node.is_dir:
            raise EntryKindError(f"Not a directory: {key}", path=key, expected="directory")
        return node

    @staticmethod
    def _join(directory: DirectoryLike, name: str) -> str:
        return f"{directory_key(directory).strip('/')}/{name}"

    # ------------------------------------------------------------------
    # file entries
    # ------------------------------------------------------------------

    def write(self, directory: DirectoryLike, name: str, data: bytes) -> None:
        """Create or overwrite a file entry. Last write wins."""
        _validate_name(name)
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise InvalidDataError(
                f"File data must be bytes, not {type(data).__name__}",
                path=self._join(directory, name),
                received=type(data).__name__,
            )
        payload = bytes(data)
        with self._lock:
            parent = self._directory(directory)
            existing = parent.children.get(name)
            if existing is not None and existing.is_dir:
                path = self._join(directory, name)
                raise EntryKindError(f"Cannot overwrite directory with file: {path}", path=path, expected="file")
            parent.children[name] = _Node(EntryKind.FILE, data=payload)
        logger.debug("write %s (%d bytes)", self._join(directory, name), len(payload))

    def read(self, directory: DirectoryLike, name: str) -> bytes:
        _validate_name(name)
        path = self._join(directory, name)
        with self._lock:
            node = self._directory(directory).children.get(name)
            if node is None:
                raise NotFoundError(f"Entry not found: {path}", path=path)
            if node.is_dir:
                raise EntryKindError(f"Is a directory: {path}", path=path, expected="file")
            return node.data

    def remove(self, directory: DirectoryLike, name: str) -> None:
        _validate_name(name)
        path = self._join(directory, name)
        with self._lock:
            parent = self._directory(directory)
            node = parent.children.get(name)
            if node is None:
                raise NotFoundError(f"Entry not found: {path}", path=path)
            if node.is_dir:
                raise EntryKindError(f"Is a directory: {path}", path=path, expected="file")
            del parent.children[name]
        logger.debug("remove %s", path)

    def list(self, directory: DirectoryLike) -> List[str]:
        """Names in creation order, led by '.' and '..' like readdir."""
        with self._lock:
            return [".", ".."] + list(self._directory(directory).children)

    def exists(self, directory: DirectoryLike, name: str) -> bool:
        try:
            _validate_name(name)
        except InvalidNameError:
            return False
        with self._lock:
            node = self._find(directory_key(directory))
            return node is not None and node.is_dir and name in node.children

    def is_file(self, directory: DirectoryLike, name: str) -> bool:
        with self._lock:
            node = self._find(directory_key(directory))
            if node is None or not node.is_dir:
                return False
            child = node.children.get(name)
            return child is not None and not child.is_dir

    def stat(self, directory: DirectoryLike, name: str) -> StoredEntry:
        _validate_name(name)
        key = directory_key(directory)
        with self._lock:
            node = self._directory(directory).children.get(name)
            if node is None:
                path = self._join(directory, name)
                raise NotFoundError(f"Entry not found: {path}", path=path)
            size = len(node.data) if not node.is_dir else len(node.children)
            return StoredEntry(directory=key, name=name, kind=node.kind, size=size)

    def entries(self, directory: DirectoryLike) -> Iterator[StoredEntry]:
        key = directory_key(directory)
        with self._lock:
            snapshot = list(self._directory(directory).children.items())
        for name, node in snapshot:
            size = len(node.data) if not node.is_dir else len(node.children)
            yield StoredEntry(directory=key, name=name, kind=node.kind, size=size)

    # ------------------------------------------------------------------
    # directories
    # ------------------------------------------------------------------

    def is_directory(self, path: str) -> bool:
        with self._lock:
            node = self._find(path)
            return node is not None and node.is_dir

    def make_directory(self, path: str) -> bool:
        """Create a directory. Returns False if it already existed."""
        parts = _split_path(path)
        if not parts:
            return False
        with self._lock:
            parent = self._directory("/".join(parts[:-1])) if len(parts) > 1 else self._root
            existing = parent.children.get(parts[-1])
            if existing is not None:
                if not existing.is_dir:
                    raise EntryKindError(f"File exists where directory expected: {path}", path=path, expected="directory")
                return False
            parent.children[parts[-1]] = _Node(EntryKind.DIRECTORY)
        logger.debug("mkdir %s", path)
        return True

    def remove_directory(self, path: str) -> None:
        parts = _split_path(path)
        if not parts:
            raise EntryKindError("Cannot remove the store root", path="/", expected="directory")
        with self._lock:
            node = self._find(path)
            if node is None:
                raise NotFoundError(f"Directory not found: {path}", path=path)
            if not node.is_dir:
                raise EntryKindError(f"Not a directory: {path}", path=path, expected="directory")
            if node.children:
                raise NotEmptyError(f"Directory not empty: {path}", path=path, entries=len(node.children))
            parent = self._find("/".join(parts[:-1])) if len(parts) > 1 else self._root
            del parent.children[parts[-1]]
        logger.debug("rmdir %s", path)

    def top_level(self) -> List[str]:
        with self._lock:
            return [name for name, node in self._root.children.items() if node.is_dir]

    def seed_sandbox_defaults(self) -> None:
        """Recreate the hierarchy the browser sandbox provides before bootstrap."""
        for path in SANDBOX_DEFAULT_DIRECTORIES:
            self.make_directory(path)
