"""Shared data models for the ROM bridge.

The directory and sentinel names here are the contract with the emulation
core and must not change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Tuple, Union


class Directory(str, Enum):
    ROMS = "roms"
    SAVES = "saves"


class Direction(str, Enum):
    LOAD = "load"
    SAVE = "save"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


DirectoryLike = Union[Directory, str]

LOAD_SENTINEL = ".load_request"
SAVE_SENTINEL = ".save_request"

# (directory, direction) -> sentinel file name inside that directory
SENTINELS: Dict[Tuple[Directory, Direction], str] = {
    (Directory.ROMS, Direction.LOAD): LOAD_SENTINEL,
    (Directory.SAVES, Direction.LOAD): LOAD_SENTINEL,
    (Directory.SAVES, Direction.SAVE): SAVE_SENTINEL,
}

# Order in which the core is expected to look at pending requests.
SENTINEL_ORDER: Tuple[Tuple[Directory, Direction], ...] = tuple(SENTINELS)


def directory_key(directory: DirectoryLike) -> str:
    """Plain string form of a directory argument."""
    if isinstance(directory, Enum):
        return str(directory.value)
    return str(directory)


def sentinel_path(directory: Directory, direction: Direction) -> str:
    return f"{directory.value}/{SENTINELS[(directory, direction)]}"


@dataclass(frozen=True)
class Request:
    """A cross-boundary command for the core."""

    direction: Direction
    directory: Directory
    target_name: str

    @property
    def key(self) -> Tuple[Directory, Direction]:
        return (self.directory, self.direction)

    @property
    def sentinel_path(self) -> str:
        return sentinel_path(self.directory, self.direction)

    @property
    def target_path(self) -> str:
        return f"{self.directory.value}/{self.target_name}"


@dataclass(frozen=True)
class StoredEntry:
    """Snapshot of one store entry."""

    directory: str
    name: str
    kind: EntryKind
    size: int = 0


@dataclass(frozen=True)
class DirectoryView:
    """Visible entry names of one directory at the time of listing."""

    directory: str
    names: Tuple[str, ...] = ()

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __len__(self) -> int:
        return len(self.names)

    def as_list(self) -> list:
        return list(self.names)


@dataclass(frozen=True)
class UploadPayload:
    """One user-initiated upload: a file name and its bytes."""

    name: str
    data: bytes

    @property
    def size(self) -> int:
        return len(self.data)
