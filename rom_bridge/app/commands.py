"""Typed UI commands processed by the bridge controller."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from ..models import Direction, Directory
from ..utils.result import Result


@dataclass(frozen=True)
class UploadCommand:
    directory: Directory
    name: str
    data: bytes = field(repr=False)


@dataclass(frozen=True)
class DeleteCommand:
    directory: Directory
    name: str
    confirmed: bool = False


@dataclass(frozen=True)
class RequestLoadCommand:
    directory: Directory
    name: str


@dataclass(frozen=True)
class RequestSaveCommand:
    name: str
    directory: Directory = Directory.SAVES


Command = Union[UploadCommand, DeleteCommand, RequestLoadCommand, RequestSaveCommand]


@dataclass(frozen=True)
class CommandOutcome:
    command: Command
    result: Result[Any]
    sequence: int = 0
