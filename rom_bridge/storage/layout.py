"""Startup layout for the shared store: exactly ``roms`` and ``saves``."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..exceptions import NotEmptyError
from ..models import Directory
from .virtual_store import VirtualFileStore

logger = logging.getLogger(__name__)

DEFAULT_PRUNE_DIRECTORIES = ("home/web_user", "home", "tmp")


@dataclass
class BootstrapReport:
    removed: List[str] = field(default_factory=list)
    created: List[str] = field(default_factory=list)
    present: List[str] = field(default_factory=list)


class LayoutBootstrap:
    """Prunes the sandbox's default directories and creates the managed ones.

    Safe to run any number of times. Directories already gone are skipped and
    existing ``roms``/``saves`` are left as they are. A pre-seeded directory
    that still has contents is never removed: ``NotEmptyError`` is raised
    instead.
    """

    def __init__(
        self,
        store: VirtualFileStore,
        prune_directories: Optional[Sequence[str]] = None,
    ):
        self._store = store
        self._prune = tuple(DEFAULT_PRUNE_DIRECTORIES if prune_directories is None else prune_directories)

    def run(self) -> BootstrapReport:
        report = BootstrapReport()

        for path in self._prune:
            if not self._store.is_directory(path):
                continue
            try:
                self._store.remove_directory(path)
            except NotEmptyError as exc:
                logger.error("Refusing to remove non-empty sandbox directory %s: %s", path, exc.to_dict())
                raise
            report.removed.append(path)

        for directory in Directory:
            if self._store.make_directory(directory.value):
                report.created.append(directory.value)
            report.present.append(directory.value)

        logger.info(
            "Layout ready (removed=%s, created=%s)",
            ",".join(report.removed) or "-",
            ",".join(report.created) or "-",
        )
        return report
