"""Download/export read path.

Unlike deletion, a missing entry is not handled here: ``NotFoundError``
reaches the caller.
"""

from __future__ import annotations

import logging
from typing import Dict

from ..models import DirectoryLike, directory_key
from ..storage.listing import DirectoryListingService
from ..storage.virtual_store import VirtualFileStore

logger = logging.getLogger(__name__)


class ExportService:
    def __init__(self, store: VirtualFileStore, listing: DirectoryListingService):
        self._store = store
        self._listing = listing

    def export(self, directory: DirectoryLike, name: str) -> bytes:
        data = self._store.read(directory, name)
        logger.debug("Exported %s/%s (%d bytes)", directory_key(directory), name, len(data))
        return data

    def export_all(self, directory: DirectoryLike) -> Dict[str, bytes]:
        return {name: self.export(directory, name) for name in self._listing.list_visible(directory)}
