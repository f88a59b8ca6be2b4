"""Upload ingestion into ``roms`` / ``saves``."""

from __future__ import annotations

import logging
import os
from typing import Awaitable, Optional, Sequence

from ..models import Directory, DirectoryLike, DirectoryView, UploadPayload, directory_key
from ..storage.listing import RefreshRegistry
from ..storage.virtual_store import VirtualFileStore

logger = logging.getLogger(__name__)

INES_MAGIC = b"NES\x1a"


def looks_like_ines(data: bytes) -> bool:
    return data[:4] == INES_MAGIC


class UploadIngestor:
    """Writes uploaded bytes and refreshes the target directory listing.

    A same-name upload replaces the stored entry without warning.
    """

    def __init__(
        self,
        store: VirtualFileStore,
        refresher: RefreshRegistry,
        check_rom_header: bool = True,
        rom_extensions: Optional[Sequence[str]] = None,
    ):
        self._store = store
        self._refresher = refresher
        self._check_rom_header = check_rom_header
        self._rom_extensions = tuple(ext.lower() for ext in (rom_extensions or (".nes",)))

    def ingest(self, directory: DirectoryLike, name: str, data: bytes) -> DirectoryView:
        key = directory_key(directory)
        replaced = self._store.exists(directory, name)
        self._store.write(directory, name, data)
        if self._check_rom_header and key == Directory.ROMS.value:
            self._warn_on_unknown_header(name, data)
        logger.info(
            "Stored %s/%s (%d bytes%s)",
            key, name, len(data), ", replaced existing" if replaced else "",
        )
        return self._refresher.refresh(directory)

    async def ingest_when_ready(
        self,
        directory: DirectoryLike,
        source: Awaitable[UploadPayload],
    ) -> DirectoryView:
        """Wait for the upload collaborator to deliver bytes, then ingest.

        No timeout and no cancellation handle. Two overlapping uploads are
        not ordered against each other; callers that need exactly-once
        behaviour serialize them.
        """
        payload = await source
        return self.ingest(directory, payload.name, payload.data)

    def _warn_on_unknown_header(self, name: str, data: bytes) -> None:
        ext = os.path.splitext(name)[1].lower()
        if ext in self._rom_extensions and not looks_like_ines(data):
            logger.warning("ROM %s has no iNES header; the core may reject it", name)
