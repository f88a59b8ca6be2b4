"""Directory listing and refresh notification.

Listings are recomputed on every call. Names beginning with ``.`` (the
request sentinels among them) and directory entries are never visible.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, Dict, List

from ..models import DirectoryLike, DirectoryView, directory_key
from .virtual_store import VirtualFileStore

logger = logging.getLogger(__name__)

RefreshCallback = Callable[[DirectoryView], None]


def is_hidden(name: str) -> bool:
    return name in (".", "..") or name.startswith(".")


class DirectoryListingService:
    def __init__(self, store: VirtualFileStore):
        self._store = store

    def list_visible(self, directory: DirectoryLike) -> List[str]:
        names = self._store.list(directory)
        return [
            name for name in names
            if not is_hidden(name) and self._store.is_file(directory, name)
        ]

    def view(self, directory: DirectoryLike) -> DirectoryView:
        return DirectoryView(directory=directory_key(directory), names=tuple(self.list_visible(directory)))


class RefreshRegistry:
    """Per-directory refresh callbacks fed with a freshly computed view."""

    def __init__(self, listing: DirectoryListingService):
        self._listing = listing
        self._callbacks: Dict[str, List[RefreshCallback]] = defaultdict(list)

    def register(self, directory: DirectoryLike, callback: RefreshCallback) -> None:
        self._callbacks[directory_key(directory)].append(callback)

    def unregister(self, directory: DirectoryLike, callback: RefreshCallback) -> bool:
        callbacks = self._callbacks.get(directory_key(directory), [])
        if callback in callbacks:
            callbacks.remove(callback)
            return True
        return False

    def refresh(self, directory: DirectoryLike) -> DirectoryView:
        view = self._listing.view(directory)
        for callback in list(self._callbacks.get(view.directory, [])):
            callback(view)
        logger.debug("refresh %s -> %d entries", view.directory, len(view))
        return view
