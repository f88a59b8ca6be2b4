from __future__ import annotations

import logging

from ..exceptions import NotFoundError, UserDeclinedError
from ..models import DirectoryLike, directory_key
from ..storage.listing import RefreshRegistry
from ..storage.virtual_store import VirtualFileStore
from ..utils.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class DeletionService:
    """Removes confirmed entries.

    A missing entry is logged and reported as ``Err(NotFoundError)``; it is
    never raised and the listing is not refreshed, so nothing suggests the
    delete went through.
    """

    def __init__(self, store: VirtualFileStore, refresher: RefreshRegistry):
        self._store = store
        self._refresher = refresher

    def request_delete(self, directory: DirectoryLike, name: str, confirmed: bool) -> Result[str]:
        path = f"{directory_key(directory)}/{name}"
        if not confirmed:
            logger.debug("Delete of %s declined", path)
            return Err(UserDeclinedError(f"Deletion of {path} not confirmed", path=path))

        try:
            self._store.remove(directory, name)
        except NotFoundError as exc:
            logger.error("Delete failed: %s", exc.to_dict())
            return Err(exc)

        logger.info("Deleted %s", path)
        self._refresher.refresh(directory)
        return Ok(name)
