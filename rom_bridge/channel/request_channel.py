"""Request channel: the UI side of the load/save protocol.

``submit`` is fire-and-forget. The call returns as soon as the transport has
made the request observable; nothing reports whether or when the core acted
on it. With the sentinel transport, two submits for the same
(directory, direction) before the core consumes the first leave only the
second target name behind. The first one is dropped with no signal to the
caller. Use ``QueueTransport`` where every request has to reach the core.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..exceptions import InvalidRequestError
from ..models import Direction, Directory, Request
from .transport import RequestTransport, sentinel_for

logger = logging.getLogger(__name__)


class RequestChannel:
    def __init__(self, transport: RequestTransport):
        self._transport = transport

    @property
    def transport(self) -> RequestTransport:
        return self._transport

    def submit(self, directory: Directory, direction: Direction, target_name: str) -> Request:
        sentinel_for(directory, direction)
        if not isinstance(target_name, str) or not target_name.strip():
            raise InvalidRequestError(
                "Request target name must be a non-empty string",
                directory=Directory(directory).value,
                direction=Direction(direction).value,
            )
        request = Request(
            direction=Direction(direction),
            directory=Directory(directory),
            target_name=target_name,
        )

        if self._transport.replaces_pending:
            displaced = self._transport.peek(request.directory, request.direction)
            if displaced is not None:
                logger.debug("Unconsumed %s replaced by %s", displaced.target_path, request.target_path)

        self._transport.send(request)
        logger.info("Requested %s of %s", request.direction.value, request.target_path)
        return request

    def request_rom_load(self, rom_name: str) -> Request:
        return self.submit(Directory.ROMS, Direction.LOAD, rom_name)

    def request_state_load(self, save_name: str) -> Request:
        return self.submit(Directory.SAVES, Direction.LOAD, save_name)

    def request_state_save(self, save_name: str) -> Request:
        return self.submit(Directory.SAVES, Direction.SAVE, save_name)

    def pending(self, directory: Directory, direction: Direction) -> Optional[Request]:
        return self._transport.peek(directory, direction)
