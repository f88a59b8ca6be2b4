"""Request transports.

A transport moves typed ``Request`` values from the UI side to the core.
``SentinelFileTransport`` is the legacy contract the core understands: the
target name written as plain text to ``<directory>/.load_request`` or
``<directory>/.save_request``. One slot per (directory, direction), so an
unconsumed request is silently replaced by the next one.

``QueueTransport`` keeps a FIFO per (directory, direction) instead and loses
nothing. With ``mirror_sentinels`` it also keeps the legacy sentinel file
holding the most recent target, for a core that only reads sentinels.
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, Dict, Optional, Tuple

from ..exceptions import InvalidRequestError, NotFoundError
from ..models import SENTINELS, Direction, Directory, Request
from ..storage.virtual_store import VirtualFileStore

logger = logging.getLogger(__name__)

RequestKey = Tuple[Directory, Direction]


def sentinel_for(directory: Directory, direction: Direction) -> str:
    try:
        return SENTINELS[(Directory(directory), Direction(direction))]
    except (KeyError, ValueError) as exc:
        raise InvalidRequestError(
            f"No request slot for {getattr(direction, 'value', direction)} "
            f"in {getattr(directory, 'value', directory)}",
            directory=str(getattr(directory, "value", directory)),
            direction=str(getattr(direction, "value", direction)),
        ) from exc


class RequestTransport(ABC):
    """Message channel from the UI bridge to the core."""

    name = "abstract"
    # True when a new request overwrites an unconsumed one in its slot.
    replaces_pending = False

    @abstractmethod
    def send(self, request: Request) -> None:
        """Deliver a request. Returns once it is observable by the core."""

    @abstractmethod
    def peek(self, directory: Directory, direction: Direction) -> Optional[Request]:
        """Next pending request for the slot, without consuming it."""

    @abstractmethod
    def receive(self, directory: Directory, direction: Direction) -> Optional[Request]:
        """Consume and return the next pending request for the slot."""


class SentinelFileTransport(RequestTransport):
    name = "sentinel"
    replaces_pending = True

    def __init__(self, store: VirtualFileStore, encoding: str = "utf-8"):
        self._store = store
        self._encoding = encoding

    def send(self, request: Request) -> None:
        sentinel = sentinel_for(request.directory, request.direction)
        self._store.write(request.directory, sentinel, request.target_name.encode(self._encoding))

    def _read_slot(self, directory: Directory, direction: Direction) -> Optional[Request]:
        sentinel = sentinel_for(directory, direction)
        try:
            raw = self._store.read(directory, sentinel)
        except NotFoundError:
            return None
        # An emptied sentinel is how some cores mark consumption.
        if not raw:
            return None
        try:
            target_name = raw.decode(self._encoding)
        except UnicodeDecodeError:
            logger.warning("Ignoring undecodable sentinel %s/%s (%d bytes)",
                           Directory(directory).value, sentinel, len(raw))
            return None
        return Request(
            direction=Direction(direction),
            directory=Directory(directory),
            target_name=target_name,
        )

    def peek(self, directory: Directory, direction: Direction) -> Optional[Request]:
        return self._read_slot(directory, direction)

    def receive(self, directory: Directory, direction: Direction) -> Optional[Request]:
        # Read and remove are separate store operations: a send landing
        # between them is lost.
        request = self._read_slot(directory, direction)
        sentinel = sentinel_for(directory, direction)
        try:
            self._store.remove(directory, sentinel)
        except NotFoundError:
            logger.debug("Sentinel %s/%s already cleared", Directory(directory).value, sentinel)
        return request


class QueueTransport(RequestTransport):
    name = "queue"

    def __init__(
        self,
        store: Optional[VirtualFileStore] = None,
        mirror_sentinels: bool = False,
        encoding: str = "utf-8",
    ):
        if mirror_sentinels and store is None:
            raise ValueError("mirror_sentinels requires a store")
        self._queues: Dict[RequestKey, Deque[Request]] = {key: deque() for key in SENTINELS}
        self._lock = threading.Lock()
        self._mirror = SentinelFileTransport(store, encoding) if mirror_sentinels and store is not None else None

    def _queue(self, directory: Directory, direction: Direction) -> Deque[Request]:
        sentinel_for(directory, direction)
        return self._queues[(Directory(directory), Direction(direction))]

    def send(self, request: Request) -> None:
        with self._lock:
            pending = self._queue(request.directory, request.direction)
            # A failed mirror write leaves nothing queued.
            if self._mirror is not None:
                self._mirror.send(request)
            pending.append(request)

    def peek(self, directory: Directory, direction: Direction) -> Optional[Request]:
        with self._lock:
            pending = self._queue(directory, direction)
            return pending[0] if pending else None

    def receive(self, directory: Directory, direction: Direction) -> Optional[Request]:
        with self._lock:
            pending = self._queue(directory, direction)
            if not pending:
                return None
            request = pending.popleft()
            if not pending and self._mirror is not None:
                self._mirror.receive(directory, direction)
            return request

    def pending_count(self, directory: Directory, direction: Direction) -> int:
        with self._lock:
            return len(self._queue(directory, direction))


def build_transport(kind: str, store: VirtualFileStore, mirror_sentinels: bool = True,
                    encoding: str = "utf-8") -> RequestTransport:
    if kind == SentinelFileTransport.name:
        return SentinelFileTransport(store, encoding)
    if kind == QueueTransport.name:
        return QueueTransport(store, mirror_sentinels=mirror_sentinels, encoding=encoding)
    raise ValueError(f"Unknown request transport: {kind}")
