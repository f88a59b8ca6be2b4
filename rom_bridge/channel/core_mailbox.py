"""Core-side consumer of the request protocol.

The emulation core polls the request slots at its own cadence, acts on each
pending request and clears the slot. ``CoreMailbox`` is that consumer. It
backs simulated cores in tests and any host that drives a core from Python.
"""

from __future__ import annotations

import logging
import threading
from typing import Callable, List, Optional

from ..models import SENTINEL_ORDER, Request
from .transport import RequestTransport

logger = logging.getLogger(__name__)

RequestHandler = Callable[[Request], None]

DEFAULT_POLL_INTERVAL = 0.25


class CoreMailbox:
    """Reads, decodes and clears pending requests.

    Features:
    - One-shot ``poll`` in the fixed slot order
    - Optional background polling thread
    """

    def __init__(self, transport: RequestTransport, interval: float = DEFAULT_POLL_INTERVAL):
        self._transport = transport
        self._interval = interval
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._handled = 0

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def handled_count(self) -> int:
        return self._handled

    def poll(self) -> List[Request]:
        """Consume every pending request.

        Returns:
            Requests in slot order: ROM load, state load, state save
        """
        consumed: List[Request] = []
        for directory, direction in SENTINEL_ORDER:
            while True:
                try:
                    request = self._transport.receive(directory, direction)
                except Exception:
                    logger.exception("Could not read %s request slot in %s", direction.value, directory.value)
                    break
                if request is None:
                    break
                consumed.append(request)
        return consumed

    def dispatch(self, handler: RequestHandler) -> int:
        """Poll once and hand each request to ``handler``."""
        count = 0
        for request in self.poll():
            try:
                handler(request)
            except Exception:
                logger.exception("Core handler failed for %s", request.target_path)
                continue
            count += 1
        self._handled += count
        return count

    def start(self, handler: RequestHandler, interval: Optional[float] = None) -> None:
        if self.is_running:
            return
        interval = self._interval if interval is None else interval
        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._run,
            args=(handler, interval),
            name="core-mailbox",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Core mailbox polling every %.2fs", interval)

    def stop(self, timeout: Optional[float] = 2.0) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
        self._thread = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def _run(self, handler: RequestHandler, interval: float) -> None:
        while not self._stop_event.is_set():
            self.dispatch(handler)
            self._stop_event.wait(interval)
