"""Bridge controller.

Owns every component instance and runs UI commands one at a time in the
order they were enqueued. Each handler runs to completion before the next
one starts; the controller never blocks on the core.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Deque, Dict, List, Optional

from ..channel.core_mailbox import CoreMailbox
from ..channel.request_channel import RequestChannel
from ..channel.transport import build_transport
from ..config.io import load_config
from ..config.models import BridgeConfig
from ..exceptions import BaseError, UserDeclinedError
from ..logging_config import setup_logging
from ..models import Direction, Directory, DirectoryLike, DirectoryView, UploadPayload, directory_key
from ..storage.layout import BootstrapReport, LayoutBootstrap
from ..storage.listing import DirectoryListingService, RefreshRegistry
from ..storage.virtual_store import VirtualFileStore
from ..utils.result import Err, Result, capture
from .commands import (
    Command,
    CommandOutcome,
    DeleteCommand,
    RequestLoadCommand,
    RequestSaveCommand,
    UploadCommand,
)
from .deletion import DeletionService
from .export import ExportService
from .upload import UploadIngestor

logger = logging.getLogger(__name__)


@dataclass
class ControllerState:
    views: Dict[str, DirectoryView] = field(default_factory=dict)
    processed: int = 0
    failed: int = 0
    last_error: Optional[Exception] = None


class BridgeController:
    def __init__(self, config: BridgeConfig, store: VirtualFileStore):
        self.config = config
        self.store = store
        self.layout = LayoutBootstrap(store, config.layout.prune_directories)
        self.listing = DirectoryListingService(store)
        self.refresher = RefreshRegistry(self.listing)
        self.transport = build_transport(
            config.channel.transport,
            store,
            mirror_sentinels=config.channel.mirror_sentinels,
            encoding=config.channel.encoding,
        )
        self.channel = RequestChannel(self.transport)
        self.ingestor = UploadIngestor(
            store,
            self.refresher,
            check_rom_header=config.uploads.check_rom_header,
            rom_extensions=config.uploads.rom_extensions,
        )
        self.deletion = DeletionService(store, self.refresher)
        self.exporter = ExportService(store, self.listing)
        self.state = ControllerState()
        self._queue: Deque[Command] = deque()
        self._sequence = 0
        self._handlers: Dict[type, Callable[[Any], Result[Any]]] = {
            UploadCommand: self._handle_upload,
            DeleteCommand: self._handle_delete,
            RequestLoadCommand: self._handle_request_load,
            RequestSaveCommand: self._handle_request_save,
        }
        for directory in Directory:
            self.refresher.register(directory, self._remember_view)

    @classmethod
    def create(
        cls,
        config: Optional[BridgeConfig] = None,
        store: Optional[VirtualFileStore] = None,
        bootstrap: bool = True,
    ) -> "BridgeController":
        config = config or BridgeConfig()
        if store is None:
            store = VirtualFileStore()
            if config.layout.seed_sandbox_defaults:
                store.seed_sandbox_defaults()
        controller = cls(config, store)
        if bootstrap:
            controller.bootstrap()
        return controller

    # ------------------------------------------------------------------
    # lifecycle and views
    # ------------------------------------------------------------------

    def bootstrap(self) -> BootstrapReport:
        report = self.layout.run()
        for directory in Directory:
            self.refresher.refresh(directory)
        return report

    def _remember_view(self, view: DirectoryView) -> None:
        self.state.views[view.directory] = view

    def on_refresh(self, directory: DirectoryLike, callback: Callable[[DirectoryView], None]) -> None:
        self.refresher.register(directory, callback)

    def view(self, directory: DirectoryLike) -> DirectoryView:
        return self.listing.view(directory)

    def core_mailbox(self) -> CoreMailbox:
        return CoreMailbox(self.transport, interval=self.config.channel.core_poll_interval)

    # ------------------------------------------------------------------
    # command queue
    # ------------------------------------------------------------------

    def enqueue(self, command: Command) -> int:
        if type(command) not in self._handlers:
            raise TypeError(f"Unsupported command: {type(command).__name__}")
        self._queue.append(command)
        return len(self._queue)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def process_pending(self) -> List[CommandOutcome]:
        outcomes: List[CommandOutcome] = []
        while self._queue:
            outcomes.append(self.dispatch(self._queue.popleft()))
        return outcomes

    def dispatch(self, command: Command) -> CommandOutcome:
        handler = self._handlers.get(type(command))
        if handler is None:
            raise TypeError(f"Unsupported command: {type(command).__name__}")

        self._sequence += 1
        try:
            result = handler(command)
        except Exception as exc:
            logger.exception("%s raised while processing", type(command).__name__)
            result = Err(exc)
        self.state.processed += 1
        if isinstance(result, Err) and not isinstance(result.error, UserDeclinedError):
            self.state.failed += 1
            self.state.last_error = result.error
            logger.warning("%s failed [%s]: %s", type(command).__name__, result.code, result.error)
        return CommandOutcome(command=command, result=result, sequence=self._sequence)

    async def upload_when_ready(
        self,
        directory: DirectoryLike,
        source: Awaitable[UploadPayload],
    ) -> CommandOutcome:
        """Await the upload bytes, then run the upload in queue order."""
        payload = await source
        self.enqueue(UploadCommand(Directory(directory_key(directory)), payload.name, payload.data))
        return self.process_pending()[-1]

    # ------------------------------------------------------------------
    # handlers
    # ------------------------------------------------------------------

    def _handle_upload(self, command: UploadCommand) -> Result[DirectoryView]:
        return capture(self.ingestor.ingest, command.directory, command.name, command.data)

    def _handle_delete(self, command: DeleteCommand) -> Result[str]:
        return self.deletion.request_delete(command.directory, command.name, command.confirmed)

    def _handle_request_load(self, command: RequestLoadCommand) -> Result[Any]:
        return capture(self.channel.submit, command.directory, Direction.LOAD, command.name)

    def _handle_request_save(self, command: RequestSaveCommand) -> Result[Any]:
        return capture(self.channel.submit, command.directory, Direction.SAVE, command.name)

    # ------------------------------------------------------------------
    # direct reads
    # ------------------------------------------------------------------

    def export(self, directory: DirectoryLike, name: str) -> bytes:
        return self.exporter.export(directory, name)


def start_bridge(
    config_path: Optional[str] = None,
    store: Optional[VirtualFileStore] = None,
    configure_logging: bool = True,
) -> BridgeController:
    """Load configuration, set up logging and return a bootstrapped controller."""
    config = load_config(config_path)
    if configure_logging:
        setup_logging(
            log_level=config.logging.level,
            log_dir=config.logging.log_dir,
            enable_file_logging=config.logging.enable_file_logging,
            structured_json=config.logging.structured_json,
        )
    try:
        controller = BridgeController.create(config, store)
    except BaseError as exc:
        logger.error("Bridge startup failed: %s", exc.to_dict())
        raise
    logger.info("Bridge ready (transport=%s)", controller.transport.name)
    return controller
