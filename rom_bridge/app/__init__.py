"""App-level services.

Upload, deletion and export services plus the controller that runs UI
commands against them. Callers (a browser UI glue layer, tests) only talk to
this package.
"""

from .commands import (
    Command,
    CommandOutcome,
    DeleteCommand,
    RequestLoadCommand,
    RequestSaveCommand,
    UploadCommand,
)
from .controller import BridgeController, ControllerState, start_bridge
from .deletion import DeletionService
from .export import ExportService
from .upload import INES_MAGIC, UploadIngestor, looks_like_ines

__all__ = [
    "BridgeController",
    "Command",
    "CommandOutcome",
    "ControllerState",
    "DeleteCommand",
    "DeletionService",
    "ExportService",
    "INES_MAGIC",
    "RequestLoadCommand",
    "RequestSaveCommand",
    "UploadCommand",
    "UploadIngestor",
    "looks_like_ines",
    "start_bridge",
]
