"""ROM Bridge - browser UI to emulation core bridge.

Manages ROMs and save states in a shared virtual filesystem and signals
load/save requests to the core through sentinel files.
"""

from .version import __version__
from .models import Direction, Directory, DirectoryView, Request, UploadPayload

__all__ = [
    "__version__",
    "Direction",
    "Directory",
    "DirectoryView",
    "Request",
    "UploadPayload",
]
