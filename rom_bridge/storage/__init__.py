"""Shared virtual filesystem: store, startup layout and listings."""

from .layout import BootstrapReport, LayoutBootstrap
from .listing import DirectoryListingService, RefreshRegistry, is_hidden
from .virtual_store import SANDBOX_DEFAULT_DIRECTORIES, VirtualFileStore

__all__ = [
    "BootstrapReport",
    "DirectoryListingService",
    "LayoutBootstrap",
    "RefreshRegistry",
    "SANDBOX_DEFAULT_DIRECTORIES",
    "VirtualFileStore",
    "is_hidden",
]
