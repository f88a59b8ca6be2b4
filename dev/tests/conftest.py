from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from rom_bridge.models import Directory, DirectoryView  # noqa: E402
from rom_bridge.storage import (  # noqa: E402
    DirectoryListingService,
    LayoutBootstrap,
    RefreshRegistry,
    VirtualFileStore,
)


@pytest.fixture
def store() -> VirtualFileStore:
    """Store with the sandbox defaults pruned and roms/saves created."""
    fs = VirtualFileStore()
    fs.seed_sandbox_defaults()
    LayoutBootstrap(fs).run()
    return fs


@pytest.fixture
def listing(store: VirtualFileStore) -> DirectoryListingService:
    return DirectoryListingService(store)


@pytest.fixture
def refresher(listing: DirectoryListingService) -> RefreshRegistry:
    return RefreshRegistry(listing)


@pytest.fixture
def refresh_log(refresher: RefreshRegistry) -> List[DirectoryView]:
    seen: List[DirectoryView] = []
    for directory in Directory:
        refresher.register(directory, seen.append)
    return seen
