"""Load/save request protocol between the UI bridge and the emulation core."""

from .core_mailbox import CoreMailbox
from .request_channel import RequestChannel
from .transport import (
    QueueTransport,
    RequestTransport,
    SentinelFileTransport,
    build_transport,
    sentinel_for,
)

__all__ = [
    "CoreMailbox",
    "QueueTransport",
    "RequestChannel",
    "RequestTransport",
    "SentinelFileTransport",
    "build_transport",
    "sentinel_for",
]
