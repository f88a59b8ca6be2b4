from __future__ import annotations

import pytest

from rom_bridge.channel import QueueTransport, RequestChannel, SentinelFileTransport, build_transport, sentinel_for
from rom_bridge.exceptions import InvalidRequestError, NotFoundError
from rom_bridge.models import Direction, Directory, Request
from rom_bridge.storage import VirtualFileStore


@pytest.fixture
def channel(store: VirtualFileStore) -> RequestChannel:
    return RequestChannel(SentinelFileTransport(store))


def test_submit_writes_exact_utf8_bytes(store: VirtualFileStore, channel: RequestChannel) -> None:
    channel.submit(Directory.SAVES, Direction.SAVE, "slot1.sav")
    assert store.read("saves", ".save_request") == "slot1.sav".encode("utf-8")

    channel.submit(Directory.ROMS, Direction.LOAD, "Super Mário Bros.nes")
    assert store.read("roms", ".load_request").decode("utf-8") == "Super Mário Bros.nes"


def test_second_submit_replaces_unconsumed_first(store: VirtualFileStore, channel: RequestChannel) -> None:
    channel.submit(Directory.SAVES, Direction.LOAD, "first.sav")
    channel.submit(Directory.SAVES, Direction.LOAD, "second.sav")

    # The first request is gone without any signal.
    assert store.read("saves", ".load_request") == b"second.sav"
    pending = channel.pending(Directory.SAVES, Direction.LOAD)
    assert pending == Request(Direction.LOAD, Directory.SAVES, "second.sav")


def test_slots_are_independent(store: VirtualFileStore, channel: RequestChannel) -> None:
    channel.request_rom_load("mario.nes")
    channel.request_state_load("slot2.sav")
    channel.request_state_save("slot3.sav")

    assert store.read("roms", ".load_request") == b"mario.nes"
    assert store.read("saves", ".load_request") == b"slot2.sav"
    assert store.read("saves", ".save_request") == b"slot3.sav"


def test_submit_returns_request(channel: RequestChannel) -> None:
    request = channel.submit("saves", "save", "slot1.sav")
    assert request.direction is Direction.SAVE
    assert request.directory is Directory.SAVES
    assert request.sentinel_path == "saves/.save_request"
    assert request.target_path == "saves/slot1.sav"


def test_rom_save_is_not_a_valid_request(store: VirtualFileStore, channel: RequestChannel) -> None:
    with pytest.raises(InvalidRequestError) as exc_info:
        channel.submit(Directory.ROMS, Direction.SAVE, "mario.nes")
    assert exc_info.value.error_code == "INVALID_REQUEST"
    assert not store.exists("roms", ".save_request")


@pytest.mark.parametrize("target", ["", "   "])
def test_empty_target_rejected(channel: RequestChannel, target: str) -> None:
    with pytest.raises(InvalidRequestError):
        channel.submit(Directory.SAVES, Direction.LOAD, target)


def test_unknown_directory_rejected() -> None:
    with pytest.raises(InvalidRequestError):
        sentinel_for("tmp", Direction.LOAD)  # type: ignore[arg-type]


def test_pending_is_none_without_request(channel: RequestChannel) -> None:
    assert channel.pending(Directory.ROMS, Direction.LOAD) is None


def test_sentinel_receive_consumes(store: VirtualFileStore) -> None:
    transport = SentinelFileTransport(store)
    transport.send(Request(Direction.LOAD, Directory.ROMS, "mario.nes"))

    received = transport.receive(Directory.ROMS, Direction.LOAD)

    assert received is not None and received.target_name == "mario.nes"
    assert not store.exists("roms", ".load_request")
    assert transport.receive(Directory.ROMS, Direction.LOAD) is None


def test_queue_transport_keeps_every_request_in_order(store: VirtualFileStore) -> None:
    transport = QueueTransport(store, mirror_sentinels=False)
    channel = RequestChannel(transport)

    channel.request_state_load("first.sav")
    channel.request_state_load("second.sav")

    assert transport.pending_count(Directory.SAVES, Direction.LOAD) == 2
    assert transport.receive(Directory.SAVES, Direction.LOAD).target_name == "first.sav"
    assert transport.receive(Directory.SAVES, Direction.LOAD).target_name == "second.sav"
    assert transport.receive(Directory.SAVES, Direction.LOAD) is None
    assert not store.exists("saves", ".load_request")


def test_queue_transport_mirrors_latest_to_sentinel(store: VirtualFileStore) -> None:
    transport = QueueTransport(store, mirror_sentinels=True)
    transport.send(Request(Direction.SAVE, Directory.SAVES, "a.sav"))
    transport.send(Request(Direction.SAVE, Directory.SAVES, "b.sav"))

    assert store.read("saves", ".save_request") == b"b.sav"

    transport.receive(Directory.SAVES, Direction.SAVE)
    assert store.read("saves", ".save_request") == b"b.sav"

    transport.receive(Directory.SAVES, Direction.SAVE)
    assert not store.exists("saves", ".save_request")


def test_queue_mirror_needs_store() -> None:
    with pytest.raises(ValueError):
        QueueTransport(None, mirror_sentinels=True)


def test_build_transport(store: VirtualFileStore) -> None:
    assert isinstance(build_transport("sentinel", store), SentinelFileTransport)
    assert isinstance(build_transport("queue", store), QueueTransport)
    with pytest.raises(ValueError):
        build_transport("carrier-pigeon", store)


def test_submit_replaces_undecodable_sentinel(store: VirtualFileStore, channel: RequestChannel) -> None:
    store.write("saves", ".save_request", b"\xff\xfe")

    channel.submit(Directory.SAVES, Direction.SAVE, "slot1.sav")

    assert store.read("saves", ".save_request") == b"slot1.sav"


def test_failed_mirror_write_leaves_nothing_queued() -> None:
    transport = QueueTransport(VirtualFileStore(), mirror_sentinels=True)

    with pytest.raises(NotFoundError):
        transport.send(Request(Direction.LOAD, Directory.ROMS, "mario.nes"))

    assert transport.pending_count(Directory.ROMS, Direction.LOAD) == 0
    assert transport.peek(Directory.ROMS, Direction.LOAD) is None
