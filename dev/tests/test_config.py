from __future__ import annotations

from pathlib import Path

import pydantic
import pytest

from rom_bridge.config import BridgeConfig, load_config, save_config, validate_config
from rom_bridge.exceptions import ConfigurationError, ValidationError


def test_defaults() -> None:
    config = BridgeConfig()
    assert config.layout.prune_directories == ["home/web_user", "home", "tmp"]
    assert config.channel.transport == "sentinel"
    assert config.uploads.check_rom_header is True
    assert config.logging.level == "INFO"


def test_missing_file_yields_defaults(tmp_path: Path) -> None:
    assert load_config(str(tmp_path / "absent.yaml")) == BridgeConfig()
    assert load_config(None) == BridgeConfig()


def test_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "bridge.yml"
    path.write_text(
        "layout:\n"
        "  prune_directories: [tmp]\n"
        "uploads:\n"
        "  check_rom_header: false\n",
        encoding="utf-8",
    )

    config = load_config(str(path))

    assert config.layout.prune_directories == ["tmp"]
    assert config.uploads.check_rom_header is False


def test_load_json(tmp_path: Path) -> None:
    path = tmp_path / "bridge.json"
    path.write_text('{"channel": {"transport": "queue", "mirror_sentinels": false}}', encoding="utf-8")

    config = load_config(str(path))

    assert config.channel.transport == "queue"
    assert config.channel.mirror_sentinels is False


def test_invalid_transport_raises_validation_error(tmp_path: Path) -> None:
    path = tmp_path / "bridge.yaml"
    path.write_text("channel:\n  transport: smoke-signals\n", encoding="utf-8")

    with pytest.raises(ValidationError) as exc_info:
        load_config(str(path))
    assert exc_info.value.details["field_name"] == "channel.transport"


def test_unparseable_file_raises(tmp_path: Path) -> None:
    path = tmp_path / "bridge.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(str(path))


def test_managed_directories_cannot_be_pruned() -> None:
    with pytest.raises(pydantic.ValidationError):
        validate_config({"layout": {"prune_directories": ["saves"]}})


def test_save_then_load_yaml(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "bridge.yaml"
    config = validate_config({"channel": {"transport": "queue"}, "logging": {"level": "DEBUG"}})

    assert save_config(config, str(path)) is True
    assert load_config(str(path)) == config
