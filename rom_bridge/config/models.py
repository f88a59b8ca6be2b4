from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class LayoutConfig(_BaseConfigModel):
    # Removed in this order, children before parents.
    prune_directories: List[str] = Field(default_factory=lambda: ["home/web_user", "home", "tmp"])
    seed_sandbox_defaults: bool = False

    @field_validator("prune_directories")
    @classmethod
    def _no_protected_dirs(cls, value: List[str]) -> List[str]:
        cleaned = [item.strip("/") for item in value if item and item.strip("/")]
        for item in cleaned:
            if item.split("/")[0] in ("roms", "saves"):
                raise ValueError(f"cannot prune the managed directory {item!r}")
        return cleaned


class ChannelConfig(_BaseConfigModel):
    transport: Literal["sentinel", "queue"] = "sentinel"
    mirror_sentinels: bool = True
    encoding: str = "utf-8"
    core_poll_interval: float = Field(default=0.25, gt=0)


class UploadsConfig(_BaseConfigModel):
    check_rom_header: bool = True
    rom_extensions: List[str] = Field(default_factory=lambda: [".nes"])


class LoggingConfig(_BaseConfigModel):
    level: str = "INFO"
    structured_json: Optional[bool] = None
    log_dir: Optional[str] = None
    enable_file_logging: bool = False


class BridgeConfig(_BaseConfigModel):
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    channel: ChannelConfig = Field(default_factory=ChannelConfig)
    uploads: UploadsConfig = Field(default_factory=UploadsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(payload: Dict[str, Any]) -> BridgeConfig:
    return cast(BridgeConfig, BridgeConfig.model_validate(payload or {}))
