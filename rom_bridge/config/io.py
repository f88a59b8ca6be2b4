"""Config I/O utilities."""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import ConfigurationError, ValidationError
from .models import BridgeConfig, validate_config

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def _read_payload(config_path: str) -> Dict[str, Any]:
    with open(config_path, "r", encoding="utf-8") as f:
        raw = f.read()
    try:
        if config_path.lower().endswith(_YAML_SUFFIXES):
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Config file is not parseable: {exc}", file_path=config_path) from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Config root must be a mapping", file_path=config_path)
    return data


def load_config(config_path: Optional[str] = None) -> BridgeConfig:
    """Load and validate configuration; a missing file yields defaults."""
    if config_path is None or not os.path.exists(config_path):
        if config_path is not None:
            logger.info("Config file %s not found, using defaults", config_path)
        return BridgeConfig()
    payload = _read_payload(config_path)
    try:
        return validate_config(payload)
    except PydanticValidationError as exc:
        first = exc.errors()[0] if exc.errors() else {}
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        logger.warning("Config validation failed for %s: %s", config_path, exc)
        raise ValidationError(
            f"Invalid configuration: {first.get('msg', exc)}",
            field_name=field_name,
            file_path=config_path,
        ) from exc


def save_config(config: BridgeConfig, config_path: str) -> bool:
    try:
        directory = os.path.dirname(config_path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        data = config.model_dump(mode="json")
        with open(config_path, "w", encoding="utf-8") as f:
            if config_path.lower().endswith(_YAML_SUFFIXES):
                f.write(yaml.safe_dump(data, sort_keys=False, allow_unicode=True))
            else:
                json.dump(data, f, indent=2)
        return True
    except OSError as exc:
        logger.error("Could not save config to %s: %s", config_path, exc)
        return False
