"""Load, validate and write the userlist YAML configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from pydantic import ValidationError

from .errors import ConfigError
from .models.config import UserlistConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "userlist.yml"

_OUTPUT_KEYS = ("out_file", "collisions_file", "uidmap_file")


def expand_tilde(value: str) -> str:
    if value == "~" or value.startswith("~/"):
        return os.path.expanduser(value)
    return value


def _check_writable(path: str) -> None:
    """Open *path* for append, then remove it and any directories made for it."""
    target = Path(path)
    existed = target.exists()
    created = []
    for parent in target.parents:
        if parent.exists():
            break
        created.append(parent)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "a", encoding="utf-8"):
            pass
    except OSError as exc:
        raise ConfigError(f"Output file {path} is not writable: {exc}") from exc
    finally:
        if not existed and target.is_file():
            target.unlink()
        # deepest first
        for directory in created:
            if directory.is_dir() and not any(directory.iterdir()):
                directory.rmdir()


def load_config(path: str | Path, *, check_outputs: bool = True) -> UserlistConfig:
    cfg_path = Path(path).expanduser()
    try:
        with open(cfg_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Unable to read config {cfg_path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Invalid config file: {cfg_path} (expected YAML mapping)")

    try:
        config = UserlistConfig.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {cfg_path}: {exc}") from exc

    # These cannot be guessed
    if not config.server_list:
        raise ConfigError("server_list is not defined")
    if not config.ssh_user:
        raise ConfigError("ssh_user is not defined")

    config.loglevel = config.loglevel.strip().lower() or "info"
    for key in _OUTPUT_KEYS:
        setattr(config, key, expand_tilde(getattr(config, key)))
    if config.logfile:
        config.logfile = expand_tilde(config.logfile)
    if isinstance(config.server_list, str):
        config.server_list = expand_tilde(config.server_list)
    config.private_keys = [expand_tilde(k) for k in config.private_keys]

    if check_outputs:
        for key in _OUTPUT_KEYS:
            _check_writable(getattr(config, key))

    logger.debug("Loaded config from %s", cfg_path)
    return config


def write_config(config: UserlistConfig, path: str | Path) -> None:
    """Dump *config* as YAML, omitting unset optional keys."""
    data = config.model_dump(exclude_none=True)
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
