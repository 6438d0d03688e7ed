"""Configuration loader — friendgraph.yml parsing, defaults and worker limits."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path

import yaml
from pydantic import ValidationError

from friendgraph.logger import logger
from friendgraph.model import FriendGraphConfig


def load_config(path: Path | None = None) -> FriendGraphConfig:
    """Load config from YAML file, or return defaults if no path given.

    Any problem with the file falls back to defaults with a warning. A
    separation worker count above the machine's CPU count is capped.
    """
    if path is None:
        logger.debug("No config file provided, using defaults")
        return FriendGraphConfig()

    raw = _read_mapping(path)
    if raw is None:
        return FriendGraphConfig()

    try:
        config = FriendGraphConfig.model_validate(raw)
    except ValidationError as e:
        logger.warning("Invalid config in %s: %s, using defaults", path, e)
        return FriendGraphConfig()

    return _cap_workers(config, path)


def _read_mapping(path: Path) -> dict[str, Any] | None:
    from pathlib import Path as _Path

    try:
        text = _Path(str(path)).read_text(encoding="utf-8")
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", path)
        return None
    except OSError as e:
        logger.warning("Cannot read config file %s: %s, using defaults", path, e)
        return None

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        logger.warning("Malformed YAML in %s: %s, using defaults", path, e)
        return None

    if raw is None:
        logger.debug("Config file %s is empty, using defaults", path)
        return None
    if not isinstance(raw, dict):
        logger.warning("Config file %s is not a YAML mapping, using defaults", path)
        return None
    return raw


def _cap_workers(config: FriendGraphConfig, path: Path) -> FriendGraphConfig:
    cpus = os.cpu_count() or 1
    requested = config.separation.workers
    if requested <= cpus:
        return config
    logger.warning(
        "separation.workers=%d in %s exceeds %d CPUs, capping", requested, path, cpus
    )
    separation = config.separation.model_copy(update={"workers": cpus})
    return config.model_copy(update={"separation": separation})
