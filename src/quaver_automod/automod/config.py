"""AutoMod thresholds and their loader.

Defaults come from ``AutoModConfig``; a YAML file and ``key=value`` overrides
are merged on top with OmegaConf, which also type-checks the values.

Usage:
    config = load_config("configs/automod.yaml", ["overlapping_objects_threshold=12"])
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when the AutoMod configuration is missing or invalid."""


@dataclass
class AutoModConfig:
    # A long note at most this long (ms) is considered too short
    short_long_note_threshold: int = 36
    # Two objects this close (ms) are considered overlapping
    overlapping_objects_threshold: int = 10


def load_config(
    path: Path | str | None = None,
    overrides: Sequence[str] = (),
) -> AutoModConfig:
    """Build an AutoModConfig from defaults, an optional YAML file and overrides.

    Args:
        path: Optional YAML file with any subset of the config keys.
        overrides: Dotlist overrides such as ``"short_long_note_threshold=40"``.

    Returns:
        The merged, validated config.

    Raises:
        ConfigError: If the file is missing or unreadable, a key is unknown, a value has the
            wrong type, or a threshold is negative.
    """
    cfg = OmegaConf.structured(AutoModConfig)

    try:
        if path is not None:
            path = Path(path)
            if not path.is_file():
                raise ConfigError(f"Config file not found: {path}")
            try:
                file_cfg = OmegaConf.load(path)
            except (yaml.YAMLError, OSError, UnicodeDecodeError) as e:
                raise ConfigError(f"Failed to read config {path}: {e}") from e
            cfg = OmegaConf.merge(cfg, file_cfg)
            logger.debug("Loaded AutoMod config from %s", path)

        if overrides:
            cfg = OmegaConf.merge(cfg, OmegaConf.from_dotlist(list(overrides)))

        config: AutoModConfig = OmegaConf.to_object(cfg)
    except OmegaConfBaseException as e:
        raise ConfigError(f"Invalid AutoMod config: {e}") from e

    _validate(config)
    return config


def _validate(config: AutoModConfig) -> None:
    errors: list[str] = []
    if config.short_long_note_threshold < 0:
        errors.append("  - short_long_note_threshold must be >= 0")
    if config.overlapping_objects_threshold < 0:
        errors.append("  - overlapping_objects_threshold must be >= 0")

    if errors:
        raise ConfigError("Invalid AutoMod config:\n" + "\n".join(errors))
