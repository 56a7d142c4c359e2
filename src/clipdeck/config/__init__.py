"""Configuration module for ClipDeck."""

from src.clipdeck.config.io import (
    controls_config_from_dict,
    load_controls_config,
    save_controls_config,
)
from src.clipdeck.config.settings import AttachOptions, ControlsConfig, PlaybackIcons


__all__ = [
    "AttachOptions",
    "ControlsConfig",
    "PlaybackIcons",
    "controls_config_from_dict",
    "load_controls_config",
    "save_controls_config",
]
