"""
Configuration import/export for playback control settings.

Saves and loads ``ControlsConfig`` to/from YAML files.
"""

from __future__ import annotations

import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

import yaml

from src.clipdeck.config.settings import ControlsConfig, PlaybackIcons

logger = logging.getLogger(__name__)


def _known_keys(data: dict[str, Any], cls: type, section: str) -> dict[str, Any]:
    """Drop keys the dataclass does not define, warning about each one."""
    names = {f.name for f in fields(cls)}
    known = {}
    for key, value in data.items():
        if key in names:
            known[key] = value
        else:
            logger.warning(f"Ignoring unknown {section} key: {key}")
    return known


def controls_config_from_dict(data: dict[str, Any] | None) -> ControlsConfig:
    """
    Build a ``ControlsConfig`` from a plain dictionary.

    Parameters
    ----------
    data : dict[str, Any] | None
        Mapping as produced by ``ControlsConfig.to_dict()``. Missing keys keep
        their defaults.

    Returns
    -------
    ControlsConfig
        Validated configuration

    Raises
    ------
    ValueError
        If a value fails validation (e.g. an unknown output format)
    """
    if not data:
        return ControlsConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping, got {type(data).__name__}")

    values = _known_keys(data, ControlsConfig, "controls")
    icons = values.pop("icons", None)
    if icons:
        values["icons"] = PlaybackIcons(**_known_keys(icons, PlaybackIcons, "icons"))
    return ControlsConfig(**values)


def save_controls_config(config: ControlsConfig, output_path: Path | str) -> None:
    """
    Export controls configuration to a YAML file.

    Parameters
    ----------
    config : ControlsConfig
        Configuration to write
    output_path : Path | str
        Path to output YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.to_dict(),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )

    logger.info(f"Exported controls config to {output_path}")


def load_controls_config(input_path: Path | str) -> ControlsConfig:
    """
    Import controls configuration from a YAML file.

    Parameters
    ----------
    input_path : Path | str
        Path to input YAML file

    Returns
    -------
    ControlsConfig
        Loaded configuration; an empty file gives the defaults

    Raises
    ------
    FileNotFoundError
        If the file does not exist
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise FileNotFoundError(f"Config file not found: {input_path}")

    with open(input_path, encoding="utf-8") as f:
        import_data = yaml.safe_load(f)

    if not import_data:
        logger.warning(f"Empty config file, using defaults: {input_path}")

    config = controls_config_from_dict(import_data)
    logger.info(f"Imported controls config from {input_path}")
    return config
