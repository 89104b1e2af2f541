"""Persistence module for saving and loading RenderOptions as YAML."""

import pathlib
from dataclasses import fields
from typing import Any, Dict, Union

import yaml
from PySide6.QtGui import QColor

from .config import RenderOptions
from .errors import ConfigError

_OPTION_NAMES = {f.name for f in fields(RenderOptions)}


def options_from_dict(data: Dict[str, Any], source: str = "<options>") -> RenderOptions:
    """Build RenderOptions from a mapping, rejecting unknown keys."""
    unknown = sorted(set(data) - _OPTION_NAMES)
    if unknown:
        raise ConfigError(f"unknown option(s): {', '.join(unknown)}", source)

    kwargs = dict(data)
    if 'debug' in kwargs and not isinstance(kwargs['debug'], bool):
        raise ConfigError(f"debug must be true or false, got {kwargs['debug']!r}", source)
    if 'font_family' in kwargs and not isinstance(kwargs['font_family'], str):
        raise ConfigError(f"font_family must be a string, got {kwargs['font_family']!r}", source)
    if 'trace_color' in kwargs:
        color = kwargs['trace_color']
        if not isinstance(color, str) or not QColor.isValidColorName(color):
            raise ConfigError(f"trace_color is not a valid color: {color!r}", source)
    if isinstance(kwargs.get('font_size'), bool):
        raise ConfigError(f"font_size must be a number, got {kwargs['font_size']!r}", source)

    try:
        if 'font_size' in kwargs:
            kwargs['font_size'] = float(kwargs['font_size'])
        return RenderOptions(**kwargs)
    except (TypeError, ValueError) as e:
        raise ConfigError(str(e), source) from e


def save_options(options: RenderOptions, path: Union[str, pathlib.Path]) -> None:
    """Serialize options to YAML."""
    with open(path, 'w') as f:
        yaml.safe_dump(options.to_dict(), f, default_flow_style=False, sort_keys=False)


def load_options(path: Union[str, pathlib.Path]) -> RenderOptions:
    """Deserialize options from YAML; an empty file gives the defaults."""
    with open(path, 'r') as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML: {e}", str(path)) from e

    if data is None:
        return RenderOptions()
    if not isinstance(data, dict):
        raise ConfigError("options file must contain a mapping", str(path))
    return options_from_dict(data, str(path))
