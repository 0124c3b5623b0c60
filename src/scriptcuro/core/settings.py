#!/usr/bin/env python3
"""
SCRIPTCURO SETTINGS
-------------------
Immutable configuration shared by the preamble emitter and the construct
rules. Defaults reproduce the stock conversion output; a YAML file can
override individual keys.

Author: ScriptCuro Team
Date: 2026-10-19
"""

import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Tuple, Union

from ruamel.yaml import YAML, YAMLError

logger = logging.getLogger("scriptcuro.settings")


@dataclass(frozen=True)
class ConverterSettings:
    spark_app_name: str = "ConvertedScript"
    session_name: str = "spark"
    dataframe_name: str = "df"
    csv_header: bool = True
    unsupported_commands: Tuple[str, ...] = ("awk",)


def load_settings(path: Optional[Union[str, Path]] = None) -> ConverterSettings:
    """
    Builds settings from an optional YAML file.

    Raises:
        RuntimeError: if the file cannot be loaded or a value has the wrong type.
    """
    defaults = ConverterSettings()
    if path is None:
        return defaults

    config_path = Path(path)
    try:
        data = YAML(typ='safe').load(config_path.read_text(encoding='utf-8'))
    except (OSError, YAMLError) as e:
        logger.error(f"Unable to load settings from {config_path}")
        raise RuntimeError(f"Failed to load settings: {str(e)}")

    if data is None:
        return defaults
    if not isinstance(data, dict):
        raise RuntimeError(f"Failed to load settings: {config_path} is not a mapping")

    known = {f.name for f in fields(ConverterSettings)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            logger.warning(f"Ignoring unknown setting '{key}' in {config_path}")
            continue
        overrides[key] = _coerce(key, value, config_path)

    return replace(defaults, **overrides)


def _coerce(key: str, value, config_path: Path):
    """Checks one YAML value against the field type; RuntimeError on mismatch."""
    if key == "unsupported_commands":
        if value is None:
            return ()
        if isinstance(value, str):
            value = [value]
        if isinstance(value, list) and all(isinstance(cmd, str) for cmd in value):
            return tuple(cmd.strip() for cmd in value if cmd.strip())
        expected = "a command name or a list of command names"
    elif key == "csv_header":
        if isinstance(value, bool):
            return value
        expected = "true or false"
    else:
        if isinstance(value, str) and value.strip():
            return value
        expected = "a non-empty string"

    logger.error(f"Invalid value for '{key}' in {config_path}: {value!r}")
    raise RuntimeError(f"Failed to load settings: '{key}' must be {expected}, got {value!r}")
