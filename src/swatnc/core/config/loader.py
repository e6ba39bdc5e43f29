# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2024-2026 SYMFLUENCE Team <dev@symfluence.org>

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml
from pydantic import ValidationError

from swatnc.core.config.models import ConverterConfig
from swatnc.core.exceptions import ConfigurationError

ENV_PREFIX = "SWATNC_"

# Legacy camelCase spellings from older command lines and YAML files
ALIAS_MAP = {
    "TXTINOUTDIR": "TXTINOUT_DIR",
    "CONVERTEDDIR": "CONVERTED_DIR",
    "CLIMATERESOLUTION": "CLIMATE_RESOLUTION",
    "SHAPEPATH": "SHAPE_PATH",
    "STOPDATE": "STOP_DATE",
    "RESOLUTION": "CLIMATE_RESOLUTION",
}


def load_config(
    path: Optional[Path] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    *,
    use_env: bool = True,
) -> ConverterConfig:
    """
    Load configuration with precedence: overrides > ENV vars > config file > defaults

    Args:
        path: Optional path to a YAML configuration file
        overrides: Dictionary of CLI/programmatic overrides
        use_env: Whether to read ``SWATNC_*`` environment variables

    Returns:
        Validated ``ConverterConfig``

    Raises:
        FileNotFoundError: If ``path`` is given but missing
        ConfigurationError: If the merged configuration is invalid
    """
    config: Dict[str, Any] = {}

    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            try:
                file_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationError(f"Could not parse {path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigurationError(f"Top level of {path} must be a mapping")
        config.update({_normalize_key(k): v for k, v in file_config.items()})

    if use_env:
        config.update(_load_env_overrides())

    if overrides:
        config.update({_normalize_key(k): v for k, v in overrides.items()})

    # None means "not set" so defaults and required-field checks apply
    clean_config = {k: v for k, v in config.items() if v is not None}

    try:
        return ConverterConfig(**clean_config)
    except ValidationError as e:
        raise ConfigurationError(_format_validation_error(e)) from e


def _load_env_overrides() -> Dict[str, Any]:
    """
    Load configuration overrides from environment variables.

    Values stay strings; pydantic coerces them to the field types.
    """
    env_overrides = {}

    for env_key, env_value in os.environ.items():
        if env_key.startswith(ENV_PREFIX):
            config_key = env_key[len(ENV_PREFIX):]
            value = env_value.strip()
            env_overrides[_normalize_key(config_key)] = (
                None if value.lower() in ('', 'none', 'null') else value
            )

    return env_overrides


def _normalize_key(key: str) -> str:
    key_upper = str(key).upper().replace('-', '_')
    return ALIAS_MAP.get(key_upper, key_upper)


def _format_validation_error(error: ValidationError) -> str:
    """
    Format a pydantic ValidationError as a readable block.

    Args:
        error: Pydantic ValidationError

    Returns:
        Message listing missing fields and invalid values
    """
    error_lines = ["=" * 70]
    error_lines.append("Configuration Validation Failed")
    error_lines.append("=" * 70)

    missing_fields = []
    invalid_values = []

    for err in error.errors():
        field_name = str(err['loc'][0]) if err['loc'] else 'unknown'
        if err['type'] == 'missing':
            missing_fields.append(field_name)
        else:
            invalid_values.append((field_name, err['msg']))

    if missing_fields:
        error_lines.append("\nMissing Required Fields:")
        error_lines.append("-" * 70)
        for field in missing_fields:
            error_lines.append(f"  ✗ {field}")

    if invalid_values:
        error_lines.append("\nInvalid Field Values:")
        error_lines.append("-" * 70)
        for field, msg in invalid_values:
            error_lines.append(f"  ✗ {field}: {msg}")

    return "\n".join(error_lines)
