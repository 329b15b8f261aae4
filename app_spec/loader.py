"""
Read application configuration files from disk.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml

from .exceptions import ConfigFileError
from .models import AppConfig, load_app_config

logger = logging.getLogger(__name__)

YAML_SUFFIXES = ('.yml', '.yaml')
JSON_SUFFIXES = ('.json',)


def read_config_file(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Read a YAML or JSON configuration file into a dictionary.

    Raises:
        ConfigFileError: If the file is missing, unparsable, or not a mapping
    """
    path = Path(path)
    if not path.exists():
        raise ConfigFileError(f"Config file '{path}' not found")

    suffix = path.suffix.lower()
    if suffix not in YAML_SUFFIXES + JSON_SUFFIXES:
        raise ConfigFileError(f"Unsupported config file type '{suffix}' (expected YAML or JSON)")

    try:
        with open(path, encoding="utf-8") as f:
            if suffix in YAML_SUFFIXES:
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigFileError(f"Failed to parse '{path}': {e}") from e
    except OSError as e:
        raise ConfigFileError(f"Failed to read '{path}': {e}") from e

    if not isinstance(data, dict):
        raise ConfigFileError(f"Config file '{path}' must contain a mapping at the top level")

    logger.debug(f"Read config file {path}")
    return data


def load_config_file(path: Union[str, Path]) -> AppConfig:
    """Read and decode a configuration file. Schema rules are not checked here."""
    return load_app_config(read_config_file(path))
