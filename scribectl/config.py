"""Configuration management for the scribectl application."""
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from dotenv import load_dotenv
from jsonschema import ValidationError as SchemaValidationError
from jsonschema import validate

from .errors import ConfigError

# Load environment variables from .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)

# Base name of the flag-defaults file looked up in the working directory
CONFIG_NAME = "scribe-config"
CONFIG_EXTENSIONS = (".yaml", ".yml")

# Flag names map to scalar values; nested structures are not flags
CONFIG_SCHEMA = {
    "type": "object",
    "additionalProperties": {
        "type": ["string", "number", "boolean", "null"]
    },
}


class Config:
    """Application configuration with sensible defaults."""

    # Explicit path to the flag-defaults file
    CONFIG_FILE: str = os.getenv("SCRIBE_CONFIG", "")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def find_config_file(directory: Optional[Union[str, Path]] = None) -> Optional[Path]:
    """Return the config file in ``directory`` (default: cwd), if there is one."""
    base = Path(directory) if directory else Path.cwd()
    for ext in CONFIG_EXTENSIONS:
        candidate = base / f"{CONFIG_NAME}{ext}"
        if candidate.is_file():
            return candidate
    return None


def load_config_file(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load flag defaults from the scribe config file.

    Lookup order:
    1. ``path`` (the ``--config`` flag)
    2. ``SCRIBE_CONFIG`` environment variable
    3. ``scribe-config.yaml`` / ``scribe-config.yml`` in the working directory

    An explicitly named file must exist. A discovered file that is absent is
    not an error and yields an empty mapping.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or is not a
            flat mapping of flag names to scalar values.
    """
    explicit = path or Config.CONFIG_FILE
    if explicit:
        config_path = Path(explicit).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")
    else:
        config_path = find_config_file()
        if config_path is None:
            logger.debug(f"No {CONFIG_NAME} file found, using flags and defaults only")
            return {}

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing config file {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Error reading config file {config_path}: {e}") from e

    if data is None:
        return {}

    try:
        validate(instance=data, schema=CONFIG_SCHEMA)
    except SchemaValidationError as ve:
        raise ConfigError(f"Invalid config file {config_path}: {ve.message}") from ve

    logger.debug(f"Loaded flag defaults from {config_path}")
    return data
