"""Configuration loading and CLI overrides for runtime tunables.

Precedence, lowest to highest: ``Constants`` defaults, YAML config file,
CLI flags. A config file given explicitly must exist and parse; discovered
config files are optional.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or is malformed."""


def default_config_paths() -> List[str]:
    """Candidate config file locations, in lookup order."""
    paths = [os.path.join(os.getcwd(), name) for name in Constants.CONFIG_FILE_NAMES]
    xdg = os.environ.get(Constants.ENV_XDG_CONFIG_HOME) or os.path.join(
        os.path.expanduser("~"), ".config"
    )
    paths.extend(os.path.join(xdg, "depgraph", name) for name in Constants.CONFIG_FILE_NAMES)
    return paths


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """Load the YAML configuration.

    Args:
        config_path: Explicit path. When None the default locations are
            searched and the first existing file is used.

    Returns:
        Parsed configuration dict (empty when no file is found).

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML or its top
            level is not a mapping.
    """
    if config_path is None:
        config_path = next((p for p in default_config_paths() if os.path.isfile(p)), None)
        if config_path is None:
            return {}
    elif not os.path.isfile(config_path):
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Failed to load config {config_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config {config_path} must contain a mapping at the top level")
    logger.debug("Loaded config from %s", config_path)
    return data


def apply_config(config: Dict[str, Any]) -> None:
    """Apply the ``pipenv`` section of a loaded config onto ``Constants``.

    Raises:
        ConfigError: If a value has the wrong type.
    """
    section = config.get("pipenv") or {}
    if not isinstance(section, dict):
        raise ConfigError("'pipenv' config section must be a mapping")

    binary = section.get("binary")
    if binary is not None:
        if not isinstance(binary, str) or not binary.strip():
            raise ConfigError("'pipenv.binary' must be a non-empty string")
        Constants.PIPENV_BINARY = binary.strip()

    timeout = section.get("timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            raise ConfigError("'pipenv.timeout' must be a positive number")
        Constants.PIPENV_TIMEOUT_SEC = timeout


def apply_cli_overrides(args) -> None:
    """Apply CLI overrides; these win over the config file."""
    if getattr(args, "PIPENV_BINARY", None):
        Constants.PIPENV_BINARY = args.PIPENV_BINARY
    timeout = getattr(args, "PIPENV_TIMEOUT", None)
    if timeout is not None:
        if timeout <= 0:
            raise ConfigError("--timeout must be a positive number of seconds")
        Constants.PIPENV_TIMEOUT_SEC = timeout
