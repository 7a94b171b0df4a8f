"""Configuration loader for termtree.

This module provides the ConfigLoader class for loading, merging and
validating termtree settings from YAML files and environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from termtree.config.defaults import (
    PROJECT_CONFIG_NAMES,
    USER_CONFIG_DIR,
    USER_CONFIG_NAMES,
)
from termtree.config.validator import flatten_pydantic_errors
from termtree.lib.errors import ConfigError
from termtree.models.config import TermTreeConfig

logger = logging.getLogger(__name__)

# Environment variable to field name mapping
ENV_VAR_MAP = {
    "namespace_prefix": "TERMTREE_NAMESPACE_PREFIX",
    "data_type": "TERMTREE_DATA_TYPE",
    "strict_settings": "TERMTREE_STRICT_SETTINGS",
}


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (bool or str)
    """
    if field_name == "strict_settings":
        return value.lower() in ("true", "1", "yes", "on")
    return value


def _env_overrides(env_vars: os._Environ[str] | dict[str, str]) -> dict[str, Any]:
    """Collect config overrides from environment variables."""
    overrides: dict[str, Any] = {}
    for field_name, env_var_name in ENV_VAR_MAP.items():
        if env_var_name in env_vars:
            overrides[field_name] = _parse_env_value(
                field_name, env_vars[env_var_name]
            )
    return overrides


class ConfigLoader:
    """Loads and merges termtree configuration.

    This class handles:
    - Loading user configuration from ~/.termtree/config.yml|config.yaml
    - Loading project configuration from termtree.yml|termtree.yaml
    - Applying TERMTREE_* environment overrides
    - Converting validation errors into human-readable messages

    Precedence (highest to lowest): environment, project file, user file,
    built-in defaults.
    """

    def __init__(self) -> None:
        """Initialize the ConfigLoader with empty caches."""
        self._user_config_loaded = False
        self._user_config: dict[str, Any] | None = None
        self._project_configs: dict[str, dict[str, Any] | None] = {}

    def load_config(
        self,
        project_dir: str | None = None,
        env_vars: os._Environ[str] | dict[str, str] | None = None,
    ) -> TermTreeConfig:
        """Load the effective configuration.

        Args:
            project_dir: Directory holding termtree.yml|termtree.yaml
                (defaults to the current working directory)
            env_vars: Environment mapping (defaults to os.environ)

        Returns:
            Validated TermTreeConfig

        Raises:
            ConfigError: If a config file cannot be parsed or is invalid
        """
        merged: dict[str, Any] = {}

        user_config = self.load_user_config()
        if user_config:
            merged.update(user_config)

        project_config = self.load_project_config(project_dir or os.getcwd())
        if project_config:
            merged.update(project_config)

        merged.update(_env_overrides(os.environ if env_vars is None else env_vars))

        try:
            return TermTreeConfig(**merged)
        except PydanticValidationError as e:
            error_text = "\n".join(flatten_pydantic_errors(e))
            raise ConfigError(
                "config_validation",
                f"Invalid termtree configuration:\n{error_text}",
            ) from e

    def load_user_config(self) -> dict[str, Any] | None:
        """Load user configuration from ~/.termtree/config.yml|config.yaml.

        Results are cached after first load.
        """
        if self._user_config_loaded:
            return self._user_config

        result = self._load_config_file(
            Path.home() / USER_CONFIG_DIR,
            USER_CONFIG_NAMES,
            "user_config",
            "user configuration",
        )
        self._user_config = result
        self._user_config_loaded = True
        return result

    def load_project_config(self, project_dir: str) -> dict[str, Any] | None:
        """Load project configuration, cached per project_dir."""
        if project_dir in self._project_configs:
            return self._project_configs[project_dir]

        result = self._load_config_file(
            Path(project_dir),
            PROJECT_CONFIG_NAMES,
            "project_config",
            "project configuration",
        )
        self._project_configs[project_dir] = result
        return result

    def _load_config_file(
        self,
        config_dir: Path,
        file_names: tuple[str, str],
        error_code: str,
        config_name: str,
    ) -> dict[str, Any] | None:
        """Load a configuration file from directory with .yml/.yaml preference.

        Args:
            config_dir: Directory to search for config files
            file_names: Preferred (.yml) and fallback (.yaml) file names
            error_code: Error code prefix for error messages
            config_name: Human-readable config name for error messages

        Returns:
            Raw configuration mapping, or None if no config file exists

        Raises:
            ConfigError: If YAML parsing fails or the file is not a mapping
        """
        yml_path = config_dir / file_names[0]
        yaml_path = config_dir / file_names[1]

        config_path = None
        if yml_path.exists():
            config_path = yml_path
            if yaml_path.exists():
                logger.info(
                    f"Both {yml_path} and {yaml_path} exist. "
                    f"Using {yml_path} (prefer .yml extension)."
                )
        elif yaml_path.exists():
            config_path = yaml_path

        if config_path is None:
            return None

        try:
            content = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(
                f"{error_code}_parse",
                f"Failed to parse {config_name} at {config_path}: {str(e)}",
            ) from e
        except OSError as e:
            raise ConfigError(
                f"{error_code}_read",
                f"Failed to read {config_name} at {config_path}: {str(e)}",
            ) from e

        if not content:
            return None
        if not isinstance(content, dict):
            raise ConfigError(
                f"{error_code}_validation",
                f"Invalid {config_name} in {config_path}: expected a mapping",
            )

        logger.debug(f"Loaded {config_name} from {config_path}")
        return content


def load_config(project_dir: str | None = None) -> TermTreeConfig:
    """One-call helper returning the effective configuration."""
    return ConfigLoader().load_config(project_dir)
