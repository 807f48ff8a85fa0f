"""
Configuration loader for the devsetup package.

Loads configuration from, lowest to highest priority:
- Built-in defaults (ProvisionConfig)
- devsetup.yaml in the repository root, if present
- An explicit config file (--config, YAML or JSON)
"""

import json
from typing import Dict, Any, Optional
from pathlib import Path

import yaml
from pydantic import ValidationError

from devsetup.config.schema import ProvisionConfig
from devsetup.errors import ConfigError
from devsetup.utils.logger import logger

# The repository that ships the Brewfile and dotfiles/ next to this package.
DEFAULT_REPO_DIR = Path(__file__).resolve().parents[2]


class ConfigLoader:
    """Load configuration from various sources."""

    DEFAULT_CONFIG_FILE = "devsetup.yaml"

    def __init__(self, root_dir: Optional[str] = None):
        """
        Initialize the config loader.

        Args:
            root_dir: Repository root holding the Brewfile and dotfiles.
                Defaults to the checkout containing this package.
        """
        self.root_dir = Path(root_dir) if root_dir else DEFAULT_REPO_DIR

    def load_from_config_file(self, config_path: str) -> Optional[Dict[str, Any]]:
        """
        Load configuration from a YAML or JSON config file.

        Args:
            config_path: Path to the config file

        Returns:
            Configuration dictionary, or None if the file does not exist

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        path = Path(config_path)

        if not path.exists():
            return None

        try:
            with open(path, "r") as f:
                if path.suffix in [".yaml", ".yml"]:
                    data = yaml.safe_load(f)
                elif path.suffix == ".json":
                    data = json.load(f)
                else:
                    # Try to auto-detect format
                    content = f.read()
                    try:
                        data = json.loads(content)
                    except json.JSONDecodeError:
                        data = yaml.safe_load(content)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not read config file {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at the top level")
        return data

    def load_config(self, config_file: Optional[str] = None) -> ProvisionConfig:
        """
        Load configuration from all available sources.

        Args:
            config_file: Optional path to an explicit config file

        Returns:
            ProvisionConfig instance with merged configuration

        Raises:
            ConfigError: If a config file is missing, unreadable or invalid
        """
        config_data: Dict[str, Any] = {}

        # Repository default file (lowest priority after built-ins)
        default_file = self.root_dir / self.DEFAULT_CONFIG_FILE
        default_data = self.load_from_config_file(str(default_file))
        if default_data:
            logger.debug("config_file_loaded", path=str(default_file))
            _deep_merge(config_data, default_data)

        # Explicit config file (highest priority)
        if config_file:
            file_data = self.load_from_config_file(config_file)
            if file_data is None:
                raise ConfigError(f"Config file not found: {config_file}")
            logger.debug("config_file_loaded", path=config_file)
            _deep_merge(config_data, file_data)

        config_data.setdefault("repo_dir", str(self.root_dir))

        try:
            return ProvisionConfig(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def export_config(self, config: ProvisionConfig, output_path: str) -> None:
        """
        Export configuration to a file.

        Args:
            config: Configuration to export
            output_path: Path to output file (.yaml/.yml for YAML, JSON otherwise)
        """
        path = Path(output_path)
        data = config.model_dump(mode="json")

        with open(path, "w") as f:
            if path.suffix in [".yaml", ".yml"]:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            else:
                json.dump(data, f, indent=2)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge override into base in place; nested mappings are merged key by key."""
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
    return base
