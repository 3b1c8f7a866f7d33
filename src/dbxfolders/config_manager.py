import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union
import logging


class ConfigManager:
    """
    Layered YAML configuration: a required base file plus optional user settings.
    Values are looked up with dot paths, e.g. 'dropbox.hosts.api'.
    """

    def __init__(self, base_config_path: Union[str, Path] = 'config.yml'):
        self.logger = logging.getLogger(__name__)
        self.base_config_path = Path(base_config_path)
        self.config: Dict[str, Any] = self._load_yaml(self.base_config_path)
        if not self.config:
            self.logger.critical(f"🛑 Base configuration '{self.base_config_path}' not found or empty.")
            raise FileNotFoundError(f"Base configuration '{self.base_config_path}' not found or was empty.")

        self.settings: Dict[str, Any] = {} # Loaded later by load_settings()
        self.settings_path: Optional[Path] = None

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> 'ConfigManager':
        """Builds a ConfigManager from an in-memory mapping instead of a file."""
        instance = cls.__new__(cls)
        instance.logger = logging.getLogger(__name__)
        instance.base_config_path = Path('<memory>')
        instance.config = dict(config)
        instance.settings = {}
        instance.settings_path = None
        return instance

    def _load_yaml(self, file_path: Path) -> Dict[str, Any]:
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            if file_path == self.base_config_path:
                self.logger.error(f"🛑 Base configuration file not found: {file_path}")
            else:
                self.logger.warning(f"🟡 Settings file not found (this may be normal): {file_path}")
            return {}
        except yaml.YAMLError as e:
            self.logger.error(f"🛑 Error parsing YAML file {file_path}: {e}")
            if file_path == self.base_config_path:
                raise # Critical for base config
            return {}

        if data is None:
            self.logger.warning(f"🟡 Configuration file is empty: {file_path}")
            return {}
        if not isinstance(data, dict):
            self.logger.error(f"🛑 Configuration file content is not a dictionary: {file_path}")
            raise ValueError(f"Invalid format in {file_path}: Expected a dictionary.")
        return data

    def get(self, key_path: str, default: Optional[Any] = None) -> Any:
        """
        Get a configuration value.
        Searches settings first, then base config.
        """
        value = self._get_value_from_dict(self.settings, key_path)
        if value is not None:
            return value

        value = self._get_value_from_dict(self.config, key_path)
        if value is not None:
            return value

        return default

    def _get_value_from_dict(self, config_dict: Dict[str, Any], key_path: str) -> Optional[Any]:
        value: Any = config_dict
        for key in key_path.split('.'):
            if not isinstance(value, dict) or key not in value:
                return None
            value = value[key]
        return value

    def load_settings(self, settings_file_path: Union[str, Path]) -> None:
        """Loads user-specific settings layered over the base config."""
        self.settings_path = Path(settings_file_path)
        self.settings = self._load_yaml(self.settings_path)
        if not self.settings:
            self.logger.info(f"🟢 User settings file '{self.settings_path}' not found or empty. Using base config.")
        else:
            self.logger.info(f"🟢 User settings loaded from '{self.settings_path}'.")

    def save_settings(self) -> None:
        if not self.settings_path:
            self.logger.warning("🟡 Cannot save settings, path not set. Call load_settings first.")
            return

        self.settings_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.settings_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.settings, f, sort_keys=False, indent=2, allow_unicode=True)
        self.logger.info(f"🟢 Settings saved to '{self.settings_path}'.")

    def update_setting(self, key_path: str, value: Any) -> None:
        """Updates a setting in memory. Call save_settings() to persist it."""
        keys = key_path.split('.')
        current_level = self.settings

        for key in keys[:-1]:
            if not isinstance(current_level.get(key), dict):
                current_level[key] = {}
            current_level = current_level[key]

        current_level[keys[-1]] = value
        self.logger.debug(f"Updated setting '{key_path}' to '{value}' in memory.")
