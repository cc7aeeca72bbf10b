"""
Settings file parser for the route planner
Handles YAML and JSON settings files with validation
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError

from routeplanner.core.exceptions import ConfigError

from .models import ConfigFormat, Settings

API_KEY_ENV = "ORS_API_KEY"

_SUFFIXES = {
    '.yaml': ConfigFormat.YAML,
    '.yml': ConfigFormat.YAML,
    '.json': ConfigFormat.JSON,
}

_KEY_HINT = f"# api_key is read from the {API_KEY_ENV} environment variable when not set here\n"


class SettingsParser:
    """Parser for route planner settings files"""

    @staticmethod
    def detect_format(file_path: Path) -> ConfigFormat:
        """Detect settings file format from extension"""
        suffix = file_path.suffix.lower()
        try:
            return _SUFFIXES[suffix]
        except KeyError:
            raise ConfigError(f"Unsupported file format: {suffix}")

    @staticmethod
    def load_file(file_path: Path) -> Dict[str, Any]:
        """Load settings file content; an empty YAML file reads as no overrides"""
        if not file_path.exists():
            raise ConfigError(f"Settings file not found: {file_path}")

        format_type = SettingsParser.detect_format(file_path)

        try:
            content = file_path.read_text(encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Error reading file: {e}")

        try:
            if format_type == ConfigFormat.YAML:
                data = yaml.safe_load(content) or {}
            else:
                data = json.loads(content)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigError(f"Invalid {format_type.value.upper()} syntax: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Settings file must contain a mapping: {file_path}")
        return data

    @staticmethod
    def save_file(settings: Settings, file_path: Path) -> None:
        """
        Save settings to file

        The API key is never written; it belongs in the environment.
        YAML files start with a comment naming the variable.
        """
        format_type = SettingsParser.detect_format(file_path)
        settings_dict = settings.model_dump(exclude={"api_key"}, exclude_none=True, mode='json')

        if format_type == ConfigFormat.YAML:
            content = _KEY_HINT + yaml.dump(
                settings_dict,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                indent=2
            )
        else:
            content = json.dumps(settings_dict, indent=2, ensure_ascii=False)

        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content, encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"Error saving file: {e}")

    @staticmethod
    def parse_settings(data: Dict[str, Any]) -> Settings:
        """Build Settings from dictionary data"""
        try:
            return Settings(**data)
        except ValidationError as e:
            raise ConfigError(f"Settings validation failed: {e}")

    @staticmethod
    def parse_file(file_path: Union[str, Path]) -> Settings:
        """
        Parse a settings file

        Args:
            file_path: Path to YAML or JSON settings file

        Returns:
            Settings instance

        Raises:
            ConfigError: If loading or validation fails
        """
        raw_data = SettingsParser.load_file(Path(file_path))
        return SettingsParser.parse_settings(raw_data)

    @staticmethod
    def create_template(path: Path, overwrite: bool = False) -> Path:
        """Write a settings template holding every default"""
        if path.exists() and not overwrite:
            raise ConfigError(
                f"Settings file already exists: {path}. Use overwrite=True to replace it."
            )
        SettingsParser.save_file(Settings(), path)
        return path


def load_settings(file_path: Optional[Union[str, Path]] = None) -> Settings:
    """
    Load settings from an optional file, then fill the API key from the environment

    A key given in the file wins over ORS_API_KEY.
    """
    settings = SettingsParser.parse_file(file_path) if file_path else Settings()

    if not settings.api_key:
        env_key = os.getenv(API_KEY_ENV)
        if env_key:
            settings = settings.model_copy(update={"api_key": env_key})

    return settings
