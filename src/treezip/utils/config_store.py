import os
import json
import platform
from pathlib import Path
from typing import Any, Dict
from treezip.constants import SETTINGS_KEYS
from treezip.errors import ConfigError

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


class ConfigStore:
    def __init__(self):
        self.base_dir = self._get_config_dir()
        self.settings_file = self.base_dir / "settings.json"
        self._ensure_config_dir()

    def _get_config_dir(self) -> Path:
        """Get platform-specific config directory"""
        system = platform.system()
        if system == "Windows":
            base_dir = os.environ.get("APPDATA", "")
            return Path(base_dir) / "treezip"
        elif system == "Darwin":  # macOS
            return Path.home() / "Library" / "Application Support" / "treezip"
        else:  # Linux and others
            xdg_config = os.environ.get("XDG_CONFIG_HOME", "")
            if xdg_config:
                return Path(xdg_config) / "treezip"
            return Path.home() / ".treezip"

    def _ensure_config_dir(self):
        """Ensure config directory exists"""
        os.makedirs(self.base_dir, exist_ok=True)

    def get_settings(self) -> Dict[str, Any]:
        """Get persisted export defaults"""
        if not self.settings_file.exists():
            return {}
        try:
            with open(self.settings_file, "r", encoding="utf-8") as f:
                settings = json.load(f)
        except (json.JSONDecodeError, IOError):
            return {}
        return settings if isinstance(settings, dict) else {}

    def save_settings(self, settings: Dict[str, Any]) -> None:
        """Replace the persisted settings"""
        unknown = [key for key in settings if key not in SETTINGS_KEYS]
        if unknown:
            raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

        with open(self.settings_file, "w", encoding="utf-8") as f:
            json.dump(settings, f, indent=2)

    def update_setting(self, key: str, value: str) -> Any:
        """Parse and store a single setting, returning the stored value"""
        parsed = parse_setting_value(key, value)
        settings = self.get_settings()
        settings[key] = parsed
        self.save_settings(settings)
        return parsed

    def reset_settings(self) -> None:
        """Remove all persisted settings"""
        if self.settings_file.exists():
            self.settings_file.unlink()


def parse_setting_value(key: str, value: str) -> Any:
    """
    Convert a command line value to the type stored for a setting.

    Raises:
        ConfigError: If the key is unknown or the value is invalid
    """
    if key not in SETTINGS_KEYS:
        raise ConfigError(
            f"Unknown setting '{key}'. Valid settings: {', '.join(SETTINGS_KEYS)}"
        )

    if key == "add_export_btn":
        lowered = value.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise ConfigError(f"Setting '{key}' expects true or false, got '{value}'")

    if key == "log_level":
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
            raise ConfigError(f"Invalid log level '{value}'")
        return level

    if not value:
        raise ConfigError(f"Setting '{key}' cannot be empty")
    return value
