"""Configuration manager for installer settings."""

import logging
import re
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from ..models.install import InstallationTarget
from ..models.service import ServiceDefinition
from ..utils.constants import (
    CONFIG_FILE,
    DEFAULT_CONFIG_NAME,
    DEFAULT_EXECUTABLE_NAME,
    DEFAULT_INSTALL_DIR,
    DEFAULT_LOG_LINES,
    DEFAULT_OPEN_FILES_LIMIT,
    DEFAULT_REPO_URL,
    DEFAULT_RESTART_DELAY,
    DEFAULT_SERVICE_NAME,
    DEFAULT_SERVICE_USER,
    HELPER_DIR,
    SERVICE_NAME_PATTERN,
    SYSTEMD_UNIT_DIR,
)

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = {
    "repo_url": DEFAULT_REPO_URL,
    "service_name": DEFAULT_SERVICE_NAME,
    "install_dir": str(DEFAULT_INSTALL_DIR),
    "executable_name": DEFAULT_EXECUTABLE_NAME,
    "config_name": DEFAULT_CONFIG_NAME,
    "unit_dir": str(SYSTEMD_UNIT_DIR),
    "helper_dir": str(HELPER_DIR),
    "install_helper": True,
    "restart_delay": DEFAULT_RESTART_DELAY,
    "open_files_limit": DEFAULT_OPEN_FILES_LIMIT,
    "description": None,
    "user": DEFAULT_SERVICE_USER,
    "staging_dir": None,
    "log_lines": DEFAULT_LOG_LINES,
}

REQUIRED_STRING_SETTINGS = (
    "repo_url", "service_name", "install_dir", "executable_name",
    "config_name", "unit_dir", "helper_dir", "user",
)
OPTIONAL_STRING_SETTINGS = ("description", "staging_dir")
INTEGER_SETTINGS = ("restart_delay", "open_files_limit", "log_lines")


class ConfigManager:
    """Manages installer settings: paths, names and unit parameters."""

    CONFIG_VERSION = "1.0"

    def __init__(self, config_file: Optional[Path] = None):
        """Initialize the config manager.

        Args:
            config_file: YAML file to load, the system config file by default
        """
        self.config_file = Path(config_file) if config_file else CONFIG_FILE
        self.settings: Dict[str, Any] = {}
        self._ensure_default_settings()

    def load_config(self) -> bool:
        """Load configuration from file.

        Returns:
            True if config loaded successfully, False if defaults are in use
        """
        if not self.config_file.exists():
            logger.debug(f"Config file {self.config_file} not found, using defaults")
            self._load_defaults()
            return False

        try:
            with open(self.config_file, 'r') as f:
                data = yaml.safe_load(f)

            if not data:
                logger.warning("Empty config file, using defaults")
                self._load_defaults()
                return False

            if not self._validate_config(data):
                logger.error("Invalid config file, using defaults")
                self._load_defaults()
                return False

            self.settings = {}
            for key, value in data.get("settings", {}).items():
                if key not in DEFAULT_SETTINGS:
                    logger.warning(f"Ignoring unknown setting: {key}")
                    continue
                self.settings[key] = value
            self._ensure_default_settings()

            logger.info(f"Loaded settings from {self.config_file}")
            return True

        except yaml.YAMLError as e:
            logger.error(f"YAML parsing error: {e}")
            self._load_defaults()
            return False
        except OSError as e:
            logger.error(f"Failed to load config: {e}")
            self._load_defaults()
            return False

    def dump_config(self) -> str:
        """Render the effective settings as YAML.

        Returns:
            YAML document accepted by load_config
        """
        data = {
            "version": self.CONFIG_VERSION,
            "settings": self.settings
        }
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False)

    def get_setting(self, key: str, default: Any = None) -> Any:
        """Get a setting value.

        Args:
            key: Setting key
            default: Default value if key not found

        Returns:
            Setting value or default
        """
        return self.settings.get(key, default)

    def set_setting(self, key: str, value: Any):
        """Override a setting for this run.

        Args:
            key: Setting key
            value: Setting value
        """
        if key not in DEFAULT_SETTINGS:
            raise KeyError(f"Unknown setting: {key}")
        self.settings[key] = value

    def build_target(self) -> InstallationTarget:
        """Build the installation target from the current settings."""
        return InstallationTarget(
            install_dir=Path(self.settings["install_dir"]),
            executable_name=self.settings["executable_name"],
            config_name=self.settings["config_name"],
            service_name=self.settings["service_name"],
        )

    def build_service_definition(self) -> ServiceDefinition:
        """Build the unit parameters from the current settings."""
        target = self.build_target()
        return ServiceDefinition(
            service_name=target.service_name,
            executable_path=target.artifact_path,
            working_directory=target.install_dir,
            config_path=target.config_path,
            description=self.settings["description"] or "",
            user=self.settings["user"],
            restart_delay=int(self.settings["restart_delay"]),
            open_files_limit=int(self.settings["open_files_limit"]),
        )

    def _validate_config(self, data: dict) -> bool:
        """Validate configuration data structure.

        Args:
            data: Configuration dictionary

        Returns:
            True if valid, False otherwise
        """
        if not isinstance(data, dict):
            logger.error("Config must be a dictionary")
            return False

        if "version" not in data:
            logger.warning("Config missing version, assuming valid")

        settings = data.get("settings", {})
        if not isinstance(settings, dict):
            logger.error("Settings must be a dictionary")
            return False

        for key in REQUIRED_STRING_SETTINGS:
            if key in settings and not (isinstance(settings[key], str) and settings[key]):
                logger.error(f"Setting '{key}' must be a non-empty string")
                return False

        for key in OPTIONAL_STRING_SETTINGS:
            if settings.get(key) is not None and not isinstance(settings[key], str):
                logger.error(f"Setting '{key}' must be a string")
                return False

        if "service_name" in settings and not re.fullmatch(SERVICE_NAME_PATTERN, settings["service_name"]):
            logger.error(f"Setting 'service_name' is not a valid unit name: {settings['service_name']!r}")
            return False

        # bool is a subclass of int
        for key in INTEGER_SETTINGS:
            value = settings.get(key)
            if key in settings and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                logger.error(f"Setting '{key}' must be a non-negative integer")
                return False

        if "install_helper" in settings and not isinstance(settings["install_helper"], bool):
            logger.error("Setting 'install_helper' must be true or false")
            return False

        return True

    def _load_defaults(self):
        """Load default configuration."""
        self.settings = {}
        self._ensure_default_settings()
        logger.debug("Loaded default configuration")

    def _ensure_default_settings(self):
        """Ensure all default settings exist."""
        for key, value in DEFAULT_SETTINGS.items():
            if key not in self.settings:
                self.settings[key] = value
