"""Application constants and configuration defaults."""

from pathlib import Path

# Application metadata
APP_NAME = "xpfctl"
APP_VERSION = "1.0.0"

# Paths
CONFIG_DIR = Path("/etc/xpfctl")
CONFIG_FILE = CONFIG_DIR / "config.yaml"
LOG_FILE = Path("/var/log/xpfctl.log")
SYSTEMD_UNIT_DIR = Path("/etc/systemd/system")
HELPER_DIR = Path("/usr/local/bin")

# Proxy artifacts
DEFAULT_REPO_URL = "https://raw.githubusercontent.com/1kst/xpf/main"
DEFAULT_SERVICE_NAME = "xpf"
DEFAULT_INSTALL_DIR = Path("/etc/xpf")
DEFAULT_EXECUTABLE_NAME = "sni-proxy-server"
DEFAULT_CONFIG_NAME = "config.yaml"

# systemd unit-name characters, no templates or escapes
SERVICE_NAME_PATTERN = r"[A-Za-z0-9:_-][A-Za-z0-9:_.-]*"

# File modes
EXECUTABLE_MODE = 0o755  # rwxr-xr-x
CONFIG_MODE = 0o644      # rw-r--r--
HELPER_MODE = 0o755

# Unit defaults
DEFAULT_SERVICE_USER = "root"
DEFAULT_RESTART_DELAY = 5  # seconds
DEFAULT_OPEN_FILES_LIMIT = 65535

# Default settings
DEFAULT_LOG_LINES = 100
FETCH_USER_AGENT = f"{APP_NAME}/{APP_VERSION}"

# Status styles (rich markup) for visual indicators
STATUS_COLORS = {
    "active": "bold green",
    "inactive": "grey50",
    "failed": "bold red",
    "activating": "yellow",
    "deactivating": "yellow",
    "unknown": "grey50"
}
