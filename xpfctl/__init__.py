"""xpfctl - install and operate the xpf SNI proxy as a systemd service."""

from .utils.constants import APP_VERSION

__version__ = APP_VERSION
