"""Core functionality for proxy installation and service management."""

from .service_manager import LogFollower, ServiceManager
from .lifecycle import LifecycleController
from .config_manager import ConfigManager
from .fetcher import ArtifactFetcher
from .unit_writer import UnitWriter
from .helper_writer import HelperScriptWriter
from .installer import InstallOrchestrator
from .menu import MenuDispatcher

__all__ = [
    "LogFollower",
    "ServiceManager",
    "LifecycleController",
    "ConfigManager",
    "ArtifactFetcher",
    "UnitWriter",
    "HelperScriptWriter",
    "InstallOrchestrator",
    "MenuDispatcher",
]
