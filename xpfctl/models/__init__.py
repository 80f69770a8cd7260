"""Data models for proxy installation and service management."""

from .service import LifecycleAction, ServiceDefinition, ServiceStatus
from .install import InstallationOutcome, InstallationTarget, InstallStage

__all__ = [
    "LifecycleAction",
    "ServiceDefinition",
    "ServiceStatus",
    "InstallationOutcome",
    "InstallationTarget",
    "InstallStage",
]
