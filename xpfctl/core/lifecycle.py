"""Lifecycle controller: logical service actions bound to one unit."""

import logging
from typing import Optional, Tuple

from ..exceptions import ServiceManagerError
from ..models.service import ServiceStatus
from ..utils.constants import DEFAULT_LOG_LINES
from .service_manager import LogFollower, ServiceManager

logger = logging.getLogger(__name__)


class LifecycleController:
    """Translates start/stop/restart/status/logs into systemd operations.

    Both the install orchestrator and the operations menu talk to the host
    only through this class, so tests can hand them a fake instead.
    """

    def __init__(self, service_name: str, service_manager: Optional[ServiceManager] = None,
                 log_lines: int = DEFAULT_LOG_LINES):
        """Initialize the controller.

        Args:
            service_name: systemd unit name without suffix
            service_manager: Host adapter, a ServiceManager by default
            log_lines: Past log lines shown when following logs
        """
        self.service_name = service_name
        self.service_manager = service_manager or ServiceManager()
        self.log_lines = log_lines

    def is_active(self) -> bool:
        return self.service_manager.is_active(self.service_name)

    def current_status(self) -> ServiceStatus:
        return self.service_manager.get_service_status(self.service_name)

    def status_text(self) -> str:
        return self.service_manager.get_status_text(self.service_name)

    def start(self) -> Tuple[bool, Optional[str]]:
        logger.info(f"Starting {self.service_name}")
        return self.service_manager.start_service(self.service_name)

    def stop(self) -> Tuple[bool, Optional[str]]:
        logger.info(f"Stopping {self.service_name}")
        return self.service_manager.stop_service(self.service_name)

    def restart(self) -> Tuple[bool, Optional[str]]:
        logger.info(f"Restarting {self.service_name}")
        return self.service_manager.restart_service(self.service_name)

    def enable(self) -> Tuple[bool, Optional[str]]:
        logger.info(f"Enabling {self.service_name} at boot")
        return self.service_manager.enable_service(self.service_name)

    def reload_units(self) -> Tuple[bool, Optional[str]]:
        logger.info("Reloading systemd unit files")
        return self.service_manager.daemon_reload()

    def tail_logs(self) -> LogFollower:
        return self.service_manager.follow_service_logs(self.service_name, self.log_lines)

    def start_and_enable(self):
        """Start the service and enable it at boot.

        Raises:
            ServiceManagerError: If either operation fails
        """
        for operation in (self.start, self.enable):
            success, error = operation()
            if not success:
                raise ServiceManagerError(
                    f"Failed to {operation.__name__} {self.service_name}: {error}"
                )
