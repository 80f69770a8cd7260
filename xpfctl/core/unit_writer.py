"""systemd unit generation for the proxy service."""

import logging
from pathlib import Path

from ..models.service import ServiceDefinition

logger = logging.getLogger(__name__)


class UnitWriter:
    """Renders and installs the systemd unit description."""

    UNIT_MODE = 0o644

    UNIT_TEMPLATE = """[Unit]
Description={description}
After=network.target

[Service]
Type=simple
User={user}
WorkingDirectory={working_directory}
ExecStart={exec_start}
Restart=on-failure
RestartSec={restart_delay}s
LimitNOFILE={open_files_limit}

[Install]
WantedBy=multi-user.target
"""

    @staticmethod
    def render_unit(definition: ServiceDefinition) -> str:
        """Render the unit text.

        The output depends only on the definition's fields.

        Args:
            definition: Service parameters

        Returns:
            Unit file content
        """
        return UnitWriter.UNIT_TEMPLATE.format(
            description=definition.description,
            user=definition.user,
            working_directory=definition.working_directory,
            exec_start=definition.exec_start,
            restart_delay=definition.restart_delay,
            open_files_limit=definition.open_files_limit,
        )

    @staticmethod
    def write_unit(definition: ServiceDefinition, unit_dir: Path) -> Path:
        """Write the unit into the directory systemd scans.

        Args:
            definition: Service parameters
            unit_dir: Unit directory, normally /etc/systemd/system

        Returns:
            Path of the written unit file

        Raises:
            OSError: If the file cannot be written
        """
        unit_path = Path(unit_dir) / definition.unit_name

        # Write to temp file first (atomic write)
        temp_file = unit_path.with_suffix('.service.tmp')
        temp_file.write_text(UnitWriter.render_unit(definition))
        temp_file.chmod(UnitWriter.UNIT_MODE)
        temp_file.replace(unit_path)

        logger.info(f"systemd unit written: {unit_path}")
        return unit_path
