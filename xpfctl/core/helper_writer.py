"""Generation of the operator helper command."""

import logging
import re
import sys
from pathlib import Path
from typing import Optional

from ..utils.constants import HELPER_MODE, SERVICE_NAME_PATTERN

logger = logging.getLogger(__name__)


class HelperScriptWriter:
    """Writes the launcher command that opens the operations menu.

    The launcher imports xpfctl under the interpreter baked into its shebang.
    """

    # The service name is the only parameter; nothing else is read at run time.
    HELPER_TEMPLATE = """#!{interpreter}
# Operations menu for the {service_name!r} service. Generated by xpfctl.
import sys

from xpfctl.main import menu_main

if __name__ == "__main__":
    sys.exit(menu_main(["--service-name", {service_name!r}]))
"""

    @staticmethod
    def render_helper_script(service_name: str, interpreter: Optional[str] = None) -> str:
        """Render the helper command.

        Args:
            service_name: Service name baked into the command
            interpreter: Python interpreter for the shebang, the current one by default

        Returns:
            Executable script text
        """
        if not service_name:
            raise ValueError("Service name cannot be empty")
        if not re.fullmatch(SERVICE_NAME_PATTERN, service_name):
            raise ValueError(f"Invalid service name: {service_name!r}")

        return HelperScriptWriter.HELPER_TEMPLATE.format(
            interpreter=interpreter or sys.executable,
            service_name=service_name,
        )

    @staticmethod
    def write_helper_script(service_name: str, helper_dir: Path,
                            interpreter: Optional[str] = None) -> Path:
        """Install the helper command onto the search path.

        Args:
            service_name: Service name, also used as the command name
            helper_dir: Directory on PATH, normally /usr/local/bin
            interpreter: Python interpreter for the shebang

        Returns:
            Path of the written command

        Raises:
            OSError: If the file cannot be written
        """
        helper_dir = Path(helper_dir)
        helper_dir.mkdir(parents=True, exist_ok=True)
        helper_path = helper_dir / service_name

        temp_file = helper_path.with_name(f".{service_name}.tmp")
        temp_file.write_text(HelperScriptWriter.render_helper_script(service_name, interpreter))
        temp_file.chmod(HELPER_MODE)
        temp_file.replace(helper_path)

        logger.info(f"Helper command written: {helper_path}")
        return helper_path
