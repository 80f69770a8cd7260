#!/usr/bin/env python3
"""Entry points: the bootstrap installer and the operations menu."""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from rich.panel import Panel

from . import __version__
from .core.config_manager import ConfigManager
from .core.installer import InstallOrchestrator
from .core.lifecycle import LifecycleController
from .core.menu import MenuDispatcher
from .exceptions import PrivilegeError
from .models.install import InstallationTarget
from .utils.console import console, setup_logging
from .utils.constants import APP_NAME, DEFAULT_SERVICE_NAME, LOG_FILE
from .utils.privilege import ensure_privileged, get_current_username, is_privileged

logger = logging.getLogger(__name__)


def build_install_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xpf-install",
        description="Install the SNI proxy (xpf) as a systemd service"
    )
    parser.add_argument('--config', type=Path, default=None,
                        help='YAML settings file (default: /etc/xpfctl/config.yaml if present)')
    parser.add_argument('--no-helper', action='store_true',
                        help='Do not install the operations menu command')
    parser.add_argument('--print-config', action='store_true',
                        help='Print the effective settings as YAML and exit')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug output')
    parser.add_argument('--version', action='version', version=f"{APP_NAME} {__version__}")
    return parser


def build_menu_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xpf-menu",
        description="Interactive operations menu for the proxy service"
    )
    parser.add_argument('--service-name', default=DEFAULT_SERVICE_NAME,
                        help=f'systemd service to manage (default: {DEFAULT_SERVICE_NAME})')
    parser.add_argument('--version', action='version', version=f"{APP_NAME} {__version__}")
    return parser


def print_summary(target: InstallationTarget, helper_installed: bool):
    """Show the post-install hints.

    Args:
        target: Installed target
        helper_installed: Whether the menu command was written
    """
    name = target.service_name
    lines = [
        "[bold green]Installation successful! The service is running and enabled at boot.[/bold green]",
        "",
        f"[yellow]Important:[/yellow] edit [cyan]{target.config_path}[/cyan] to match your setup.",
        "",
        "Common commands:",
        f"  Status:       [yellow]systemctl status {name}[/yellow]",
        f"  Follow logs:  [yellow]journalctl -u {name} -f[/yellow]",
        f"  Restart:      [yellow]systemctl restart {name}[/yellow]  (after editing the config)",
        f"  Stop:         [yellow]systemctl stop {name}[/yellow]",
    ]
    if helper_installed:
        lines += ["", f"Operations menu: [yellow]sudo {name}[/yellow]"]
    console.print(Panel("\n".join(lines), title=f"{name} installed", expand=False))


def install_main(argv: Optional[List[str]] = None) -> int:
    """Run the full install non-interactively.

    Returns:
        0 on success, 1 on any fatal failure
    """
    args = build_install_parser().parse_args(argv)

    if args.print_config:
        setup_logging(verbose=args.verbose)
        config_manager = ConfigManager(args.config)
        config_manager.load_config()
        console.print(config_manager.dump_config(), markup=False, end="")
        return 0

    setup_logging(LOG_FILE if is_privileged() else None, verbose=args.verbose)

    try:
        ensure_privileged()
    except PrivilegeError as e:
        logger.error(e.message)
        return 1

    logger.info("=" * 45)
    logger.info("     SNI Proxy (xpf) installer")
    logger.info("=" * 45)
    logger.debug(f"Install requested by {get_current_username()}")

    try:
        config_manager = ConfigManager(args.config)
        config_manager.load_config()
        if args.no_helper:
            config_manager.set_setting("install_helper", False)

        orchestrator = InstallOrchestrator(config_manager)
        outcome = orchestrator.run()

    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return 1

    if outcome.success:
        print_summary(orchestrator.target, orchestrator.install_helper)
    return outcome.exit_code


def menu_main(argv: Optional[List[str]] = None) -> int:
    """Open the operations menu for one service.

    Returns:
        0 when the operator quits, 1 without root privileges
    """
    args = build_menu_parser().parse_args(argv)

    setup_logging(LOG_FILE if is_privileged() else None)

    try:
        ensure_privileged()
    except PrivilegeError as e:
        logger.error(e.message)
        return 1

    controller = LifecycleController(args.service_name)
    return MenuDispatcher(controller).run()


if __name__ == "__main__":
    sys.exit(install_main())
