"""Interactive operations menu for the installed service."""

import logging
from typing import Callable, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from ..exceptions import MenuInputError
from ..models.service import LifecycleAction
from ..utils.console import console as default_console, status_markup
from .lifecycle import LifecycleController

logger = logging.getLogger(__name__)

MENU_ORDER = [
    LifecycleAction.STATUS,
    LifecycleAction.TAIL_LOGS,
    LifecycleAction.START,
    LifecycleAction.STOP,
    LifecycleAction.RESTART,
    LifecycleAction.QUIT,
]


class MenuDispatcher:
    """Read-dispatch loop over a fixed set of lifecycle actions.

    The only blocking points are the input prompt and a running log
    follower. Bad input never leaves the loop.
    """

    PROMPT = "Select an option [1-5, q]: "
    PAUSE_PROMPT = "Press Enter to return to the menu..."

    def __init__(self, controller: LifecycleController, console: Optional[Console] = None,
                 input_func: Optional[Callable[[str], str]] = None):
        """Initialize the dispatcher.

        Args:
            controller: Lifecycle controller for the service
            console: rich console to draw on
            input_func: Prompt function, console.input by default
        """
        self.controller = controller
        self.console = console or default_console
        self.input_func = input_func or self.console.input

    def run(self) -> int:
        """Run the menu until the operator quits.

        Returns:
            Process exit status (always 0)
        """
        logger.debug(f"Operations menu opened for {self.controller.service_name}")
        while True:
            self.render_menu()
            try:
                line = self.input_func(self.PROMPT)
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return self._quit()

            try:
                action = LifecycleAction.from_input(line)
            except MenuInputError as e:
                self.console.print(f"[bold red]Error:[/bold red] {escape(e.message)}. Please choose 1-5 or q.")
                continue

            if action is LifecycleAction.QUIT:
                return self._quit()

            try:
                self.dispatch(action)
            except KeyboardInterrupt:
                self.console.print()
                self.console.print(f"[yellow]Interrupted:[/yellow] {action.label}")
                logger.debug(f"{action.name} interrupted by operator")
            self._pause()

    def render_menu(self):
        """Draw the menu with the current service state."""
        status = self.controller.current_status()

        table = Table(show_header=False, box=None, padding=(0, 2))
        for action in MENU_ORDER:
            table.add_row(f"[bold cyan]{action.value}[/bold cyan]", action.label)

        self.console.print(Panel(
            table,
            title=f"{self.controller.service_name} service manager",
            subtitle=f"status: {status_markup(status.value)}",
            expand=False,
        ))

    def dispatch(self, action: LifecycleAction):
        """Run one lifecycle action and show its result.

        Args:
            action: Any action except QUIT
        """
        logger.debug(f"Dispatching {action.name}")
        if action is LifecycleAction.STATUS:
            self._show_status()
        elif action is LifecycleAction.TAIL_LOGS:
            self._tail_logs()
        elif action is LifecycleAction.START:
            self._run_operation("start", self.controller.start, confirm=True)
        elif action is LifecycleAction.STOP:
            self._run_operation("stop", self.controller.stop)
        elif action is LifecycleAction.RESTART:
            self._run_operation("restart", self.controller.restart, confirm=True)
        else:
            raise ValueError(f"Cannot dispatch {action}")

    def _show_status(self):
        self.console.print(self.controller.status_text(), markup=False)

    def _tail_logs(self):
        """Follow the journal until the operator presses Ctrl+C."""
        self.console.print("[dim]Following logs, press Ctrl+C to return to the menu[/dim]")
        try:
            follower = self.controller.tail_logs()
        except OSError as e:
            self.console.print(f"[bold red]Error:[/bold red] Could not read logs: {escape(str(e))}")
            return

        try:
            follower.wait()
        except KeyboardInterrupt:
            follower.cancel()
            self.console.print()
            logger.debug("Log follow interrupted by operator")

    def _run_operation(self, verb: str, operation: Callable, confirm: bool = False):
        """Run start/stop/restart and report the outcome.

        Args:
            verb: Operation name for messages
            operation: Controller method returning (success, error)
            confirm: Show the status report afterwards
        """
        success, error = operation()
        name = self.controller.service_name
        if success:
            self.console.print(f"[green]✓[/green] {verb.capitalize()} {name}: done")
        else:
            self.console.print(f"[bold red]Error:[/bold red] Failed to {verb} {name}: {escape(str(error))}")

        if confirm:
            self._show_status()

    def _pause(self):
        try:
            self.input_func(self.PAUSE_PROMPT)
        except EOFError:
            # The next menu prompt sees the same EOF and quits.
            pass
        except KeyboardInterrupt:
            self.console.print()

    def _quit(self) -> int:
        self.console.print("Goodbye!")
        logger.debug("Operations menu closed")
        return 0
