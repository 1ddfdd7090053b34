"""Terminal output for catalog commands, built on Rich."""

from typing import Dict, List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

# kind -> (style, symbol, goes to stderr)
_STATUS: Dict[str, Tuple[str, str, bool]] = {
    "info": ("blue", "ℹ️ ", False),
    "success": ("green", "✓", False),
    "warning": ("yellow", "⚠️ ", True),
    "error": ("red", "❌", True),
}


class ConsoleUI:
    """
    Styled output for the CLI.

    Tables and status lines go to ``console``; warnings and errors go to
    ``err_console`` so listings stay clean when stdout is piped. Status
    messages are escaped, since they often quote titles and names typed by
    the user.

    Attributes:
        console: Console for regular output.
        err_console: Console for warnings and errors.
    """

    def __init__(self, console: Optional[Console] = None, err_console: Optional[Console] = None) -> None:
        self.console = console or Console()
        if err_console is None:
            err_console = console if console is not None else Console(stderr=True)
        self.err_console = err_console

    def print(self, *args, **kwargs) -> None:
        """Print to the regular console."""
        self.console.print(*args, **kwargs)

    def _status(self, kind: str, message: str) -> None:
        style, symbol, to_stderr = _STATUS[kind]
        target = self.err_console if to_stderr else self.console
        target.print(f"[{style}]{symbol} {escape(message)}[/{style}]")

    def print_info(self, message: str) -> None:
        self._status("info", message)

    def print_success(self, message: str) -> None:
        self._status("success", message)

    def print_warning(self, message: str) -> None:
        self._status("warning", message)

    def print_error(self, message: str) -> None:
        self._status("error", message)

    def print_panel(self, content: str, title: str = "", border_style: str = "cyan") -> None:
        """
        Print markup content inside a bordered panel.

        Args:
            content: Rich markup; callers escape user text themselves.
            title: Panel title.
            border_style: Border color.
        """
        self.console.print(Panel(content, title=title, border_style=border_style, expand=False))

    def create_table(self, title: str, columns: Optional[List[str]] = None) -> Table:
        """
        Create an empty table with a header row.

        Args:
            title: Table title.
            columns: Column headers, in display order.

        Returns:
            Rich Table ready for ``add_row``.
        """
        table = Table(title=title, header_style="bold cyan", show_lines=False)
        for header in columns or []:
            table.add_column(header, no_wrap=header == "ID")
        return table

    def print_table(self, table: Table) -> None:
        self.console.print(table)
