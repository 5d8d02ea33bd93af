"""Shared utility functions for apimod.

Provides JSON I/O and Rich-based console reporting. The engine modules never
print; they return outcome values that the orchestrator and CLI render with
the helpers below.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# JSON I/O
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> Any:
    """Load and parse a JSON file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed document, whatever its top-level type.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
    """
    raw = Path(path).read_text(encoding="utf-8")
    return json.loads(raw)


def dump_json(data: dict[str, Any] | list[Any]) -> str:
    """Serialise *data* as pretty-printed JSON with a trailing newline."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_step(message: str) -> None:
    """Print a cyan step header (``→ Creating module: users``)."""
    console.print(f"[cyan]→ {message}[/cyan]")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]✔ {message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]", soft_wrap=True)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_summary_table(
    rows: list[dict[str, str]], title: str = "Summary"
) -> None:
    """Print a table whose columns are the keys of the first row.

    Args:
        rows: One mapping per table row; all rows share the same keys.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    if not rows:
        table.add_column("Item", style="dim")
        table.add_row("(none)")
    else:
        for i, column in enumerate(rows[0]):
            table.add_column(column, style="dim" if i == 0 else None, no_wrap=i == 0)
        for row in rows:
            table.add_row(*(str(value) for value in row.values()))

    console.print(table)
    console.print()
