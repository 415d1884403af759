"""Utility functions for terminal UI and user input."""

from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()


def choose_index(prompt: str, options: list, max_attempts: int = 3) -> Optional[int]:
    """
    Let user choose an index from a list of options.
    Returns the selected index or None if invalid.
    """
    if not options:
        return None

    for _ in range(max_attempts):
        try:
            choice = input(f"{prompt} (0-{len(options) - 1}): ")
            idx = int(choice)
            if 0 <= idx < len(options):
                return idx
            console.print(
                f"[red]Please enter a number between 0 and {len(options) - 1}[/red]"
            )
        except ValueError:
            console.print("[red]Please enter a valid number[/red]")
        except (KeyboardInterrupt, EOFError):
            console.print("\n[yellow]Cancelled[/yellow]")
            return None

    console.print("[red]Too many invalid attempts[/red]")
    return None


def choose_option(title: str, options: List[str]) -> Optional[str]:
    """Show options as a numbered table and return the chosen one."""
    table = create_table(title, ["#", "Option"])
    for idx, option in enumerate(options):
        table.add_row(str(idx), escape(option))
    console.print(table)

    idx = choose_index("Select", options)
    if idx is None:
        return None
    return options[idx]


def create_table(title: str, headers: list) -> Table:
    """Create a formatted table for display."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for header in headers:
        table.add_column(header)
    return table


def format_verdict_color(verdict: str) -> str:
    """Format a Codeforces verdict with appropriate color."""
    verdict_upper = verdict.upper()

    if verdict_upper == "OK":
        return f"[green]{verdict}[/green]"
    elif verdict_upper in ["WRONG_ANSWER", "RUNTIME_ERROR", "COMPILATION_ERROR"]:
        return f"[red]{verdict}[/red]"
    elif verdict_upper in [
        "TIME_LIMIT_EXCEEDED",
        "MEMORY_LIMIT_EXCEEDED",
        "IDLENESS_LIMIT_EXCEEDED",
    ]:
        return f"[magenta]{verdict}[/magenta]"
    elif verdict_upper in ["TESTING", "SUBMITTED"]:
        return f"[yellow]{verdict}[/yellow]"
    else:
        return escape(verdict)
