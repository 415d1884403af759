"""Submitting solutions to the current contest."""

from pathlib import Path
from typing import List

from rich.console import Console
from rich.markup import escape

from ..client import CaffeineClient


console = Console()


def list_code_files(root: Path) -> List[str]:
    """Files in ``root`` that look like solutions rather than testcases."""
    return sorted(
        path.name
        for path in Path(root).iterdir()
        if path.is_file()
        and not path.name.startswith(".")
        and "." in path.name
        and not path.name.endswith(".txt")
    )


def submit_solution(
    client: CaffeineClient, contest_id: int, problem_id: str, path: Path
) -> str:
    """Submit ``path`` for a problem and return caffeine's acknowledgment."""
    console.print(
        f"[cyan]Submitting {escape(str(path))} to {contest_id}{escape(problem_id)}[/cyan]"
    )
    return client.submit(contest_id, problem_id, path)
