"""Creating solution stubs and testcase files in the contest folder."""

from pathlib import Path
from typing import Iterable, List, Optional

from rich.console import Console
from rich.markup import escape

from ..client import CaffeineClient
from ..errors import FileSystemError, ParseError
from .quit import QuitController


console = Console()

PROBLEM_PLACEHOLDER = "<problem>"
NUM_PLACEHOLDER = "<num>"


def build_filename(template: str, problem_id: str, ordinal: Optional[int] = None) -> str:
    """
    Substitute the placeholders of a filename template.

    The first testcase (ordinal 0) gets an empty <num>, later ones get
    ordinal + 1, so a problem's testcases are a.txt, a2.txt, a3.txt...
    """
    filename = template.replace(PROBLEM_PLACEHOLDER, problem_id)
    if ordinal is not None:
        filename = filename.replace(NUM_PLACEHOLDER, str(ordinal + 1) if ordinal > 0 else "")
    return filename


def write_new_file(path: Path, data: bytes) -> None:
    """
    Create ``path`` holding ``data``.

    Raises FileExistsError if the file already exists and FileSystemError
    for any other failure.  An existing file is never modified.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise FileSystemError(f"cannot create directory: {e}", path.parent) from e

    try:
        with open(path, "xb") as f:
            f.write(data)
    except FileExistsError:
        raise
    except OSError as e:
        raise FileSystemError(str(e), path) from e


class MaterializationEngine:
    """Writes contest files under ``root`` without ever overwriting one."""

    def __init__(
        self,
        client: CaffeineClient,
        root: Path,
        quit: QuitController,
        testcase_filename: str,
    ):
        self.client = client
        self.root = Path(root)
        self.quit = quit
        self.testcase_filename = testcase_filename

    def materialize_solutions(
        self,
        problem_ids: Iterable[str],
        template_location: str,
        filename_template: str,
    ) -> List[Path]:
        """Copy the template once per problem. Returns the files created."""
        problem_ids = list(problem_ids)
        template = self.root / template_location
        created = []

        console.print(f"[cyan] -> problem names: {escape(', '.join(problem_ids))}[/cyan]")
        for problem_id in problem_ids:
            if self.quit.should_quit():
                console.print("[yellow]Quit by user.[/yellow]")
                break

            target = self.root / build_filename(filename_template, problem_id)
            try:
                write_new_file(target, template.read_bytes())
            except FileExistsError:
                console.print(f"[dim]{escape(str(target))} already exists, skipping[/dim]")
            except (FileSystemError, OSError) as e:
                console.print(
                    f"[red]Copying template to {escape(str(target))} failed ({escape(str(e))})[/red]"
                )
            else:
                console.print(f"[green]Copied template to {escape(str(target))}[/green]")
                created.append(target)

        return created

    def materialize_testcases(self, contest_id: int) -> List[str]:
        """
        Download the contest's testcases and write each one to its own file.

        Existing files are left alone, so running this twice is harmless.
        Returns the distinct problem ids found, in download order.
        """
        console.print("[cyan]Generating testcases for the contest...[/cyan]")
        try:
            problems = self.client.get_testcases(contest_id)
        except ParseError as e:
            console.print(f"[red]Failed to generate testcases: {escape(str(e))}[/red]")
            return []

        problem_ids: List[str] = []
        if self.quit.should_quit():
            console.print("[yellow]Quit by user.[/yellow]")
            return problem_ids

        for problem in problems:
            if problem.problem_id not in problem_ids:
                problem_ids.append(problem.problem_id)

            written = []
            for ordinal, testcase in enumerate(problem.testcases):
                if self.quit.should_quit():
                    console.print("[yellow]Quit by user.[/yellow]")
                    return problem_ids

                filename = build_filename(self.testcase_filename, problem.problem_id, ordinal)
                target = self.root / filename
                if target.exists():
                    written.append(f"({filename})")
                    continue

                try:
                    write_new_file(target, testcase.encode("utf-8"))
                except FileExistsError:
                    written.append(f"({filename})")
                except FileSystemError as e:
                    written.append(f"({filename}) [{e}]")
                else:
                    written.append(filename)

            console.print(
                f"Gathering testcases for problem {escape(problem.problem_id)}... "
                f"{escape(', '.join(written))} [green]DONE[/green]"
            )

        return problem_ids
