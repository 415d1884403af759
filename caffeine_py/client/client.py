"""Subprocess client for the caffeine Codeforces command-line tool."""

import subprocess
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape

from ..errors import CollaboratorInvocationError
from . import parsing
from .models import Contest, ProblemTestcases, Submission


console = Console()


class CaffeineClient:
    """Runs caffeine commands and parses what they print."""

    DEFAULT_EXECUTABLE = "caffeine"
    ENCODING = "utf-8"
    TIMEOUT = 300

    def __init__(self, executable: Optional[str] = None, debug: bool = False):
        """Initialize the client."""
        self.executable = executable or self.DEFAULT_EXECUTABLE
        self.debug = debug

    def _run(self, *args: str) -> str:
        """Run caffeine with the given arguments and return its stdout."""
        command = [self.executable, *args]
        if self.debug:
            console.print(f"[cyan]DEBUG: {escape(' '.join(command))}[/cyan]")

        try:
            # Own session: a Ctrl-C in the terminal reaches us, not caffeine.
            completed = subprocess.run(
                command,
                capture_output=True,
                timeout=self.TIMEOUT,
                start_new_session=True,
            )
        except FileNotFoundError as e:
            raise CollaboratorInvocationError(
                f"Failed to execute {self.executable} (not found), see "
                "https://github.com/thud/caffeine",
                command,
            ) from e
        except subprocess.TimeoutExpired as e:
            raise CollaboratorInvocationError(
                f"{' '.join(command)} timed out after {self.TIMEOUT}s", command
            ) from e
        except OSError as e:
            raise CollaboratorInvocationError(
                f"Failed to execute {self.executable} ({e})", command
            ) from e

        if completed.returncode != 0:
            stderr = self._decode(completed.stderr).strip()
            raise CollaboratorInvocationError(
                f"{' '.join(command)} exited with code {completed.returncode}: {stderr}",
                command,
                stderr,
            )
        return self._decode(completed.stdout)

    def _decode(self, output: Optional[bytes]) -> str:
        """Decode process output, replacing bytes that are not valid UTF-8."""
        return (output or b"").decode(self.ENCODING, errors="replace")

    def version(self) -> str:
        return self._run("--version").strip() or self.executable

    def get_contests(self) -> List[Contest]:
        """Fetch all contests known to Codeforces."""
        return parsing.parse_contest_list(self._run("contest", "list"))

    def get_handle(self) -> str:
        """Get the handle caffeine is logged in as."""
        return parsing.parse_handle(self._run("user", "info"))

    def get_friends(self) -> List[str]:
        return parsing.parse_friends(self._run("user", "friends", "-r"))

    def get_latest_submission(self, handle: str) -> Optional[Submission]:
        """Get the most recent submission of a user, or None if there is none."""
        return parsing.parse_latest_submission(
            self._run("user", "status", handle, "-rn1")
        )

    def get_problem_indices(self, contest_id: int) -> List[str]:
        """Get the problem indices of a contest from the first standings row."""
        return parsing.parse_problem_indices(
            self._run("contest", "standings", str(contest_id), "-r", "-f1", "-n1")
        )

    def get_testcases(self, contest_id: int) -> List[ProblemTestcases]:
        return parsing.parse_testcases(
            self._run("contest", "testcases", str(contest_id))
        )

    def submit(self, contest_id: int, problem_id: str, solution_path: Path) -> str:
        """Submit a solution file and return caffeine's acknowledgment."""
        return self._run("submit", str(contest_id), problem_id, str(solution_path))
