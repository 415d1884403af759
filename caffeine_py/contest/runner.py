"""Running a contest from selection to submission watching."""

import time
from pathlib import Path
from typing import Callable, Iterable, Optional

from rich.console import Console
from rich.markup import escape

from ..client import CaffeineClient, Contest
from ..config import ContestConfig
from ..errors import CollaboratorInvocationError
from .materialize import MaterializationEngine
from .quit import QuitController
from .selector import Chooser, ContestSelector
from .watcher import Notify, SubmissionWatcher


console = Console()

# Extra seconds to wait after the announced start before downloading testcases.
START_GRACE_SECONDS = 10


class ContestRunner:
    """Selects a contest, creates its files and watches submissions."""

    def __init__(
        self,
        client: CaffeineClient,
        config: ContestConfig,
        root: Path,
        quit: QuitController,
        choose: Chooser,
        notify: Notify,
        clock: Callable[[], float] = time.time,
        config_path: Optional[Path] = None,
    ):
        self.client = client
        self.config = config
        self.root = Path(root)
        self.quit = quit
        self.choose = choose
        self.notify = notify
        self.clock = clock
        self.config_path = config_path
        self.selector = ContestSelector(client, choose, clock)
        self.engine = MaterializationEngine(
            client, self.root, quit, config.testcase_filename
        )

    def _quit_requested(self) -> bool:
        if self.quit.should_quit():
            console.print("[yellow]Quit by user.[/yellow]")
            return True
        return False

    def run(
        self, contest_id: Optional[int] = None, extra_users: Iterable[str] = ()
    ) -> Optional[Contest]:
        """
        Run one contest until the user quits.

        Returns the selected contest, or None if the run was cancelled
        before a contest was chosen.  Failing to run caffeine at all or to
        list contests aborts the run with CollaboratorInvocationError, and
        declining to choose raises SelectionAborted.
        """
        self.quit.reset()
        console.print("[cyan]Initialising new Codeforces contest...[/cyan]")

        try:
            version = self.client.version()
            console.print(f"[dim]{escape(version)}[/dim]")
            if self._quit_requested():
                return None
            catalog = self.selector.fetch_catalog()
        except CollaboratorInvocationError:
            # A call cut short by a quit request is not a failure.
            if self._quit_requested():
                return None
            raise

        contest = self.selector.select_contest(catalog, contest_id)
        self._remember_contest(contest)
        if self._quit_requested():
            return contest

        if not contest.has_started:
            if self.config.default_solutions:
                self.engine.materialize_solutions(
                    self.config.default_solutions,
                    self.config.template_location,
                    self.config.solution_filename,
                )
            wait = max(0, START_GRACE_SECONDS - contest.relative_time_seconds)
            console.print(f"[cyan]Sleeping {wait}s until the start.[/cyan]")
            if self.quit.sleep(wait):
                self._quit_requested()
                return contest
        else:
            console.print("[cyan]Contest has already started.[/cyan]")

        self.materialize_contest(contest)
        if self._quit_requested():
            return contest

        watcher = SubmissionWatcher(
            self.client,
            contest,
            self.quit,
            self.notify,
            poll_delay=self.config.poll_delay,
            intra_poll_delay=self.config.intra_poll_delay,
            clock=self.clock,
        )
        watcher.run(watcher.resolve_users(extra_users))
        console.print("[green]Done.[/green]")
        return contest

    def materialize_contest(self, contest: Contest) -> None:
        """Write testcases, then a solution stub for every problem that has them."""
        try:
            problem_ids = self.engine.materialize_testcases(contest.id)
        except CollaboratorInvocationError as e:
            if self.quit.should_quit():
                return
            console.print(f"[red]Failed to generate testcases: {escape(str(e))}[/red]")
            return

        if problem_ids and not self.quit.should_quit():
            self.engine.materialize_solutions(
                problem_ids,
                self.config.template_location,
                self.config.solution_filename,
            )

    def _remember_contest(self, contest: Contest) -> None:
        """Record the contest so later submit commands know where to go."""
        self.config.contest_id = contest.id
        try:
            self.config.save(self.config_path)
        except OSError as e:
            console.print(f"[yellow]Could not save current contest: {escape(str(e))}[/yellow]")
