"""Polling watched users' submissions and reporting what changed."""

import time
from dataclasses import dataclass
from typing import Callable, ClassVar, Dict, Iterable, List, Optional

from rich.console import Console
from rich.markup import escape

from ..client import CaffeineClient, Contest, Submission
from ..errors import CaffeineError
from .quit import QuitController


console = Console()


@dataclass(frozen=True)
class SubmissionState:
    """Last observed submission of a watched user."""

    submission_id: int
    verdict: str


@dataclass(frozen=True)
class WatchEvent:
    user: str
    problem_index: str
    verdict: str

    title: ClassVar[str] = "SUBMISSION"


class NewSubmission(WatchEvent):
    title = "NEW SUBMISSION"


class VerdictChanged(WatchEvent):
    title = "VERDICT CHANGED"


Notify = Callable[[WatchEvent], None]


class SubmissionWatcher:
    """
    Polls the latest submission of every watched user, one user at a time,
    and emits an event whenever a user's (submission id, verdict) pair
    changes for the watched contest.

    Per user the state is either unseen (no entry in ``state``) or the last
    pair seen.  A different submission id always counts as a new submission,
    the same id with another verdict as a verdict change.  Submissions to
    other contests are ignored.

    The loop only ends on a quit request.  Passing the contest's end time is
    reported once but does not stop the watch.
    """

    def __init__(
        self,
        client: CaffeineClient,
        contest: Contest,
        quit: QuitController,
        notify: Notify,
        poll_delay: float,
        intra_poll_delay: float,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.contest = contest
        self.quit = quit
        self.notify = notify
        self.poll_delay = poll_delay
        self.intra_poll_delay = intra_poll_delay
        self.clock = clock
        self.state: Dict[str, SubmissionState] = {}
        self._end_reported = False

    def resolve_users(self, extra_users: Iterable[str] = ()) -> List[str]:
        """Watch the logged-in user and their friends, plus ``extra_users``."""
        users = []
        try:
            users.append(self.client.get_handle())
        except CaffeineError:
            console.print("[yellow]Unable to find default user.[/yellow]")

        try:
            users.extend(self.client.get_friends())
        except CaffeineError:
            console.print("[yellow]Unable to find user's friends.[/yellow]")

        users.extend(extra_users)
        # Keep the first occurrence of each handle.
        return list(dict.fromkeys(users))

    def observe(self, user: str, submission: Submission) -> Optional[WatchEvent]:
        """Apply one fetched submission to the user's state."""
        if submission.contest_id != self.contest.id:
            return None

        previous = self.state.get(user)
        if previous is None or submission.id != previous.submission_id:
            event = NewSubmission(user, submission.problem_index, submission.verdict)
        elif submission.verdict != previous.verdict:
            event = VerdictChanged(user, submission.problem_index, submission.verdict)
        else:
            return None

        self.state[user] = SubmissionState(submission.id, submission.verdict)
        return event

    def poll_user(self, user: str) -> Optional[WatchEvent]:
        try:
            submission = self.client.get_latest_submission(user)
        except CaffeineError:
            if self.quit.should_quit():
                return None
            console.print(f"[red]failed to get user {escape(user)}'s latest submission.[/red]")
            return None

        if submission is None or self.quit.should_quit():
            return None
        return self.observe(user, submission)

    def check_contest_end(self) -> None:
        if not self._end_reported and self.clock() >= self.contest.end_time_seconds:
            console.print("[yellow]Contest ended.[/yellow]")
            self._end_reported = True

    def run_cycle(self, users: List[str]) -> bool:
        """Poll every user once. Returns False once a quit was requested."""
        for user in users:
            if self.quit.should_quit():
                return False

            event = self.poll_user(user)
            if event is not None:
                self.notify(event)

            if self.quit.sleep(self.intra_poll_delay):
                return False
        return True

    def run(self, users: Optional[List[str]] = None) -> None:
        """Watch until a quit is requested."""
        if users is None:
            users = self.resolve_users()
        console.print(f"[cyan]Users to watch: {escape(', '.join(users))}[/cyan]")

        while not self.quit.should_quit():
            self.check_contest_end()
            if not self.run_cycle(users):
                break
            if self.quit.sleep(self.poll_delay):
                break

        console.print("[yellow]Quit by user.[/yellow]")
