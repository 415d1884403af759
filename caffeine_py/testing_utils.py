"""Helpers shared by the test suite."""

from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .client.models import Contest, ProblemTestcases, Submission
from .contest.quit import QuitController
from .contest.watcher import WatchEvent


def contest_record(
    contest_id: int,
    name: str,
    duration: int = 7200,
    start: int = 1609338900,
    relative: int = -3600,
) -> str:
    """One block of ``caffeine contest list`` output."""
    return (
        f"- id: {contest_id}\n"
        f"  name: {name}\n"
        f"  type: CF\n"
        f"  phase: BEFORE\n"
        f"  durationSeconds: {duration}\n"
        f"  startTimeSeconds: {start}\n"
        f"  relativeTimeSeconds: {relative}\n"
    )


def contest_listing(*records: str) -> str:
    return "contests:\n" + "".join(records)


def testcase_stream(problems: Dict[str, Sequence[str]]) -> str:
    """Build ``caffeine contest testcases`` output."""
    out = []
    for problem_id, testcases in problems.items():
        out.append(f"--- NEW PROBLEM ---\n{problem_id}\n")
        for testcase in testcases:
            out.append(f"+++ NEW TESTCASE +++\n{testcase}\n")
    return "".join(out)


Response = Union[Exception, Optional[Submission]]


class FakeClient:
    """Stands in for CaffeineClient; exceptions given as data are raised."""

    def __init__(
        self,
        contests: Union[Exception, List[Contest], None] = None,
        testcases: Union[Exception, List[ProblemTestcases], None] = None,
        handle: Union[Exception, str] = "thud",
        friends: Union[Exception, List[str], None] = None,
        submissions: Optional[Dict[str, List[Response]]] = None,
        problems: Union[Exception, List[str], None] = None,
    ):
        self.contests = contests if contests is not None else []
        self.testcases = testcases if testcases is not None else []
        self.handle = handle
        self.friends = friends if friends is not None else []
        self.submissions = submissions or {}
        self.problems = problems if problems is not None else []
        self.calls: List[tuple] = []

    @staticmethod
    def _give(value):
        if isinstance(value, Exception):
            raise value
        return value

    def version(self) -> str:
        self.calls.append(("version",))
        return "caffeine 0.2.0"

    def get_contests(self):
        self.calls.append(("contests",))
        return self._give(self.contests)

    def get_handle(self):
        self.calls.append(("handle",))
        return self._give(self.handle)

    def get_friends(self):
        self.calls.append(("friends",))
        return self._give(self.friends)

    def get_latest_submission(self, handle: str):
        """Pop the next queued response; the last one repeats forever."""
        self.calls.append(("status", handle))
        queue = self.submissions.get(handle, [None])
        value = queue.pop(0) if len(queue) > 1 else queue[0]
        return self._give(value)

    def get_problem_indices(self, contest_id: int):
        self.calls.append(("standings", contest_id))
        return self._give(self.problems)

    def get_testcases(self, contest_id: int):
        self.calls.append(("testcases", contest_id))
        return self._give(self.testcases)

    def submit(self, contest_id: int, problem_id: str, solution_path: Path) -> str:
        self.calls.append(("submit", contest_id, problem_id, solution_path))
        return "successful submission"


class EventRecorder:
    """Notification sink that remembers what it was given."""

    def __init__(self):
        self.events: List[WatchEvent] = []

    def __call__(self, event: WatchEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> List[str]:
        return [type(e).__name__ for e in self.events]


class CountingDelay:
    """Fake delay that records waits and can trigger a quit after some of them."""

    def __init__(self, quit=None, quit_after: Optional[int] = None):
        self.quit = quit
        self.quit_after = quit_after
        self.waits: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.waits.append(seconds)
        if self.quit_after is not None and len(self.waits) >= self.quit_after:
            self.quit.request_quit()


def counting_quit(quit_after: Optional[int] = None) -> Tuple[QuitController, CountingDelay]:
    """A QuitController whose delays are recorded instead of waited."""
    delay = CountingDelay(quit_after=quit_after)
    quit = QuitController(delay)
    delay.quit = quit
    return quit, delay
