"""Contest catalog fetching and selection."""

import dataclasses
import time
from typing import Callable, Dict, List, Optional

from rich.console import Console
from rich.markup import escape

from ..client import CaffeineClient, Contest
from ..errors import ParseError, SelectionAborted


console = Console()

Catalog = Dict[str, Contest]
# (title, options) -> chosen option, or None if the user declined.
Chooser = Callable[[str, List[str]], Optional[str]]


class ContestSelector:
    """Builds the contest catalog and resolves the user's choice."""

    def __init__(
        self,
        client: CaffeineClient,
        choose: Chooser,
        clock: Callable[[], float] = time.time,
    ):
        self.client = client
        self.choose = choose
        self.clock = clock

    def fetch_catalog(self) -> Catalog:
        """
        Fetch contests keyed by display name, in listing order.
        A malformed listing yields an empty catalog.
        """
        try:
            contests = self.client.get_contests()
        except ParseError as e:
            console.print(f"[red]Unable to get list of contests: {escape(str(e))}[/red]")
            return {}

        return {contest.name: contest for contest in contests}

    def select_contest(self, catalog: Catalog, contest_id: Optional[int] = None) -> Contest:
        """
        Let the user pick a contest and return it with a corrected start time.
        If ``contest_id`` is given it is looked up instead of asking.
        """
        names = list(catalog)
        if not names:
            raise SelectionAborted("No contests to select from.")

        if contest_id is not None:
            name = next((n for n in names if catalog[n].id == contest_id), None)
            if name is None:
                raise SelectionAborted(f"Contest {contest_id} is not in the contest list.")
        else:
            name = self.choose("Available Contests", names)
        if not name or name not in catalog:
            raise SelectionAborted("Failed to select a contest.")

        contest = self.correct_clock_skew(catalog[name])
        console.print(
            f"[green]Selected contest {escape(contest.name)} ({contest.id})[/green]"
        )
        return contest

    def correct_clock_skew(self, contest: Contest) -> Contest:
        """Recompute the start time from the server-relative offset."""
        return dataclasses.replace(
            contest,
            start_time_seconds=int(self.clock()) + contest.relative_time_seconds,
        )
