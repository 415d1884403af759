"""Data models for Codeforces entities returned by caffeine."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class Contest:
    """Represents a contest from the contest list."""

    id: int
    name: str
    duration_seconds: int
    start_time_seconds: int
    # Seconds since the start at query time; negative if not started yet.
    relative_time_seconds: int

    @property
    def has_started(self) -> bool:
        return self.relative_time_seconds >= 0

    @property
    def end_time_seconds(self) -> int:
        return self.start_time_seconds + self.duration_seconds


@dataclass
class Submission:
    """Represents the latest submission of a user."""

    id: int
    contest_id: int
    verdict: str
    problem_index: str


@dataclass
class ProblemTestcases:
    """Raw testcase inputs downloaded for one problem."""

    problem_id: str
    testcases: List[str] = field(default_factory=list)
