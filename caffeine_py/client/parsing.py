"""Parsers for the text and JSON printed by the caffeine tool.

Every parser either returns typed models or raises ``ParseError``; callers
decide whether a malformed response degrades to an empty result.

The contest list is printed as one block per contest, each block starting
with ``-`` at the beginning of a line.  Fields are taken by fixed line and
token position (tokens are separated by single spaces, so indentation
produces empty tokens)::

    - id: 1466                      line 1, token 3
      name: Good Bye 2020           line 2, tokens 4..
      ...
      durationSeconds: 9000         line 5, token 4
      startTimeSeconds: 1609338900  line 6, token 4
      relativeTimeSeconds: -3600    line 7, token 4
"""

import json
from typing import Any, List, Optional

from ..errors import ParseError
from .models import Contest, ProblemTestcases, Submission


CONTEST_SEPARATOR = "\n-"
PROBLEM_DELIMITER = "--- NEW PROBLEM ---\n"
TESTCASE_DELIMITER = "+++ NEW TESTCASE +++\n"
PENDING_VERDICT = "TESTING"


def _token(line: str, position: int) -> str:
    return line.split(" ")[position]


def _int_token(line: str, position: int) -> int:
    return int(_token(line, position))


def parse_contest_list(text: str) -> List[Contest]:
    """Parse ``caffeine contest list`` output into contests, in listing order."""
    contests = []
    for record in text.split(CONTEST_SEPARATOR)[1:]:
        lines = record.split("\n")
        try:
            name = " ".join(lines[1].split(" ")[3:]).strip()
            contest = Contest(
                id=_int_token(lines[0], 2),
                name=name,
                duration_seconds=_int_token(lines[4], 3),
                start_time_seconds=_int_token(lines[5], 3),
                relative_time_seconds=_int_token(lines[6], 3),
            )
        except (IndexError, ValueError) as e:
            raise ParseError(f"Malformed contest record: {record[:80]!r}") from e
        if not name:
            raise ParseError(f"Contest {contest.id} has no name")
        contests.append(contest)
    return contests


def parse_handle(text: str) -> str:
    """Extract the logged-in handle from ``caffeine user info`` output."""
    try:
        handle = _token(text.split("\n")[1], 2).strip()
    except IndexError as e:
        raise ParseError("User info does not contain a handle") from e
    if not handle:
        raise ParseError("User info does not contain a handle")
    return handle


def _load_result(text: str) -> Any:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON response: {e}") from e
    if not isinstance(data, dict) or "result" not in data:
        raise ParseError("JSON response has no 'result' field")
    return data["result"]


def parse_friends(text: str) -> List[str]:
    """Parse ``caffeine user friends -r`` output."""
    result = _load_result(text)
    if not isinstance(result, list) or not all(isinstance(h, str) for h in result):
        raise ParseError("Friend list is not a list of handles")
    return result


def parse_latest_submission(text: str) -> Optional[Submission]:
    """Parse ``caffeine user status <handle> -rn1`` output.

    Returns None when the user has no submissions at all.
    """
    result = _load_result(text)
    if not isinstance(result, list):
        raise ParseError("Submission list is not a list")
    if not result:
        return None

    latest = result[0]
    try:
        return Submission(
            id=int(latest["id"]),
            contest_id=int(latest.get("contestId", -1)),
            verdict=latest.get("verdict") or PENDING_VERDICT,
            problem_index=str(latest["problem"]["index"]),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ParseError(f"Malformed submission: {latest!r}") from e


def parse_problem_indices(text: str) -> List[str]:
    """Parse problem indices from ``caffeine contest standings`` output."""
    result = _load_result(text)
    try:
        return [str(p["index"]) for p in result["problems"]]
    except (KeyError, TypeError) as e:
        raise ParseError("Standings do not contain a problem list") from e


def parse_testcases(text: str) -> List[ProblemTestcases]:
    """Split ``caffeine contest testcases`` output into per-problem blocks.

    Anything before the first delimiter at either level is ignored.  Problem
    ids are lowercased; testcase bodies are kept verbatim.
    """
    problems = []
    for block in text.split(PROBLEM_DELIMITER)[1:]:
        problem_id = block.split("\n")[0].strip().lower()
        if not problem_id:
            raise ParseError("Testcase block without a problem id")
        problems.append(
            ProblemTestcases(
                problem_id=problem_id,
                testcases=block.split(TESTCASE_DELIMITER)[1:],
            )
        )
    return problems
