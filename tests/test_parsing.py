import json

import pytest

from caffeine_py.client import parsing
from caffeine_py.errors import ParseError
from caffeine_py.testing_utils import contest_listing, contest_record, testcase_stream


class TestParseContestList:
    def test_two_records_give_two_contests(self):
        text = contest_listing(
            contest_record(1466, "Good Bye 2020", 9000, 1609338900, -3600),
            contest_record(1465, "Educational Round 101", 7200, 1609000000, 338900),
        )

        contests = parsing.parse_contest_list(text)

        assert len(contests) == 2
        first, second = contests
        assert first.id == 1466
        assert first.name == "Good Bye 2020"
        assert first.duration_seconds == 9000
        assert first.start_time_seconds == 1609338900
        assert first.relative_time_seconds == -3600
        assert second.id == 1465
        assert second.name == "Educational Round 101"
        assert second.relative_time_seconds == 338900

    def test_preamble_without_records_is_empty(self):
        assert parsing.parse_contest_list("contests:\n") == []

    def test_short_record_raises(self):
        text = "contests:\n- id: 1466\n  name: Good Bye 2020\n"
        with pytest.raises(ParseError):
            parsing.parse_contest_list(text)

    def test_non_numeric_field_raises(self):
        text = contest_listing(contest_record(1466, "Round"))
        text = text.replace("durationSeconds: 7200", "durationSeconds: soon")
        with pytest.raises(ParseError):
            parsing.parse_contest_list(text)


class TestParseHandle:
    def test_handle_is_third_token_of_second_line(self):
        assert parsing.parse_handle("user:\n- handle: thud\n  rating: 1500\n") == "thud"

    def test_missing_line_raises(self):
        with pytest.raises(ParseError):
            parsing.parse_handle("user:")


class TestParseJson:
    def test_friends(self):
        text = json.dumps({"status": "OK", "result": ["tourist", "Petr"]})
        assert parsing.parse_friends(text) == ["tourist", "Petr"]

    def test_friends_invalid_json_raises(self):
        with pytest.raises(ParseError):
            parsing.parse_friends("Error: not logged in")

    def test_latest_submission(self):
        text = json.dumps(
            {
                "result": [
                    {
                        "id": 101,
                        "contestId": 1466,
                        "verdict": "OK",
                        "problem": {"index": "C1"},
                    }
                ]
            }
        )

        submission = parsing.parse_latest_submission(text)

        assert submission.id == 101
        assert submission.contest_id == 1466
        assert submission.verdict == "OK"
        assert submission.problem_index == "C1"

    def test_submission_in_queue_is_testing(self):
        text = json.dumps(
            {"result": [{"id": 5, "contestId": 1, "problem": {"index": "A"}}]}
        )
        assert parsing.parse_latest_submission(text).verdict == "TESTING"

    def test_no_submissions_is_none(self):
        assert parsing.parse_latest_submission('{"result": []}') is None

    def test_submission_without_problem_raises(self):
        with pytest.raises(ParseError):
            parsing.parse_latest_submission('{"result": [{"id": 1}]}')

    def test_problem_indices(self):
        text = json.dumps(
            {"result": {"problems": [{"index": "A"}, {"index": "B"}, {"index": "C1"}]}}
        )
        assert parsing.parse_problem_indices(text) == ["A", "B", "C1"]


class TestParseTestcases:
    def test_two_level_stream(self):
        text = "fetching problems\n" + testcase_stream(
            {"A": ["1 2\n", "3 4\n"], "B": ["5\n"]}
        )

        problems = parsing.parse_testcases(text)

        assert [p.problem_id for p in problems] == ["a", "b"]
        assert problems[0].testcases == ["1 2\n\n", "3 4\n\n"]
        assert problems[1].testcases == ["5\n\n"]

    def test_problem_without_testcases(self):
        problems = parsing.parse_testcases("--- NEW PROBLEM ---\nD\n")
        assert problems[0].problem_id == "d"
        assert problems[0].testcases == []

    def test_empty_output(self):
        assert parsing.parse_testcases("") == []
