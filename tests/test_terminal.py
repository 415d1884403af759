from unittest.mock import patch

from caffeine_py.utils.terminal import choose_index, choose_option, format_verdict_color


class TestFormatVerdictColor:
    def test_known_verdicts(self):
        assert format_verdict_color("OK") == "[green]OK[/green]"
        assert format_verdict_color("WRONG_ANSWER") == "[red]WRONG_ANSWER[/red]"
        assert format_verdict_color("TESTING") == "[yellow]TESTING[/yellow]"
        assert (
            format_verdict_color("TIME_LIMIT_EXCEEDED")
            == "[magenta]TIME_LIMIT_EXCEEDED[/magenta]"
        )

    def test_unknown_verdict_is_plain(self):
        assert format_verdict_color("CHALLENGED") == "CHALLENGED"

    def test_unknown_verdict_markup_is_escaped(self):
        assert format_verdict_color("[bold]X") == "\\[bold]X"


class TestChooseIndex:
    def test_retries_after_invalid_input(self):
        with patch("builtins.input", side_effect=["x", "5", "1"]):
            assert choose_index("Select", ["a", "b"]) == 1

    def test_empty_options(self):
        assert choose_index("Select", []) is None

    def test_eof_cancels(self):
        with patch("builtins.input", side_effect=EOFError):
            assert choose_index("Select", ["a"]) is None


class TestChooseOption:
    def test_returns_chosen_option(self):
        with patch("builtins.input", return_value="1"):
            assert choose_option("Problems", ["A", "B"]) == "B"
