from caffeine_py.client import ProblemTestcases
from caffeine_py.contest import MaterializationEngine, QuitController, build_filename
from caffeine_py.errors import ParseError
from caffeine_py.testing_utils import FakeClient


def _engine(tmp_path, client=None, quit=None, testcase_filename="<problem><num>.txt"):
    return MaterializationEngine(
        client or FakeClient(),
        tmp_path,
        quit or QuitController(),
        testcase_filename,
    )


class TestBuildFilename:
    def test_problem_only(self):
        assert build_filename("<problem>.cpp", "a") == "a.cpp"

    def test_first_testcase_has_no_number(self):
        assert build_filename("<problem><num>.txt", "c1", 0) == "c1.txt"

    def test_later_testcases_are_one_based_from_two(self):
        assert build_filename("<problem><num>.txt", "b", 1) == "b2.txt"
        assert build_filename("tests/<problem>-<num>.in", "b", 4) == "tests/b-5.in"


class TestMaterializeSolutions:
    def test_copies_template_per_problem(self, tmp_path):
        (tmp_path / "template.cpp").write_text("int main() {}\n")
        engine = _engine(tmp_path)

        created = engine.materialize_solutions(["a", "b"], "template.cpp", "<problem>.cpp")

        assert created == [tmp_path / "a.cpp", tmp_path / "b.cpp"]
        assert (tmp_path / "a.cpp").read_text() == "int main() {}\n"
        assert (tmp_path / "b.cpp").read_text() == "int main() {}\n"

    def test_never_overwrites_existing_file(self, tmp_path):
        (tmp_path / "template.cpp").write_text("template\n")
        (tmp_path / "a.cpp").write_text("my solution\n")
        engine = _engine(tmp_path)

        created = engine.materialize_solutions(["a", "b"], "template.cpp", "<problem>.cpp")

        assert created == [tmp_path / "b.cpp"]
        assert (tmp_path / "a.cpp").read_text() == "my solution\n"

    def test_missing_template_is_logged_not_raised(self, tmp_path):
        engine = _engine(tmp_path)

        created = engine.materialize_solutions(["a"], "missing.cpp", "<problem>.cpp")

        assert created == []
        assert not (tmp_path / "a.cpp").exists()

    def test_one_failure_does_not_stop_the_rest(self, tmp_path):
        (tmp_path / "template.cpp").write_text("t")
        # A plain file where a directory is needed makes that single copy fail.
        (tmp_path / "x").write_text("")
        engine = _engine(tmp_path)

        created = engine.materialize_solutions(["a", "x/b", "c"], "template.cpp", "<problem>.cpp")

        assert created == [tmp_path / "a.cpp", tmp_path / "c.cpp"]

    def test_stops_when_quit_requested(self, tmp_path):
        (tmp_path / "template.cpp").write_text("t")
        quit = QuitController()
        quit.request_quit()
        engine = _engine(tmp_path, quit=quit)

        assert engine.materialize_solutions(["a"], "template.cpp", "<problem>.cpp") == []
        assert not (tmp_path / "a.cpp").exists()


class TestMaterializeTestcases:
    PROBLEMS = [
        ProblemTestcases("a", ["1 2\n\n", "3 4\n\n"]),
        ProblemTestcases("b", ["5\n\n"]),
    ]

    def test_writes_each_testcase(self, tmp_path):
        client = FakeClient(testcases=self.PROBLEMS)

        problem_ids = _engine(tmp_path, client).materialize_testcases(1466)

        assert problem_ids == ["a", "b"]
        assert client.calls == [("testcases", 1466)]
        assert (tmp_path / "a.txt").read_text() == "1 2\n\n"
        assert (tmp_path / "a2.txt").read_text() == "3 4\n\n"
        assert (tmp_path / "b.txt").read_text() == "5\n\n"

    def test_running_twice_is_idempotent(self, tmp_path):
        engine = _engine(tmp_path, FakeClient(testcases=self.PROBLEMS))
        engine.materialize_testcases(1466)
        first = {p.name: p.read_text() for p in tmp_path.iterdir()}

        engine.materialize_testcases(1466)

        assert {p.name: p.read_text() for p in tmp_path.iterdir()} == first

    def test_existing_file_is_not_clobbered(self, tmp_path):
        (tmp_path / "a2.txt").write_text("edited by hand\n")

        _engine(tmp_path, FakeClient(testcases=self.PROBLEMS)).materialize_testcases(1466)

        assert (tmp_path / "a2.txt").read_text() == "edited by hand\n"
        assert (tmp_path / "a.txt").read_text() == "1 2\n\n"

    def test_creates_parent_directories(self, tmp_path):
        engine = _engine(
            tmp_path,
            FakeClient(testcases=self.PROBLEMS),
            testcase_filename="tests/<problem>/<num>in.txt",
        )

        engine.materialize_testcases(1466)

        assert (tmp_path / "tests" / "a" / "in.txt").exists()
        assert (tmp_path / "tests" / "a" / "2in.txt").exists()

    def test_problem_ids_are_distinct(self, tmp_path):
        problems = [ProblemTestcases("a", ["1\n"]), ProblemTestcases("a", [])]

        ids = _engine(tmp_path, FakeClient(testcases=problems)).materialize_testcases(1)

        assert ids == ["a"]

    def test_write_failure_is_per_file(self, tmp_path):
        (tmp_path / "a").write_text("not a directory")
        engine = _engine(
            tmp_path,
            FakeClient(testcases=self.PROBLEMS),
            testcase_filename="<problem>/<num>in.txt",
        )

        assert engine.materialize_testcases(1466) == ["a", "b"]
        assert (tmp_path / "a").read_text() == "not a directory"
        assert (tmp_path / "b" / "in.txt").read_text() == "5\n\n"

    def test_parse_error_gives_no_problems(self, tmp_path):
        engine = _engine(tmp_path, FakeClient(testcases=ParseError("bad stream")))
        assert engine.materialize_testcases(1466) == []

    def test_quit_before_writing(self, tmp_path):
        quit = QuitController()
        quit.request_quit()

        ids = _engine(tmp_path, FakeClient(testcases=self.PROBLEMS), quit=quit).materialize_testcases(1)

        assert ids == []
        assert list(tmp_path.iterdir()) == []
