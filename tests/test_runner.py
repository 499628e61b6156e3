import logging
from pathlib import Path

import pytest

from codecleanup.config import CheckConfig
from codecleanup.errors import ConfigurationError
from codecleanup.runner import CheckRunner, RunState, run_scan
from codecleanup.utils import find_source_files

CLEAN_CLASS = "class Clean {\n    int value() {\n        return 1;\n    }\n}\n"


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8") if isinstance(text, str) else text)
    return path


def warning_records(caplog):
    return [record for record in caplog.records if record.levelno == logging.WARNING]


def test_long_line_in_one_of_two_files_fails_the_run(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    write(tmp_path / "a" / "Clean.java", CLEAN_CLASS)
    long_line = "    // " + "x" * 123
    assert len(long_line) == 130
    write(tmp_path / "b" / "Long.java", "class Long {\n" + long_line + "\n}\n")

    result = run_scan(tmp_path, CheckConfig(max_line_length=120))

    assert result.files_scanned == 2
    assert len(result.violations) == 1
    assert result.violations[0].rule == "line_length"
    assert result.violations[0].line == 2
    assert result.violations_found
    assert result.exit_code() == 1
    assert len(warning_records(caplog)) == 1


def test_empty_root_passes_with_summary(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")

    result = run_scan(tmp_path, CheckConfig())

    assert result.files_scanned == 0
    assert result.passed
    assert result.exit_code() == 0
    assert caplog.records[-1].getMessage() == "No violations found."


def test_missing_root_is_a_warning_and_a_pass(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    runner = CheckRunner(tmp_path / "absent", CheckConfig())

    result = runner.run()

    assert result.passed
    assert runner.state is RunState.DONE
    assert any("Source directory does not exist" in r.getMessage() for r in warning_records(caplog))


def test_terminated_file_logs_no_warning(tmp_path, caplog):
    caplog.set_level(logging.DEBUG, logger="codecleanup")
    write(tmp_path / "Clean.java", CLEAN_CLASS)

    result = run_scan(tmp_path, CheckConfig())

    assert result.passed
    assert warning_records(caplog) == []


def test_later_clean_check_does_not_clear_earlier_violation(tmp_path):
    # TODO runs before the unused-import check, which finds nothing here.
    write(tmp_path / "Todo.java", "class Todo {\n    // TODO later\n}\n")

    result = run_scan(tmp_path, CheckConfig())

    assert [violation.rule for violation in result.violations] == ["todo"]
    assert result.files[0].violations_found
    assert result.violations_found


def test_parse_failure_skips_only_the_unused_import_check(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    write(tmp_path / "Broken.java", "import java.util.List;\nclass Broken { void run( } // TODO\n")

    result = run_scan(tmp_path, CheckConfig())

    file_result = result.files[0]
    assert [violation.rule for violation in file_result.violations] == ["todo"]
    assert len(file_result.errors) == 1
    assert "Unable to parse" in file_result.errors[0]
    assert any("Skipping unused_imports check" in r.getMessage() for r in warning_records(caplog))
    assert result.violations_found


def test_unreadable_file_is_logged_and_skipped(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    write(tmp_path / "Bad.java", b"class Bad {}\n\xff\xfe\n")
    write(tmp_path / "Good.java", "class Good {}")

    result = run_scan(tmp_path, CheckConfig())

    assert result.files_scanned == 2
    bad, good = result.files
    assert bad.errors and not bad.violations_found
    assert [violation.rule for violation in good.violations] == ["newline_at_eof"]
    assert any(r.levelno == logging.ERROR and "Bad.java" in r.getMessage() for r in caplog.records)


def test_each_violation_logs_exactly_one_warning(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    write(
        tmp_path / "Messy.java",
        "import java.util.Map;\nclass Messy {\n    // TODO one\n    // TODO two\n}",
    )

    result = run_scan(tmp_path, CheckConfig())

    assert len(result.violations) == 4
    assert len(warning_records(caplog)) == 4
    assert caplog.records[-1].getMessage() == "Code cleanup violations found: 4 violation(s) in 1 file(s)."


def test_disabled_checks_do_not_run(tmp_path):
    write(tmp_path / "Messy.java", "import java.util.Map;\nclass Messy { // TODO }")
    config = CheckConfig(check_unused_imports=False, check_newline_at_end=False, check_todos=False)

    runner = CheckRunner(tmp_path, config)
    result = runner.run()

    assert runner.enabled_checks == []
    assert result.passed


def test_parallel_run_matches_sequential_order(tmp_path):
    for index in range(6):
        body = "class C%d {\n    // TODO %d\n}\n" % (index, index)
        write(tmp_path / ("pkg%d" % index) / ("C%d.java" % index), body)

    sequential = run_scan(tmp_path, CheckConfig())
    parallel = run_scan(tmp_path, CheckConfig(), jobs=4)

    assert [str(v) for v in parallel.violations] == [str(v) for v in sequential.violations]
    assert parallel.summary.todo == 6


def test_runner_rejects_non_positive_jobs(tmp_path):
    with pytest.raises(ConfigurationError):
        CheckRunner(tmp_path, CheckConfig(), jobs=0)


def test_explicit_log_sink_receives_messages(tmp_path, caplog):
    sink = logging.getLogger("cleanup-test-sink")
    caplog.set_level(logging.INFO, logger="cleanup-test-sink")
    write(tmp_path / "Todo.java", "class Todo {} // TODO\n")

    CheckRunner(tmp_path, CheckConfig(), log=sink).run()

    assert {record.name for record in caplog.records} == {"cleanup-test-sink"}


def test_walker_returns_sorted_java_files_only(tmp_path):
    write(tmp_path / "b" / "B.java", CLEAN_CLASS)
    write(tmp_path / "a" / "A.java", CLEAN_CLASS)
    write(tmp_path / "a" / "notes.txt", "TODO")
    (tmp_path / "dir.java").mkdir()

    files = find_source_files(tmp_path)

    assert [path.relative_to(tmp_path).as_posix() for path in files] == ["a/A.java", "b/B.java"]


def test_walker_rejects_missing_root(tmp_path):
    with pytest.raises(ConfigurationError):
        find_source_files(tmp_path / "missing")


def test_deeply_nested_expression_is_isolated_to_its_file(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    terms = " + ".join('"s%d"' % index for index in range(3000))
    write(tmp_path / "Deep.java", "class Deep {\n    Object f() {\n        return " + terms + ";\n    }\n}\n")
    write(tmp_path / "Todo.java", "class Todo {\n    // TODO later\n}\n")

    result = run_scan(tmp_path, CheckConfig())

    deep, todo = result.files
    assert deep.errors == [f"Unable to parse {tmp_path / 'Deep.java'}: syntax tree too deep"]
    assert not deep.violations_found
    assert [violation.rule for violation in todo.violations] == ["todo"]
    assert caplog.records[-1].getMessage() == "Code cleanup violations found: 1 violation(s) in 1 file(s)."


def test_record_declaration_skips_unused_imports_but_not_other_checks(tmp_path):
    write(
        tmp_path / "Point.java",
        "import java.util.List;\n\npublic record Point(int x, int y) {\n    // TODO validate\n}",
    )

    result = run_scan(tmp_path, CheckConfig())

    file_result = result.files[0]
    assert sorted(violation.rule for violation in file_result.violations) == ["newline_at_eof", "todo"]
    assert len(file_result.errors) == 1
    assert "Unable to parse" in file_result.errors[0]


def test_file_that_cannot_be_opened_is_logged_and_skipped(tmp_path, caplog, monkeypatch):
    caplog.set_level(logging.INFO, logger="codecleanup")
    write(tmp_path / "Locked.java", "class Locked {} // TODO\n")
    write(tmp_path / "Open.java", "class Open {} // TODO\n")
    real_open = Path.open

    def guarded_open(self, *args, **kwargs):
        if self.name == "Locked.java":
            raise PermissionError(13, "Permission denied", str(self))
        return real_open(self, *args, **kwargs)

    monkeypatch.setattr(Path, "open", guarded_open)

    result = run_scan(tmp_path, CheckConfig())

    locked, opened = result.files
    assert locked.errors == [f"Error processing file: {tmp_path / 'Locked.java'} (Permission denied)"]
    assert not locked.violations_found
    assert [violation.rule for violation in opened.violations] == ["todo"]
    assert any(r.levelno == logging.ERROR and "Locked.java" in r.getMessage() for r in caplog.records)


def test_violation_log_line_carries_location_and_message_once(tmp_path, caplog):
    caplog.set_level(logging.INFO, logger="codecleanup")
    path = write(tmp_path / "Todo.java", "class Todo {\n    // TODO later\n}\n")

    run_scan(tmp_path, CheckConfig())

    (record,) = warning_records(caplog)
    assert record.getMessage() == f"{path}:2: TODO found: // TODO later"
