import io
import logging

import pytest

from persistence import store as store_module
from tracker import daycount
from tracker.errors import EX_CONFIG, EX_IOERR, EX_SOFTWARE, EX_USAGE, DateComputationError


@pytest.fixture
def home(monkeypatch, tmp_path):
    for name in ("BIRTHDATE", "HOME", "DIR_NAME", "FILE_NAME", "TIMEZONE", "MILESTONE_DAYS", "LOG_LEVEL", "LOG_JSON"):
        monkeypatch.delenv(f"DAYCOUNT_{name}", raising=False)
    monkeypatch.setenv("DAYCOUNT_HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return tmp_path


def _run(*argv):
    out, err = io.StringIO(), io.StringIO()
    code = daycount.main(list(argv), out=out, err=err)
    return code, out.getvalue().splitlines(), err.getvalue()


def test_first_run_seeds_and_reports_today(home):
    code, lines, _ = _run("--today", "2024-03-15")
    assert code == 0
    assert lines == ["Today:", "  2024-03-15  [meta] Started counting days: today"]
    assert (home / ".daycount" / "events.csv").exists()


def test_report_with_birthday(home, monkeypatch):
    monkeypatch.setenv("DAYCOUNT_BIRTHDATE", "1990-03-15")
    events = home / "events.csv"
    events.write_text(
        "date,category,description\n"
        "2024-03-10,trip,Back home\n"
        "not-a-date,broken,Row\n"
        "2024-03-20,,Dentist\n",
        encoding="utf-8",
    )
    code, lines, _ = _run("--file", str(events), "--today", "2024-03-15")
    assert code == 0
    assert lines == [
        "Past:",
        "  2024-03-10  [trip] Back home: 5 days ago",
        "Upcoming:",
        "  2024-03-20  Dentist: in 5 days",
        "You are 12419 days old.",
        "Happy birthday!",
    ]


def test_bad_birthdate_does_not_abort(home, monkeypatch):
    monkeypatch.setenv("DAYCOUNT_BIRTHDATE", "someday")
    code, lines, _ = _run("--today", "2024-03-15", "--no-birthday")
    assert code == 0
    code, lines, _ = _run("--today", "2024-03-15")
    assert code == 0
    assert not any("days old" in line for line in lines)


def test_empty_file_reports_no_events(home):
    events = home / "events.csv"
    events.write_text("date,category,description\n", encoding="utf-8")
    code, lines, _ = _run("--file", str(events), "--today", "2024-03-15")
    assert code == 0
    assert lines == ["No events."]


def test_missing_header_exits_with_io_error(home):
    events = home / "events.csv"
    events.write_text("garbage\n", encoding="utf-8")
    code, lines, err = _run("--file", str(events), "--today", "2024-03-15")
    assert code == EX_IOERR
    assert lines == []
    assert err.startswith("error: ")


def test_bad_today_is_usage_error(home):
    code, _, err = _run("--today", "March 15")
    assert code == EX_USAGE
    assert "--today" in err


def test_invalid_configuration_exits_with_config_error(home, monkeypatch):
    monkeypatch.setenv("DAYCOUNT_MILESTONE_DAYS", "lots")
    code, _, err = _run("--today", "2024-03-15")
    assert code == EX_CONFIG
    assert err.startswith("error: invalid configuration")


def test_uncreatable_store_dir_is_config_error(home):
    (home / "blocker").write_text("", encoding="utf-8")
    code, _, _ = _run("--file", str(home / "blocker" / "events.csv"), "--today", "2024-03-15")
    assert code == EX_CONFIG


def test_bad_birthdate_logs_one_warning(home, monkeypatch, caplog):
    monkeypatch.setenv("DAYCOUNT_BIRTHDATE", "someday")
    caplog.set_level(logging.WARNING)
    code, _, _ = _run("--today", "2024-03-15")
    assert code == 0
    invalid = [r for r in caplog.records if "birthday.invalid_birthdate" in r.getMessage()]
    assert len(invalid) == 1
    assert "someday" in invalid[0].getMessage()


def test_seed_write_failure_exits_with_io_error(home, monkeypatch):
    def refuse(*args, **kwargs):
        raise PermissionError("read-only file system")

    monkeypatch.setattr(store_module.tempfile, "mkstemp", refuse)
    code, lines, err = _run("--today", "2024-03-15")
    assert code == EX_IOERR
    assert lines == []
    assert err.startswith("error: ")
    assert not (home / ".daycount" / "events.csv").exists()


def test_unreadable_clock_exits_with_software_error(home, monkeypatch):
    def broken_clock(timezone=None):
        raise DateComputationError("cannot read the current time: clock unavailable")

    monkeypatch.setattr(daycount, "today", broken_clock)
    code, lines, err = _run()
    assert code == EX_SOFTWARE
    assert lines == []
    assert err == "error: cannot read the current time: clock unavailable\n"
