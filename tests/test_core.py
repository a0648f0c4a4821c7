import io
import os
import threading
from datetime import datetime

import pytest
from rich.console import Console

import mysqldumpgz.core as core_module
from mysqldumpgz.core import MysqlDumpGz
from mysqldumpgz.models import JobDefinition, JobResult, Settings
from mysqldumpgz.services.presentation import Printer

FIRST = JobDefinition("first", "-f", "--first", "First", "first_db", "_first")
SECOND = JobDefinition("second", "-n", "--second", "Second", "second_db", "_second")
TODAY = datetime(2026, 10, 18)


class FakeDumpJobService:
    """Returns canned exit codes; the second job finishes before the first one."""

    def __init__(self, exit_codes):
        self.exit_codes = exit_codes
        self.calls = []
        self.rejected = []
        self.second_done = threading.Event()

    def clock(self):
        return TODAY

    def build_paths(self, job, today=None):
        file_sql = job.output_file or f"/dumps/{job.key}.sql"
        return file_sql, f"{file_sql}.gz"

    def reject_collision(self, job, path, today=None):
        self.rejected.append((job.key, path))
        return JobResult(job=job, exit_code=2, message=f"{path} already exists")

    def run(self, job, user, password, simulate=False, today=None):
        self.calls.append((job.key, user, password, simulate))
        if job.key == "first":
            self.second_done.wait(timeout=5)
        else:
            self.second_done.set()
        return JobResult(job=job, exit_code=self.exit_codes.get(job.key, 0))


def _printer():
    return Printer(
        console=Console(file=io.StringIO(), width=200),
        error_console=Console(file=io.StringIO(), width=200),
    )


def build_app(tmp_path, exit_codes=None, **overrides):
    values = {"jobs": (FIRST, SECOND), "dump_folder": str(tmp_path), "db_password": "pw"}
    values.update(overrides)
    app = MysqlDumpGz(Settings(**values), printer=_printer())
    app.dump_job_service = FakeDumpJobService(exit_codes or {})
    return app


def test_reported_exit_code_follows_launch_order(tmp_path):
    app = build_app(tmp_path, exit_codes={"first": 13, "second": 11})

    assert app.run(["-a", "-y"]) == 13
    assert {call[0] for call in app.dump_job_service.calls} == {"first", "second"}


def test_first_failure_in_launch_order_wins_over_later_success(tmp_path):
    app = build_app(tmp_path, exit_codes={"first": 11})

    assert app.run(["-f", "-n", "-y"]) == 11


def test_all_jobs_succeed(tmp_path):
    app = build_app(tmp_path)

    assert app.run(["--all", "--yes"]) == 0
    assert sorted(call[2] for call in app.dump_job_service.calls) == ["pw", "pw"]


def test_simulate_runs_sequentially_without_password(tmp_path, monkeypatch):
    def fail_prompt(*_args, **_kwargs):
        raise AssertionError("simulate must not prompt")

    monkeypatch.setattr(core_module.click, "prompt", fail_prompt)
    monkeypatch.setattr(core_module.click, "confirm", fail_prompt)
    app = build_app(tmp_path, db_password="")
    app.dump_job_service.second_done.set()

    assert app.run(["-s", "-f", "-n"]) == 0
    assert app.dump_job_service.calls == [
        ("first", "root", "", True),
        ("second", "root", "", True),
    ]


def test_password_is_prompted_when_not_configured(tmp_path, monkeypatch):
    prompts = []

    def fake_prompt(text, **kwargs):
        prompts.append((text, kwargs.get("hide_input")))
        return "typed"

    monkeypatch.setattr(core_module.click, "prompt", fake_prompt)
    app = build_app(tmp_path, db_password="")
    app.dump_job_service.second_done.set()

    assert app.run(["-f", "-y"]) == 0
    assert prompts == [("Enter password for root database user", True)]
    assert app.dump_job_service.calls == [("first", "root", "typed", False)]


def test_declined_confirmation_exits_cleanly(tmp_path, monkeypatch):
    monkeypatch.setattr(core_module.click, "confirm", lambda *_args, **_kwargs: False)
    app = build_app(tmp_path)

    assert app.run(["-f"]) == 0
    assert app.dump_job_service.calls == []
    output = app.printer.console.file.getvalue()
    assert "The following databases will be extracted:" in output
    assert "    first_db" in output


def test_cancelled_prompt_exits_with_error(tmp_path, monkeypatch):
    def abort(*_args, **_kwargs):
        raise core_module.click.Abort()

    monkeypatch.setattr(core_module.click, "prompt", abort)
    app = build_app(tmp_path, db_password="")

    assert app.run(["-f", "-y"]) == 1
    assert "Operation cancelled by user." in app.printer.error_console.file.getvalue()


def test_root_is_required_before_anything_else(tmp_path, monkeypatch):
    monkeypatch.setattr(core_module.os, "geteuid", lambda: 1000, raising=False)
    app = build_app(tmp_path, require_root=True)

    assert app.run([]) == 1
    assert "must be run as root" in app.printer.error_console.file.getvalue()


@pytest.mark.parametrize("argv, expected", [(["--bogus"], 2), (["-s"], 2), ([], 0)])
def test_argument_errors_map_to_exit_codes(tmp_path, argv, expected):
    app = build_app(tmp_path)

    assert app.run(argv) == expected


def test_repeated_job_with_same_output_is_rejected_before_launch(tmp_path):
    app = build_app(tmp_path)
    app.dump_job_service.second_done.set()
    target = str(tmp_path / "same.sql")

    assert app.run(["-f", target, "-f", "-y"]) == 2
    assert app.dump_job_service.calls == [("first", "root", "pw", False)]
    assert app.dump_job_service.rejected == [("first", os.path.realpath(target))]


def test_distinct_outputs_all_launch(tmp_path):
    app = build_app(tmp_path)

    assert app.run(["-f", "-n", "-y"]) == 0
    assert app.dump_job_service.rejected == []
    assert len(app.dump_job_service.calls) == 2
