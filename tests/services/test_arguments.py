import logging

import pytest

from mysqldumpgz.errors import DumpgzError
from mysqldumpgz.models import Action, JobDefinition, Settings
from mysqldumpgz.services.arguments import ArgumentParser
from mysqldumpgz.services.filesystem import FileSystemService

MY_DB = JobDefinition("md", "-m", "--my-database", "My Database", "my_database", "_myDB")
SALES = JobDefinition("sl", "-l", "--sales", "Sales", "sales", "_sales")


def _parser():
    settings = Settings(jobs=(MY_DB, SALES))
    return ArgumentParser(settings, filesystem_service=FileSystemService(logging.getLogger("test")))


def test_empty_arguments_request_help():
    assert _parser().parse([]).action is Action.HELP


@pytest.mark.parametrize(
    "argv, action",
    [
        (["-h"], Action.HELP),
        (["-m", "--help", "--bogus"], Action.HELP),
        (["--check", "--bogus"], Action.CHECK),
        (["-s", "--config"], Action.SHOW_CONFIG),
    ],
)
def test_early_exit_actions_stop_scanning(argv, action):
    request = _parser().parse(argv)

    assert request.action is action
    assert request.jobs == ()


def test_flags_and_job_selection():
    request = _parser().parse(["-s", "--sales", "-y", "-m"])

    assert request.action is Action.NONE
    assert request.simulate is True
    assert request.assume_yes is True
    assert [job.key for job in request.jobs] == ["sl", "md"]


def test_all_appends_every_job_after_previous_selection():
    request = _parser().parse(["-l", "--all"])

    assert [job.key for job in request.jobs] == ["sl", "md", "sl"]
    assert set(request.jobs) >= {MY_DB, SALES}


def test_repeated_selection_is_kept():
    request = _parser().parse(["-m", "-m"])

    assert [job.key for job in request.jobs] == ["md", "md"]


def test_following_token_becomes_absolute_output_path(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    request = _parser().parse(["-m", "out/today.sql", "-l"])

    assert request.jobs[0].output_file == str((tmp_path / "out" / "today.sql").resolve())
    assert request.jobs[1].output_file is None
    assert MY_DB.output_file is None


def test_token_starting_with_dash_is_never_an_output_path():
    with pytest.raises(DumpgzError, match="Invalid option -weird.sql"):
        _parser().parse(["-m", "-weird.sql"])


def test_output_path_applies_to_every_selection_of_the_job(tmp_path):
    target = str(tmp_path / "db.sql")

    request = _parser().parse(["-a", "-m", target])

    overridden = [job for job in request.jobs if job.key == "md"]
    assert len(overridden) == 2
    assert all(job.output_file == target for job in overridden)


def test_invalid_option_fails_with_args_exit_code():
    with pytest.raises(DumpgzError, match="Invalid option --bogus") as exc_info:
        _parser().parse(["-m", "--bogus"])

    assert exc_info.value.exit_code == 2
    assert "Use -h or --help to get help" in str(exc_info.value)


def test_no_database_selected_fails_with_args_exit_code():
    with pytest.raises(DumpgzError, match="No database was specified") as exc_info:
        _parser().parse(["-s", "-y"])

    assert exc_info.value.exit_code == 2
