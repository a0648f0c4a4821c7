"""Shared domain models for mysqldumpgz."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from mysqldumpgz import constants


class Action(str, Enum):
    """Early-exit action requested on the command line."""

    NONE = "none"
    HELP = "help"
    CHECK = "check"
    SHOW_CONFIG = "show-config"


class MessageKind(str, Enum):
    PLAIN = "plain"
    COMMAND = "cmd"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class FileStatus(str, Enum):
    """Outcome of probing whether a file can be created at a path."""

    OK = "ok"
    EXISTS = "exists"
    FOLDER_MISSING = "folder missing"
    NOT_CREATABLE = "not creatable"


@dataclass(frozen=True)
class JobDefinition:
    """One database the tool knows how to dump."""

    key: str
    short_flag: str
    long_flag: str
    show_name: str
    db_name: str
    file_suffix: str = ""
    output_file: Optional[str] = None

    @property
    def flags(self) -> Tuple[str, str]:
        return (self.short_flag, self.long_flag)


@dataclass(frozen=True)
class Settings:
    """Effective configuration, loaded once at startup and read-only afterwards."""

    jobs: Tuple[JobDefinition, ...]
    date_format: str = constants.DEFAULT_DATE_FORMAT
    dump_folder: str = constants.DEFAULT_DUMP_FOLDER
    organize_by_date: bool = constants.DEFAULT_ORGANIZE_BY_DATE
    host: str = constants.DEFAULT_HOST
    port: int = constants.DEFAULT_PORT
    db_user: str = constants.DEFAULT_DB_USER
    db_password: str = field(default=constants.DEFAULT_DB_PASSWORD, repr=False)
    sys_user: str = constants.DEFAULT_SYS_USER
    sys_group: str = constants.DEFAULT_SYS_GROUP
    require_root: bool = constants.DEFAULT_REQUIRE_ROOT
    dump_command: str = constants.DEFAULT_DUMP_COMMAND
    compress_command: str = constants.DEFAULT_COMPRESS_COMMAND
    chown_command: str = constants.DEFAULT_CHOWN_COMMAND
    check_commands: Tuple[str, ...] = ()
    verbose: bool = False
    log_file: Optional[str] = None
    config_path: Optional[str] = None

    @property
    def commands_to_check(self) -> Tuple[str, ...]:
        if self.check_commands:
            return self.check_commands
        return (self.dump_command, self.compress_command, self.chown_command)

    def find_job(self, flag: str) -> Optional[JobDefinition]:
        for job in self.jobs:
            if flag in job.flags:
                return job
        return None


@dataclass(frozen=True)
class RunRequest:
    """Parsed intent of one invocation."""

    jobs: Tuple[JobDefinition, ...] = ()
    simulate: bool = False
    assume_yes: bool = False
    action: Action = Action.NONE


@dataclass(frozen=True)
class JobResult:
    job: JobDefinition
    exit_code: int
    sql_path: Optional[str] = None
    gz_path: Optional[str] = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == constants.EXIT_OK
