"""Help text, coloured messages and configuration dump."""

from typing import Dict, List, Optional

from rich.console import Console

from mysqldumpgz.constants import CONFIG_PASSWORD_MASK
from mysqldumpgz.models import MessageKind, Settings

STYLES: Dict[MessageKind, Optional[str]] = {
    MessageKind.PLAIN: None,
    MessageKind.COMMAND: "grey70",
    MessageKind.SUCCESS: "green",
    MessageKind.WARNING: "yellow",
    MessageKind.ERROR: "bold red",
}


class Printer:
    """Writes messages styled by kind.

    Rich drops the styling by itself when the target stream is not a terminal,
    so redirected output stays plain text. Errors go to stderr.
    """

    def __init__(self, console: Optional[Console] = None, error_console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self.error_console = error_console or Console(stderr=True, highlight=False)

    def print(self, text: str = "", kind: MessageKind = MessageKind.PLAIN):
        if kind is MessageKind.COMMAND:
            text = f"$ {text}"
        target = self.error_console if kind is MessageKind.ERROR else self.console
        target.print(text, style=STYLES[kind], markup=False, highlight=False, soft_wrap=True)

    def cmd(self, text: str):
        self.print(text, MessageKind.COMMAND)

    def success(self, text: str):
        self.print(text, MessageKind.SUCCESS)

    def warning(self, text: str):
        self.print(text, MessageKind.WARNING)

    def error(self, text: str):
        self.print(text, MessageKind.ERROR)


def render_help(settings: Settings, prog: str = "mysqldumpgz") -> str:
    lines: List[str] = [
        "",
        "This script extracts dumps from a database, compresses them and moves them to a folder.",
        "",
        f"Use: {prog} [-h|-s|--check|--config] [database_flag] [output_file]",
        "",
        "Options:",
        "",
        "  --check            Checks if the commands used by the script are available.",
        "  --config           Shows the configuration.",
        "  -h,  --help        Shows this help.",
        "  -s,  --simulate    Shows the commands that extract the dump but does not execute them.",
        "  -y,  --yes         Answers yes to all questions.",
        "",
        "Database selection:",
        "",
        "  -a,  --all             Extracts the dump of all databases.",
    ]

    flag_columns = [f"{job.short_flag}, {job.long_flag}" for job in settings.jobs]
    width = max((len(column) for column in flag_columns), default=0)
    for column, job in zip(flag_columns, settings.jobs):
        lines.append(f"  {column.ljust(width)}    Extracts the dump of {job.db_name}.")

    lines.extend(
        [
            "",
            "You can specify the output file as an argument after the database selector option.",
            "",
        ]
    )
    return "\n".join(lines)


def render_config(settings: Settings) -> str:
    lines = [f"CONFIG_FILE: {settings.config_path}", "", "DB_CONFIG:"]
    for job in settings.jobs:
        lines.extend(
            [
                f"DB_KEY: {job.key}",
                f"    short_flag:  {job.short_flag}",
                f"    long_flag:   {job.long_flag}",
                f"    show_name:   {job.show_name}",
                f"    db_name:     {job.db_name}",
                f"    file_suffix: {job.file_suffix}",
            ]
        )
    lines.append("")

    defaults = [
        ("DATE_FORMAT", settings.date_format),
        ("DUMP_FOLDER", settings.dump_folder),
        ("ORGANIZE_BY_DATE", str(settings.organize_by_date).lower()),
        ("HOST", settings.host),
        ("PORT", settings.port),
        ("DB_USER", settings.db_user),
        ("DB_PASSWORD", CONFIG_PASSWORD_MASK),
        ("SYS_USER", settings.sys_user),
        ("SYS_GROUP", settings.sys_group),
        ("REQUIRE_ROOT", str(settings.require_root).lower()),
        ("DUMP_COMMAND", settings.dump_command),
        ("COMPRESS_COMMAND", settings.compress_command),
        ("CHOWN_COMMAND", settings.chown_command),
        ("CHECK_COMMANDS", " ".join(settings.commands_to_check)),
    ]
    for name, value in defaults:
        lines.append(f"DEFAULT_{name}: {value}")
    return "\n".join(lines)
