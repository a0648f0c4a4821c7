import logging
import os
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

import click

from . import constants
from .errors import DumpgzError
from .errors_catalog import actionable_error
from .models import Action, JobResult, RunRequest, Settings
from .services.arguments import ArgumentParser
from .services.command_runner import CommandRunner
from .services.dump_job import DumpJobService
from .services.environment import EnvironmentService
from .services.filesystem import FileSystemService
from .services.presentation import Printer, render_config, render_help

logger = logging.getLogger("mysqldumpgz")


class MysqlDumpGz:
    """Parses a command line and runs the requested dumps in parallel."""

    def __init__(self, settings: Settings, printer: Optional[Printer] = None, prog: str = "mysqldumpgz"):
        self.settings = settings
        self.prog = prog
        self.printer = printer or Printer()

        self.command_runner = CommandRunner(logger=logger)
        self.filesystem_service = FileSystemService(logger=logger)
        self.argument_parser = ArgumentParser(settings, filesystem_service=self.filesystem_service)
        self.environment_service = EnvironmentService(
            logger=logger,
            printer=self.printer,
            command_runner=self.command_runner,
        )
        self.dump_job_service = DumpJobService(
            settings,
            logger=logger,
            printer=self.printer,
            command_runner=self.command_runner,
            filesystem_service=self.filesystem_service,
        )

    def check_root(self):
        if not self.settings.require_root:
            return
        geteuid = getattr(os, "geteuid", None)
        if geteuid is not None and geteuid() != 0:
            raise DumpgzError(
                actionable_error("user_not_root"), exit_code=constants.EXIT_ERROR_USER_NOT_ROOT
            )

    def resolve_password(self) -> str:
        if self.settings.db_password:
            return self.settings.db_password
        return click.prompt(
            f"Enter password for {self.settings.db_user} database user",
            hide_input=True,
            default="",
            show_default=False,
        )

    def confirm(self, request: RunRequest) -> bool:
        if request.assume_yes:
            return True
        self.printer.print("The following databases will be extracted:")
        for job in request.jobs:
            self.printer.print(f"    {job.db_name}")
        return click.confirm("Are you sure?", default=False)

    def simulate(self, request: RunRequest) -> int:
        for job in request.jobs:
            self.dump_job_service.run(job, self.settings.db_user, "", simulate=True)
        return constants.EXIT_OK

    def extract(self, request: RunRequest) -> int:
        password = self.resolve_password()
        if not self.confirm(request):
            return constants.EXIT_OK

        results = self.run_parallel(request, password)
        exit_code = constants.EXIT_OK
        for result in results:
            if result.exit_code != constants.EXIT_OK:
                exit_code = result.exit_code
                break
        return exit_code

    def run_parallel(self, request: RunRequest, password: str) -> List[JobResult]:
        logger.debug("Launching %s dump job(s)", len(request.jobs))
        today = self.dump_job_service.clock()
        claimed = set()
        rejected = {}
        for index, job in enumerate(request.jobs):
            paths = [
                self.filesystem_service.resolve_path(path)
                for path in self.dump_job_service.build_paths(job, today)
            ]
            collision = next((path for path in paths if path in claimed), None)
            if collision is not None:
                rejected[index] = self.dump_job_service.reject_collision(job, collision, today)
                continue
            claimed.update(paths)

        with ThreadPoolExecutor(max_workers=len(request.jobs), thread_name_prefix="dump") as executor:
            slots = [
                rejected[index]
                if index in rejected
                else executor.submit(
                    self.dump_job_service.run, job, self.settings.db_user, password, today=today
                )
                for index, job in enumerate(request.jobs)
            ]
            with self.printer.console.status("Extracting dumps...", spinner="line"):
                # Launch order, not completion order, decides the reported failure.
                return [slot if isinstance(slot, JobResult) else slot.result() for slot in slots]

    def dispatch(self, request: RunRequest) -> int:
        if request.action is Action.HELP:
            self.printer.print(render_help(self.settings, prog=self.prog))
            return constants.EXIT_OK
        if request.action is Action.CHECK:
            return self.environment_service.check(self.settings.commands_to_check)
        if request.action is Action.SHOW_CONFIG:
            self.printer.print(render_config(self.settings))
            return constants.EXIT_OK
        if request.simulate:
            return self.simulate(request)
        return self.extract(request)

    def run(self, argv: Sequence[str]) -> int:
        try:
            self.check_root()
            request = self.argument_parser.parse(argv)
            return self.dispatch(request)
        except (KeyboardInterrupt, click.Abort):
            self.printer.error("Operation cancelled by user.")
            logger.info("Operation cancelled by user")
            return 1
        except DumpgzError as exc:
            self.printer.error(str(exc))
            logger.debug("Aborting with exit code %s", exc.exit_code)
            return exc.exit_code
        except Exception as exc:
            self.printer.error(f"Unexpected error: {exc}")
            logger.exception("Unexpected error")
            return 1
