"""Single database dump: mysqldump, gzip and chown in sequence."""

import os
from datetime import datetime
from typing import Callable, List, Optional, Tuple

from mysqldumpgz import constants
from mysqldumpgz.errors import DumpgzError
from mysqldumpgz.models import FileStatus, JobDefinition, JobResult, Settings
from mysqldumpgz.services.command_runner import redact


class DumpJobService:
    """Runs, or simulates, the extraction of one configured database."""

    def __init__(
        self,
        settings: Settings,
        logger,
        printer,
        command_runner,
        filesystem_service,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.settings = settings
        self.logger = logger
        self.printer = printer
        self.command_runner = command_runner
        self.filesystem_service = filesystem_service
        self.clock = clock

    def dump_folder(self, today: datetime) -> str:
        folder = os.path.expanduser(self.settings.dump_folder)
        if self.settings.organize_by_date:
            folder = os.path.join(folder, today.strftime("%Y"), today.strftime("%m"))
        return folder

    def build_paths(self, job: JobDefinition, today: Optional[datetime] = None) -> Tuple[str, str]:
        if job.output_file:
            file_sql = job.output_file
        else:
            today = today or self.clock()
            file_name = f"{today.strftime(self.settings.date_format)}{job.file_suffix}{constants.SQL_EXTENSION}"
            file_sql = os.path.join(self.dump_folder(today), file_name)
        return file_sql, f"{file_sql}{constants.COMPRESSED_SUFFIX}"

    def build_commands(
        self, job: JobDefinition, user: str, password: str, file_sql: str, file_gz: str
    ) -> Tuple[List[str], List[str], List[str]]:
        settings = self.settings
        dump_cmd = [
            settings.dump_command,
            "-h",
            settings.host,
            "-P",
            str(settings.port),
            "-u",
            user,
            f"-p{password}",
            "--databases",
            job.db_name,
        ]
        compress_cmd = [settings.compress_command, file_sql]
        chown_cmd = [settings.chown_command, f"{settings.sys_user}:{settings.sys_group}", file_gz]
        return dump_cmd, compress_cmd, chown_cmd

    def simulate(self, job: JobDefinition, user: str, password: str) -> JobResult:
        file_sql, file_gz = self.build_paths(job)
        dump_cmd, compress_cmd, chown_cmd = self.build_commands(job, user, password, file_sql, file_gz)

        self.printer.print(f"Commands to execute to extract the dump of {job.db_name}:")
        self.printer.cmd(f"{redact(dump_cmd, password)} > {file_sql}")
        self.printer.cmd(" ".join(compress_cmd))
        self.printer.cmd(" ".join(chown_cmd))
        return JobResult(job=job, exit_code=constants.EXIT_OK, sql_path=file_sql, gz_path=file_gz)

    def reject_collision(self, job: JobDefinition, path: str, today: Optional[datetime] = None) -> JobResult:
        """Fails a job whose output path another job of the same run already claimed."""
        file_sql, file_gz = self.build_paths(job, today)
        message = self._reject(
            f"ERROR: The file {path} already exists or can't be created (claimed by another job of this run).\n"
            f"       The dump of {job.db_name} won't be extracted"
        )
        return JobResult(
            job=job,
            exit_code=constants.EXIT_ERROR_ARGS,
            sql_path=file_sql,
            gz_path=file_gz,
            message=message,
        )

    def run(
        self,
        job: JobDefinition,
        user: str,
        password: str,
        simulate: bool = False,
        today: Optional[datetime] = None,
    ) -> JobResult:
        if simulate:
            return self.simulate(job, user, password)

        today = today or self.clock()
        file_sql, file_gz = self.build_paths(job, today)

        error = ""
        if not job.output_file:
            try:
                self.filesystem_service.ensure_folder(self.dump_folder(today))
            except OSError as exc:
                error = self._reject(f"ERROR: Could not create the dump folder: {exc}")
        error = error or self.validate(job, user, password, file_sql, file_gz)
        if error:
            return JobResult(
                job=job,
                exit_code=constants.EXIT_ERROR_ARGS,
                sql_path=file_sql,
                gz_path=file_gz,
                message=error,
            )

        dump_cmd, compress_cmd, chown_cmd = self.build_commands(job, user, password, file_sql, file_gz)

        def failed(exit_code: int, message: str) -> JobResult:
            self.printer.error(message)
            self.logger.debug("Job %s failed with exit code %s", job.key, exit_code)
            return JobResult(job=job, exit_code=exit_code, sql_path=file_sql, gz_path=file_gz, message=message)

        self.printer.print(f"{job.show_name}: Extracting dump of {job.db_name}...")
        if not self._execute(dump_cmd, stdout_path=file_sql, secret=password):
            # mysqldump leaves an empty or partial file behind when it fails
            self.filesystem_service.remove_file(file_sql)
            return failed(
                constants.EXIT_ERROR_MYSQLDUMP,
                f"ERROR: An error occurred while trying to extract the dump of {job.db_name}",
            )

        self.printer.print(f"{job.show_name}: Compressing the file...")
        if not self._execute(compress_cmd):
            result = failed(
                constants.EXIT_ERROR_GZIP,
                f"ERROR: An error occurred while trying to compress the file {file_sql}",
            )
            if os.path.isfile(file_sql):
                self.printer.warning(f"{job.show_name}: The uncompressed dump was kept at {file_sql}")
            return result

        self.printer.print(f"{job.show_name}: Assigning owner to the compressed file...")
        if not self._execute(chown_cmd):
            return failed(
                constants.EXIT_ERROR_CHOWN,
                f"ERROR: An error occurred while trying to assign the owner to the file {file_gz}",
            )

        self.printer.success(f"{job.show_name}: Done.")
        self.printer.success(f"    File: {file_gz}")
        self.logger.info("Dump of %s written to %s", job.db_name, file_gz)
        return JobResult(job=job, exit_code=constants.EXIT_OK, sql_path=file_sql, gz_path=file_gz)

    def validate(self, job: JobDefinition, user: str, password: str, file_sql: str, file_gz: str) -> str:
        if not user or not password:
            return self._reject("ERROR: You must specify the database user and password")
        if not job.db_name:
            return self._reject("ERROR: You must specify the database name")
        if not file_sql:
            return self._reject("ERROR: You must specify a valid file name")

        for path in (file_sql, file_gz):
            status = self.filesystem_service.can_create_file(path)
            if status is not FileStatus.OK:
                return self._reject(
                    f"ERROR: The file {path} already exists or can't be created ({status.value}).\n"
                    f"       The dump of {job.db_name} won't be extracted"
                )
        return ""

    def _reject(self, message: str) -> str:
        self.printer.error(message)
        return message

    def _execute(self, cmd: List[str], stdout_path: Optional[str] = None, secret: Optional[str] = None) -> bool:
        try:
            if stdout_path is None:
                result = self.command_runner.run(cmd, secret=secret)
            else:
                with open(stdout_path, "w", encoding="utf-8") as file_obj:
                    result = self.command_runner.run(cmd, stdout=file_obj, secret=secret)
        except DumpgzError as exc:
            self.printer.error(str(exc))
            return False
        except OSError as exc:
            self.printer.error(f"ERROR: {exc}")
            return False
        return result.returncode == 0
