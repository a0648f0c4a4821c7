"""Environment diagnostics for mysqldumpgz."""

from mysqldumpgz.constants import EXIT_ERROR_COMMAND_NOT_FOUND, EXIT_OK
from mysqldumpgz.errors import DumpgzError
from mysqldumpgz.errors_catalog import actionable_error


class EnvironmentService:
    """Checks that the external commands are reachable.

    This is a diagnostic run on request only; the dump jobs never call it.
    """

    def __init__(self, logger, printer, command_runner):
        self.logger = logger
        self.printer = printer
        self.command_runner = command_runner

    def color_test(self):
        self.printer.print("Color test:")
        self.printer.print("This is the default color")
        self.printer.cmd("This is a command")
        self.printer.success("This is a success message")
        self.printer.warning("This is a warning message")
        self.printer.error("This is an error message")

    def check(self, commands) -> int:
        exit_code = EXIT_OK

        self.color_test()
        self.printer.print("Command test:")
        for command in commands:
            if not self.command_available(command):
                self.printer.error(actionable_error("command_not_found", command=command))
                exit_code = EXIT_ERROR_COMMAND_NOT_FOUND

        if exit_code == EXIT_OK:
            self.printer.success("OK")
        return exit_code

    def command_available(self, command: str) -> bool:
        try:
            result = self.command_runner.run([command, "--version"], capture_output=True)
        except DumpgzError as exc:
            self.logger.debug("%s", exc)
            return False
        return result.returncode == 0
