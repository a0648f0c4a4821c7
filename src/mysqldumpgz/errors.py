"""Domain errors for mysqldumpgz."""

from mysqldumpgz.constants import EXIT_ERROR_ARGS


class DumpgzError(RuntimeError):
    """Raised when the run cannot continue; carries the process exit code."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR_ARGS):
        super().__init__(message)
        self.exit_code = exit_code
