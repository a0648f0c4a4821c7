"""Subprocess execution service for mysqldumpgz."""

import subprocess
from typing import IO, List, Optional

from mysqldumpgz.constants import EXIT_ERROR_COMMAND_NOT_FOUND, PASSWORD_MASK
from mysqldumpgz.errors import DumpgzError


def redact(cmd: List[str], secret: Optional[str]) -> str:
    """Renders a command line with its `-p<password>` argument masked."""
    if secret is None:
        return " ".join(cmd)
    secret_arg = f"-p{secret}"
    return " ".join(f"-p{PASSWORD_MASK}" if part == secret_arg else part for part in cmd)


class CommandRunner:
    """Runs external commands with consistent error handling."""

    def __init__(self, logger):
        self.logger = logger

    def run(
        self,
        cmd: List[str],
        capture_output: bool = False,
        stdout: Optional[IO] = None,
        secret: Optional[str] = None,
    ) -> subprocess.CompletedProcess:
        cmd_str = redact(cmd, secret)
        self.logger.debug("Executing: %s", cmd_str)

        try:
            result = subprocess.run(
                cmd,
                text=True,
                stdout=stdout if stdout is not None else (subprocess.PIPE if capture_output else None),
                stderr=subprocess.PIPE if capture_output else None,
            )
        except FileNotFoundError as exc:
            raise DumpgzError(
                f"Required command not found: {cmd[0]}. Please install it and try again.",
                exit_code=EXIT_ERROR_COMMAND_NOT_FOUND,
            ) from exc
        except OSError as exc:
            raise DumpgzError(
                f"Failed to execute command: {cmd_str}. {exc}",
                exit_code=EXIT_ERROR_COMMAND_NOT_FOUND,
            ) from exc

        if capture_output and result.stdout:
            self.logger.debug("Command output: %s", result.stdout.strip())

        if result.returncode == 0:
            return result

        stderr = (result.stderr or "").strip() if capture_output else ""
        message = f"Command failed ({result.returncode}): {cmd_str}"
        if stderr:
            message = f"{message}\n{stderr}"

        self.logger.debug("%s", message)
        return result
