import logging
import os

import click
from rich.logging import RichHandler

from .core import MysqlDumpGz
from .errors import DumpgzError
from .services.config_loader import ConfigLoader
from .services.presentation import Printer

console_handler = RichHandler(rich_tracebacks=True, show_level=False, show_path=False)

logging.basicConfig(
    level="DEBUG",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[console_handler],
)
console_handler.setLevel(logging.WARNING)


def _configure_logging(settings):
    logger = logging.getLogger("mysqldumpgz")

    if settings.verbose:
        console_handler.setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)
    else:
        logger.setLevel(logging.INFO)

    if settings.log_file:
        log_path = os.path.abspath(os.path.expanduser(settings.log_file))
        if any(
            isinstance(handler, logging.FileHandler) and handler.baseFilename == log_path
            for handler in logger.handlers
        ):
            return
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG if settings.verbose else logging.INFO)
        file_handler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
        logger.addHandler(file_handler)


@click.command(
    context_settings={
        "ignore_unknown_options": True,
        "allow_extra_args": True,
        "help_option_names": [],
    },
    add_help_option=False,
)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def main(args):
    """Dump MySQL databases, gzip them and hand them to their owner."""
    printer = Printer()

    try:
        settings = ConfigLoader().load()
    except DumpgzError as exc:
        printer.error(str(exc))
        raise SystemExit(exc.exit_code) from exc

    _configure_logging(settings)

    app = MysqlDumpGz(settings, printer=printer)
    raise SystemExit(app.run(list(args)))


if __name__ == "__main__":
    main()
