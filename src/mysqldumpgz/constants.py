"""Shared constants for mysqldumpgz."""

EXIT_OK = 0
EXIT_ERROR_USER_NOT_ROOT = 1
EXIT_ERROR_CONFIG = 1
EXIT_ERROR_ARGS = 2
EXIT_ERROR_COMMAND_NOT_FOUND = 3
EXIT_ERROR_MYSQLDUMP = 11
EXIT_ERROR_GZIP = 12
EXIT_ERROR_CHOWN = 13

CONFIG_ENV_VAR = "MYSQLDUMPGZ_CONFIG"
CONFIG_FILE_NAME = ".mysqldumpgz.yml"

DEFAULT_DATE_FORMAT = "%Y-%m-%d"
DEFAULT_DUMP_FOLDER = "~/dumps"
DEFAULT_ORGANIZE_BY_DATE = True
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 3306
DEFAULT_DB_USER = "root"
DEFAULT_DB_PASSWORD = ""
DEFAULT_SYS_USER = "root"
DEFAULT_SYS_GROUP = "root"
DEFAULT_REQUIRE_ROOT = False
DEFAULT_DUMP_COMMAND = "mysqldump"
DEFAULT_COMPRESS_COMMAND = "gzip"
DEFAULT_CHOWN_COMMAND = "chown"

SQL_EXTENSION = ".sql"
COMPRESSED_SUFFIX = ".gz"
PASSWORD_MASK = "******"
CONFIG_PASSWORD_MASK = "********"

RESERVED_FLAGS = (
    "-h",
    "--help",
    "-s",
    "--simulate",
    "-y",
    "--yes",
    "--check",
    "--config",
    "-a",
    "--all",
)
