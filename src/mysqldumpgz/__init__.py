"""
mysqldumpgz - parallel mysqldump + gzip + chown wrapper
"""

__version__ = "1.0.0"

from .core import MysqlDumpGz
from .errors import DumpgzError

__all__ = ["MysqlDumpGz", "DumpgzError"]
