"""Filesystem helpers for mysqldumpgz."""

import logging
import os

from mysqldumpgz.models import FileStatus


class FileSystemService:
    """Encapsulates file and directory side effects."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    @staticmethod
    def resolve_path(path: str) -> str:
        return os.path.realpath(os.path.expanduser(path))

    def can_create_file(self, path: str) -> FileStatus:
        """Probes a path by creating and removing it; leaves nothing behind on success."""
        path = self.resolve_path(path)

        if os.path.isfile(path) or os.path.isdir(path):
            return FileStatus.EXISTS
        if os.path.lexists(path):
            return FileStatus.EXISTS
        if not os.path.isdir(os.path.dirname(path)):
            return FileStatus.FOLDER_MISSING

        try:
            fd = os.open(path, os.O_CREAT | os.O_EXCL | os.O_WRONLY, 0o644)
        except FileExistsError:
            return FileStatus.EXISTS
        except OSError as exc:
            self.logger.debug("Cannot create %s: %s", path, exc)
            return FileStatus.NOT_CREATABLE

        os.close(fd)
        os.remove(path)
        return FileStatus.OK

    def ensure_folder(self, path: str):
        if not os.path.isdir(path):
            os.makedirs(path, exist_ok=True)
            self.logger.debug("Created directory: %s", path)

    def remove_file(self, path: str):
        if os.path.isfile(path):
            try:
                os.remove(path)
                self.logger.debug("Removed file: %s", path)
            except OSError as exc:
                self.logger.warning("Could not remove %s: %s", path, exc)
