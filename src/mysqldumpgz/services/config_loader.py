"""Configuration loader for mysqldumpgz."""

import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from mysqldumpgz import constants
from mysqldumpgz.errors import DumpgzError
from mysqldumpgz.errors_catalog import actionable_error
from mysqldumpgz.models import JobDefinition, Settings


class ConfigLoader:
    """Loads the YAML file describing the databases and the global defaults."""

    SUPPORTED_KEYS = {
        "jobs",
        "date_format",
        "dump_folder",
        "organize_by_date",
        "host",
        "port",
        "db_user",
        "db_password",
        "sys_user",
        "sys_group",
        "require_root",
        "dump_command",
        "compress_command",
        "chown_command",
        "check_commands",
        "verbose",
        "log_file",
    }
    JOB_KEYS = {"key", "short_flag", "long_flag", "show_name", "db_name", "file_suffix"}
    REQUIRED_JOB_KEYS = ("short_flag", "long_flag", "db_name")
    BOOLEAN_KEYS = ("organize_by_date", "require_root", "verbose")

    def candidate_paths(self) -> List[str]:
        env_path = os.environ.get(constants.CONFIG_ENV_VAR)
        if env_path:
            return [env_path]
        return [
            os.path.join(os.getcwd(), constants.CONFIG_FILE_NAME),
            os.path.join(os.path.expanduser("~"), constants.CONFIG_FILE_NAME),
        ]

    def locate(self) -> str:
        candidates = self.candidate_paths()
        for candidate in candidates:
            if os.path.isfile(candidate):
                return candidate
        raise DumpgzError(
            actionable_error("config_not_found", paths=", ".join(candidates)),
            exit_code=constants.EXIT_ERROR_CONFIG,
        )

    def load(self, config_path: Optional[str] = None) -> Settings:
        if not config_path:
            config_path = self.locate()

        path = Path(config_path)
        if not path.exists():
            raise DumpgzError(
                f"ERROR: configuration file {config_path} not found",
                exit_code=constants.EXIT_ERROR_CONFIG,
            )

        try:
            parsed = yaml.safe_load(path.read_text(encoding="utf-8"))
        except (yaml.YAMLError, OSError) as exc:
            raise self._error(f"Invalid config file '{config_path}': {exc}") from exc

        if not isinstance(parsed, dict):
            raise self._error("Config file must contain a YAML mapping at the root.")

        unknown = sorted(set(parsed.keys()) - self.SUPPORTED_KEYS)
        if unknown:
            unknown_list = ", ".join(unknown)
            raise self._error(f"Unknown configuration keys: {unknown_list}")

        for key in self.BOOLEAN_KEYS:
            if key in parsed and not isinstance(parsed[key], bool):
                raise self._error(f"Configuration key '{key}' must be true or false.")

        jobs = self._load_jobs(parsed.get("jobs"))
        self._check_flags(jobs)

        values: Dict[str, Any] = {
            key: parsed[key]
            for key in self.SUPPORTED_KEYS - {"jobs", "check_commands", "port"}
            if parsed.get(key) is not None
        }
        for key in ("date_format", "dump_folder", "host", "db_user", "db_password", "sys_user", "sys_group"):
            if key in values:
                values[key] = str(values[key])

        if parsed.get("port") is not None:
            try:
                values["port"] = int(parsed["port"])
            except (TypeError, ValueError) as exc:
                raise self._error(f"Configuration key 'port' must be an integer: {exc}") from exc

        check_commands = parsed.get("check_commands")
        if check_commands is not None:
            if not isinstance(check_commands, list):
                raise self._error("Configuration key 'check_commands' must be a list.")
            values["check_commands"] = tuple(str(command) for command in check_commands)

        return Settings(jobs=jobs, config_path=str(path), **values)

    def _load_jobs(self, raw_jobs: Any):
        if not raw_jobs:
            raise self._error("Configuration must define at least one entry under 'jobs'.")
        if not isinstance(raw_jobs, list):
            raise self._error("Configuration key 'jobs' must be a list.")

        jobs = []
        for index, raw_job in enumerate(raw_jobs):
            if not isinstance(raw_job, dict):
                raise self._error(f"Job #{index + 1} must be a mapping.")

            unknown = sorted(set(raw_job.keys()) - self.JOB_KEYS)
            if unknown:
                raise self._error(f"Unknown keys in job #{index + 1}: {', '.join(unknown)}")

            missing = [key for key in self.REQUIRED_JOB_KEYS if not raw_job.get(key)]
            if missing:
                raise self._error(f"Job #{index + 1} is missing: {', '.join(missing)}")

            db_name = str(raw_job["db_name"])
            jobs.append(
                JobDefinition(
                    key=str(raw_job.get("key") or db_name),
                    short_flag=str(raw_job["short_flag"]),
                    long_flag=str(raw_job["long_flag"]),
                    show_name=str(raw_job.get("show_name") or db_name),
                    db_name=db_name,
                    file_suffix=str(raw_job.get("file_suffix") or ""),
                )
            )
        return tuple(jobs)

    def _check_flags(self, jobs):
        seen_keys = set()
        seen_flags = {flag: "a built-in option" for flag in constants.RESERVED_FLAGS}

        for job in jobs:
            if job.key in seen_keys:
                raise self._error(f"Duplicate job key: {job.key}")
            seen_keys.add(job.key)

            for flag in job.flags:
                if not flag.startswith("-"):
                    raise self._error(f"Flag '{flag}' of job '{job.key}' must start with '-'.")
                if flag in seen_flags:
                    raise self._error(
                        f"Flag '{flag}' of job '{job.key}' collides with {seen_flags[flag]}."
                    )
                seen_flags[flag] = f"job '{job.key}'"

    @staticmethod
    def _error(message: str) -> DumpgzError:
        return DumpgzError(message, exit_code=constants.EXIT_ERROR_CONFIG)
