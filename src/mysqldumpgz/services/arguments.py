"""Command line parsing for mysqldumpgz.

Job flags come from the configuration, so the arguments are scanned by hand
left to right instead of being declared up front.
"""

import dataclasses
from typing import Dict, List, Sequence

from mysqldumpgz.constants import EXIT_ERROR_ARGS
from mysqldumpgz.errors import DumpgzError
from mysqldumpgz.errors_catalog import actionable_error
from mysqldumpgz.models import Action, JobDefinition, RunRequest, Settings


class ArgumentParser:
    def __init__(self, settings: Settings, filesystem_service):
        self.settings = settings
        self.filesystem_service = filesystem_service

    def parse(self, argv: Sequence[str]) -> RunRequest:
        if not argv:
            return RunRequest(action=Action.HELP)

        selected: List[JobDefinition] = []
        overrides: Dict[str, str] = {}
        simulate = False
        assume_yes = False

        index = 0
        while index < len(argv):
            option = argv[index]
            index += 1

            if option in ("-h", "--help"):
                return RunRequest(action=Action.HELP)
            if option == "--check":
                return RunRequest(action=Action.CHECK)
            if option == "--config":
                return RunRequest(action=Action.SHOW_CONFIG)
            if option in ("-s", "--simulate"):
                simulate = True
                continue
            if option in ("-y", "--yes"):
                assume_yes = True
                continue
            if option in ("-a", "--all"):
                selected.extend(self.settings.jobs)
                continue

            job = self.settings.find_job(option)
            if job is None:
                raise DumpgzError(
                    actionable_error("invalid_option", option=option), exit_code=EXIT_ERROR_ARGS
                )

            selected.append(job)
            # A following token is an output path unless it looks like an option.
            if index < len(argv) and argv[index] and not argv[index].startswith("-"):
                overrides[job.key] = self.filesystem_service.resolve_path(argv[index])
                index += 1

        if not selected:
            raise DumpgzError(actionable_error("no_database"), exit_code=EXIT_ERROR_ARGS)

        jobs = tuple(
            dataclasses.replace(job, output_file=overrides[job.key]) if job.key in overrides else job
            for job in selected
        )
        return RunRequest(jobs=jobs, simulate=simulate, assume_yes=assume_yes)
