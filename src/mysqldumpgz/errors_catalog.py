"""Actionable error catalog for mysqldumpgz."""

from typing import Dict

_ERROR_MESSAGES: Dict[str, Dict[str, str]] = {
    "config_not_found": {
        "what": "ERROR: configuration file not found (looked in: {paths})",
        "next": "Create one from mysqldumpgz.example.yml or point $MYSQLDUMPGZ_CONFIG at it.",
    },
    "user_not_root": {
        "what": "ERROR: This script must be run as root",
        "next": "Run it again with sudo or set `require_root: false` in the configuration.",
    },
    "invalid_option": {
        "what": "ERROR: Invalid option {option}",
        "next": "Use -h or --help to get help",
    },
    "no_database": {
        "what": "ERROR: No database was specified",
        "next": "Use -h or --help to get help",
    },
    "command_not_found": {
        "what": "ERROR: command {command} not found",
        "next": "Install it or fix its name in the configuration, then run --check again.",
    },
}


def actionable_error(code: str, **kwargs: str) -> str:
    if code not in _ERROR_MESSAGES:
        raise KeyError(f"Unknown error catalog key: {code}")

    template = _ERROR_MESSAGES[code]
    what = template["what"].format(**kwargs)
    next_step = template["next"].format(**kwargs)
    return f"{what}\n    {next_step}"
