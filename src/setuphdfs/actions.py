# actions.py
from __future__ import annotations

import os
import uuid
from pathlib import Path

from .model import SetupResult
from .ui.console import get_console

# ---------------------------------------------------------------------
# GitHub Actions runtime boundary
# ---------------------------------------------------------------------
# Inputs arrive as INPUT_<NAME> environment variables. Exported variables
# and PATH entries only reach later steps through the files named by
# GITHUB_ENV / GITHUB_PATH; each is also applied to this process so the
# rest of the current step sees it too.
# ---------------------------------------------------------------------


class InputError(ValueError):
    """Raised when a required action input is missing."""


def get_input(name: str, *, required: bool = False) -> str:
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = os.environ.get(key, "").strip()
    if required and not value:
        raise InputError(f"Input required and not supplied: {name}")
    return value


def _append_file_command(env_name: str, line: str) -> bool:
    path = os.environ.get(env_name)
    if not path:
        return False
    with Path(path).open("a", encoding="utf-8") as f:
        f.write(line if line.endswith("\n") else line + "\n")
    return True


def export_variable(name: str, value: str) -> None:
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    if delimiter in name or delimiter in value:
        raise ValueError(f"Unexpected input: value for {name} contains the delimiter")
    os.environ[name] = value

    if not _append_file_command("GITHUB_ENV", f"{name}<<{delimiter}\n{value}\n{delimiter}"):
        get_console().print_info(f"{name}={value}")


def add_path(entry: str) -> None:
    os.environ["PATH"] = f"{entry}{os.pathsep}{os.environ.get('PATH', '')}"
    if not _append_file_command("GITHUB_PATH", entry):
        get_console().print_info(f"PATH+={entry}")


def publish(result: SetupResult) -> None:
    """Hand a finished setup to the later steps of the job."""
    for entry in result.path_entries:
        add_path(entry)
    for name, value in result.variables.items():
        export_variable(name, value)
