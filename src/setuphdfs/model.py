# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional


@dataclass(frozen=True)
class Step:
    """A single shell command run to completion by the runner."""
    name: str
    run: str
    cwd: str | None = None

    # "sh" runs through /bin/sh, "powershell" through powershell -Command
    shell: str = "sh"

    # Message logged as an error when the command exits non-zero
    failure_message: Optional[str] = None


@dataclass
class Phase:
    """
    One ordered unit of the setup pipeline.

    `kind` is the failure category reported when the phase fails:
    download / configure / cache / ssh / format / start.
    """
    kind: str
    title: str
    action: Callable[[], object]


@dataclass(frozen=True)
class SetupResult:
    """
    What a successful setup publishes for later steps of the job.

    The boundary adapter (actions.publish) turns this into GITHUB_PATH /
    GITHUB_ENV entries.
    """
    hadoop_home: Path
    path_entries: List[str] = field(default_factory=list)
    variables: Dict[str, str] = field(default_factory=dict)
