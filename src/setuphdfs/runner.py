# runner.py
from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional

from .model import Phase, Step
from .ui.console import Console, get_console


# ----------------------------------------------------------------------
# Errors
# ----------------------------------------------------------------------

@dataclass(eq=False)
class CIError(Exception):
    """
    The single failure signal of a setup run.

    kind is the phase that failed: download / configure / cache / ssh /
    format / start.
    """
    kind: str
    message: str
    step: str | None = None
    details: dict = field(default_factory=dict)

    def __str__(self) -> str:
        lines = [f"{self.kind}: {self.message}"]
        if self.step:
            lines.append(f"step={self.step}")
        for k, v in self.details.items():
            lines.append(f"{k}={v}")
        return "\n".join(lines)


@dataclass(eq=False)
class StepFailure(Exception):
    step: str
    cmd: str
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    def __str__(self) -> str:
        return f"step '{self.step}' failed (exit={self.exit_code}): {self.cmd}"


TOOL_HINTS = {
    "powershell": "Run on a Windows runner with Windows PowerShell available.",
}


# ----------------------------------------------------------------------
# Execution primitives
# ----------------------------------------------------------------------

def _command(step: Step) -> List[str] | str:
    if step.shell == "powershell":
        return [
            "powershell",
            "-NoProfile",
            "-NonInteractive",
            "-ExecutionPolicy",
            "Bypass",
            "-Command",
            step.run,
        ]
    if step.shell == "sh":
        return step.run
    raise ValueError(f"step '{step.name}' has unknown shell: {step.shell!r}")


def run_step(
    step: Step,
    *,
    env: Optional[Dict[str, str]] = None,
    console: Console | None = None,
) -> subprocess.CompletedProcess:
    """
    Run one step to completion.

    Output is always logged (stdout as info, stderr as warning); a non-zero
    exit logs the step's failure message and raises StepFailure.
    """
    console = console or get_console()

    cwd = Path(step.cwd or ".").resolve()
    if not cwd.exists():
        raise FileNotFoundError(f"step '{step.name}' cwd not found: {cwd}")

    run_env = os.environ.copy()
    run_env.update(env or {})

    cmd = _command(step)
    console.print_step(step.name)
    console.print_debug(f"$ {step.run}")

    proc = subprocess.run(
        cmd,
        shell=isinstance(cmd, str),
        stdin=subprocess.DEVNULL,
        cwd=str(cwd),
        env=run_env,
        text=True,
        capture_output=True,
    )
    console.print_output(proc.stdout or "", proc.stderr or "")

    if proc.returncode != 0:
        console.print_error(step.failure_message or f"{step.name} failed")
        raise StepFailure(
            step=step.name,
            cmd=step.run,
            exit_code=proc.returncode,
            stdout=(proc.stdout or "")[-4000:],
            stderr=(proc.stderr or "")[-4000:],
        )
    return proc


def run_pipeline(phases: List[Phase], *, console: Console | None = None) -> Dict[str, object]:
    """
    Run phases strictly in order.

    Each phase finishes (including any process it starts) before the next
    one begins. The first failure stops the run and is raised as a CIError
    tagged with the phase kind.

    Returns:
      {phase.kind: value returned by phase.action}
    """
    console = console or get_console()
    results: Dict[str, object] = {}

    for phase in phases:
        with console.group(phase.title):
            try:
                results[phase.kind] = phase.action()
            except CIError:
                raise
            except StepFailure as e:
                raise CIError(
                    kind=phase.kind,
                    message=str(e),
                    step=e.step,
                    details={"exit_code": e.exit_code},
                ) from e
            except FileNotFoundError as e:
                tool = Path(e.filename).name if e.filename else None
                details = {"hint": TOOL_HINTS[tool]} if tool in TOOL_HINTS else {}
                raise CIError(kind=phase.kind, message=str(e), details=details) from e
            except Exception as e:
                raise CIError(kind=phase.kind, message=str(e) or type(e).__name__) from e

    return results
