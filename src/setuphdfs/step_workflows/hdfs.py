# step_workflows/hdfs.py
from __future__ import annotations

from pathlib import Path

from ..model import Step
from .. import settings


def _script(hadoop_home: Path, subdir: str, name: str, windows: bool) -> str:
    suffix = ".cmd" if windows else ""
    return str(Path(hadoop_home) / subdir / f"{name}{suffix}")


def _invoke(script: str, args: str, windows: bool) -> str:
    # PowerShell only runs a quoted path through the call operator
    cmd = f'& "{script}"' if windows else f'"{script}"'
    return f"{cmd} {args}".strip()


def format_namenode_step(hadoop_home: str | Path, *, windows: bool | None = None) -> Step:
    """`hdfs namenode -format` against a freshly cached install."""
    if windows is None:
        windows = settings.is_windows()
    hdfs = _script(Path(hadoop_home), "bin", "hdfs", windows)
    return Step(
        name="Format hdfs namenode",
        run=_invoke(hdfs, "namenode -format", windows),
        shell="powershell" if windows else "sh",
        failure_message="Format hdfs namenode failed",
    )


def start_dfs_step(hadoop_home: str | Path, *, windows: bool | None = None) -> Step:
    if windows is None:
        windows = settings.is_windows()
    name = "start-dfs" if windows else "start-dfs.sh"
    script = _script(Path(hadoop_home), "sbin", name, windows)
    return Step(
        name="Start hdfs",
        run=_invoke(script, "", windows),
        shell="powershell" if windows else "sh",
        failure_message="Call start-dfs failed",
    )
