# orchestrator.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from . import settings
from .cache import ToolCache
from .distribution import acquire, download_url
from .model import Phase, SetupResult
from .runner import run_pipeline, run_step
from .site_config import write_site_config
from .step_workflows.hdfs import format_namenode_step, start_dfs_step
from .step_workflows.ssh import loopback_ssh_step
from .ui.console import Console, get_console

# download -> configure -> cache -> ssh -> format -> start
#
# format and start talk to localhost over ssh, so nothing after the ssh
# phase starts until it has exited successfully.


class HDFSSetup:
    """
    One-shot single-node HDFS setup for a CI job.

    Usage:
      result = HDFSSetup("3.3.1").run()
      actions.publish(result)
    """

    def __init__(
        self,
        version: str,
        *,
        cache: ToolCache | None = None,
        arch: str | None = None,
        windows: bool | None = None,
        console: Console | None = None,
    ):
        self.version = version
        self.cache = cache or ToolCache()
        self.arch = arch or settings.arch()
        self.windows = settings.is_windows() if windows is None else windows
        self.console = console or get_console()

        self._unpacked: Optional[Path] = None
        self._home: Optional[Path] = None

    @property
    def url(self) -> str:
        return download_url(self.version)

    @property
    def hadoop_home(self) -> Path:
        if self._home is None:
            raise RuntimeError("hadoop home is only known after the cache phase")
        return self._home

    # ---- phases ----

    def _download(self) -> Path:
        self.console.print_info(f"Downloading {self.url}")
        self._unpacked = acquire(self.version)
        return self._unpacked

    def _configure(self) -> List[Path]:
        written = write_site_config(self._unpacked)
        for path in written:
            self.console.print_info(f"Wrote {path}")
        return written

    def _cache(self) -> Path:
        self._home = self.cache.cache_dir(self._unpacked, settings.TOOL_NAME, self.version, self.arch)
        self.console.print_info(f"Cached at {self._home}")
        return self._home

    def _ssh(self):
        return run_step(loopback_ssh_step(windows=self.windows), console=self.console)

    def _format(self):
        env = {"HADOOP_HOME": str(self.hadoop_home)}
        return run_step(format_namenode_step(self.hadoop_home, windows=self.windows), env=env, console=self.console)

    def _start(self):
        env = {"HADOOP_HOME": str(self.hadoop_home)}
        return run_step(start_dfs_step(self.hadoop_home, windows=self.windows), env=env, console=self.console)

    def phases(self) -> List[Phase]:
        return [
            Phase("download", "Download hadoop", self._download),
            Phase("configure", "Write site configuration", self._configure),
            Phase("cache", "Cache hadoop", self._cache),
            Phase("ssh", "Setup self ssh", self._ssh),
            Phase("format", "Format hdfs namenode", self._format),
            Phase("start", "Start hdfs", self._start),
        ]

    def result(self) -> SetupResult:
        home = self.hadoop_home
        return SetupResult(
            hadoop_home=home,
            path_entries=[str(home / "bin")],
            variables={
                "HDFS_NAMENODE_ADDR": settings.NAMENODE_ADDR,
                "HDFS_NAMENODE_HTTP_ADDR": settings.NAMENODE_HTTP_ADDR,
                "HADOOP_HOME": str(home),
            },
        )

    def run(self) -> SetupResult:
        self.console.print_setup_started(self.version, self.url)
        run_pipeline(self.phases(), console=self.console)
        return self.result()


def setup_hdfs(version: str, **kwargs) -> SetupResult:
    return HDFSSetup(version, **kwargs).run()
