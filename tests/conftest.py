"""Shared test fixtures for setup-hdfs."""

from __future__ import annotations

import io
import os
import subprocess
import tarfile
import urllib.error
import urllib.request
from pathlib import Path
from typing import Callable

import pytest

from setuphdfs.cache import ToolCache
from setuphdfs.ui.console import Console, set_console

PUBLISHED_VARIABLES = ("HDFS_NAMENODE_ADDR", "HDFS_NAMENODE_HTTP_ADDR", "HADOOP_HOME")


@pytest.fixture(autouse=True)
def runner_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate every test from the real runner environment."""
    monkeypatch.setenv("RUNNER_TEMP", str(tmp_path / "runner-temp"))
    monkeypatch.setenv("RUNNER_TOOL_CACHE", str(tmp_path / "tool-cache"))
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    for name in ("SETUP_HDFS_MIRROR", "GITHUB_ENV", "GITHUB_PATH", "GITHUB_ACTIONS", "INPUT_HDFS-VERSION"):
        monkeypatch.delenv(name, raising=False)
    for name in PUBLISHED_VARIABLES:
        monkeypatch.delenv(name, raising=False)

    set_console(Console(annotations=False))
    return tmp_path


@pytest.fixture
def tool_cache(tmp_path: Path) -> ToolCache:
    return ToolCache(tmp_path / "tool-cache")


def build_hadoop_tarball(version: str, *, stale_config: bool = True) -> bytes:
    """A tiny stand-in for hadoop-<version>.tar.gz."""
    files = {
        f"hadoop-{version}/bin/hdfs": b"#!/bin/sh\n",
        f"hadoop-{version}/sbin/start-dfs.sh": b"#!/bin/sh\n",
        f"hadoop-{version}/etc/hadoop/hadoop-env.sh": b"# env\n",
    }
    if stale_config:
        files[f"hadoop-{version}/etc/hadoop/core-site.xml"] = (
            b"<configuration><property><name>stale</name></property></configuration>\n"
        )

    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode="w:gz") as tar:
        for name, data in files.items():
            info = tarfile.TarInfo(name=name)
            info.size = len(data)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(data))
    return buf.getvalue()


class FakeMirror:
    """Replaces urllib.request.urlopen; serves one archive per version."""

    def __init__(self) -> None:
        self.archives: dict[str, bytes] = {}
        self.requested: list[str] = []

    def publish(self, version: str) -> None:
        self.archives[version] = build_hadoop_tarball(version)

    def __call__(self, req, *args, **kwargs):
        url = req.full_url if isinstance(req, urllib.request.Request) else str(req)
        self.requested.append(url)
        for version, data in self.archives.items():
            if url.endswith(f"/hadoop-{version}/hadoop-{version}.tar.gz"):
                return io.BytesIO(data)
        raise urllib.error.HTTPError(url, 404, "Not Found", hdrs=None, fp=None)


@pytest.fixture
def mirror(monkeypatch: pytest.MonkeyPatch) -> FakeMirror:
    fake = FakeMirror()
    monkeypatch.setattr(urllib.request, "urlopen", fake)
    return fake


class ProcessRecorder:
    """Replaces subprocess.run; records commands and fails on request."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.envs: list[dict] = []
        self.kwargs: list[dict] = []
        self.fail_when: Callable[[str], bool] = lambda cmd: False

    def fail_on(self, fragment: str) -> None:
        self.fail_when = lambda cmd: fragment in cmd

    def __call__(self, cmd, *args, **kwargs):
        text = cmd if isinstance(cmd, str) else " ".join(cmd)
        self.calls.append(text)
        self.envs.append(dict(kwargs.get("env") or {}))
        self.kwargs.append(kwargs)
        if self.fail_when(text):
            return subprocess.CompletedProcess(cmd, 1, stdout="partial output\n", stderr="boom\n")
        return subprocess.CompletedProcess(cmd, 0, stdout="ok\n", stderr="")

    def index_of(self, fragment: str) -> int:
        for i, cmd in enumerate(self.calls):
            if fragment in cmd:
                return i
        return -1


@pytest.fixture
def processes(monkeypatch: pytest.MonkeyPatch) -> ProcessRecorder:
    recorder = ProcessRecorder()
    monkeypatch.setattr(subprocess, "run", recorder)
    return recorder


@pytest.fixture
def make_tarball() -> Callable[..., bytes]:
    return build_hadoop_tarball
