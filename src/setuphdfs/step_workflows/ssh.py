# step_workflows/ssh.py
from __future__ import annotations

from typing import List

from ..model import Step
from .. import settings

# start-dfs reaches the local daemons through `ssh localhost`, so the runner
# user has to trust its own key before the namenode is formatted.

FAILURE_MESSAGE = "Setup self ssh failed"

# Reuse an existing key; ssh-keygen would otherwise ask to overwrite it
KEYGEN_POSIX = "{ test -f ~/.ssh/id_rsa || ssh-keygen -t rsa -P '' -f ~/.ssh/id_rsa; }"
KEYGEN_WINDOWS = (
    "if (-not (Test-Path $HOME\\.ssh\\id_rsa)) { ssh-keygen -t rsa -P '\"\"' -f $HOME\\.ssh\\id_rsa }"
)

POSIX_COMMANDS: List[str] = [
    "chmod g-w $HOME",
    "chmod o-w $HOME",
    "mkdir -p ~/.ssh",
    KEYGEN_POSIX,
    "cat ~/.ssh/id_rsa.pub >> ~/.ssh/authorized_keys",
    "chmod 0600 ~/.ssh/authorized_keys",
    "ssh-keyscan -H localhost >> ~/.ssh/known_hosts",
    "chmod 0600 ~/.ssh/known_hosts",
    "eval `ssh-agent`",
    "ssh-add ~/.ssh/id_rsa",
]

# Authenticated Users gets read (and traverse on $HOME); everything else
# inherited from the parent is stripped, otherwise sshd rejects the files.
_GRANT_RX = '"NT AUTHORITY\\Authenticated Users:(CI)(OI)(RX)"'
_GRANT_R = '"NT AUTHORITY\\Authenticated Users:(CI)(OI)(R)"'

WINDOWS_COMMANDS: List[str] = [
    f'icacls $HOME /remove "BUILTIN\\Users" /inheritance:r /grant:r {_GRANT_RX}',
    "New-Item -ItemType Directory -Force -Path $HOME\\.ssh",
    KEYGEN_WINDOWS,
    "New-Item -ItemType File -Force -Path $HOME\\.ssh\\authorized_keys",
    "Set-Content -Path $HOME\\.ssh\\authorized_keys -Value (Get-Content $HOME\\.ssh\\id_rsa.pub)",
    f"icacls $HOME\\.ssh\\authorized_keys /inheritance:r /grant:r {_GRANT_R}",
    "New-Item -ItemType File -Force -Path $HOME\\.ssh\\known_hosts",
    "ssh-keyscan -H localhost | Out-File -Encoding ascii -FilePath $HOME\\.ssh\\known_hosts",
    f"icacls $HOME\\.ssh\\known_hosts /inheritance:r /grant:r {_GRANT_R}",
    "Start-Process ssh-agent",
    "ssh-add $HOME\\.ssh\\id_rsa",
]


def _powershell_chain(commands: List[str]) -> str:
    # Windows PowerShell 5 has no `&&`; stop at the first failing command instead
    lines = ["$ErrorActionPreference = 'Stop'"]
    for cmd in commands:
        lines.append(cmd)
        lines.append("if ($LASTEXITCODE -and $LASTEXITCODE -ne 0) { exit $LASTEXITCODE }")
    return "\n".join(lines)


def loopback_ssh_step(*, windows: bool | None = None) -> Step:
    """Build the step that sets up passwordless `ssh localhost` for this user."""
    if windows is None:
        windows = settings.is_windows()

    if windows:
        return Step(
            name="Setup self ssh",
            run=_powershell_chain(WINDOWS_COMMANDS),
            shell="powershell",
            failure_message=FAILURE_MESSAGE,
        )

    return Step(
        name="Setup self ssh",
        run=" && ".join(POSIX_COMMANDS),
        shell="sh",
        failure_message=FAILURE_MESSAGE,
    )
