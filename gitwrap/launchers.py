from __future__ import annotations

import os
import shutil
import subprocess
from typing import TYPE_CHECKING, NoReturn

if TYPE_CHECKING:
    from gitwrap.command import GitWrap
    from gitwrap.host import HostPlatform


class GitWrapError(RuntimeError):
    """Base class for errors raised by gitwrap."""


class CommandNotFoundError(GitWrapError):
    """Raised when the executable cannot be resolved on the search path."""

    def __init__(self, name: str) -> None:
        super().__init__(f'exec: "{name}": command not found')
        self.name = name


class ProcessLauncher:
    name = "base"

    def launch(self, command: GitWrap) -> None:
        raise NotImplementedError


class SpawnLauncher(ProcessLauncher):
    """Start a child process with inherited streams and wait for it."""

    name = "spawn"

    def launch(self, command: GitWrap) -> None:
        command.trace()
        subprocess.run(
            command.argv(),
            cwd=command.work_dir or None,
            stdin=command.stdin,
            stdout=command.stdout,
            stderr=command.stderr,
            check=True,
        )


class ExecLauncher(ProcessLauncher):
    """Replace the current process image with the resolved executable.

    The working directory configured on the command is not applied: the new
    image inherits the caller's current directory.
    """

    name = "exec"

    def launch(self, command: GitWrap) -> NoReturn:
        command.trace()
        binary = shutil.which(command.bin)
        if binary is None:
            raise CommandNotFoundError(command.bin)
        os.execve(binary, [binary, *command.args], os.environ)
        raise AssertionError("os.execve returned")  # pragma: no cover


_LAUNCHERS: dict[str, type[ProcessLauncher]] = {
    SpawnLauncher.name: SpawnLauncher,
    ExecLauncher.name: ExecLauncher,
}


def get_launcher(name: str) -> ProcessLauncher:
    launcher_cls = _LAUNCHERS.get(name.strip().lower())
    if launcher_cls is None:
        supported = ", ".join(sorted(_LAUNCHERS))
        raise ValueError(f"Unsupported launcher '{name}'. Try one of: {supported}")
    return launcher_cls()


def select_launcher(host: HostPlatform) -> ProcessLauncher:
    if host.supports_exec():
        return ExecLauncher()
    return SpawnLauncher()
