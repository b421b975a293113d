"""Builder for invoking the version-control binary as a subprocess."""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Any, NoReturn, Union

import click

from gitwrap.host import HostPlatform
from gitwrap.launchers import ExecLauncher, ProcessLauncher, SpawnLauncher, select_launcher
from gitwrap.settings import GitWrapSettings

Stream = Union[IO[Any], int, None]

_UNSET: Any = object()


def quote_arg(arg: str) -> str:
    if '"' in arg:
        return f"'{arg}'"
    if arg == "" or "'" in arg or " " in arg:
        return f'"{arg}"'
    return arg


class GitWrap:
    """A single git invocation, configured by chained calls and run once.

    Streams set to ``None`` are inherited from the current process.
    """

    def __init__(
        self,
        *args: str,
        settings: GitWrapSettings | None = None,
        host: HostPlatform | None = None,
    ) -> None:
        self.settings = GitWrapSettings.from_env() if settings is None else settings
        self.host = HostPlatform.current() if host is None else host
        self.bin = self.settings.bin
        self.args: list[str] = list(args)
        self.work_dir = ""
        self.stdin: Stream = None
        self.stdout: Stream = None
        self.stderr: Stream = None
        self.launcher: ProcessLauncher = select_launcher(self.host)
        self._git_dir: str | None = None

    def __str__(self) -> str:
        return f"{self.bin} {' '.join(quote_arg(arg) for arg in self.args)}"

    def __repr__(self) -> str:
        return f"GitWrap({str(self)!r}, work_dir={self.work_dir!r})"

    def argv(self) -> list[str]:
        return [self.bin, *self.args]

    def with_work_dir(self, path: str | Path) -> GitWrap:
        self.work_dir = str(path)
        return self

    def with_stdin(self, stream: Stream) -> GitWrap:
        self.stdin = stream
        return self

    def with_output(self, out: Stream, err: Stream = _UNSET) -> GitWrap:
        self.stdout = out
        if err is not _UNSET:
            self.stderr = err
        return self

    def sub_cmd(self, name: str) -> GitWrap:
        self.args.append(name)
        return self

    def with_arg(self, *args: str) -> GitWrap:
        self.args.extend(args)
        return self

    def with_args(self, args: Sequence[str]) -> GitWrap:
        self.args.extend(args)
        return self

    def is_git_repo(self) -> bool:
        return (Path(self.work_dir or ".") / self.settings.git_dir).is_dir()

    def git_dir(self) -> str:
        """Return the repo metadata path, computed on first call and cached."""
        if self._git_dir is None:
            self._git_dir = self._compute_git_dir()
        return self._git_dir

    def _compute_git_dir(self) -> str:
        if self.work_dir:
            return f"{self.work_dir}/{self.settings.git_dir}"
        return self.settings.git_dir

    def current_branch(self) -> str:
        # Unimplemented: would read "ref: refs/heads/<name>" from <git_dir>/HEAD.
        return ""

    def trace(self) -> None:
        if self.settings.debug:
            click.secho(f">  {self}", fg="yellow", err=True)

    def output(self) -> str:
        self.trace()
        completed = subprocess.run(
            self.argv(),
            cwd=self.work_dir or None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=self.stderr,
            check=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
        return completed.stdout

    def combined_output(self) -> str:
        self.trace()
        completed = subprocess.run(
            self.argv(),
            cwd=self.work_dir or None,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            check=True,
            encoding="utf-8",
            errors="surrogateescape",
        )
        return completed.stdout

    def success(self) -> bool:
        self.trace()
        try:
            completed = subprocess.run(
                self.argv(),
                cwd=self.work_dir or None,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except (OSError, ValueError):
            return False
        return completed.returncode == 0

    def new_process(self, **popen_kwargs: Any) -> subprocess.Popen[Any]:
        """Start and return a process for this command.

        The process is already running when this returns; ``popen_kwargs`` are
        passed straight to :class:`subprocess.Popen` and are the only way to
        configure it before it starts.
        """
        return subprocess.Popen(self.argv(), **popen_kwargs)

    def run(self) -> None:
        self.launcher.launch(self)

    def spawn(self) -> None:
        SpawnLauncher().launch(self)

    def exec(self) -> NoReturn:
        ExecLauncher().launch(self)
