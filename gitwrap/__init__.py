"""Thin builder around invoking git as a subprocess."""

from gitwrap.command import GitWrap, quote_arg
from gitwrap.host import HostPlatform
from gitwrap.launchers import (
    CommandNotFoundError,
    ExecLauncher,
    GitWrapError,
    ProcessLauncher,
    SpawnLauncher,
    get_launcher,
    select_launcher,
)
from gitwrap.settings import DEFAULT_BIN, GIT_DIR, GitWrapSettings

__all__ = [
    "DEFAULT_BIN",
    "GIT_DIR",
    "CommandNotFoundError",
    "ExecLauncher",
    "GitWrap",
    "GitWrapError",
    "GitWrapSettings",
    "HostPlatform",
    "ProcessLauncher",
    "SpawnLauncher",
    "get_launcher",
    "quote_arg",
    "select_launcher",
]
