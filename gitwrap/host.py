from __future__ import annotations

import platform
from functools import lru_cache
from pathlib import Path

PROC_VERSION_PATH = Path("/proc/version")
WSL_MARKER = "Microsoft"
_PROC_VERSION_READ_LIMIT = 1024


class HostPlatform:
    """Answers which process-launch facilities the running host supports."""

    def __init__(
        self,
        system: str | None = None,
        proc_version_path: Path = PROC_VERSION_PATH,
    ) -> None:
        self.system = platform.system() if system is None else system
        self.proc_version_path = proc_version_path
        self._wsl: bool | None = None

    @classmethod
    def current(cls) -> HostPlatform:
        return _current_host()

    @property
    def family(self) -> str:
        system = self.system.lower()
        if "windows" in system:
            return "windows"
        if "darwin" in system:
            return "macos"
        return "linux"

    def is_windows(self) -> bool:
        return self.family == "windows"

    def is_wsl(self) -> bool:
        # WSL1 cannot replace the process image reliably; WSL2 reports a
        # lowercase "microsoft" kernel and is treated as plain Linux.
        if self._wsl is None:
            self._wsl = WSL_MARKER in self._read_proc_version()
        return self._wsl

    def supports_exec(self) -> bool:
        return not (self.is_windows() or self.is_wsl())

    def _read_proc_version(self) -> str:
        try:
            with self.proc_version_path.open("rb") as handle:
                head = handle.read(_PROC_VERSION_READ_LIMIT)
        except OSError:
            return ""
        return head.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"HostPlatform(system={self.system!r}, proc_version_path={str(self.proc_version_path)!r})"


@lru_cache(maxsize=1)
def _current_host() -> HostPlatform:
    return HostPlatform()
