from __future__ import annotations

from pathlib import Path

from gitwrap.host import HostPlatform


def _proc_version(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "version"
    path.write_text(content, encoding="utf-8")
    return path


def test_wsl1_kernel_marker_disables_exec(tmp_path: Path) -> None:
    path = _proc_version(
        tmp_path,
        "Linux version 4.4.0-19041-Microsoft (Microsoft@Microsoft.com) (gcc version 5.4.0)",
    )
    host = HostPlatform(system="Linux", proc_version_path=path)

    assert host.is_wsl() is True
    assert host.supports_exec() is False


def test_plain_linux_supports_exec(tmp_path: Path) -> None:
    path = _proc_version(tmp_path, "Linux version 6.8.0-45-generic (buildd@lcy02-amd64-075)")
    host = HostPlatform(system="Linux", proc_version_path=path)

    assert host.is_wsl() is False
    assert host.supports_exec() is True


def test_marker_match_is_case_sensitive(tmp_path: Path) -> None:
    path = _proc_version(tmp_path, "Linux version 5.15.153.1-microsoft-standard-WSL2")
    assert HostPlatform(system="Linux", proc_version_path=path).is_wsl() is False


def test_missing_proc_version_is_not_wsl(tmp_path: Path) -> None:
    host = HostPlatform(system="Linux", proc_version_path=tmp_path / "missing")
    assert host.is_wsl() is False
    assert host.supports_exec() is True


def test_wsl_detection_is_memoized(tmp_path: Path) -> None:
    path = _proc_version(tmp_path, "Linux version 4.4.0-Microsoft")
    host = HostPlatform(system="Linux", proc_version_path=path)

    assert host.is_wsl() is True
    path.write_text("Linux version 6.8.0-generic", encoding="utf-8")
    assert host.is_wsl() is True


def test_marker_beyond_read_limit_is_ignored(tmp_path: Path) -> None:
    path = _proc_version(tmp_path, "x" * 1024 + "Microsoft")
    assert HostPlatform(system="Linux", proc_version_path=path).is_wsl() is False


def test_windows_never_supports_exec(tmp_path: Path) -> None:
    host = HostPlatform(system="Windows", proc_version_path=tmp_path / "missing")
    assert host.family == "windows"
    assert host.is_windows() is True
    assert host.supports_exec() is False


def test_family_names() -> None:
    assert HostPlatform(system="Darwin").family == "macos"
    assert HostPlatform(system="Linux").family == "linux"
    assert HostPlatform(system="FreeBSD").family == "linux"


def test_current_host_is_shared() -> None:
    assert HostPlatform.current() is HostPlatform.current()
