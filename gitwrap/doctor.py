from __future__ import annotations

import shutil
import subprocess
from pathlib import Path

from gitwrap.host import HostPlatform
from gitwrap.launchers import select_launcher
from gitwrap.settings import GitWrapSettings

WARNING_CHECKS = {"repository"}


def _next_action(tool: str, host: HostPlatform) -> str:
    tool_map: dict[str, dict[str, str]] = {
        "git": {
            "macos": "brew install git",
            "linux": "sudo apt-get update && sudo apt-get install -y git",
            "windows": "winget install --id Git.Git -e --source winget",
        },
        "repository": {
            "macos": "git init",
            "linux": "git init",
            "windows": "git init",
        },
    }
    resolved = tool_map.get(tool, {})
    return resolved.get(host.family, "echo 'No platform-specific remediation available'")


def _with_next(message: str, tool: str, host: HostPlatform) -> str:
    return f"{message} NEXT: {_next_action(tool, host)}"


def _binary_exists(name: str) -> bool:
    return shutil.which(name) is not None


def _binary_check(settings: GitWrapSettings, host: HostPlatform) -> tuple[str, bool, str]:
    if _binary_exists(settings.bin):
        return ("git-binary", True, f"{settings.bin} found in PATH")
    return (
        "git-binary",
        False,
        _with_next(f"{settings.bin} not found in PATH.", "git", host),
    )


def _version_check(settings: GitWrapSettings, binary_ok: bool) -> tuple[str, bool, str]:
    if not binary_ok:
        return ("git-version", False, "Skipped because the binary is unavailable")
    try:
        probe = subprocess.run(
            [settings.bin, "--version"],
            check=False,
            capture_output=True,
            text=True,
        )
    except OSError as exc:
        return ("git-version", False, str(exc))
    if probe.returncode == 0:
        return ("git-version", True, probe.stdout.strip() or "version reported")
    message = probe.stderr.strip() or probe.stdout.strip() or "version probe failed"
    return ("git-version", False, message)


def _platform_check(host: HostPlatform) -> tuple[str, bool, str]:
    suffix = " (WSL detected)" if host.is_wsl() else ""
    return ("platform", True, f"{host.family}{suffix}")


def _launcher_check(host: HostPlatform) -> tuple[str, bool, str]:
    launcher = select_launcher(host)
    if launcher.name == "exec":
        return ("launcher", True, "exec: run replaces the current process")
    return ("launcher", True, "spawn: process replacement unsupported on this host")


def _repository_check(
    settings: GitWrapSettings, work_dir: Path, host: HostPlatform
) -> tuple[str, bool, str]:
    if (work_dir / settings.git_dir).is_dir():
        return ("repository", True, f"{work_dir} is a git repository")
    return (
        "repository",
        False,
        _with_next(f"No {settings.git_dir} directory under {work_dir}.", "repository", host),
    )


def run_doctor_checks(
    settings: GitWrapSettings,
    work_dir: Path,
    host: HostPlatform | None = None,
) -> list[tuple[str, bool, str]]:
    resolved_host = HostPlatform.current() if host is None else host
    checks: list[tuple[str, bool, str]] = []

    binary_check = _binary_check(settings, resolved_host)
    checks.append(binary_check)
    checks.append(_version_check(settings, binary_check[1]))
    checks.append(_platform_check(resolved_host))
    checks.append(_launcher_check(resolved_host))
    checks.append(_repository_check(settings, work_dir, resolved_host))
    return checks
