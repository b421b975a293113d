from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from gitwrap.command import GitWrap
from gitwrap.doctor import WARNING_CHECKS, run_doctor_checks
from gitwrap.host import HostPlatform
from gitwrap.launchers import GitWrapError, get_launcher
from gitwrap.settings import GitWrapSettings, format_validation_error

_PASSTHROUGH = {"ignore_unknown_options": True, "allow_interspersed_args": False}


@dataclass(slots=True)
class CliState:
    settings: GitWrapSettings
    work_dir: Path | None


def _load_settings(
    config: Path | None, bin_name: str | None, debug: bool | None
) -> GitWrapSettings:
    try:
        if config is not None:
            settings = GitWrapSettings.load(config)
        else:
            settings = GitWrapSettings.from_env()
        return settings.with_overrides(bin=bin_name, debug=debug)
    except ValidationError as exc:
        raise click.ClickException(
            f"Invalid settings:\n{format_validation_error(exc)}"
        ) from exc
    except ValueError as exc:
        raise click.ClickException(str(exc)) from exc


def _echo_raw(text: str) -> None:
    # Captured output keeps undecodable bytes as surrogates; write them back verbatim.
    click.echo(text.encode("utf-8", errors="surrogateescape"), nl=False)


def _build(state: CliState, git_args: tuple[str, ...]) -> GitWrap:
    command = GitWrap(*git_args, settings=state.settings, host=HostPlatform.current())
    if state.work_dir is not None:
        command.with_work_dir(state.work_dir)
    return command


@click.group(help="Build and run git invocations with platform-aware launching.")
@click.option("config", "--config", type=click.Path(exists=True, path_type=Path), default=None)
@click.option("bin_name", "--bin", type=str, default=None, help="Executable to invoke.")
@click.option(
    "work_dir",
    "-C",
    "--work-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
)
@click.option("debug", "--debug/--no-debug", default=None, help="Trace each command line.")
@click.pass_context
def app(
    ctx: click.Context,
    config: Path | None,
    bin_name: str | None,
    work_dir: Path | None,
    debug: bool | None,
) -> None:
    ctx.obj = CliState(settings=_load_settings(config, bin_name, debug), work_dir=work_dir)


@app.command("show", context_settings=_PASSTHROUGH)
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def show(state: CliState, git_args: tuple[str, ...]) -> None:
    click.echo(str(_build(state, git_args)))


@app.command("output", context_settings=_PASSTHROUGH)
@click.option("combined", "--combined", is_flag=True, default=False)
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def output(state: CliState, combined: bool, git_args: tuple[str, ...]) -> None:
    command = _build(state, git_args)
    try:
        text = command.combined_output() if combined else command.output()
    except subprocess.CalledProcessError as exc:
        if exc.output:
            _echo_raw(exc.output)
        raise SystemExit(exc.returncode) from exc
    except (OSError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    _echo_raw(text)


@app.command("check", context_settings=_PASSTHROUGH)
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def check(state: CliState, git_args: tuple[str, ...]) -> None:
    ok = _build(state, git_args).success()
    click.echo(f"STATUS={'success' if ok else 'failed'}")
    if not ok:
        raise SystemExit(1)


@app.command("run", context_settings=_PASSTHROUGH)
@click.option("spawn", "--spawn", is_flag=True, default=False, help="Never replace this process.")
@click.argument("git_args", nargs=-1, type=click.UNPROCESSED)
@click.pass_obj
def run(state: CliState, spawn: bool, git_args: tuple[str, ...]) -> None:
    command = _build(state, git_args)
    if spawn or state.work_dir is not None:
        command.launcher = get_launcher("spawn")
    try:
        command.run()
    except subprocess.CalledProcessError as exc:
        raise SystemExit(exc.returncode) from exc
    except (GitWrapError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc


@app.command("is-repo")
@click.pass_obj
def is_repo(state: CliState) -> None:
    ok = _build(state, ()).is_git_repo()
    click.echo("true" if ok else "false")
    if not ok:
        raise SystemExit(1)


@app.command("doctor")
@click.pass_obj
def doctor(state: CliState) -> None:
    work_dir = state.work_dir if state.work_dir is not None else Path.cwd()
    checks = run_doctor_checks(state.settings, work_dir, HostPlatform.current())
    has_failures = False
    for name, ok, message in checks:
        if ok:
            status = "PASS"
        elif name in WARNING_CHECKS:
            status = "WARN"
        else:
            status = "FAIL"
        click.echo(f"{status} {name}: {message}")
        has_failures = has_failures or (status == "FAIL")

    if has_failures:
        raise SystemExit(1)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
