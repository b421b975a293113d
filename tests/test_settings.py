from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from gitwrap.settings import DEFAULT_BIN, GIT_DIR, GitWrapSettings, format_validation_error


def test_defaults() -> None:
    settings = GitWrapSettings()
    assert settings.bin == DEFAULT_BIN == "git"
    assert settings.git_dir == GIT_DIR == ".git"
    assert settings.debug is False


def test_from_env_reads_prefixed_variables() -> None:
    settings = GitWrapSettings.from_env(
        {"GITWRAP_BIN": "/usr/local/bin/git", "GITWRAP_GIT_DIR": ".meta", "GITWRAP_DEBUG": "1"}
    )
    assert settings.bin == "/usr/local/bin/git"
    assert settings.git_dir == ".meta"
    assert settings.debug is True


@pytest.mark.parametrize("raw", ["0", "false", "No", " OFF "])
def test_from_env_false_values(raw: str) -> None:
    assert GitWrapSettings.from_env({"GITWRAP_DEBUG": raw}).debug is False


def test_from_env_ignores_blank_values() -> None:
    settings = GitWrapSettings.from_env({"GITWRAP_BIN": "  ", "GITWRAP_GIT_DIR": ""})
    assert settings.bin == "git"
    assert settings.git_dir == ".git"


def test_load_file_then_environment(tmp_path: Path) -> None:
    config = tmp_path / "gitwrap.yaml"
    config.write_text("bin: hub\ndebug: true\n", encoding="utf-8")

    from_file = GitWrapSettings.load(config, environ={})
    overridden = GitWrapSettings.load(config, environ={"GITWRAP_DEBUG": "off"})

    assert from_file.bin == "hub"
    assert from_file.debug is True
    assert overridden.bin == "hub"
    assert overridden.debug is False


def test_load_empty_file_gives_defaults(tmp_path: Path) -> None:
    config = tmp_path / "gitwrap.yaml"
    config.write_text("", encoding="utf-8")
    assert GitWrapSettings.load(config, environ={}) == GitWrapSettings()


def test_load_rejects_non_mapping(tmp_path: Path) -> None:
    config = tmp_path / "gitwrap.yaml"
    config.write_text("- git\n- hub\n", encoding="utf-8")
    with pytest.raises(ValueError, match="must be a YAML object"):
        GitWrapSettings.load(config, environ={})


def test_git_dir_must_be_single_component() -> None:
    with pytest.raises(ValidationError) as excinfo:
        GitWrapSettings(git_dir="nested/.git")
    assert "git_dir" in format_validation_error(excinfo.value)


def test_bin_must_not_be_empty() -> None:
    with pytest.raises(ValidationError):
        GitWrapSettings(bin="   ")


def test_with_overrides_skips_none() -> None:
    settings = GitWrapSettings(bin="hub")
    assert settings.with_overrides(bin=None, debug=None) is settings
    assert settings.with_overrides(debug=True) == GitWrapSettings(bin="hub", debug=True)
