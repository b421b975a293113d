from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ValidationError, field_validator

DEFAULT_BIN = "git"
GIT_DIR = ".git"

_ENV_PREFIX = "GITWRAP_"
_FALSE_VALUES = {"0", "false", "no", "off"}


def _env_enabled(raw: str) -> bool:
    return raw.strip().lower() not in _FALSE_VALUES


class GitWrapSettings(BaseModel):
    bin: str = DEFAULT_BIN
    git_dir: str = GIT_DIR
    debug: bool = False

    @field_validator("bin")
    @classmethod
    def validate_bin(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Executable name must not be empty")
        return value

    @field_validator("git_dir")
    @classmethod
    def validate_git_dir(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Metadata directory name must not be empty")
        if "/" in value or "\\" in value:
            raise ValueError("Metadata directory name must be a single path component")
        return value

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        base: GitWrapSettings | None = None,
    ) -> GitWrapSettings:
        env = os.environ if environ is None else environ
        data = base.model_dump() if base is not None else {}
        raw_bin = env.get(f"{_ENV_PREFIX}BIN")
        if raw_bin is not None and raw_bin.strip():
            data["bin"] = raw_bin
        raw_git_dir = env.get(f"{_ENV_PREFIX}GIT_DIR")
        if raw_git_dir is not None and raw_git_dir.strip():
            data["git_dir"] = raw_git_dir
        raw_debug = env.get(f"{_ENV_PREFIX}DEBUG")
        if raw_debug is not None:
            data["debug"] = _env_enabled(raw_debug)
        return cls.model_validate(data)

    @classmethod
    def load(
        cls,
        path: Path,
        environ: Mapping[str, str] | None = None,
    ) -> GitWrapSettings:
        """Read a YAML settings file, then apply ``GITWRAP_*`` overrides."""
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ValueError(f"Settings file at {path} must be a YAML object")
        return cls.from_env(environ, base=cls.model_validate(raw))

    def with_overrides(self, **overrides: Any) -> GitWrapSettings:
        updates = {key: value for key, value in overrides.items() if value is not None}
        if not updates:
            return self
        return type(self).model_validate({**self.model_dump(), **updates})


def format_validation_error(exc: ValidationError) -> str:
    messages: list[str] = []
    for issue in exc.errors():
        loc = ".".join(str(part) for part in issue.get("loc", []))
        message = issue.get("msg", "validation error")
        messages.append(f"{loc}: {message}")
    return "\n".join(messages)
