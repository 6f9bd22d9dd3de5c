"""Configuration models consumed by the command builder.

WrapperConfig

`wkhtmltopdf_command` (`str | list[str] | None`)
: Renderer invocation. A string is a single executable; a list allows
  wrappers such as ``["docker", "run", "...", "wkhtmltopdf"]``. When unset,
  the executable is looked up through ``WKHTMLTOPDF_PATH`` then ``PATH``.

`extra_args` (`list[str]`)
: Binary-level flags appended right after the executable, before the job's
  global parameters.

`xvfb` (`XvfbConfig | None`)
: Headless display wrapper prepended to the command when set.

`always_put_toc_first` (`bool`)
: Move every table of contents object to the front of the object list
  when building the command.

XvfbConfig

`command` (`str`)
: Wrapper executable, ``xvfb-run`` by default.

`args` (`list[str]`)
: Arguments passed to the wrapper before the renderer command.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
import yaml

from pdfsmith.adapters.binary import find_executable


class XvfbConfig(BaseModel):
    """Virtual display wrapper used to run the renderer headlessly."""

    model_config = ConfigDict(extra="forbid")

    command: str = "xvfb-run"
    args: list[str] = Field(default_factory=lambda: ["--auto-servernum"])

    def command_line(self) -> list[str]:
        return [self.command, *self.args]


class WrapperConfig(BaseModel):
    """Read-only renderer configuration shared by jobs."""

    model_config = ConfigDict(extra="forbid")

    wkhtmltopdf_command: str | list[str] | None = None
    extra_args: list[str] = Field(default_factory=list)
    xvfb: XvfbConfig | None = None
    always_put_toc_first: bool = False

    @field_validator("wkhtmltopdf_command")
    @classmethod
    def _reject_empty_command(cls, value: str | list[str] | None) -> str | list[str] | None:
        if isinstance(value, str) and not value.strip():
            return None
        if isinstance(value, list) and not value:
            return None
        return value

    @property
    def xvfb_enabled(self) -> bool:
        return self.xvfb is not None

    def command_as_list(self) -> list[str]:
        """Return the renderer invocation followed by binary-level flags."""
        command = self.wkhtmltopdf_command
        if command is None:
            binary = [find_executable()]
        elif isinstance(command, str):
            binary = [command]
        else:
            binary = list(command)
        return [*binary, *self.extra_args]

    @classmethod
    def from_mapping(cls, payload: dict[str, Any] | None) -> WrapperConfig:
        return cls.model_validate(payload or {})

    @classmethod
    def from_file(cls, path: str | Path) -> WrapperConfig:
        """Load the configuration from a YAML document."""
        raw = Path(path).read_text(encoding="utf-8")
        data = yaml.safe_load(raw) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Configuration file '{path}' must contain a mapping.")
        return cls.from_mapping(data)


__all__ = ["WrapperConfig", "XvfbConfig"]
