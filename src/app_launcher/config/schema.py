"""Pydantic models for configuration schema."""

from __future__ import annotations

import shlex
from typing import Any

from pydantic import BaseModel, Field, field_validator


class SearchConfig(BaseModel):
    """Where and how to discover entries."""

    data_dirs: str | None = Field(
        default=None,
        description="Colon-separated data directories (default: $XDG_DATA_DIRS)",
    )
    include_data_home: bool = Field(default=True, description="Also search $XDG_DATA_HOME")
    only_applications: bool = Field(default=True, description="Skip entries whose Type is not Application")
    deduplicate: bool = Field(default=True, description="First descriptor with a given file name wins")
    builtin_actions: bool = Field(default=True, description="Add logout/shutdown/restart entries")
    workers: int | None = Field(default=None, ge=1, description="Thread pool size for loading")

    @field_validator("data_dirs", mode="before")
    @classmethod
    def parse_data_dirs(cls, v: str | list[str] | None) -> str | None:
        """Accept a list of directories as well as a colon-separated string."""
        if isinstance(v, list):
            return ":".join(str(d) for d in v)
        return v


class IconConfig(BaseModel):
    """Icon theme lookup options."""

    enabled: bool = True
    theme: str | None = Field(default=None, description="Icon theme (default: from GTK settings)")
    fallback_theme: str = "hicolor"
    size: int = Field(default=48, ge=1, description="Preferred minimum icon size in pixels")


class LaunchConfig(BaseModel):
    """Launch options."""

    terminal: list[str] = Field(
        default_factory=lambda: ["x-terminal-emulator", "-e"],
        description="Command used to run terminal applications",
    )
    confirm_actions: bool = Field(default=True, description="Ask before logout/shutdown/restart")
    forward_output: bool = Field(default=False, description="Keep stdout/stderr of launched programs")

    @field_validator("terminal", mode="before")
    @classmethod
    def parse_terminal(cls, v: str | list[str] | None) -> list[str]:
        """Accept the terminal command as a shell string or a list."""
        if v is None:
            return []
        if isinstance(v, str):
            return shlex.split(v)
        return v


class Config(BaseModel):
    """Top-level configuration."""

    search: SearchConfig = Field(default_factory=SearchConfig)
    icons: IconConfig = Field(default_factory=IconConfig)
    launch: LaunchConfig = Field(default_factory=LaunchConfig)
    keybindings: dict[str, dict[str, str]] = Field(
        default_factory=dict, description="Mode name to keybindings mapping"
    )
    aliases: dict[str, str] = Field(default_factory=dict, description="Command aliases")

    @field_validator("keybindings", mode="before")
    @classmethod
    def parse_keybindings(cls, v: dict[str, Any] | None) -> dict[str, dict[str, str]]:
        """Drop empty modes and stringify commands."""
        if not v:
            return {}
        result: dict[str, dict[str, str]] = {}
        for mode, bindings in v.items():
            if isinstance(bindings, dict):
                result[mode] = {str(key): str(command) for key, command in bindings.items()}
        return result
