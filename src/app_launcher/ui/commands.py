"""Bindable commands for the launcher UI."""

from __future__ import annotations

import logging
import shlex
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app_launcher.core.errors import LaunchSpawnError, NoCommand

if TYPE_CHECKING:
    from app_launcher.ui.app import LauncherApp

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Result of executing a command."""

    success: bool = True
    message: str = ""
    exit_app: bool = False


class CommandRegistry:
    """Registry of bindable commands."""

    def __init__(self) -> None:
        self._commands: dict[str, Callable[..., CommandResult]] = {}

    def register(self, name: str) -> Callable[[Callable[..., CommandResult]], Callable[..., CommandResult]]:
        """Decorator to register a command."""
        def decorator(func: Callable[..., CommandResult]) -> Callable[..., CommandResult]:
            self._commands[name] = func
            return func
        return decorator

    def get(self, name: str) -> Callable[..., CommandResult] | None:
        """Get a command by name or abbreviation."""
        # Exact match first
        if name in self._commands:
            return self._commands[name]

        # Try abbreviation matching
        matches = self._match_abbreviation(name)
        if len(matches) == 1:
            return self._commands[matches[0]]
        elif len(matches) > 1:
            raise ValueError(f"Ambiguous command '{name}': matches {matches}")

        return None

    def _match_abbreviation(self, abbrev: str) -> list[str]:
        """Match an abbreviation like "s-n" to "select-next"."""
        abbrev_parts = abbrev.split("-")
        matches: list[str] = []

        for cmd_name in self._commands:
            cmd_parts = cmd_name.split("-")
            if len(abbrev_parts) > len(cmd_parts):
                continue
            if all(cmd_parts[i].startswith(part) for i, part in enumerate(abbrev_parts)):
                matches.append(cmd_name)

        return matches

    def list_commands(self) -> list[str]:
        """List all registered command names."""
        return sorted(self._commands.keys())

    def execute(self, name: str, app: LauncherApp, args: list[str] | None = None) -> CommandResult:
        """Execute a command by name.

        Args:
            name: Command name or abbreviation
            app: The launcher application
            args: Command arguments

        Returns:
            CommandResult
        """
        try:
            command = self.get(name)
        except ValueError as e:
            return CommandResult(success=False, message=str(e))
        if command is None:
            return CommandResult(success=False, message=f"Unknown command: {name}")

        return command(app, args or [])


# Global command registry
commands = CommandRegistry()


def parse_command_string(cmd_string: str) -> tuple[str, list[str]]:
    """Parse a command string into name and arguments.

    Args:
        cmd_string: Command string like "select-next 5"

    Returns:
        Tuple of (command_name, arguments)
    """
    parts = shlex.split(cmd_string)
    if not parts:
        return "", []
    return parts[0], parts[1:]


def _count(args: list[str]) -> int:
    if args and args[0].isdigit():
        return int(args[0])
    return 1


# Selection commands

@commands.register("select-next")
def select_next(app: LauncherApp, args: list[str]) -> CommandResult:
    """Move the selection down."""
    app.index.move_selection(_count(args))
    return CommandResult()


@commands.register("select-previous")
def select_previous(app: LauncherApp, args: list[str]) -> CommandResult:
    """Move the selection up."""
    app.index.move_selection(-_count(args))
    return CommandResult()


@commands.register("select-first")
def select_first(app: LauncherApp, args: list[str]) -> CommandResult:
    app.index.select_first()
    return CommandResult()


@commands.register("select-last")
def select_last(app: LauncherApp, args: list[str]) -> CommandResult:
    app.index.select_last()
    return CommandResult()


@commands.register("clear-query")
def clear_query(app: LauncherApp, args: list[str]) -> CommandResult:
    app.buffer.text = ""
    return CommandResult()


# Launch commands

def _spawn_failed(e: LaunchSpawnError) -> CommandResult:
    logger.error("%s", e)
    return CommandResult(success=False, message=str(e))


@commands.register("launch")
def launch(app: LauncherApp, args: list[str]) -> CommandResult:
    """Launch the selected entry, asking first if it needs confirmation."""
    entry = app.index.selected
    if entry is None:
        return CommandResult(success=False, message="Nothing selected")

    try:
        plan = app.launcher.request(entry)
    except NoCommand:
        return CommandResult(success=False, message=f"{entry.title} cannot be launched")
    except LaunchSpawnError as e:
        return _spawn_failed(e)

    if plan.requires_confirmation:
        app.enter_confirm_mode()
        return CommandResult(message=f"{entry.title}? [y/N]")

    return CommandResult(exit_app=True)


@commands.register("confirm")
def confirm(app: LauncherApp, args: list[str]) -> CommandResult:
    """Run the launch waiting for confirmation."""
    try:
        plan = app.launcher.confirm()
    except LaunchSpawnError as e:
        app.exit_confirm_mode()
        return _spawn_failed(e)

    app.exit_confirm_mode()
    return CommandResult(exit_app=plan is not None)


@commands.register("cancel")
def cancel(app: LauncherApp, args: list[str]) -> CommandResult:
    """Drop the launch waiting for confirmation."""
    app.launcher.cancel()
    app.exit_confirm_mode()
    return CommandResult()


@commands.register("quit")
def quit_app(app: LauncherApp, args: list[str]) -> CommandResult:
    return CommandResult(exit_app=True)
