"""Key binding management for the launcher UI."""

from __future__ import annotations

import string
from collections.abc import Callable
from typing import TYPE_CHECKING

from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys

from app_launcher.ui.commands import commands, parse_command_string

if TYPE_CHECKING:
    from app_launcher.config.schema import Config
    from app_launcher.ui.app import LauncherApp

MODES = ("normal", "confirm")

# Mapping of key names to prompt_toolkit Keys
KEY_MAPPING: dict[str, str | Keys | tuple[str | Keys, ...]] = {
    **{f"ctrl-{c}": Keys(f"c-{c}") for c in string.ascii_lowercase},
    **{f"alt-{c}": (Keys.Escape, c) for c in string.ascii_lowercase},
    "enter": Keys.ControlM,
    "return": Keys.ControlM,
    "tab": Keys.ControlI,
    "backspace": Keys.ControlH,
    "delete": Keys.Delete,
    "escape": Keys.Escape,
    "up": Keys.Up,
    "down": Keys.Down,
    "left": Keys.Left,
    "right": Keys.Right,
    "home": Keys.Home,
    "end": Keys.End,
    "pageup": Keys.PageUp,
    "pagedown": Keys.PageDown,
    "space": " ",
    **{f"f{n}": Keys(f"f{n}") for n in range(1, 13)},
}


def parse_key_spec(key_spec: str) -> str | Keys | tuple[str | Keys, ...]:
    """Parse a key specification string to prompt_toolkit key.

    Args:
        key_spec: Key specification like "ctrl-n", "alt-b", "pagedown"

    Returns:
        prompt_toolkit key specification
    """
    key_lower = key_spec.lower()

    if key_lower in KEY_MAPPING:
        return KEY_MAPPING[key_lower]

    # Single characters bind as themselves
    return key_spec


class KeyBindingManager:
    """Builds key bindings for each UI mode from the configuration."""

    def __init__(self, config: Config, app: LauncherApp) -> None:
        """Initialize key binding manager.

        Args:
            config: Configuration with keybindings
            app: The launcher application
        """
        self.config = config
        self.app = app
        self._bindings: dict[str, KeyBindings] = {}

        for mode in MODES:
            self._create_mode_bindings(mode)

    def _create_mode_bindings(self, mode: str) -> None:
        kb = KeyBindings()
        self._bindings[mode] = kb

        for key_spec, command_str in self.config.keybindings.get(mode, {}).items():
            self._bind_key(kb, key_spec, command_str)

    def _bind_key(self, kb: KeyBindings, key_spec: str, command_str: str) -> None:
        """Bind a key to a command string (possibly with args)."""
        key = parse_key_spec(key_spec)
        cmd_name, cmd_args = parse_command_string(self._resolve_alias(command_str))

        def make_handler(name: str, args: list[str]) -> Callable:
            def handler(event) -> None:  # type: ignore
                result = commands.execute(name, self.app, args)
                self.app.status = result.message
                if result.exit_app:
                    event.app.exit()

            return handler

        if isinstance(key, tuple):
            kb.add(*key)(make_handler(cmd_name, cmd_args))
        else:
            kb.add(key)(make_handler(cmd_name, cmd_args))

    def _resolve_alias(self, command_str: str) -> str:
        """Resolve command alias to full command."""
        parts = command_str.split(None, 1)
        if not parts:
            return command_str

        cmd_name = parts[0]
        rest = parts[1] if len(parts) > 1 else ""

        if cmd_name in self.config.aliases:
            resolved = self.config.aliases[cmd_name]
            if rest:
                return f"{resolved} {rest}"
            return resolved

        return command_str

    def get_bindings(self, mode: str) -> KeyBindings:
        """Get key bindings for a mode."""
        return self._bindings.get(mode, KeyBindings())
