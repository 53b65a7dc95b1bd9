"""Launchable entry model."""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_TITLE = "Unnamed"
ACTION_ID_PREFIX = "launcher:action:"


@dataclass(frozen=True)
class Entry:
    """A launchable item: a discovered application or a built-in action.

    Attributes:
        id: Unique identifier (descriptor path, or a namespaced action id)
        title: Display name
        generic_name: Secondary name, also searched
        comment: The descriptor's own description
        icon: Logical icon name or absolute path (unresolved)
        launch_command: Raw exec template (unexpanded)
        is_terminal: Whether the command runs inside a terminal emulator
        user_confirm: Whether launching needs an explicit confirmation
    """

    id: str
    title: str = DEFAULT_TITLE
    generic_name: str | None = None
    comment: str | None = None
    icon: str | None = None
    launch_command: str | None = None
    is_terminal: bool = False
    user_confirm: bool = False

    @property
    def description(self) -> str | None:
        """Comment if present, otherwise the generic name."""
        if self.comment is not None:
            return self.comment
        return self.generic_name

    @property
    def is_action(self) -> bool:
        """Check if this is a built-in action."""
        return self.id.startswith(ACTION_ID_PREFIX)

    @property
    def is_launchable(self) -> bool:
        """Check if the entry carries a launch command."""
        return bool(self.launch_command)

    @classmethod
    def action(
        cls,
        name: str,
        title: str,
        command: str,
        description: str | None = None,
        icon: str | None = None,
        confirm: bool = False,
    ) -> Entry:
        """Build a built-in action entry with a namespaced id."""
        return cls(
            id=f"{ACTION_ID_PREFIX}{name}",
            title=title,
            comment=description,
            icon=icon,
            launch_command=command,
            is_terminal=False,
            user_confirm=confirm,
        )
