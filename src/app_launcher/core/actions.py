"""Built-in session actions."""

from __future__ import annotations

from app_launcher.core.entry import Entry


def get_builtin_actions(confirm: bool = True) -> list[Entry]:
    """Get the built-in logout, shutdown and restart entries.

    Args:
        confirm: Whether launching an action needs explicit confirmation

    Returns:
        List of action entries, always in the same order
    """
    return [
        Entry.action(
            "logout",
            title="Logout",
            description="Log out of the currently active session",
            icon="system-log-out",
            command="sh -c 'loginctl terminate-session $XDG_SESSION_ID'",
            confirm=confirm,
        ),
        Entry.action(
            "shutdown",
            title="Shutdown",
            description="Shut down the system",
            icon="system-shutdown",
            command="shutdown now",
            confirm=confirm,
        ),
        Entry.action(
            "restart",
            title="Restart",
            description="Restart the system",
            icon="system-reboot",
            command="shutdown -r now",
            confirm=confirm,
        ),
    ]
