"""Interactive launcher UI using prompt_toolkit."""

from app_launcher.ui.app import LauncherApp

__all__ = ["LauncherApp"]
