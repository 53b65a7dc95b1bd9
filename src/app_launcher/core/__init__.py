"""Core functionality: entries, discovery, icons, search and launching."""

from app_launcher.core.actions import get_builtin_actions
from app_launcher.core.desktop import parse_desktop_entry, read_descriptor
from app_launcher.core.discovery import data_dirs, list_descriptor_files, load_entries
from app_launcher.core.entry import Entry
from app_launcher.core.errors import LaunchSpawnError, LauncherError, NoCommand, ParseError
from app_launcher.core.fuzzy import fuzzy_score
from app_launcher.core.icons import Icon, IconResolver, IconSize, parse_icon_size, resolve_icons
from app_launcher.core.index import RankedEntry, SearchIndex, rank_entries
from app_launcher.core.launch import Launcher, LaunchPlan, plan_launch, spawn
from app_launcher.core.loader import EntryLoader, EntrySet, load_entry_set

__all__ = [
    "Entry",
    "EntryLoader",
    "EntrySet",
    "Icon",
    "IconResolver",
    "IconSize",
    "LaunchPlan",
    "LaunchSpawnError",
    "Launcher",
    "LauncherError",
    "NoCommand",
    "ParseError",
    "RankedEntry",
    "SearchIndex",
    "data_dirs",
    "fuzzy_score",
    "get_builtin_actions",
    "list_descriptor_files",
    "load_entries",
    "load_entry_set",
    "parse_desktop_entry",
    "parse_icon_size",
    "plan_launch",
    "rank_entries",
    "read_descriptor",
    "resolve_icons",
    "spawn",
]
