"""Full entry reloads: discovery, built-in actions and icon resolution."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from app_launcher.core.actions import get_builtin_actions
from app_launcher.core.discovery import data_dirs, load_entries
from app_launcher.core.entry import Entry
from app_launcher.core.icons import IconResolver, detect_icon_theme, resolve_icons

if TYPE_CHECKING:
    from app_launcher.config.schema import Config
    from app_launcher.core.index import SearchIndex

logger = logging.getLogger(__name__)


@dataclass
class EntrySet:
    """One complete load: entries plus their resolved icons."""

    entries: list[Entry] = field(default_factory=list)
    icons: dict[str, Path] = field(default_factory=dict)


def search_dirs(config: Config, environ: Mapping[str, str] | None = None) -> list[Path]:
    """Data directories to search for the given configuration."""
    return data_dirs(
        config.search.data_dirs,
        include_data_home=config.search.include_data_home,
        environ=environ,
    )


def make_icon_resolver(
    config: Config,
    dirs: list[Path],
    environ: Mapping[str, str] | None = None,
) -> IconResolver:
    theme = config.icons.theme or detect_icon_theme(environ)
    return IconResolver(
        dirs,
        theme=theme,
        fallback_theme=config.icons.fallback_theme,
        default_size=config.icons.size,
    )


def load_entry_set(config: Config, environ: Mapping[str, str] | None = None) -> EntrySet:
    """Run a full reload.

    Discovered entries come first, built-in actions are appended last.
    Failures of single descriptors or icons never abort the load; an
    unusable search path yields an empty set of discovered entries.
    """
    try:
        dirs = search_dirs(config, environ)
    except (OSError, RuntimeError) as e:
        # Path.home() raises RuntimeError when no home directory is known
        logger.error("Cannot determine search directories: %s", e)
        dirs = []

    entries = load_entries(
        dirs,
        only_applications=config.search.only_applications,
        dedupe=config.search.deduplicate,
        max_workers=config.search.workers,
    )
    if config.search.builtin_actions:
        entries.extend(get_builtin_actions(confirm=config.launch.confirm_actions))

    icons: dict[str, Path] = {}
    if config.icons.enabled:
        resolver = make_icon_resolver(config, dirs, environ)
        icons = resolve_icons(entries, resolver, max_workers=config.search.workers)

    return EntrySet(entries=entries, icons=icons)


class EntryLoader:
    """Loads entry sets in the background and swaps them into an index.

    Every load gets a ticket; when loads overlap, a result older than one
    already applied is dropped, so the index only moves forward.
    """

    def __init__(
        self,
        index: SearchIndex,
        load: Callable[[], EntrySet],
        on_loaded: Callable[[EntrySet], None] | None = None,
    ) -> None:
        self.index = index
        self.load = load
        self.on_loaded = on_loaded

    def reload(self) -> bool:
        """Load synchronously and apply the result.

        Returns:
            True if the result was applied to the index
        """
        ticket = self.index.next_ticket()
        entry_set = self.load()
        applied = self.index.replace(entry_set.entries, entry_set.icons, ticket=ticket)
        if applied and self.on_loaded:
            self.on_loaded(entry_set)
        return applied

    def start(self) -> threading.Thread:
        """Reload on a daemon thread."""
        thread = threading.Thread(target=self._run, name="entry-loader", daemon=True)
        thread.start()
        return thread

    def _run(self) -> None:
        try:
            self.reload()
        except Exception:
            logger.exception("Entry reload failed")
