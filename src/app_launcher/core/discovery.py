"""Discovery of desktop entry descriptors across XDG data directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from app_launcher.core.desktop import parse_desktop_entry
from app_launcher.core.entry import Entry
from app_launcher.core.errors import ParseError

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIRS = "/usr/local/share:/usr/share"
APPLICATIONS_SUBDIR = "applications"
DESCRIPTOR_SUFFIX = ".desktop"


def split_search_path(value: str) -> list[Path]:
    """Split a colon-separated search path, ignoring empty components."""
    return [Path(part) for part in value.split(":") if part]


def data_home(environ: Mapping[str, str] | None = None) -> Path:
    """Get the user data directory ($XDG_DATA_HOME or ~/.local/share)."""
    env = os.environ if environ is None else environ
    value = env.get("XDG_DATA_HOME")
    if value:
        return Path(value)
    return Path.home() / ".local" / "share"


def data_dirs(
    search_path: str | None = None,
    include_data_home: bool = False,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """Get the ordered list of data directories to search.

    Args:
        search_path: Colon-separated directories (default: $XDG_DATA_DIRS)
        include_data_home: Search $XDG_DATA_HOME before everything else
        environ: Environment mapping (default: os.environ)

    Returns:
        Directories in search order, without duplicates
    """
    env = os.environ if environ is None else environ
    if search_path is None:
        search_path = env.get("XDG_DATA_DIRS") or DEFAULT_DATA_DIRS

    dirs = split_search_path(search_path)
    if include_data_home:
        dirs.insert(0, data_home(env))

    seen: set[Path] = set()
    result: list[Path] = []
    for d in dirs:
        if d not in seen:
            seen.add(d)
            result.append(d)
    return result


def scan_directory(data_dir: Path) -> list[Path]:
    """List descriptor files directly under <data_dir>/applications.

    Missing or non-directory roots yield an empty list.
    """
    apps_dir = data_dir / APPLICATIONS_SUBDIR
    try:
        return [
            child
            for child in apps_dir.iterdir()
            if child.suffix == DESCRIPTOR_SUFFIX and child.is_file()
        ]
    except OSError:
        return []


def list_descriptor_files(dirs: Iterable[Path], max_workers: int | None = None) -> list[Path]:
    """List descriptor files in all data directories.

    Directories are scanned concurrently; results keep the search order of
    ``dirs``. Order within one directory is whatever the filesystem returns.
    """
    dirs = list(dirs)
    if not dirs:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        per_dir = list(pool.map(scan_directory, dirs))

    return [path for paths in per_dir for path in paths]


def _load_one(path: Path, only_applications: bool) -> Entry | None:
    try:
        return parse_desktop_entry(path, only_applications)
    except ParseError as e:
        logger.warning("Skipping descriptor %s", e)
        return None


def deduplicate(paths: Iterable[Path]) -> list[Path]:
    """Keep the first descriptor for each desktop file id (file name)."""
    seen: set[str] = set()
    result: list[Path] = []
    for path in paths:
        if path.name in seen:
            logger.debug("Shadowed descriptor: %s", path)
            continue
        seen.add(path.name)
        result.append(path)
    return result


def load_entries(
    dirs: Iterable[Path],
    only_applications: bool = True,
    dedupe: bool = True,
    max_workers: int | None = None,
) -> list[Entry]:
    """Discover and parse every visible application entry.

    Args:
        dirs: Data directories in search order
        only_applications: Reject descriptors whose Type is not "Application"
        dedupe: Drop descriptors shadowed by an earlier one with the same file name
        max_workers: Thread pool size (default: executor default)

    Returns:
        Entries in discovery order; unreadable or hidden descriptors are skipped
    """
    paths = list_descriptor_files(dirs, max_workers)
    if dedupe:
        paths = deduplicate(paths)
    if not paths:
        return []

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        parsed = list(pool.map(lambda p: _load_one(p, only_applications), paths))

    entries = [entry for entry in parsed if entry is not None]
    logger.debug("Loaded %d entries from %d descriptors", len(entries), len(paths))
    return entries
