"""Icon theme lookup.

Icons live in theme trees laid out as::

    <data-dir>/icons/<theme>/<size-dir>/apps/<name>.<ext>

where ``<size-dir>`` is ``scalable``, ``WxH`` or ``WxH@scale``. Scalable
icons are ``.svg`` files, fixed-size icons are ``.png`` files.
"""

from __future__ import annotations

import configparser
import logging
import os
import re
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from app_launcher.core.entry import Entry

logger = logging.getLogger(__name__)

FALLBACK_THEME = "hicolor"
SCALABLE_DIR = "scalable"
APPS_CONTEXT = "apps"

_SIZE_RE = re.compile(r"^(\d+)x(\d+)(?:@(\d+))?$")
_KNOWN_EXTENSIONS = (".png", ".svg")


@dataclass(frozen=True)
class IconSize:
    """Size of an icon directory: scalable, or fixed width x height @ scale."""

    scalable: bool = False
    width: int = 0
    height: int = 0
    scale: int = 1

    @classmethod
    def fixed(cls, width: int, height: int, scale: int = 1) -> IconSize:
        return cls(scalable=False, width=width, height=height, scale=scale)

    @property
    def extension(self) -> str:
        """File extension used for icons of this size."""
        return "svg" if self.scalable else "png"

    def fits(self, min_width: int, min_height: int) -> bool:
        """Check if a fixed size is at least the requested minimum."""
        return self.width >= min_width and self.height >= min_height

    def __str__(self) -> str:
        if self.scalable:
            return SCALABLE_DIR
        if self.scale != 1:
            return f"{self.width}x{self.height}@{self.scale}"
        return f"{self.width}x{self.height}"


SCALABLE = IconSize(scalable=True)


def parse_icon_size(value: str) -> IconSize | None:
    """Parse a size directory name.

    Examples:
        >>> parse_icon_size("scalable")
        IconSize(scalable=True, width=0, height=0, scale=1)
        >>> parse_icon_size("48x48@2")
        IconSize(scalable=False, width=48, height=48, scale=2)
        >>> parse_icon_size("bogus") is None
        True
    """
    if value == SCALABLE_DIR:
        return SCALABLE

    match = _SIZE_RE.match(value)
    if not match:
        return None

    width, height = int(match.group(1)), int(match.group(2))
    scale = int(match.group(3)) if match.group(3) else 1
    if width <= 0 or height <= 0 or scale <= 0:
        return None
    return IconSize.fixed(width, height, scale)


@dataclass(frozen=True)
class Icon:
    """A resolved icon file.

    ``size`` is None when the icon was given as an absolute path and no
    theme lookup took place.
    """

    path: Path
    size: IconSize | None = None
    theme: str | None = None


def detect_icon_theme(environ: Mapping[str, str] | None = None) -> str | None:
    """Read the active icon theme name from the GTK settings file."""
    env = os.environ if environ is None else environ
    config_home = env.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    settings = base / "gtk-3.0" / "settings.ini"

    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(settings, encoding="utf-8")
    except (configparser.Error, UnicodeDecodeError) as e:
        logger.debug("Unreadable GTK settings %s: %s", settings, e)
        return None

    theme = parser.get("Settings", "gtk-icon-theme-name", fallback="").strip()
    return theme or None


def select_best(variants: Iterable[Icon], min_width: int, min_height: int) -> Icon | None:
    """Pick the best icon variant for a minimum size.

    Scalable variants always win. Otherwise the smallest fixed variant that
    is at least ``min_width`` x ``min_height`` is chosen; the first one in
    enumeration order wins ties. Returns None if nothing is big enough.
    """
    candidates: list[Icon] = []
    for icon in variants:
        if icon.size is None:
            continue
        if icon.size.scalable:
            return icon
        if icon.size.fits(min_width, min_height):
            candidates.append(icon)

    if not candidates:
        return None
    return min(candidates, key=lambda icon: (icon.size.width, icon.size.height))  # type: ignore[union-attr]


def _largest(variants: list[Icon]) -> Icon | None:
    if not variants:
        return None
    for icon in variants:
        if icon.size is not None and icon.size.scalable:
            return icon
    return max(
        variants,
        key=lambda icon: (icon.size.width, icon.size.height) if icon.size else (0, 0),
    )


class IconResolver:
    """Maps logical icon names to files in themed icon trees."""

    def __init__(
        self,
        dirs: Iterable[Path],
        theme: str | None = None,
        fallback_theme: str = FALLBACK_THEME,
        default_size: int = 48,
    ) -> None:
        """Initialize the resolver.

        Args:
            dirs: Data directories whose icons/ subdirectory holds themes
            theme: Active theme name, searched first
            fallback_theme: Theme searched when the active theme has no match
            default_size: Minimum size used by resolve()
        """
        self.dirs = list(dirs)
        self.theme = theme
        self.fallback_theme = fallback_theme
        self.default_size = default_size

    @property
    def themes(self) -> list[str]:
        """Theme names in lookup order."""
        themes: list[str] = []
        for name in (self.theme, self.fallback_theme):
            if name and name not in themes:
                themes.append(name)
        return themes

    def theme_roots(self, theme: str) -> list[Path]:
        """Existing theme directories for a theme, in search order."""
        roots = [d / "icons" / theme for d in self.dirs]
        return [root for root in roots if root.is_dir()]

    def variants(self, name: str, theme: str) -> list[Icon]:
        """Find every size variant of an icon in one theme.

        Size directories are visited in sorted name order so results are
        deterministic.
        """
        found: list[Icon] = []
        for root in self.theme_roots(theme):
            try:
                children = sorted(root.iterdir(), key=lambda p: p.name)
            except OSError:
                continue

            for child in children:
                size = parse_icon_size(child.name)
                if size is None or not child.is_dir():
                    continue
                candidate = child / APPS_CONTEXT / f"{name}.{size.extension}"
                if candidate.is_file():
                    found.append(Icon(path=candidate, size=size, theme=theme))
        return found

    def find(self, name: str, min_width: int = 0, min_height: int = 0) -> Icon | None:
        """Find the best icon for a name.

        Args:
            name: Logical icon name or absolute path
            min_width: Minimum width
            min_height: Minimum height

        Returns:
            The icon, or None if no variant is big enough in any theme
        """
        if not name:
            return None
        if os.path.isabs(name):
            return Icon(path=Path(name))

        name = _strip_extension(name)
        for theme in self.themes:
            icon = select_best(self.variants(name, theme), min_width, min_height)
            if icon is not None:
                return icon
        return None

    def resolve_best(self, name: str, min_width: int, min_height: int) -> Path | None:
        """Resolve to the closest-above size match, or None."""
        icon = self.find(name, min_width, min_height)
        return icon.path if icon else None

    def resolve(self, name: str) -> Path | None:
        """Resolve a name to any usable icon file.

        Prefers a variant of at least ``default_size``; when every variant
        is smaller, the largest one is returned.
        """
        if not name:
            return None
        icon = self.find(name, self.default_size, self.default_size)
        if icon is not None:
            return icon.path

        name = _strip_extension(name)
        for theme in self.themes:
            icon = _largest(self.variants(name, theme))
            if icon is not None:
                return icon.path
        return None


def _strip_extension(name: str) -> str:
    for ext in _KNOWN_EXTENSIONS:
        if name.endswith(ext):
            return name[: -len(ext)]
    return name


def resolve_icons(
    entries: Iterable[Entry],
    resolver: IconResolver,
    max_workers: int | None = None,
) -> dict[str, Path]:
    """Resolve the icon of every entry, once per distinct name.

    Args:
        entries: Entries whose icons to resolve
        resolver: Icon resolver
        max_workers: Thread pool size

    Returns:
        Mapping of logical icon name to file; unresolved names are absent
    """
    names = sorted({entry.icon for entry in entries if entry.icon})
    if not names:
        return {}

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        paths = list(pool.map(resolver.resolve, names))

    icons = {name: path for name, path in zip(names, paths) if path is not None}
    logger.debug("Resolved %d of %d icons", len(icons), len(names))
    return icons
