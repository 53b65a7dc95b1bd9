"""Desktop entry (.desktop) descriptor parsing."""

from __future__ import annotations

import configparser
import re
from pathlib import Path

from app_launcher.core.entry import DEFAULT_TITLE, Entry
from app_launcher.core.errors import ParseError

DESKTOP_GROUP = "Desktop Entry"
APPLICATION_TYPE = "Application"

# Escapes allowed in string values: \s \n \t \r \\
_ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}
_ESCAPE_RE = re.compile(r"\\(.)")


def unescape_value(value: str) -> str:
    """Expand the escape sequences allowed in desktop entry values.

    Unknown sequences are kept as-is so that Exec quoting survives.

    Examples:
        >>> unescape_value(r"Hello\\sWorld")
        'Hello World'
    """
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), value)


def is_true(value: str | None) -> bool:
    """Check a boolean key. Only the exact string "true" counts."""
    return value == "true"


def read_descriptor(path: Path | str) -> dict[str, str]:
    """Read the main group of a descriptor file.

    Args:
        path: Path to the descriptor

    Returns:
        Mapping of key to unescaped value for the [Desktop Entry] group

    Raises:
        ParseError: If the file is unreadable, not UTF-8, or malformed
    """
    path = Path(path)
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=("#",),
    )
    # Keys are case-sensitive
    parser.optionxform = str  # type: ignore[assignment,method-assign]

    try:
        with open(path, encoding="utf-8") as f:
            parser.read_file(f, source=str(path))
    except UnicodeDecodeError:
        raise ParseError(path, "not valid UTF-8") from None
    except OSError as e:
        raise ParseError(path, e.strerror or str(e)) from e
    except configparser.MissingSectionHeaderError:
        raise ParseError(path, "missing group header") from None
    except configparser.Error as e:
        raise ParseError(path, str(e).splitlines()[0]) from e

    if not parser.has_section(DESKTOP_GROUP):
        raise ParseError(path, f"missing [{DESKTOP_GROUP}] group")

    return {key: unescape_value(value) for key, value in parser.items(DESKTOP_GROUP)}


def is_visible(fields: dict[str, str], only_applications: bool = True) -> bool:
    """Apply the Type, NoDisplay and Hidden filters to a parsed group."""
    if only_applications and fields.get("Type") != APPLICATION_TYPE:
        return False
    if is_true(fields.get("NoDisplay")):
        return False
    return not is_true(fields.get("Hidden"))


def entry_from_fields(entry_id: str, fields: dict[str, str]) -> Entry:
    """Build an Entry from the keys of a [Desktop Entry] group."""
    return Entry(
        id=entry_id,
        title=fields.get("Name", DEFAULT_TITLE),
        generic_name=fields.get("GenericName"),
        comment=fields.get("Comment"),
        icon=fields.get("Icon") or None,
        launch_command=fields.get("Exec") or None,
        is_terminal=is_true(fields.get("Terminal")),
    )


def parse_desktop_entry(path: Path | str, only_applications: bool = True) -> Entry | None:
    """Parse a descriptor into an Entry.

    Args:
        path: Path to the descriptor
        only_applications: Reject entries whose Type is not "Application"

    Returns:
        The Entry, or None if the descriptor is filtered out

    Raises:
        ParseError: If the descriptor cannot be read
    """
    fields = read_descriptor(path)
    if not is_visible(fields, only_applications):
        return None
    return entry_from_fields(str(path), fields)
