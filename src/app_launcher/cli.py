"""Command-line interface for the launcher."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from app_launcher import __version__
from app_launcher.config.loader import load_config
from app_launcher.config.schema import Config
from app_launcher.core.errors import LauncherError
from app_launcher.core.index import SearchIndex
from app_launcher.core.launch import Launcher, spawn
from app_launcher.core.loader import EntrySet, load_entry_set
from app_launcher.ui.app import LauncherApp

logger = logging.getLogger(__name__)


def parse_args(args: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv[1:])

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="launcher",
        description="Search and launch desktop applications",
        epilog="Example: launcher --query fire",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        metavar="FILE",
        help="Configuration file path (default: ~/.config/launcher/config.yaml)",
    )

    parser.add_argument(
        "--config-dir",
        type=Path,
        metavar="DIR",
        help="Drop-in configuration directory (default: ~/.config/launcher/conf.d/)",
    )

    parser.add_argument(
        "--data-dirs",
        metavar="PATHS",
        help="Colon-separated data directories to search, replacing $XDG_DATA_HOME and $XDG_DATA_DIRS",
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--list", "-l", action="store_true", help="List all entries and exit")
    mode.add_argument("--query", "-q", metavar="TEXT", help="Print entries matching TEXT, best first")
    mode.add_argument("--plan", metavar="ID", help="Print the command line for an entry id")
    mode.add_argument("--launch", metavar="ID", help="Launch an entry by id")

    parser.add_argument(
        "--icons",
        "-i",
        action="store_true",
        help="Show resolved icon paths when listing",
    )

    parser.add_argument(
        "--yes",
        "-y",
        action="store_true",
        help="Confirm launches that ask for confirmation",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("--verbose", "-v", action="store_true", help="Log debug messages")
    verbosity.add_argument("--quiet", action="store_true", help="Only log errors")

    parser.add_argument(
        "--version",
        "-V",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(args)


def setup_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging to stderr."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(
        level=level,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_entries(index: SearchIndex, show_icons: bool = False) -> None:
    """Print the filtered view as tab-separated lines."""
    for entry in index.filtered:
        columns = [entry.id, entry.title, entry.description or ""]
        if show_icons:
            icon = index.icon_path(entry)
            columns.append(str(icon) if icon else "")
        print("\t".join(columns))


def run_command(parsed: argparse.Namespace, config: Config) -> int:
    """Run a non-interactive mode."""
    entry_set = load_entry_set(config)
    index = SearchIndex(entry_set.entries, entry_set.icons)

    if parsed.list or parsed.query is not None:
        index.set_query(parsed.query or "")
        print_entries(index, parsed.icons)
        return 0

    entry_id = parsed.plan or parsed.launch
    entry = index.get(entry_id)
    if entry is None:
        print(f"Error: No entry with id {entry_id}", file=sys.stderr)
        return 1

    launcher = Launcher(
        config.launch.terminal,
        spawner=lambda plan: spawn(plan, forward_output=config.launch.forward_output),
    )

    if parsed.plan:
        print(launcher.plan(entry))
        return 0

    plan = launcher.request(entry)
    if plan.requires_confirmation:
        if not parsed.yes:
            print(f"Error: {entry.title} needs confirmation, pass --yes", file=sys.stderr)
            return 1
        launcher.confirm()
    return 0


def run_interactive(config: Config) -> int:
    """Run the interactive UI."""
    def load() -> EntrySet:
        return load_entry_set(config)

    plan = LauncherApp(config, load=load).run()
    if plan is not None:
        logger.info("Launched %s", plan)
    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point.

    Args:
        args: Command-line arguments

    Returns:
        Exit code
    """
    parsed = parse_args(args)
    setup_logging(parsed.verbose, parsed.quiet)

    try:
        config = load_config(
            config_path=parsed.config,
            dropin_dir=parsed.config_dir,
        )
    except Exception as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    if parsed.data_dirs is not None:
        config.search.data_dirs = parsed.data_dirs
        config.search.include_data_home = False

    try:
        if parsed.list or parsed.query is not None or parsed.plan or parsed.launch:
            return run_command(parsed, config)
        return run_interactive(config)
    except KeyboardInterrupt:
        return 130
    except LauncherError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
