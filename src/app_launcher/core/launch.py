"""Launch planning: exec template expansion and process spawning."""

from __future__ import annotations

import logging
import shlex
import subprocess
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from app_launcher.core.entry import Entry
from app_launcher.core.errors import LaunchSpawnError, NoCommand

logger = logging.getLogger(__name__)

DEFAULT_TERMINAL: tuple[str, ...] = ("x-terminal-emulator", "-e")


@dataclass(frozen=True)
class LaunchPlan:
    """A concrete command ready to be spawned.

    Attributes:
        entry_id: Id of the planned entry
        program: Executable to run
        args: Arguments passed to the program
        terminal: Whether the command was wrapped in a terminal launcher
        requires_confirmation: Whether the caller must confirm before spawning
    """

    entry_id: str
    program: str
    args: list[str] = field(default_factory=list)
    terminal: bool = False
    requires_confirmation: bool = False

    @property
    def argv(self) -> list[str]:
        """Full argument vector, program first."""
        return [self.program, *self.args]

    def __str__(self) -> str:
        return shlex.join(self.argv)


def expand_field_codes(tokens: Sequence[str]) -> list[str]:
    """Remove exec field codes.

    Every token starting with ``%`` is dropped, except ``%%`` which becomes
    a literal ``%``.

    Examples:
        >>> expand_field_codes(["app", "%f", "--flag"])
        ['app', '--flag']
        >>> expand_field_codes(["printf", "%%"])
        ['printf', '%']
    """
    result: list[str] = []
    for token in tokens:
        if token == "%%":
            result.append("%")
        elif token.startswith("%"):
            continue
        else:
            result.append(token)
    return result


def split_command(entry: Entry) -> list[str]:
    """Tokenize an entry's exec template and drop field codes.

    Raises:
        NoCommand: If there is no command, quoting is unbalanced, or
            nothing remains after removing field codes
    """
    if not entry.launch_command:
        raise NoCommand(entry.id)

    try:
        tokens = shlex.split(entry.launch_command, posix=True)
    except ValueError as e:
        raise NoCommand(entry.id, f"invalid command: {e}") from None

    argv = expand_field_codes(tokens)
    if not argv:
        raise NoCommand(entry.id, "empty command")
    return argv


def plan_launch(entry: Entry, terminal: Sequence[str] = DEFAULT_TERMINAL) -> LaunchPlan:
    """Build the command line for an entry.

    Args:
        entry: The entry to launch
        terminal: Terminal launcher command, used for terminal entries

    Returns:
        LaunchPlan with program and arguments

    Raises:
        NoCommand: If the entry has no usable command
    """
    argv = split_command(entry)

    if entry.is_terminal and terminal:
        program, *prefix = terminal
        args = [*prefix, *argv]
    else:
        program, *args = argv

    return LaunchPlan(
        entry_id=entry.id,
        program=program,
        args=args,
        terminal=entry.is_terminal and bool(terminal),
        requires_confirmation=entry.user_confirm,
    )


def spawn(plan: LaunchPlan, forward_output: bool = False) -> subprocess.Popen[bytes]:
    """Start a planned command detached from this process.

    Args:
        plan: The plan to run
        forward_output: Keep stdout/stderr attached instead of discarding them

    Returns:
        The started process

    Raises:
        LaunchSpawnError: If the process could not be created
    """
    output = None if forward_output else subprocess.DEVNULL
    try:
        process = subprocess.Popen(
            plan.argv,
            stdin=subprocess.DEVNULL,
            stdout=output,
            stderr=output,
            start_new_session=True,
        )
    except OSError as e:
        raise LaunchSpawnError(plan.argv, e.strerror or str(e)) from e

    logger.info("Launched %s (pid %d)", plan, process.pid)
    return process


Spawner = Callable[[LaunchPlan], object]


class Launcher:
    """Two-phase launcher: plan, optionally confirm, then spawn.

    Plans that need confirmation are held as ``pending`` until
    :meth:`confirm` or :meth:`cancel` is called.
    """

    def __init__(
        self,
        terminal: Sequence[str] = DEFAULT_TERMINAL,
        spawner: Spawner | None = None,
    ) -> None:
        self.terminal = tuple(terminal)
        self.spawner: Spawner = spawner or spawn
        self.pending: LaunchPlan | None = None

    def plan(self, entry: Entry) -> LaunchPlan:
        return plan_launch(entry, self.terminal)

    def request(self, entry: Entry) -> LaunchPlan:
        """Plan an entry and run it unless it needs confirmation.

        Raises:
            NoCommand: If the entry has no usable command
            LaunchSpawnError: If spawning failed
        """
        plan = self.plan(entry)
        if plan.requires_confirmation:
            self.pending = plan
            return plan

        self.pending = None
        self.spawner(plan)
        return plan

    def confirm(self) -> LaunchPlan | None:
        """Run the pending plan, if any."""
        plan = self.pending
        if plan is None:
            return None
        self.pending = None
        self.spawner(plan)
        return plan

    def cancel(self) -> None:
        self.pending = None
