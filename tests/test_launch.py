"""Tests for the launch planner."""

import subprocess

import pytest

from app_launcher.core.entry import Entry
from app_launcher.core.errors import LaunchSpawnError, NoCommand
from app_launcher.core.launch import (
    Launcher,
    LaunchPlan,
    expand_field_codes,
    plan_launch,
    spawn,
)


class TestExpandFieldCodes:
    """Tests for expand_field_codes function."""

    def test_drops_field_codes(self):
        """Test that %x tokens are removed."""
        assert expand_field_codes(["app", "%f", "--flag", "%U"]) == ["app", "--flag"]

    def test_literal_percent(self):
        """Test that %% collapses to %."""
        assert expand_field_codes(["printf", "%%"]) == ["printf", "%"]

    def test_embedded_percent_kept(self):
        """Test that tokens not starting with % are left alone."""
        assert expand_field_codes(["app", "--name=%c"]) == ["app", "--name=%c"]


class TestPlanLaunch:
    """Tests for plan_launch function."""

    def test_simple_command(self):
        """Test planning "app %f --flag"."""
        plan = plan_launch(Entry(id="x", launch_command="app %f --flag"))

        assert plan.argv == ["app", "--flag"]
        assert plan.program == "app"
        assert plan.args == ["--flag"]

    def test_literal_percent_in_position(self):
        """Test that %% gives a literal % at its position."""
        plan = plan_launch(Entry(id="x", launch_command="printf %% done"))

        assert plan.argv == ["printf", "%", "done"]

    def test_quoting_honored(self):
        """Test POSIX quoting rules."""
        plan = plan_launch(Entry(id="x", launch_command="sh -c 'echo \"hello world\"' %u"))

        assert plan.argv == ["sh", "-c", 'echo "hello world"']

    def test_no_variable_expansion(self):
        """Test that $VARS are passed through literally."""
        plan = plan_launch(Entry(id="x", launch_command="sh -c 'echo $HOME'"))

        assert plan.args == ["-c", "echo $HOME"]

    def test_no_command(self):
        """Test that a missing command raises NoCommand."""
        with pytest.raises(NoCommand):
            plan_launch(Entry(id="x"))

    def test_unbalanced_quotes(self):
        """Test that broken quoting raises NoCommand."""
        with pytest.raises(NoCommand, match="invalid command"):
            plan_launch(Entry(id="x", launch_command="app 'unterminated"))

    def test_only_field_codes(self):
        """Test that a command of only field codes raises NoCommand."""
        with pytest.raises(NoCommand, match="empty"):
            plan_launch(Entry(id="x", launch_command="%f %u"))

    def test_terminal_wrapping(self):
        """Test that terminal entries run in the terminal launcher."""
        entry = Entry(id="x", launch_command="htop --tree", is_terminal=True)

        plan = plan_launch(entry, terminal=["xterm", "-e"])

        assert plan.program == "xterm"
        assert plan.args == ["-e", "htop", "--tree"]
        assert plan.terminal

    def test_confirmation_flag(self):
        """Test that user_confirm carries over to the plan."""
        plan = plan_launch(Entry(id="x", launch_command="shutdown now", user_confirm=True))

        assert plan.requires_confirmation
        assert plan.argv == ["shutdown", "now"]

    def test_str(self):
        """Test rendering a plan as a shell command."""
        plan = LaunchPlan(entry_id="x", program="echo", args=["a b"])

        assert str(plan) == "echo 'a b'"


class TestLauncher:
    """Tests for the two-phase Launcher."""

    def test_immediate_launch(self):
        """Test that plans without confirmation run at once."""
        spawned = []
        launcher = Launcher(spawner=spawned.append)

        plan = launcher.request(Entry(id="x", launch_command="app"))

        assert spawned == [plan]
        assert launcher.pending is None

    def test_confirmation_deferred(self):
        """Test that confirmation holds the plan until confirm()."""
        spawned = []
        launcher = Launcher(spawner=spawned.append)

        plan = launcher.request(Entry(id="x", launch_command="shutdown now", user_confirm=True))

        assert spawned == []
        assert launcher.pending == plan

        assert launcher.confirm() == plan
        assert spawned == [plan]
        assert launcher.pending is None

    def test_cancel(self):
        """Test that cancel() drops the pending plan."""
        spawned = []
        launcher = Launcher(spawner=spawned.append)
        launcher.request(Entry(id="x", launch_command="shutdown now", user_confirm=True))

        launcher.cancel()

        assert launcher.confirm() is None
        assert spawned == []

    def test_no_command_not_spawned(self):
        """Test that NoCommand is raised before spawning."""
        spawned = []
        launcher = Launcher(spawner=spawned.append)

        with pytest.raises(NoCommand):
            launcher.request(Entry(id="x"))
        assert spawned == []

    def test_terminal_from_launcher(self):
        """Test that the launcher's terminal command is used."""
        launcher = Launcher(terminal=["foot"], spawner=lambda plan: None)

        plan = launcher.plan(Entry(id="x", launch_command="vim", is_terminal=True))

        assert plan.argv == ["foot", "vim"]


class TestSpawn:
    """Tests for spawn function."""

    def test_missing_program(self):
        """Test that a missing executable raises LaunchSpawnError."""
        plan = LaunchPlan(entry_id="x", program="/nonexistent/program-that-does-not-exist")

        with pytest.raises(LaunchSpawnError):
            spawn(plan)

    def test_detached(self, monkeypatch):
        """Test the Popen arguments used for detaching."""
        calls = {}

        class FakePopen:
            pid = 1234

            def __init__(self, argv, **kwargs):
                calls["argv"] = argv
                calls.update(kwargs)

        monkeypatch.setattr(subprocess, "Popen", FakePopen)

        spawn(LaunchPlan(entry_id="x", program="app", args=["--flag"]))

        assert calls["argv"] == ["app", "--flag"]
        assert calls["start_new_session"] is True
        assert calls["stdin"] == subprocess.DEVNULL
        assert calls["stdout"] == subprocess.DEVNULL
