"""Tests for the desktop entry parser."""

import pytest

from app_launcher.core.desktop import (
    is_true,
    parse_desktop_entry,
    read_descriptor,
    unescape_value,
)
from app_launcher.core.errors import ParseError


class TestReadDescriptor:
    """Tests for read_descriptor function."""

    def test_reads_main_group(self, write_desktop, firefox_desktop):
        """Test reading keys of the [Desktop Entry] group."""
        path = write_desktop("firefox.desktop", firefox_desktop)

        fields = read_descriptor(path)

        assert fields["Name"] == "Firefox"
        assert fields["Exec"] == "firefox %u"

    def test_ignores_other_groups(self, write_desktop, firefox_desktop):
        """Test that action groups do not override main keys."""
        path = write_desktop("firefox.desktop", firefox_desktop)

        fields = read_descriptor(path)

        assert fields["Name"] != "New Window"

    def test_keys_are_case_sensitive(self, write_desktop):
        """Test that key case is preserved."""
        path = write_desktop("a.desktop", "[Desktop Entry]\nName=A\nname=lower\n")

        fields = read_descriptor(path)

        assert fields["Name"] == "A"
        assert fields["name"] == "lower"

    def test_missing_file(self, data_dir):
        """Test that an unreadable file raises ParseError."""
        with pytest.raises(ParseError):
            read_descriptor(data_dir / "applications" / "missing.desktop")

    def test_missing_group_header(self, write_desktop):
        """Test that content without a group header raises ParseError."""
        path = write_desktop("bad.desktop", "Name=Broken\n")

        with pytest.raises(ParseError):
            read_descriptor(path)

    def test_missing_main_group(self, write_desktop):
        """Test that a file without [Desktop Entry] raises ParseError."""
        path = write_desktop("bad.desktop", "[Something Else]\nName=Broken\n")

        with pytest.raises(ParseError, match="Desktop Entry"):
            read_descriptor(path)

    def test_non_utf8(self, data_dir):
        """Test that non-UTF-8 content raises ParseError."""
        path = data_dir / "applications" / "latin1.desktop"
        path.write_bytes("[Desktop Entry]\nName=Caf\xe9\n".encode("latin-1"))

        with pytest.raises(ParseError, match="UTF-8"):
            read_descriptor(path)

    def test_percent_signs_kept(self, write_desktop):
        """Test that values with % are not interpolated."""
        path = write_desktop("p.desktop", "[Desktop Entry]\nExec=printf %% %f\n")

        assert read_descriptor(path)["Exec"] == "printf %% %f"


class TestParseDesktopEntry:
    """Tests for parse_desktop_entry function."""

    def test_field_mapping(self, write_desktop, firefox_desktop):
        """Test mapping descriptor keys to entry fields."""
        path = write_desktop("firefox.desktop", firefox_desktop)

        entry = parse_desktop_entry(path)

        assert entry is not None
        assert entry.id == str(path)
        assert entry.title == "Firefox"
        assert entry.generic_name == "Web Browser"
        assert entry.comment == "Browse the World Wide Web"
        assert entry.icon == "firefox"
        assert entry.launch_command == "firefox %u"
        assert entry.is_terminal is False

    def test_missing_name(self, write_desktop):
        """Test that a missing Name gives "Unnamed"."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Application\nExec=x\n")

        entry = parse_desktop_entry(path)

        assert entry is not None
        assert entry.title == "Unnamed"

    def test_optional_fields_absent(self, write_desktop):
        """Test that absent keys stay None."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Application\nName=X\n")

        entry = parse_desktop_entry(path)

        assert entry is not None
        assert entry.generic_name is None
        assert entry.comment is None
        assert entry.icon is None
        assert entry.launch_command is None
        assert entry.description is None

    def test_terminal_true(self, write_desktop):
        """Test Terminal=true."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Application\nName=X\nTerminal=true\n")

        entry = parse_desktop_entry(path)

        assert entry is not None
        assert entry.is_terminal is True

    @pytest.mark.parametrize("value", ["1", "yes", "True", "TRUE"])
    def test_terminal_only_exact_true(self, write_desktop, value):
        """Test that only the exact string "true" counts."""
        path = write_desktop(
            "x.desktop", f"[Desktop Entry]\nType=Application\nName=X\nTerminal={value}\n"
        )

        entry = parse_desktop_entry(path)

        assert entry is not None
        assert entry.is_terminal is False

    @pytest.mark.parametrize("key", ["NoDisplay", "Hidden"])
    def test_hidden_entries_excluded(self, write_desktop, key):
        """Test that NoDisplay=true and Hidden=true exclude the entry."""
        path = write_desktop("x.desktop", f"[Desktop Entry]\nType=Application\nName=X\n{key}=true\n")

        assert parse_desktop_entry(path) is None

    def test_hidden_false_kept(self, write_desktop):
        """Test that NoDisplay=false keeps the entry."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Application\nName=X\nNoDisplay=false\n")

        assert parse_desktop_entry(path) is not None

    def test_non_application_rejected(self, write_desktop):
        """Test that Type=Link is rejected by default."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Link\nName=X\nURL=https://example.com\n")

        assert parse_desktop_entry(path) is None

    def test_non_application_allowed(self, write_desktop):
        """Test that the Type filter can be disabled."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Link\nName=X\n")

        entry = parse_desktop_entry(path, only_applications=False)

        assert entry is not None
        assert entry.title == "X"

    def test_hidden_filter_still_applies_without_type_filter(self, write_desktop):
        """Test that Hidden applies even when the Type filter is off."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Link\nName=X\nHidden=true\n")

        assert parse_desktop_entry(path, only_applications=False) is None

    def test_escaped_values(self, write_desktop):
        """Test that escape sequences in values are expanded."""
        path = write_desktop("x.desktop", "[Desktop Entry]\nType=Application\nName=My\\sApp\n")

        entry = parse_desktop_entry(path)

        assert entry is not None
        assert entry.title == "My App"


class TestHelpers:
    """Tests for small helpers."""

    def test_unescape_value(self):
        """Test escape expansion."""
        assert unescape_value(r"a\sb\tc\\d") == "a b\tc\\d"

    def test_unescape_keeps_unknown(self):
        """Test that unknown escapes survive for Exec quoting."""
        assert unescape_value(r'sh -c "echo \"hi\""') == r'sh -c "echo \"hi\""'

    def test_is_true(self):
        """Test boolean parsing."""
        assert is_true("true")
        assert not is_true("True")
        assert not is_true(None)
