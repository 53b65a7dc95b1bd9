"""Pytest configuration and fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from app_launcher.config.loader import load_config_from_string
from app_launcher.config.schema import Config
from app_launcher.core.entry import Entry

FIREFOX_DESKTOP_CONTENT = """\
[Desktop Entry]
Type=Application
Name=Firefox
GenericName=Web Browser
Comment=Browse the World Wide Web
Icon=firefox
Exec=firefox %u
Terminal=false

[Desktop Action new-window]
Name=New Window
Exec=firefox --new-window %u
"""


@pytest.fixture
def firefox_desktop() -> str:
    """Descriptor content with a main group and an action group."""
    return FIREFOX_DESKTOP_CONTENT


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """An empty XDG data directory."""
    path = tmp_path / "share"
    (path / "applications").mkdir(parents=True)
    return path


@pytest.fixture
def write_desktop(data_dir: Path) -> Callable[..., Path]:
    """Factory writing a descriptor into a data directory."""

    def write(name: str, content: str, directory: Path | None = None) -> Path:
        apps = (directory or data_dir) / "applications"
        apps.mkdir(parents=True, exist_ok=True)
        path = apps / name
        path.write_text(content, encoding="utf-8")
        return path

    return write


@pytest.fixture
def make_icon(data_dir: Path) -> Callable[..., Path]:
    """Factory creating an empty icon file in a theme tree."""

    def make(theme: str, size_dir: str, name: str, directory: Path | None = None) -> Path:
        ext = "svg" if size_dir == "scalable" else "png"
        path = (directory or data_dir) / "icons" / theme / size_dir / "apps" / f"{name}.{ext}"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(b"")
        return path

    return make


@pytest.fixture
def sample_entries() -> list[Entry]:
    """A few entries for search tests."""
    return [
        Entry(id="/apps/gimp.desktop", title="GIMP", generic_name="Image Editor"),
        Entry(id="/apps/files.desktop", title="Files", generic_name="File Manager"),
        Entry(id="/apps/firefox.desktop", title="Firefox", generic_name="Web Browser"),
        Entry(id="/apps/terminal.desktop", title="Terminal", launch_command="gnome-terminal"),
    ]


@pytest.fixture
def sample_config(data_dir: Path) -> Config:
    """Configuration pointing at the temporary data directory."""
    yaml_content = f"""
search:
  data_dirs: "{data_dir}"
  include_data_home: false
  builtin_actions: true

icons:
  theme: Papirus
  size: 32

launch:
  terminal: "xterm -e"
  confirm_actions: true
"""
    return load_config_from_string(yaml_content, defaults=True)


@pytest.fixture
def empty_config() -> Config:
    """Empty configuration for testing."""
    return Config()
