"""Interactive launcher using prompt_toolkit."""

from __future__ import annotations

from collections.abc import Callable

from prompt_toolkit import Application
from prompt_toolkit.buffer import Buffer
from prompt_toolkit.data_structures import Point
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.layout import Layout
from prompt_toolkit.layout.containers import HSplit, Window
from prompt_toolkit.layout.controls import BufferControl, FormattedTextControl
from prompt_toolkit.layout.processors import BeforeInput
from prompt_toolkit.styles import Style

from app_launcher.config.schema import Config
from app_launcher.core.index import SearchIndex
from app_launcher.core.launch import Launcher, LaunchPlan, spawn
from app_launcher.core.loader import EntryLoader, EntrySet
from app_launcher.ui.keybindings import KeyBindingManager

STYLE = {
    "prompt": "bold",
    "entry": "",
    "entry.selected": "reverse",
    "entry.description": "#888888",
    "entry.selected entry.description": "reverse",
    "separator": "#444444",
    "status": "#888888 italic",
}


class LauncherApp:
    """Search box with a ranked list of entries below it."""

    def __init__(
        self,
        config: Config,
        index: SearchIndex | None = None,
        load: Callable[[], EntrySet] | None = None,
        launcher: Launcher | None = None,
    ) -> None:
        """Initialize the launcher UI.

        Args:
            config: Configuration object
            index: Search index to show (a new empty one if None)
            load: Reload function run in the background when the UI starts
            launcher: Launcher used for the selected entry
        """
        self.config = config
        self.index = index or SearchIndex()
        self.load = load
        self.launcher = launcher or Launcher(config.launch.terminal, spawner=self._spawn)

        self.buffer = Buffer(
            multiline=False,
            name="query",
            on_text_changed=self._on_query_changed,
            read_only=Condition(lambda: self._mode == "confirm"),
        )

        self.status = ""
        self.loading = False
        self.launched: LaunchPlan | None = None

        self._mode = "normal"
        self._kb_manager: KeyBindingManager | None = None
        self.app: Application | None = None

    @property
    def mode(self) -> str:
        return self._mode

    def _spawn(self, plan: LaunchPlan) -> None:
        spawn(plan, forward_output=self.config.launch.forward_output)
        self.launched = plan

    def _on_query_changed(self, buffer: Buffer) -> None:
        self.index.set_query(buffer.text)
        self.status = ""

    def _on_loaded(self, entry_set: EntrySet) -> None:
        self.loading = False
        if self.app:
            self.app.invalidate()

    def enter_confirm_mode(self) -> None:
        self._mode = "confirm"
        self._update_keybindings()

    def exit_confirm_mode(self) -> None:
        self._mode = "normal"
        self._update_keybindings()

    def _update_keybindings(self) -> None:
        if self.app and self._kb_manager:
            self.app.key_bindings = self._kb_manager.get_bindings(self._mode)

    def _create_keybindings(self) -> KeyBindings:
        self._kb_manager = KeyBindingManager(self.config, self)
        return self._kb_manager.get_bindings(self._mode)

    def render_entries(self) -> StyleAndTextTuples:
        """Formatted text for the result list, one line per entry."""
        fragments: StyleAndTextTuples = []
        selection = self.index.selection

        for i, entry in enumerate(self.index.filtered):
            style = "class:entry.selected" if i == selection else "class:entry"
            fragments.append((style, f" {entry.title}"))
            if entry.description:
                fragments.append((f"{style} class:entry.description", f"  {entry.description}"))
            fragments.append(("", "\n"))

        return fragments

    def render_status(self) -> StyleAndTextTuples:
        if self.status:
            text = self.status
        elif self.loading:
            text = "Loading..."
        else:
            text = f"{len(self.index.filtered)}/{len(self.index)}"
        return [("class:status", f" {text}")]

    def _create_layout(self) -> Layout:
        query = Window(
            content=BufferControl(
                buffer=self.buffer,
                input_processors=[BeforeInput("> ", style="class:prompt")],
            ),
            height=1,
        )
        # The cursor on the selected line keeps it scrolled into view
        entries = Window(
            content=FormattedTextControl(
                self.render_entries,
                get_cursor_position=lambda: Point(x=0, y=self.index.selection),
            ),
            wrap_lines=False,
        )
        return Layout(
            HSplit([
                query,
                Window(height=1, char="-", style="class:separator"),
                entries,
                Window(content=FormattedTextControl(self.render_status), height=1),
            ]),
            focused_element=query,
        )

    def run(self) -> LaunchPlan | None:
        """Run the UI until an entry is launched or the user quits.

        Returns:
            The plan that was launched, if any
        """
        self.app = Application(
            layout=self._create_layout(),
            key_bindings=self._create_keybindings(),
            style=Style.from_dict(STYLE),
            full_screen=True,
            mouse_support=False,
        )

        if self.load is not None:
            self.loading = True
            EntryLoader(self.index, self.load, on_loaded=self._on_loaded).start()

        self.app.run()
        return self.launched
