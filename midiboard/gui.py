"""The soundboard window: sound list, key binding and output selection."""

from __future__ import annotations

import logging
import queue
import threading
from enum import Enum
from typing import NamedTuple

from .app import Application, import_sound
from .config import change_config
from .library import sound_names
from .midi import MidiReader
from .midimap import KeyAlreadyBoundError
from .player import SoundPlayer, output_devices

logger = logging.getLogger(__name__)

TITLE = "Bamboo MIDI Soundboard"
WINDOW_WIDTH = 1080
WINDOW_HEIGHT = 720
CONTENT_RELATION = 0.2
LOG_BOX_HEIGHT = 150
_POLL_MS = 50


class Output(Enum):
    """The two audio outputs a sound is played on, by their config key."""

    MICROPHONE = "MicrophoneOutput"
    PLAYBACK = "PlaybackOutput"


_OUTPUT_NAMES = {"microphone": Output.MICROPHONE, "playback": Output.PLAYBACK}


def _output(which: Output | str) -> Output:
    if isinstance(which, Output):
        return which
    try:
        return _OUTPUT_NAMES[which.lower()]
    except (KeyError, AttributeError):
        raise ValueError(f"unknown output: {which!r}") from None


class Rect(NamedTuple):
    """A pane's position and size in window coordinates."""

    x: float
    y: float
    width: float
    height: float


def binding_label(key: int | None) -> str:
    """Return the text of a sound's binding button."""
    return "[Not Bound]" if key is None else f"MIDI: [{key}]"


def window_layout(width: float, height: float) -> dict[str, Rect]:
    """Return the rectangles of the library, sound and log panes for a window size."""
    side = width * CONTENT_RELATION
    rest = width * (1.0 - CONTENT_RELATION)
    return {
        "library": Rect(0, 0, side, height),
        "sounds": Rect(side, 0, rest, height - LOG_BOX_HEIGHT),
        "log": Rect(side, height - LOG_BOX_HEIGHT, rest, LOG_BOX_HEIGHT),
    }


class SoundboardWindow:
    """Main window listing the imported sounds and their MIDI bindings."""

    def __init__(self, app: Application, reader: MidiReader, player: SoundPlayer) -> None:
        self.app = app
        self.reader = reader
        self.player = player
        self.sounds: list[str] = []
        self._expanded: set[str] = set()

    def refresh_sounds(self) -> list[str]:
        """Reread the sound directory and return the sound names."""
        self.sounds = sound_names(self.app.paths.sound_directory)
        return self.sounds

    def bind_sound(self, sound_name: str) -> int | None:
        """Wait for a MIDI key and bind ``sound_name`` to it.

        Returns the key, or ``None`` if the reader stopped before a key came.
        Raises ``KeyAlreadyBoundError`` if the key already has a sound.
        """
        key = self.reader.await_input()
        if key is None:
            return None
        self.app.midimap.bind(key, sound_name)
        return key

    def select_output(self, which: Output | str, device: str) -> None:
        """Make ``device`` the microphone or playback output and save it."""
        output = _output(which)
        logger.info("New %s output: %s", output.name.lower(), device)
        change_config(self.app.paths.config_path, output.value, device, self.app.config)

    def run(self) -> None:
        """Show the window until it is closed, then stop the MIDI reader."""
        import tkinter as tk

        root = tk.Tk()
        root.title(TITLE)
        root.geometry(f"{WINDOW_WIDTH}x{WINDOW_HEIGHT}")
        status = tk.StringVar(root, value="Ready")
        events: queue.Queue[tuple[str, str, object]] = queue.Queue()

        try:
            devices = output_devices()
        except Exception as exc:  # audio back end may be unavailable
            logger.error("Could not list output devices: %s", exc)
            devices = []
        self.refresh_sounds()

        library_pane = tk.Frame(root, borderwidth=1, relief="groove")
        tk.Label(library_pane, text="Sound Libraries", anchor="w").pack(fill="x")
        sounds_pane = tk.Frame(root, borderwidth=1, relief="groove")
        tk.Label(sounds_pane, text="Sound Effects", anchor="w").pack(fill="x", padx=15)
        sound_list = tk.Frame(sounds_pane)
        sound_list.pack(fill="both", expand=True, padx=15)
        log_pane = tk.Frame(root, borderwidth=1, relief="groove")
        tk.Label(log_pane, textvariable=status, anchor="nw", justify="left").pack(
            fill="both", expand=True, padx=8, pady=8
        )
        panes = {"library": library_pane, "sounds": sounds_pane, "log": log_pane}

        def place_panes(_event: object = None) -> None:
            layout = window_layout(root.winfo_width(), root.winfo_height())
            for name, pane in panes.items():
                rect = layout[name]
                pane.place(x=rect.x, y=rect.y, width=rect.width, height=rect.height)

        def render_sounds() -> None:
            for child in sound_list.winfo_children():
                child.destroy()
            for sound in self.sounds:
                entry = tk.Frame(sound_list)
                entry.pack(fill="x", anchor="w")
                marker = "v" if sound in self._expanded else ">"
                tk.Button(
                    entry,
                    text=f"{marker} {sound}",
                    anchor="w",
                    relief="flat",
                    command=lambda name=sound: toggle(name),
                ).pack(fill="x")
                if sound in self._expanded:
                    key = self.app.midimap.key_for_sound(sound)
                    tk.Button(
                        entry,
                        text=binding_label(key),
                        width=12,
                        bg="#994c1a",
                        activebackground="#663300",
                        command=lambda name=sound: start_bind(name),
                    ).pack(anchor="w", padx=20, pady=4)

        def toggle(name: str) -> None:
            self._expanded.symmetric_difference_update({name})
            render_sounds()

        def start_bind(name: str) -> None:
            status.set(f"Press a MIDI key for {name}...")

            def worker() -> None:
                try:
                    key = self.bind_sound(name)
                except (KeyAlreadyBoundError, RuntimeError, OSError) as exc:
                    events.put(("error", name, exc))
                else:
                    events.put(("bound", name, key))

            threading.Thread(target=worker, daemon=True).start()

        def poll_events() -> None:
            while True:
                try:
                    kind, name, detail = events.get_nowait()
                except queue.Empty:
                    break
                if kind == "error":
                    status.set(f"Couldn't bind {name}: {detail}")
                elif detail is None:
                    status.set(f"Binding of {name} cancelled")
                else:
                    status.set(f"Bound {name} to MIDI key {detail}")
                render_sounds()
            root.after(_POLL_MS, poll_events)

        def do_import() -> None:
            try:
                imported = import_sound(self.app)
            except OSError as exc:
                status.set(f"Import failed: {exc}")
                return
            if imported is not None:
                status.set(f"Imported sound: {imported.name}")
            self.refresh_sounds()
            render_sounds()

        def choose_output(which: Output, device: str) -> None:
            try:
                self.select_output(which, device)
            except OSError as exc:
                status.set(f"Couldn't save output: {exc}")
            else:
                status.set(f"New {which.name.lower()} output: {device}")

        menubar = tk.Menu(root)
        sounds_menu = tk.Menu(menubar, tearoff=0)
        sounds_menu.add_command(label="Import", command=do_import)
        menubar.add_cascade(label="Sounds", menu=sounds_menu)
        output_menu = tk.Menu(menubar, tearoff=0)
        for output, label in ((Output.MICROPHONE, "Microphone"), (Output.PLAYBACK, "Playback")):
            submenu = tk.Menu(output_menu, tearoff=0)
            for device in devices:
                submenu.add_command(
                    label=device,
                    command=lambda which=output, name=device: choose_output(which, name),
                )
            output_menu.add_cascade(label=label, menu=submenu)
        menubar.add_cascade(label="Output", menu=output_menu)
        root.config(menu=menubar)

        root.bind("<Configure>", lambda event: place_panes() if event.widget is root else None)
        root.protocol("WM_DELETE_WINDOW", root.destroy)
        place_panes()
        render_sounds()
        root.after(_POLL_MS, poll_events)
        try:
            root.mainloop()
        finally:
            self.reader.stop()