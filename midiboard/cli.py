"""Command line entry point that starts the soundboard."""

from __future__ import annotations

import argparse
import logging
import threading
from collections.abc import Sequence

from .app import SetupError, initialize_application
from .gui import SoundboardWindow
from .midi import MidiReader
from .player import SoundPlayer

logger = logging.getLogger(__name__)


def _read_midi(reader: MidiReader) -> None:
    try:
        reader.run()
    except (ValueError, OSError) as exc:
        logger.error("MIDI input stopped: %s", exc)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the soundboard: load the data directory, read MIDI and open the window."""
    parser = argparse.ArgumentParser(
        prog="midiboard", description="Play sounds bound to MIDI keys."
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="log more detail")
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO, format="%(message)s"
    )

    print("Starting Soundboard...")
    try:
        app = initialize_application()
    except SetupError as exc:
        logger.debug("setup failed: %s", exc)
        print("Soundboard Failed To Find or Create Required Directories!")
        print("Please Check Application And Directory Privileges!")
        return 1

    player = SoundPlayer(app.config)
    reader = MidiReader(app.config, app.midimap, player)
    threading.Thread(target=_read_midi, args=(reader,), daemon=True).start()
    try:
        SoundboardWindow(app, reader, player).run()
    finally:
        reader.stop()
    print("Window Closed")
    return 0