"""Reading MIDI key presses and playing the sounds bound to them."""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence

import mido

from .config import Config
from .midimap import MidiMap
from .player import SoundPlayer

logger = logging.getLogger(__name__)

_POLL_INTERVAL = 0.001


def port_names() -> list[str]:
    """Return the names of the available MIDI input ports."""
    return list(mido.get_input_names())


def key_from_message(message: mido.Message | Sequence[int]) -> int | None:
    """Return the key of a pressed-key message, or ``None`` for anything else.

    A message counts when it has at least three bytes and a non-zero third byte.
    """
    data = message.bytes() if isinstance(message, mido.Message) else list(message)
    if len(data) < 3 or data[2] == 0:
        return None
    return int(data[1])


class MidiReader:
    """Listens on a MIDI input port and plays the sound bound to each pressed key."""

    def __init__(self, config: Config, midimap: MidiMap, player: SoundPlayer) -> None:
        self.config = config
        self.midimap = midimap
        self.player = player
        self._port = None
        self._stopped = threading.Event()

    def open_port(self) -> None:
        """(Re)open the input port numbered by ``config.midi_port``."""
        if self._port is not None:
            self._port.close()
            self._port = None
        names = port_names()
        index = self.config.midi_port
        if not 0 <= index < len(names):
            raise ValueError(f"MIDI port {index} is not available")
        self._port = mido.open_input(names[index])
        logger.info("Reading input from MIDI port: %d", index)

    def _next_key(self) -> int | None:
        message = self._port.poll()
        if message is None:
            self._stopped.wait(_POLL_INTERVAL)
            return None
        return key_from_message(message)

    def await_input(self) -> int | None:
        """Wait for the next pressed key; ``None`` if the reader is stopped first."""
        if self._port is None:
            raise RuntimeError("no MIDI port is open")
        while not self._stopped.is_set():
            key = self._next_key()
            if key is not None:
                return key
        return None

    def run(self) -> None:
        """Open the configured port and play bound sounds until stopped."""
        if not port_names():
            logger.warning("No active MIDI inputs found")
            return
        self.open_port()
        try:
            while not self._stopped.is_set():
                key = self._next_key()
                if key is None:
                    continue
                sound = self.midimap.sound_for_key(key)
                if not sound:
                    continue
                threading.Thread(target=self.player.play, args=(sound,), daemon=True).start()
                logger.info("Played sound %s", sound)
        finally:
            if self._port is not None:
                self._port.close()
                self._port = None

    def stop(self) -> None:
        """Make ``run`` and ``await_input`` return."""
        self._stopped.set()