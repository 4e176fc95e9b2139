"""Playing sound files on the configured microphone and playback devices."""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
from pygame._sdl2 import audio as sdl2_audio  # noqa: E402

from .config import Config  # noqa: E402

logger = logging.getLogger(__name__)

_FREQUENCY = 44100
_SAMPLE_SIZE = -16
_CHANNELS = 2
_CHUNK_SIZE = 512


def _ensure_mixer() -> tuple[int, int, int]:
    if not pygame.mixer.get_init():
        pygame.mixer.init(frequency=_FREQUENCY, size=_SAMPLE_SIZE, channels=_CHANNELS)
    return pygame.mixer.get_init()


def output_devices() -> list[str]:
    """Return the names of the audio output devices."""
    _ensure_mixer()
    return list(sdl2_audio.get_audio_device_names(False))


class _SampleStream:
    """Feeds decoded samples to an audio device, then silence."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._position = 0

    def __call__(self, device: object, buffer: memoryview) -> None:
        view = memoryview(buffer).cast("B")
        size = len(view)
        chunk = self._data[self._position:self._position + size]
        self._position += len(chunk)
        view[:len(chunk)] = chunk
        view[len(chunk):] = bytes(size - len(chunk))


class SoundPlayer:
    """Plays one sound at a time on the microphone and playback outputs."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self._lock = threading.Lock()
        self._current: threading.Event | None = None

    def _outputs(self) -> list[str]:
        return [
            device
            for device in (self.config.microphone_output, self.config.playback_output)
            if device
        ]

    def play(self, path: str | Path) -> bool:
        """Play ``path`` to the end, interrupting any earlier sound.

        Blocks while the sound plays. Returns ``False`` when no output is configured.
        """
        path = Path(path)
        finished = threading.Event()
        with self._lock:
            if self._current is not None:
                self._current.set()
                logger.info("Stopped media player")
            self._current = finished

        outputs = self._outputs()
        if not outputs:
            logger.error("Failed to play sound %s: no device to play back on", path)
            with self._lock:
                if self._current is finished:
                    self._current = None
            return False

        devices = []
        try:
            frequency, _, channels = _ensure_mixer()
            sound = pygame.mixer.Sound(str(path))
            data = sound.get_raw()
            length = sound.get_length()
            for name in outputs:
                devices.append(
                    sdl2_audio.AudioDevice(
                        devicename=name,
                        iscapture=False,
                        frequency=frequency,
                        audioformat=sdl2_audio.AUDIO_S16,
                        numchannels=channels,
                        chunksize=_CHUNK_SIZE,
                        allowed_changes=0,
                        callback=_SampleStream(data),
                    )
                )
            logger.info("Playing sound %s", path.name)
            for device in devices:
                device.pause(0)
            finished.wait(length)
        finally:
            for device in devices:
                device.close()
            with self._lock:
                if self._current is finished:
                    self._current = None
        return True