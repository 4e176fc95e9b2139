"""A MIDI-driven soundboard: key bindings, configuration, playback and a window."""

__version__ = "0.1.0"