"""Reading and editing the soundboard's ``key = "value"`` configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_CONFIG_LINES = (
    "# Audio configuration",
    'MicrophoneOutput = ""',
    'PlaybackOutput   = ""',
    "",
    "# Bindings",
    'MuteSoundboard   = ""',
    'PlayLastSound    = ""',
    "",
    'MidiPort   = ""',
)

_STRING_FIELDS = {
    "MicrophoneOutput": "microphone_output",
    "PlaybackOutput": "playback_output",
    "MidiPortName": "midi_port_name",
}
_INT_FIELDS = {
    "MuteSoundboard": "mute_soundboard",
    "PlayLastSound": "play_last_sound",
    "MidiPort": "midi_port",
}
# Settings that take effect immediately when changed through change_config.
_LIVE_KEYS = frozenset({"MicrophoneOutput", "PlaybackOutput", "MidiPortName", "MidiPort"})


@dataclass
class Config:
    """Current soundboard settings."""

    microphone_output: str = ""
    playback_output: str = ""
    mute_soundboard: int = -1
    play_last_sound: int = -1
    midi_port: int = 1
    midi_port_name: str = ""

    def apply(self, name: str, value: str) -> None:
        """Set the field named by a config-file key; empty integers and unknown keys are ignored."""
        if name in _STRING_FIELDS:
            setattr(self, _STRING_FIELDS[name], value)
        elif name in _INT_FIELDS and value != "":
            setattr(self, _INT_FIELDS[name], int(value))


def _variable_name(line: str) -> str:
    parts = line.split()
    return parts[0] if parts else ""


def _is_setting(line: str) -> bool:
    return bool(line) and not line.startswith("#")


def _parse_value(line: str) -> str | None:
    _, sep, rest = line.partition("=")
    if not sep:
        return None
    value = rest.strip(" ")
    if value.startswith('"'):
        end = value.rfind('"')
        value = value[1:end] if end > 0 else value[1:]
    return value


def write_default_config(path: str | Path) -> None:
    """Write the default configuration file to ``path``."""
    Path(path).write_text("\n".join(DEFAULT_CONFIG_LINES) + "\n", encoding="utf-8")


def load_config(path: str | Path) -> Config:
    """Read the configuration at ``path``; a missing file gives the defaults."""
    config = Config()
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return config
    for line in text.splitlines():
        if not _is_setting(line):
            continue
        value = _parse_value(line)
        if value is None:
            continue
        config.apply(_variable_name(line), value)
    return config


def change_config(path: str | Path, name: str, value: str, config: Config) -> None:
    """Set ``name`` to ``value`` in the file, appending it if absent, and update ``config``."""
    path = Path(path)
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except FileNotFoundError:
        lines = []

    index = None
    for position, line in enumerate(lines):
        if _is_setting(line) and _variable_name(line) == name:
            index = position

    new_line = f'{name} = "{value}"'
    if index is None:
        lines.append(new_line)
    else:
        lines[index] = new_line
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    if name in _LIVE_KEYS:
        if name == "MidiPort":
            config.midi_port = int(value)
        else:
            config.apply(name, value)