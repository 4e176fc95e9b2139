"""Persistent mapping between MIDI keys and sound files."""

from __future__ import annotations

from pathlib import Path


class KeyAlreadyBoundError(Exception):
    """Raised when binding a sound to a key that already has one."""


def parse_mapping_line(line: str) -> tuple[int, str]:
    """Parse a ``{key, path},`` line into its key and sound path."""
    start = line.find("{")
    comma = line.find(",")
    end = line.find("}")
    if start < 0 or comma < start or end < comma:
        raise ValueError(f"malformed mapping line: {line!r}")
    key = int(line[start + 1:comma])
    return key, line[comma + 2:end]


def _sound_name(sound_path: str) -> str:
    return sound_path[sound_path.rfind("/") + 1:]


class MidiMap:
    """Key-to-sound bindings backed by a mapping file."""

    def __init__(self, path: str | Path, sound_directory: str | Path) -> None:
        self.path = Path(path)
        self.sound_directory = Path(sound_directory)
        self.key_map: dict[int, str] = {}
        self.bindings: dict[str, int] = {}

    def _read_lines(self) -> list[str]:
        return [
            line
            for line in self.path.read_text(encoding="utf-8").splitlines()
            if line.strip()
        ]

    def load(self) -> None:
        """Read bindings from the file; earlier entries win over later duplicates."""
        for line in self._read_lines():
            key, sound_path = parse_mapping_line(line)
            self.key_map.setdefault(key, sound_path)
            self.bindings.setdefault(_sound_name(sound_path), key)

    def add_mapping(self, key: int, sound_path: str) -> None:
        """Append a binding line to the file."""
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(f"{{{key}, {sound_path}}},\n")

    def remove_key(self, key: int) -> None:
        """Remove every line for ``key`` from the file."""
        try:
            lines = self._read_lines()
        except FileNotFoundError:
            lines = []
        kept = [line for line in lines if parse_mapping_line(line)[0] != key]
        self.path.write_text("".join(f"{line}\n" for line in kept), encoding="utf-8")

    def bind(self, key: int, sound_name: str) -> None:
        """Bind ``sound_name`` to ``key``, moving it off any previous key."""
        if key in self.key_map:
            raise KeyAlreadyBoundError(f"key {key} already has a sound bound")
        old_key = self.bindings.pop(sound_name, None)
        if old_key is not None:
            self.key_map.pop(old_key, None)
            self.remove_key(old_key)
        sound_path = str(self.sound_directory / sound_name)
        self.key_map[key] = sound_path
        self.bindings[sound_name] = key
        self.add_mapping(key, sound_path)

    def sound_for_key(self, key: int) -> str | None:
        """Return the sound path bound to ``key``, if any."""
        return self.key_map.get(key)

    def key_for_sound(self, sound_name: str) -> int | None:
        """Return the key bound to ``sound_name``, if any."""
        return self.bindings.get(sound_name)