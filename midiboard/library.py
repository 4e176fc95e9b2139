"""Listing the sound files held in the sound directory."""

from __future__ import annotations

from pathlib import Path


def sound_paths(directory: str | Path) -> list[Path]:
    """Return the paths of every entry in ``directory``, sorted by name."""
    return sorted(Path(directory).iterdir(), key=lambda entry: entry.name)


def sound_names(directory: str | Path) -> list[str]:
    """Return the file names of every entry in ``directory``, sorted."""
    return [entry.name for entry in sound_paths(directory)]