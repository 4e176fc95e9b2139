"""Locating, creating and loading the soundboard's data directory."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .config import Config, load_config, write_default_config
from .midimap import KeyAlreadyBoundError, MidiMap

logger = logging.getLogger(__name__)

UNBOUND_KEY = -1


class SetupError(Exception):
    """Raised when the data directory cannot be found or created."""


@dataclass(frozen=True)
class Paths:
    """Locations of the soundboard's data files."""

    content_directory: Path
    sound_directory: Path
    config_path: Path
    midimap_path: Path

    @classmethod
    def under(cls, content_directory: str | Path) -> Paths:
        """Return the standard layout below ``content_directory``."""
        root = Path(content_directory)
        return cls(
            content_directory=root,
            sound_directory=root / "sounds",
            config_path=root / "config.conf",
            midimap_path=root / "midimap.csv",
        )


@dataclass
class Application:
    """Loaded soundboard state: where the data lives, the settings and the bindings."""

    paths: Paths
    config: Config
    midimap: MidiMap


def content_directory(environ: Mapping[str, str] | None = None) -> Path:
    """Return the data directory chosen from ``XDG_DATA_HOME`` or ``HOME``."""
    env = os.environ if environ is None else environ
    if "XDG_DATA_HOME" in env:
        return Path(env["XDG_DATA_HOME"]) / "soundboard"
    if "HOME" in env:
        return Path(env["HOME"]) / ".local" / "share" / "soundboard"
    raise SetupError("neither XDG_DATA_HOME nor HOME is set")


def create_directories(paths: Paths) -> None:
    """Create the data and sound directories, an empty mapping and a default config."""
    try:
        paths.content_directory.mkdir(parents=True, exist_ok=True)
        logger.info("created content directory")
        paths.sound_directory.mkdir(exist_ok=True)
        logger.info("created sounds directory")
        write_default_config(paths.config_path)
        logger.info("created config file")
        paths.midimap_path.touch()
        logger.info("created midimap file")
    except OSError as exc:
        raise SetupError(f"could not create {paths.content_directory}: {exc}") from exc


def initialize_application(environ: Mapping[str, str] | None = None) -> Application:
    """Find or create the data directory and load settings and bindings from it."""
    paths = Paths.under(content_directory(environ))
    midimap = MidiMap(paths.midimap_path, paths.sound_directory)

    if not paths.content_directory.exists():
        logger.info("Creating directory %s", paths.content_directory)
        create_directories(paths)
        return Application(paths=paths, config=Config(), midimap=midimap)

    logger.info("Directory found: %s", paths.content_directory)
    try:
        paths.sound_directory.mkdir(exist_ok=True)
        if paths.midimap_path.exists():
            midimap.load()
        if paths.config_path.exists() and paths.config_path.stat().st_size > 0:
            config = load_config(paths.config_path)
        else:
            logger.info("Config was not found or was empty; populating it")
            write_default_config(paths.config_path)
            config = Config()
    except OSError as exc:
        raise SetupError(f"could not load {paths.content_directory}: {exc}") from exc
    return Application(paths=paths, config=config, midimap=midimap)


def choose_file() -> Path | None:
    """Ask the user for a file with a zenity dialog; ``None`` if nothing was chosen."""
    try:
        result = subprocess.run(
            ["zenity", "--file-selection"],
            capture_output=True,
            text=True,
            check=False,
        )
    except FileNotFoundError:
        logger.error("zenity is not available")
        return None
    lines = result.stdout.splitlines()
    if not lines or not lines[0]:
        return None
    return Path(lines[0])


def import_sound(app: Application, source: str | Path | None = None) -> Path | None:
    """Copy a sound into the sound directory and register it as unbound.

    Without ``source`` the user is asked to choose a file. Returns the new path,
    or ``None`` if nothing was chosen.
    """
    if source is None:
        source = choose_file()
        if source is None:
            return None
    source = Path(source)
    destination = app.paths.sound_directory / source.name
    if destination.exists():
        raise FileExistsError(f"{destination} already exists")
    shutil.copyfile(source, destination)

    try:
        app.midimap.bind(UNBOUND_KEY, source.name)
    except KeyAlreadyBoundError:
        logger.warning("Couldn't bind %s: key already has a sound bound", source.name)

    logger.info("Imported sound: %s", source.name)
    return destination