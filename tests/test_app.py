import subprocess
from pathlib import Path
from unittest import mock

import pytest

from midiboard.app import (
    Application,
    Paths,
    SetupError,
    choose_file,
    content_directory,
    create_directories,
    import_sound,
    initialize_application,
)
from midiboard.config import DEFAULT_CONFIG_LINES, Config
from midiboard.midimap import MidiMap

DEFAULT_TEXT = "\n".join(DEFAULT_CONFIG_LINES) + "\n"


def test_paths_under_layout(tmp_path):
    paths = Paths.under(tmp_path)
    assert paths.content_directory == tmp_path
    assert paths.sound_directory == tmp_path / "sounds"
    assert paths.config_path == tmp_path / "config.conf"
    assert paths.midimap_path == tmp_path / "midimap.csv"


def test_content_directory_prefers_xdg():
    env = {"XDG_DATA_HOME": "/data", "HOME": "/home/someone"}
    assert content_directory(env) == Path("/data/soundboard")


def test_content_directory_falls_back_to_home():
    env = {"HOME": "/home/someone"}
    assert content_directory(env) == Path("/home/someone/.local/share/soundboard")


def test_content_directory_without_environment_fails():
    with pytest.raises(SetupError):
        content_directory({})


def test_create_directories_builds_layout(tmp_path):
    paths = Paths.under(tmp_path / "soundboard")
    create_directories(paths)
    assert paths.sound_directory.is_dir()
    assert paths.config_path.read_text() == DEFAULT_TEXT
    assert paths.midimap_path.read_text() == ""


def test_create_directories_failure_raises_setup_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    with pytest.raises(SetupError):
        create_directories(Paths.under(blocker / "soundboard"))


def test_initialize_creates_missing_directory(tmp_path):
    app = initialize_application({"XDG_DATA_HOME": str(tmp_path)})
    root = tmp_path / "soundboard"
    assert app.paths == Paths.under(root)
    assert app.config == Config()
    assert app.midimap.key_map == {}
    assert (root / "config.conf").read_text() == DEFAULT_TEXT
    assert (root / "sounds").is_dir()


def test_initialize_loads_existing_data(tmp_path):
    root = tmp_path / "soundboard"
    (root / "sounds").mkdir(parents=True)
    (root / "midimap.csv").write_text("{5, /x/sounds/bonk.ogg},\n")
    (root / "config.conf").write_text('MicrophoneOutput = "Speakers"\nMidiPort = "3"\n')

    app = initialize_application({"XDG_DATA_HOME": str(tmp_path)})

    assert app.midimap.key_for_sound("bonk.ogg") == 5
    assert app.midimap.sound_for_key(5) == "/x/sounds/bonk.ogg"
    assert app.config.microphone_output == "Speakers"
    assert app.config.midi_port == 3


def test_initialize_populates_empty_config(tmp_path):
    root = tmp_path / "soundboard"
    root.mkdir()
    (root / "config.conf").write_text("")

    app = initialize_application({"HOME": str(tmp_path / "unused"), "XDG_DATA_HOME": str(tmp_path)})

    assert app.config == Config()
    assert (root / "config.conf").read_text() == DEFAULT_TEXT


def _make_app(tmp_path):
    paths = Paths.under(tmp_path / "soundboard")
    create_directories(paths)
    return Application(
        paths=paths,
        config=Config(),
        midimap=MidiMap(paths.midimap_path, paths.sound_directory),
    )


def test_import_sound_copies_and_registers(tmp_path):
    app = _make_app(tmp_path)
    source = tmp_path / "bonk.ogg"
    source.write_bytes(b"audio-bytes")

    destination = import_sound(app, source)

    assert destination == app.paths.sound_directory / "bonk.ogg"
    assert destination.read_bytes() == b"audio-bytes"
    assert app.midimap.key_for_sound("bonk.ogg") == -1
    assert app.midimap.sound_for_key(-1) == str(destination)


def test_second_import_stays_unbound(tmp_path):
    app = _make_app(tmp_path)
    first = tmp_path / "first.ogg"
    second = tmp_path / "second.ogg"
    first.write_bytes(b"1")
    second.write_bytes(b"2")

    import_sound(app, first)
    import_sound(app, second)

    assert (app.paths.sound_directory / "second.ogg").read_bytes() == b"2"
    assert app.midimap.key_for_sound("first.ogg") == -1
    assert app.midimap.key_for_sound("second.ogg") is None


def test_import_existing_sound_raises(tmp_path):
    app = _make_app(tmp_path)
    source = tmp_path / "bonk.ogg"
    source.write_bytes(b"x")
    import_sound(app, source)
    with pytest.raises(FileExistsError):
        import_sound(app, source)


def test_choose_file_returns_selected_path():
    done = subprocess.CompletedProcess(["zenity"], 0, stdout="/tmp/sounds/bonk.ogg\n", stderr="")
    with mock.patch("subprocess.run", return_value=done) as run:
        assert choose_file() == Path("/tmp/sounds/bonk.ogg")
    assert run.call_args.args[0] == ["zenity", "--file-selection"]


def test_choose_file_cancelled_returns_none():
    done = subprocess.CompletedProcess(["zenity"], 1, stdout="", stderr="")
    with mock.patch("subprocess.run", return_value=done):
        assert choose_file() is None


def test_choose_file_without_zenity_returns_none():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("zenity")):
        assert choose_file() is None


def test_import_sound_with_cancelled_dialog_copies_nothing(tmp_path):
    app = _make_app(tmp_path)
    done = subprocess.CompletedProcess(["zenity"], 1, stdout="", stderr="")
    with mock.patch("subprocess.run", return_value=done):
        assert import_sound(app) is None
    assert list(app.paths.sound_directory.iterdir()) == []