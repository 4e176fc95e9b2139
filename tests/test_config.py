import pytest

from midiboard.config import Config, change_config, load_config, write_default_config


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config.conf"
    write_default_config(path)
    return path


def test_default_file_loads_as_defaults(config_path):
    assert load_config(config_path) == Config()


def test_default_file_starts_with_audio_comment(config_path):
    lines = config_path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "# Audio configuration"
    assert 'MidiPort   = ""' in lines


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.conf") == Config()


def test_change_existing_value_round_trips(config_path):
    config = Config()
    before = config_path.read_text(encoding="utf-8").splitlines()
    change_config(config_path, "MicrophoneOutput", "Virtual Mic", config)
    after = config_path.read_text(encoding="utf-8").splitlines()
    assert len(after) == len(before)
    assert config.microphone_output == "Virtual Mic"
    assert load_config(config_path).microphone_output == "Virtual Mic"


def test_change_preserves_comments_and_blank_lines(config_path):
    before = config_path.read_text(encoding="utf-8").splitlines()
    change_config(config_path, "PlaybackOutput", "speakers", Config())
    after = config_path.read_text(encoding="utf-8").splitlines()
    kept = [line for line in before if not line or line.startswith("#")]
    assert [line for line in after if not line or line.startswith("#")] == kept


def test_change_missing_key_is_appended(config_path):
    config = Config()
    before = config_path.read_text(encoding="utf-8").splitlines()
    change_config(config_path, "MidiPortName", "keys", config)
    after = config_path.read_text(encoding="utf-8").splitlines()
    assert len(after) == len(before) + 1
    assert after[-1] == 'MidiPortName = "keys"'
    assert config.midi_port_name == "keys"
    assert load_config(config_path).midi_port_name == "keys"


def test_change_midi_port_parses_integer(config_path):
    config = Config()
    change_config(config_path, "MidiPort", "3", config)
    assert config.midi_port == 3
    assert load_config(config_path).midi_port == 3


def test_change_midi_port_rejects_empty(config_path):
    with pytest.raises(ValueError):
        change_config(config_path, "MidiPort", "", Config())


def test_change_binding_updates_file_but_not_live_config(config_path):
    config = Config()
    change_config(config_path, "MuteSoundboard", "5", config)
    assert config.mute_soundboard == Config().mute_soundboard
    assert load_config(config_path).mute_soundboard == 5


def test_change_on_missing_file_creates_it(tmp_path):
    path = tmp_path / "new.conf"
    config = Config()
    change_config(path, "PlaybackOutput", "speakers", config)
    assert load_config(path).playback_output == "speakers"


def test_load_rejects_non_numeric_integer(tmp_path):
    path = tmp_path / "bad.conf"
    path.write_text('PlayLastSound = "abc"\n', encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


def test_apply_ignores_empty_integer_and_unknown_keys():
    config = Config()
    config.apply("PlayLastSound", "")
    config.apply("Unknown", "value")
    assert config == Config()


def test_apply_sets_integer_field():
    config = Config()
    config.apply("PlayLastSound", "42")
    assert config.play_last_sound == 42