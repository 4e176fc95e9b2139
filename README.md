# midiboard

A soundboard driven by a MIDI controller. Press a key on the controller and
the sound bound to it plays on the configured microphone output and playback
device at the same time, so others on a call hear it and so do you.

## Installing

```
pip install .
```

- MIDI input is read with `mido`, which needs one of its port back ends
  (for example `python-rtmidi`) installed to see any ports.
- Sounds are decoded and played through `pygame`'s mixer and SDL2 audio
  devices.
- The window uses `tkinter` from the standard library; some systems ship it
  as a separate package.
- **Sounds → Import** opens a file picker with `zenity`; without it the
  import does nothing.

## Running

```
midiboard            # start the soundboard
midiboard --verbose  # also log debug messages
```

On start the program looks for its data directory:

- `$XDG_DATA_HOME/soundboard/` if `XDG_DATA_HOME` is set,
- otherwise `$HOME/.local/share/soundboard/`.

If the directory does not exist it is created together with `sounds/`, an
empty `midimap.csv` and a default `config.conf`. If it exists, the bindings
and settings are loaded from it; an empty or missing `config.conf` is
rewritten with the defaults. When the directory cannot be found or created,
the program prints a message and exits with status 1.

A background thread then reads MIDI input while the window is open. Closing
the window stops the reader and prints `Window Closed`.

## The configuration file

`config.conf` holds one `Name = "value"` setting per line; lines starting
with `#` are comments. A fresh file looks like this:

```
# Audio configuration
MicrophoneOutput = ""
PlaybackOutput   = ""

# Bindings
MuteSoundboard   = ""
PlayLastSound    = ""

MidiPort   = ""
```

| Setting            | Meaning                                         | Default |
|--------------------|-------------------------------------------------|---------|
| `MicrophoneOutput` | audio device a sound is played on               | `""`    |
| `PlaybackOutput`   | second audio device a sound is played on        | `""`    |
| `MidiPort`         | index of the MIDI input port to read            | `1`     |
| `MidiPortName`     | stored name of the MIDI port                    | `""`    |
| `MuteSoundboard`   | key number, read and stored                     | `-1`    |
| `PlayLastSound`    | key number, read and stored                     | `-1`    |

Empty integer settings keep their defaults. A sound plays only on the outputs
that are set; if neither is set, nothing plays. The outputs are normally
chosen from the window's **Output** menu, which rewrites the matching line
(or appends it if missing).

## The MIDI map

Each line of `midimap.csv` binds one MIDI note number to a sound file:

```
{36, /home/me/.local/share/soundboard/sounds/Bonk.ogg},
```

A key holds at most one sound, and a sound is bound to at most one key.
Binding a sound again moves it to the new key and removes its old line.
Binding to a key that already has a sound raises `KeyAlreadyBoundError`.
An imported sound is recorded under key `-1` until it is bound to a real key.

Only messages of at least three bytes with a non-zero third byte (a key
press with velocity) count as a press; note-offs and short messages are
ignored. Starting a new sound interrupts the one that is playing.

## The window

- **Sounds → Import** asks for a file, copies it into `sounds/` (refusing to
  overwrite an existing file) and lists it.
- **Output → Microphone / Playback** lists the audio output devices and saves
  the chosen one to `config.conf`.
- The sound list shows every file in `sounds/`. Clicking a sound expands it
  to show its binding button (`MIDI: [36]` or `[Not Bound]`); clicking that
  button waits for the next key press on the controller and binds it.
- A status area along the bottom reports imports, bindings and errors.

## Using it from Python

```python
from midiboard.config import load_config, change_config
from midiboard.midimap import MidiMap
from midiboard.library import sound_names

config = load_config("config.conf")
change_config("config.conf", "PlaybackOutput", "pulse", config)

midimap = MidiMap("midimap.csv", "sounds")
midimap.load()
midimap.bind(36, "Bonk.ogg")
print(midimap.sound_for_key(36))
print(sound_names("sounds"))
```

Other pieces:

- `midiboard.app` — `initialize_application()`, `Paths`, `import_sound()`.
- `midiboard.player` — `output_devices()` and `SoundPlayer(config).play(path)`,
  which blocks while the sound plays.
- `midiboard.midi` — `port_names()`, `key_from_message()` and `MidiReader`
  with `run()`, `await_input()` and `stop()`.
- `midiboard.gui` — `SoundboardWindow`, `binding_label()`, `window_layout()`.

## What it does not do

- The **Sound Libraries** pane on the left is a heading only; extra sound
  directories cannot be added.
- Sounds cannot be removed or unbound from the window; edit `sounds/` and
  `midimap.csv` by hand.
- `MuteSoundboard` and `PlayLastSound` are read and stored but no key acts
  on them.
- The MIDI port is chosen only by its index in `config.conf`; the window has
  no port menu.

## Running the tests

```
pip install .[test]
pytest
```