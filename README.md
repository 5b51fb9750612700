# tystnad

Some speakers, headphones and audio interfaces switch themselves off after a
few seconds of silence. When sound starts again they wake up late, and the
first part of a notification or a song is lost or comes out with a pop.

`tystnad` prevents this by playing silence on the audio output again and
again. Instead of silence it can loop a file of your choosing.

## Installation

```
pip install tystnad
```

Playback goes through the `pygame` mixer. Settings are kept in a JSON file,
`settings.json`, in your user configuration directory as given by
`platformdirs`.

## Running it

Playback is off until you turn it on. Turn it on and start the loop with:

```
tystnad --enable
```

The choice is saved, so later runs of plain `tystnad` start the loop straight
away. If playback is off, `tystnad` prints a hint and exits. The loop runs
until you press Ctrl+C. If playback fails, the error is printed, playback is
switched off in the current run and the command exits with status 1.

Options:

- `--enable` / `--disable`: turn playback on or off.
- `--length SECONDS`: length of the silent clip, from 1 to 3600 seconds
  (default 500).
- `--audio-file PATH`: loop this file instead of silence; pass an empty
  string to go back to silence.
- `--sink NAME`: the audio output device to open; `default` (or an empty
  string) means the system's default output.
- `--startup` / `--no-startup`: on macOS, add or remove a launch agent that
  starts the program at login. On other systems a notice is printed and
  nothing is changed.
- `--settings PATH`: use this settings file instead of the default one.
- `--configure-only`: store the given options, print the current
  configuration and exit without playing.
- `--version`: print the version.

Every option you give is saved and used by the next run.

Note that the audio file is not decoded: its bytes are played as raw
interleaved signed 16-bit little-endian stereo samples at 44.1 kHz. Use a file
holding audio in that form.

## Using it as a library

Make a silent WAV clip in memory and fade in its start:

```python
from tystnad.wav import generate_empty_sound, apply_fade_in

clip = generate_empty_sound(5, 44100, 2, 16)   # 5 seconds, 44.1 kHz, stereo, 16-bit
apply_fade_in(clip, 2205, 2)                   # ramp the first 2205 frames, in place
```

`generate_empty_sound` returns a `bytearray` holding a complete WAV file.
`apply_fade_in` treats the buffer as interleaved 16-bit samples from its first
byte onwards.

Play audio and wait for it to finish:

```python
from tystnad.player import AudioPlayer, AudioError

try:
    with AudioPlayer("default") as player:
        player.play(clip)
        player.wait_until_done()
except AudioError as error:
    print(f"playback failed: {error}")
```

`AudioPlayer.play_file` reads a file from disk and plays its bytes in the same
way; `read_audio_file` only reads it. A trailing partial frame is dropped, and
empty data plays nothing.

Read and write saved settings:

```python
from tystnad.settings import Settings, default_settings_path

settings = Settings(default_settings_path())
settings.save("audio_length", 30)
length = settings.load("audio_length", 500)
sound_file = settings.load_str("custom_audio_file", "")
```

The whole configuration is available as `tystnad.app.Config`, with
`Config.from_settings(settings)` and `config.save(settings)`.
`tystnad.app.KeepAlive(config)` plays one round with `play_once()` or loops
with `run(stop_event)` until a `threading.Event` is set.

On macOS, `tystnad.launch_agent.write_launch_agent(app_path)` writes
`~/Library/LaunchAgents/com.yourdomain.tystnad.plist` (an existing file is
left as it is) and `remove_launch_agent()` deletes it.

## What it does not do

`tystnad` has no tray icon, menu or settings window. It is controlled from the
command line only, and the loop runs in the foreground until it is
interrupted.

## Running the tests

```
pip install "tystnad[test]"
pytest
```