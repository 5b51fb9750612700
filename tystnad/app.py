"""Keeps an audio output awake by playing silence (or a chosen file) in a loop."""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Protocol

from tystnad.launch_agent import get_executable_path, remove_launch_agent, write_launch_agent
from tystnad.player import DEFAULT_SINK, AudioError, AudioPlayer
from tystnad.settings import Settings
from tystnad.wav import apply_fade_in, generate_empty_sound

_log = logging.getLogger(__name__)

VERSION = "0.1.0"
DEFAULT_LENGTH = 500
MIN_LENGTH = 1
MAX_LENGTH = 3600

FADE_IN_MS = 50
FADE_RATE = 44100
FADE_CHANNELS = 2
FADE_IN_FRAMES = FADE_IN_MS * FADE_RATE // 1000

_IDLE_SECONDS = 0.1


class _Player(Protocol):
    def play(self, data: bytes | bytearray) -> None: ...
    def play_file(self, file_path: str) -> None: ...
    def wait_until_done(self) -> None: ...
    def __enter__(self) -> _Player: ...
    def __exit__(self, exc_type, exc, tb) -> None: ...


@dataclass
class Config:
    """User-adjustable state of the application."""

    enabled: bool = False
    length: int = DEFAULT_LENGTH
    custom_audio_file: str = ""
    alsa_sink: str = DEFAULT_SINK
    run_on_startup: bool = False

    @classmethod
    def from_settings(cls, settings: Settings) -> Config:
        """Build a configuration from stored settings, using defaults for gaps."""
        return cls(
            enabled=bool(settings.load("state", False)),
            length=int(settings.load("audio_length", DEFAULT_LENGTH)),
            custom_audio_file=settings.load_str("custom_audio_file", ""),
            alsa_sink=settings.load_str("alsa_sink", DEFAULT_SINK),
            run_on_startup=bool(settings.load("run_on_startup", False)),
        )

    def save(self, settings: Settings) -> None:
        """Store every field; an empty sink is stored as the default sink."""
        settings.save("state", self.enabled)
        settings.save("audio_length", self.length)
        settings.save("custom_audio_file", self.custom_audio_file)
        settings.save("alsa_sink", self.alsa_sink or DEFAULT_SINK)
        settings.save("run_on_startup", self.run_on_startup)


def validate_length(value: str) -> int:
    """Parse a silence length in seconds, accepting 1 to 3600."""
    try:
        length = int(value)
    except (TypeError, ValueError) as exc:
        raise argparse.ArgumentTypeError(f"not a whole number of seconds: {value!r}") from exc
    if not MIN_LENGTH <= length <= MAX_LENGTH:
        raise argparse.ArgumentTypeError(
            f"length must be between {MIN_LENGTH} and {MAX_LENGTH} seconds"
        )
    return length


class KeepAlive:
    """Plays the configured sound repeatedly while the configuration is enabled."""

    def __init__(
        self,
        config: Config,
        player_factory: Callable[[str], _Player] = AudioPlayer,
    ) -> None:
        self.config = config
        self.player_factory = player_factory
        self.last_error: Exception | None = None
        self._length: int | None = None
        self._silence = bytearray()

    def sound(self) -> bytearray:
        """Return the silent buffer for the current length, with its fade-in applied."""
        if self._length != self.config.length:
            silence = generate_empty_sound(self.config.length)
            apply_fade_in(silence, FADE_IN_FRAMES, FADE_CHANNELS)
            self._silence = silence
            self._length = self.config.length
        return self._silence

    def play_once(self) -> bool:
        """Play one round; on failure record the error, turn off and return False."""
        sink = self.config.alsa_sink or DEFAULT_SINK
        try:
            with self.player_factory(sink) as player:
                if self.config.custom_audio_file:
                    player.play_file(self.config.custom_audio_file)
                else:
                    player.play(self.sound())
                player.wait_until_done()
        except (AudioError, OSError) as exc:
            _log.error("An error occurred:\n%s", exc)
            self.last_error = exc
            self.config.enabled = False
            return False
        return True

    def run(self, stop_event: threading.Event) -> None:
        """Loop until `stop_event` is set, playing while enabled and idling otherwise."""
        while not stop_event.is_set():
            if self.config.enabled:
                self.play_once()
            else:
                stop_event.wait(_IDLE_SECONDS)


def build_parser() -> argparse.ArgumentParser:
    """Return the command-line parser."""
    parser = argparse.ArgumentParser(
        prog="tystnad",
        description="Keep the audio output awake by playing silence in a loop.",
    )
    parser.add_argument("--version", action="version", version=f"tystnad {VERSION}")
    parser.add_argument("--settings", metavar="PATH", help="settings file to use")
    state = parser.add_mutually_exclusive_group()
    state.add_argument("--enable", dest="enabled", action="store_const", const=True,
                       help="turn playback on")
    state.add_argument("--disable", dest="enabled", action="store_const", const=False,
                       help="turn playback off")
    parser.add_argument("--length", type=validate_length, metavar="SECONDS",
                        help=f"length of the silent sound ({MIN_LENGTH}-{MAX_LENGTH} sec)")
    parser.add_argument("--audio-file", metavar="PATH",
                        help="play this file instead of silence; empty string for silence")
    parser.add_argument("--sink", metavar="NAME", help="audio output device")
    startup = parser.add_mutually_exclusive_group()
    startup.add_argument("--startup", dest="run_on_startup", action="store_const", const=True,
                         help="run at login")
    startup.add_argument("--no-startup", dest="run_on_startup", action="store_const",
                         const=False, help="do not run at login")
    parser.add_argument("--configure-only", action="store_true",
                        help="store the given options and exit")
    return parser


def _apply_startup(enabled: bool) -> None:
    if sys.platform != "darwin":
        print("Running at login is only supported on macOS.", file=sys.stderr)
        return
    if enabled:
        write_launch_agent(get_executable_path())
    else:
        remove_launch_agent()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; return the exit status."""
    args = build_parser().parse_args(argv)
    settings = Settings(args.settings)
    config = Config.from_settings(settings)

    changed = False
    if args.enabled is not None:
        config.enabled = args.enabled
        changed = True
    if args.length is not None:
        config.length = args.length
        changed = True
    if args.audio_file is not None:
        config.custom_audio_file = args.audio_file
        changed = True
    if args.sink is not None:
        config.alsa_sink = args.sink or DEFAULT_SINK
        changed = True
    if args.run_on_startup is not None:
        config.run_on_startup = args.run_on_startup
        changed = True
        _apply_startup(config.run_on_startup)
    if changed:
        config.save(settings)

    if args.configure_only:
        print(f"state: {'on' if config.enabled else 'off'}")
        print(f"audio length: {config.length} sec")
        print(f"audio file: {config.custom_audio_file or '(silence)'}")
        print(f"sink: {config.alsa_sink}")
        return 0

    if not config.enabled:
        print("tystnad is turned off; start it with --enable.", file=sys.stderr)
        return 0

    keep_alive = KeepAlive(config)
    try:
        while config.enabled:
            keep_alive.play_once()
    except KeyboardInterrupt:
        return 0
    print(f"An error occurred:\n{keep_alive.last_error}", file=sys.stderr)
    return 1