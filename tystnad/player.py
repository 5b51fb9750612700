"""Playback of raw 16-bit stereo PCM data through the audio mixer."""

from __future__ import annotations

import os
import threading
import time
from types import TracebackType

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

SAMPLE_RATE = 44100
CHANNELS = 2
SAMPLE_BYTES = 2
FRAME_SIZE = CHANNELS * SAMPLE_BYTES
DEFAULT_SINK = "default"

_POLL_SECONDS = 0.02
_mixer_lock = threading.Lock()
_mixer_device: str | None = None


class AudioError(RuntimeError):
    """Raised when audio cannot be read or played."""


def read_audio_file(file_path: str | os.PathLike[str]) -> bytes:
    """Return the whole content of `file_path` as raw bytes."""
    path = os.fspath(file_path)
    try:
        with open(path, "rb") as handle:
            return handle.read()
    except FileNotFoundError as exc:
        raise AudioError(f"Failed to open file: {path}") from exc
    except OSError as exc:
        raise AudioError(f"Failed to read file: {path}") from exc


def _ensure_mixer(sink: str) -> None:
    global _mixer_device
    device = None if not sink or sink == DEFAULT_SINK else sink
    with _mixer_lock:
        if pygame.mixer.get_init() is not None:
            if _mixer_device == device:
                return
            pygame.mixer.quit()
        try:
            pygame.mixer.init(
                frequency=SAMPLE_RATE,
                size=-8 * SAMPLE_BYTES,
                channels=CHANNELS,
                devicename=device,
            )
        except pygame.error as exc:
            raise AudioError(f"Failed to open audio device: {exc}") from exc
        _mixer_device = device


class AudioPlayer:
    """Plays interleaved signed 16-bit little-endian stereo samples at 44.1 kHz."""

    def __init__(self, sink: str = DEFAULT_SINK) -> None:
        self.sink = sink or DEFAULT_SINK
        self._sound: pygame.mixer.Sound | None = None
        self._channel: pygame.mixer.Channel | None = None

    @property
    def busy(self) -> bool:
        """True while the last buffer handed to `play` is still sounding."""
        return self._channel is not None and bool(self._channel.get_busy())

    def play(self, data: bytes | bytearray | memoryview) -> None:
        """Start playing `data`; a trailing partial frame is dropped."""
        usable = len(data) - len(data) % FRAME_SIZE
        if usable <= 0:
            return
        _ensure_mixer(self.sink)
        try:
            self._sound = pygame.mixer.Sound(buffer=bytes(data[:usable]))
            channel = self._sound.play()
        except pygame.error as exc:
            raise AudioError(f"Failed to play audio: {exc}") from exc
        if channel is None:
            raise AudioError("Failed to play audio: no free channel")
        self._channel = channel

    def play_file(self, file_path: str | os.PathLike[str]) -> None:
        """Start playing the raw content of `file_path`."""
        self.play(read_audio_file(file_path))

    def wait_until_done(self) -> None:
        """Block until playback has finished."""
        while self.busy:
            time.sleep(_POLL_SECONDS)

    def stop(self) -> None:
        """Stop playback and release the buffer."""
        if self._channel is not None:
            self._channel.stop()
            self._channel = None
        self._sound = None

    def __enter__(self) -> AudioPlayer:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.stop()