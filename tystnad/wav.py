"""Generation and shaping of 16-bit PCM WAV data."""

from __future__ import annotations

import struct

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_FMT_CHUNK_SIZE = 16
_PCM_FORMAT = 1


def _u32(value: int) -> int:
    return value & 0xFFFFFFFF


def _u16(value: int) -> int:
    return value & 0xFFFF


def generate_empty_sound(
    duration_seconds: int,
    sample_rate: int = 44100,
    num_channels: int = 2,
    bits_per_sample: int = 16,
) -> bytearray:
    """Return a complete WAV file holding `duration_seconds` of silence."""
    if duration_seconds < 0:
        raise ValueError("duration_seconds must not be negative")
    if sample_rate < 0 or num_channels < 0 or bits_per_sample < 0:
        raise ValueError("sample_rate, num_channels and bits_per_sample must not be negative")

    byte_rate = sample_rate * num_channels * bits_per_sample // 8
    block_align = num_channels * bits_per_sample // 8
    num_samples = duration_seconds * sample_rate
    data_chunk_size = num_samples * block_align
    riff_chunk_size = 4 + (8 + _FMT_CHUNK_SIZE) + (8 + data_chunk_size)

    header = _HEADER.pack(
        b"RIFF",
        _u32(riff_chunk_size),
        b"WAVE",
        b"fmt ",
        _FMT_CHUNK_SIZE,
        _PCM_FORMAT,
        _u16(num_channels),
        _u32(sample_rate),
        _u32(byte_rate),
        _u16(block_align),
        _u16(bits_per_sample),
        b"data",
        _u32(data_chunk_size),
    )
    buffer = bytearray(header)
    buffer.extend(bytes(data_chunk_size))
    return buffer


def apply_fade_in(buffer: bytearray, in_samples: int, channels: int) -> None:
    """Scale the first `in_samples` frames of `buffer` by a linear ramp, in place.

    The buffer is read as interleaved little-endian signed 16-bit samples,
    starting at its first byte; a trailing odd byte is left alone.
    """
    if channels <= 0:
        raise ValueError("channels must be positive")

    total = len(buffer) // 2
    frames = min(in_samples, total // channels)
    if frames <= 0:
        return

    count = frames * channels
    layout = f"<{count}h"
    samples = struct.unpack_from(layout, buffer)
    faded = [
        max(-32768, min(32767, int(sample * (index // channels) / frames)))
        for index, sample in enumerate(samples)
    ]
    struct.pack_into(layout, buffer, 0, *faded)