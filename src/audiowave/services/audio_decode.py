"""Audio decode helpers producing a single-channel sample buffer.

WAV files are read with the standard library. Other formats are piped through
an external ``ffmpeg`` binary as interleaved 32-bit float PCM. Only the first
channel is kept; channels are never mixed.
"""

from __future__ import annotations

import logging
import shutil
import struct
import subprocess
import wave
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from audiowave.errors import (
    AudioProcessingError,
    FileInitializationError,
    InvalidFrameCountOrFormatError,
    InvalidSourceError,
)

SourceKind = Literal["wave", "ffmpeg"]

_FFMPEG_SAMPLE_RATE = 44_100
_FIRST_CHANNEL_FILTER = "pan=mono|c0=c0"
_FFMPEG_TIMEOUT_S = 30.0
_FFPROBE_TIMEOUT_S = 10.0
_WAVE_SUFFIXES = {".wav", ".wave"}
logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AudioSource:
    """Opened audio file handle description, validated but not yet decoded."""

    path: Path
    kind: SourceKind
    sample_rate: int
    # 0 when the container does not report a channel count.
    channels: int
    frame_count: int | None = None


@dataclass(frozen=True)
class DecodedSamples:
    """First-channel PCM decoded from an audio source."""

    sample_rate: int
    channels: int
    samples: list[float]

    @property
    def duration_ms(self) -> int:
        if self.sample_rate <= 0:
            return 0
        return int((len(self.samples) * 1000) / self.sample_rate)


def open_audio_source(track_path: Path | str) -> AudioSource:
    """Validate ``track_path`` and probe enough of it to plan the decode.

    WAV layouts the standard library cannot read, such as IEEE float, fall
    back to ``ffmpeg`` when it is installed.
    """
    if not track_path:
        raise InvalidSourceError(track_path)
    path = Path(track_path)
    if not path.exists() or not path.is_file():
        raise InvalidSourceError(track_path)

    try:
        with wave.open(str(path), "rb") as handle:
            return AudioSource(
                path=path,
                kind="wave",
                sample_rate=int(handle.getframerate()),
                channels=int(handle.getnchannels()),
                frame_count=int(handle.getnframes()),
            )
    except (wave.Error, EOFError) as exc:
        if path.suffix.lower() in _WAVE_SUFFIXES:
            if shutil.which("ffmpeg") is None:
                raise FileInitializationError(str(exc)) from exc
            logger.debug(
                "Standard WAV reader rejected file, using ffmpeg",
                extra={"event": "wave_ffmpeg_fallback", "path": str(path)},
            )
    except OSError as exc:
        raise FileInitializationError(str(exc)) from exc

    if shutil.which("ffmpeg") is None:
        raise FileInitializationError(
            f"ffmpeg is required to decode {path.suffix or 'this file'}"
        )
    return AudioSource(
        path=path,
        kind="ffmpeg",
        sample_rate=_FFMPEG_SAMPLE_RATE,
        channels=_probe_channels(path),
    )


def decode_samples(source: AudioSource) -> DecodedSamples:
    """Decode the first channel of ``source`` fully into memory."""
    if source.kind == "wave":
        decoded = _decode_wave(source)
    else:
        decoded = _decode_ffmpeg(source)
    logger.debug(
        "Decoded audio samples",
        extra={
            "event": "samples_decoded",
            "path": str(source.path),
            "source_kind": source.kind,
            "sample_count": len(decoded.samples),
            "sample_rate": decoded.sample_rate,
        },
    )
    return decoded


def load_samples(track_path: Path | str) -> DecodedSamples:
    """Open and decode ``track_path`` in one call."""
    return decode_samples(open_audio_source(track_path))


def _decode_wave(source: AudioSource) -> DecodedSamples:
    if not source.frame_count or source.frame_count <= 0:
        raise InvalidFrameCountOrFormatError("no frames")
    try:
        with wave.open(str(source.path), "rb") as handle:
            channels = int(handle.getnchannels())
            frame_rate = int(handle.getframerate())
            sample_width = int(handle.getsampwidth())
            if channels <= 0 or frame_rate <= 0 or sample_width not in (1, 2, 3, 4):
                raise InvalidFrameCountOrFormatError(
                    f"channels={channels} rate={frame_rate} width={sample_width}"
                )
            raw = handle.readframes(handle.getnframes())
    except (wave.Error, EOFError, OSError) as exc:
        raise AudioProcessingError(str(exc)) from exc

    samples = _first_channel(raw, channels=channels, sample_width=sample_width)
    if not samples:
        raise InvalidFrameCountOrFormatError("no frames")
    return DecodedSamples(sample_rate=frame_rate, channels=channels, samples=samples)


def _decode_ffmpeg(source: AudioSource) -> DecodedSamples:
    ffmpeg_bin = shutil.which("ffmpeg")
    if ffmpeg_bin is None:
        raise AudioProcessingError("ffmpeg binary not found on PATH")
    cmd = [
        ffmpeg_bin,
        "-v",
        "error",
        "-i",
        str(source.path),
        "-vn",
        "-sn",
        "-dn",
        "-f",
        "f32le",
        "-acodec",
        "pcm_f32le",
        "-af",
        _FIRST_CHANNEL_FILTER,
        "-ac",
        "1",
        "-ar",
        str(_FFMPEG_SAMPLE_RATE),
        "pipe:1",
    ]
    proc: subprocess.Popen[bytes] | None = None
    try:
        proc = subprocess.Popen(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
        stdout, stderr = proc.communicate(timeout=_FFMPEG_TIMEOUT_S)
        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip().splitlines()
            raise AudioProcessingError(
                detail[0] if detail else f"ffmpeg exited with {proc.returncode}"
            )
    except (OSError, subprocess.SubprocessError) as exc:
        raise AudioProcessingError(str(exc)) from exc
    finally:
        if proc is not None and proc.poll() is None:
            proc.kill()

    aligned = (len(stdout) // 4) * 4
    samples = [float(value) for (value,) in struct.iter_unpack("<f", stdout[:aligned])]
    if not samples:
        raise InvalidFrameCountOrFormatError("no frames")
    return DecodedSamples(
        sample_rate=_FFMPEG_SAMPLE_RATE,
        channels=source.channels,
        samples=samples,
    )


def _probe_channels(path: Path) -> int:
    """Return the source channel count reported by ffprobe, 0 when unknown."""
    ffprobe_bin = shutil.which("ffprobe")
    if ffprobe_bin is None:
        return 0
    cmd = [
        ffprobe_bin,
        "-v",
        "error",
        "-select_streams",
        "a:0",
        "-show_entries",
        "stream=channels",
        "-of",
        "default=noprint_wrappers=1:nokey=1",
        str(path),
    ]
    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            check=False,
            timeout=_FFPROBE_TIMEOUT_S,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        logger.debug(
            "ffprobe channel probe failed: %s",
            exc,
            extra={"event": "ffprobe_failed", "path": str(path)},
        )
        return 0
    output = completed.stdout.strip().splitlines()
    if completed.returncode != 0 or not output or not output[0].isdigit():
        return 0
    return int(output[0])


def _first_channel(raw: bytes, *, channels: int, sample_width: int) -> list[float]:
    bytes_per_frame = channels * sample_width
    frame_count = len(raw) // bytes_per_frame
    max_value = _sample_max(sample_width)
    return [
        _read_sample(raw, frame_idx * bytes_per_frame, sample_width) / max_value
        for frame_idx in range(frame_count)
    ]


def _read_sample(raw: bytes, offset: int, sample_width: int) -> int:
    if sample_width == 1:
        return raw[offset] - 128
    if sample_width == 2:
        return int.from_bytes(raw[offset : offset + 2], "little", signed=True)
    if sample_width == 3:
        value = int.from_bytes(raw[offset : offset + 3], "little", signed=False)
        if value & 0x800000:
            value -= 0x1000000
        return value
    if sample_width == 4:
        return int.from_bytes(raw[offset : offset + 4], "little", signed=True)
    raise InvalidFrameCountOrFormatError(f"unsupported sample width {sample_width}")


def _sample_max(sample_width: int) -> float:
    if sample_width == 1:
        return 128.0
    if sample_width == 2:
        return 32768.0
    if sample_width == 3:
        return 8_388_608.0
    return 2_147_483_648.0
