"""Typed error hierarchy for sample loading and waveform rasterization."""

from __future__ import annotations


class AudioWaveError(Exception):
    """Base class for all audiowave failures."""


class InvalidCanvasError(AudioWaveError):
    """Canvas or grid dimensions are not finite and positive."""


class InvalidSourceError(AudioWaveError):
    """The source path does not point at a local regular file."""

    def __init__(self, path: object) -> None:
        super().__init__(f"The path provided is not a readable audio file: {path}")
        self.path = path


class FileInitializationError(AudioWaveError):
    """The file exists but could not be opened as audio."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Failed to initialize audio file: {message}")


class InvalidFrameCountOrFormatError(AudioWaveError):
    """The audio has no frames or uses an unsupported sample layout."""

    def __init__(self, detail: str | None = None) -> None:
        message = "Invalid frame count or audio format."
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class AudioProcessingError(AudioWaveError):
    """The decoder failed while reading samples."""

    def __init__(self, message: str) -> None:
        super().__init__(f"Audio processing failed: {message}")


class RequestSupersededError(AudioWaveError):
    """A pending load was replaced by a newer request on the same provider."""

    def __init__(self, generation: int) -> None:
        super().__init__(f"Sample request {generation} was superseded.")
        self.generation = generation
