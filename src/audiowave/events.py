"""Result and state-change events delivered by the sample provider.

A request resolves to exactly one of `SamplesReady` or `SamplesFailed`;
`SampleResult` is the union listeners receive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from audiowave.errors import AudioWaveError
from audiowave.services.audio_decode import DecodedSamples

ProviderState = Literal["idle", "processing", "completed", "failed"]


@dataclass(frozen=True)
class SamplesReady:
    """Decode finished and the buffer is available."""

    generation: int
    decoded: DecodedSamples

    @property
    def samples(self) -> list[float]:
        return self.decoded.samples


@dataclass(frozen=True)
class SamplesFailed:
    """Decode failed with a typed error."""

    generation: int
    error: AudioWaveError

    @property
    def message(self) -> str:
        return str(self.error)


@dataclass(frozen=True)
class ProviderStateChanged:
    """Provider lifecycle transition."""

    previous: ProviderState
    current: ProviderState
    generation: int


SampleResult = Union[SamplesReady, SamplesFailed]
