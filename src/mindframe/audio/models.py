"""Data models for the binaural mixing pipeline.

Everything here is created fresh for one mix call and discarded once the
result has been handed back. Tool calls report failure through
``ProbeResult``/``RenderResult`` rather than by raising, so the fallback
policy can branch on them explicitly.
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..core.enums import BinauralPreset, Scenario


class MixPlanError(ValueError):
    """Raised when a mix plan cannot be derived from the given inputs."""


@dataclass(frozen=True)
class MixConfiguration:
    """Per-scenario mixing constants.

    Attributes:
        voice_volume: Linear gain applied to the voice track
        binaural_volume: Linear gain applied to the binaural track
        fade_in_duration: Binaural fade-in length in seconds
        fade_out_duration: Binaural fade-out length in seconds
    """
    voice_volume: float
    binaural_volume: float
    fade_in_duration: float
    fade_out_duration: float

    def __post_init__(self):
        for name in ("voice_volume", "binaural_volume"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value}")
        for name in ("fade_in_duration", "fade_out_duration"):
            value = getattr(self, name)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass(frozen=True)
class MixPlan:
    """Timing for a single mix, derived from the measured voice duration."""
    voice_duration: float
    pad_before: float
    pad_after: float
    total_duration: float
    fade_in_duration: float
    fade_out_duration: float
    fade_out_start: float

    @property
    def pad_before_ms(self) -> int:
        return int(round(self.pad_before * 1000))

    @property
    def total_duration_ms(self) -> int:
        return int(round(self.total_duration * 1000))


@dataclass(frozen=True)
class RenderSpec:
    """Everything a media tool needs to render one mix."""
    voice_path: Path
    binaural_path: Path
    output_path: Path
    plan: MixPlan
    mix_config: MixConfiguration
    makeup_gain: float = 1.5
    mp3_quality: int = 2
    timeout_s: float = 60.0


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of a duration probe."""
    duration_s: Optional[float] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.duration_s is not None

    @classmethod
    def ok(cls, duration_s: float) -> "ProbeResult":
        return cls(duration_s=duration_s)

    @classmethod
    def failed(cls, error: str) -> "ProbeResult":
        return cls(error=error)


@dataclass(frozen=True)
class RenderResult:
    """Outcome of a mix render."""
    output_path: Optional[Path] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.output_path is not None

    @classmethod
    def ok(cls, output_path: Path) -> "RenderResult":
        return cls(output_path=output_path)

    @classmethod
    def failed(cls, error: str) -> "RenderResult":
        return cls(error=error)


@dataclass
class MixResult:
    """Audio handed back to the caller.

    ``has_binaural`` is False whenever the fallback path was taken, even
    though the call itself succeeded. ``skip_reason`` says why.
    """
    buffer: bytes
    format: str = "mp3"  # "mp3" or "wav"
    has_binaural: bool = False
    scenario: Optional[Scenario] = None
    preset: Optional[BinauralPreset] = None
    skip_reason: Optional[str] = None

    def to_dict(self) -> dict:
        """Metadata for logging and analytics (without the audio bytes)."""
        return {
            "format": self.format,
            "has_binaural": self.has_binaural,
            "scenario": self.scenario.value if self.scenario else None,
            "preset": self.preset.value if self.preset else None,
            "skip_reason": self.skip_reason,
            "size_bytes": len(self.buffer),
        }
