"""Mixer configuration dataclass.

Values mirror the production deployment: binaural assets bundled under
``public/audio/binaural`` relative to the deployment root, ffmpeg on PATH
(or in ``FFMPEG_PATH``), and a 60 second bound on every external call.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class MixerConfig:
    """Configuration for the binaural mixing pipeline."""

    # ===========================================
    # ASSETS
    # ===========================================
    assets_root: str = "."  # Deployment root the asset paths are relative to

    # ===========================================
    # EXTERNAL TOOL
    # ===========================================
    # "ffmpeg" = ffmpeg/ffprobe child processes (production)
    # "pydub" = in-process rendering through pydub
    backend: str = "ffmpeg"
    ffmpeg_path: Optional[str] = None  # Directory holding the binaries (None = PATH)
    ffmpeg_binary: str = "ffmpeg"
    ffprobe_binary: str = "ffprobe"
    timeout_s: float = 60.0  # Bound on each probe/render call

    # ===========================================
    # MIX TIMING
    # ===========================================
    # Binaural starts before the voice and ends after it so the listener
    # settles into the beat before and after the affirmation
    pad_before_s: float = 2.0
    pad_after_s: float = 2.0

    # ===========================================
    # OUTPUT
    # ===========================================
    makeup_gain: float = 1.5  # Applied after summing the attenuated tracks
    mp3_quality: int = 2  # libmp3lame VBR quality (~190 kbps)
    temp_dir: Optional[str] = None  # None = system temp directory

    # ===========================================
    # TTS
    # ===========================================
    elevenlabs_api_key: Optional[str] = None

    # ===========================================
    # LOGGING
    # ===========================================
    verbose: bool = False

    def __post_init__(self):
        if self.backend not in ("ffmpeg", "pydub"):
            raise ValueError(f"Unknown mixer backend: {self.backend!r}")
        if self.timeout_s <= 0:
            raise ValueError(f"timeout_s must be positive, got {self.timeout_s}")
        if self.pad_before_s < 0 or self.pad_after_s < 0:
            raise ValueError("Padding must be non-negative")
        if self.makeup_gain <= 0:
            raise ValueError(f"makeup_gain must be positive, got {self.makeup_gain}")
        if not 0 <= self.mp3_quality <= 9:
            raise ValueError(f"mp3_quality must be within 0-9, got {self.mp3_quality}")

    @property
    def ffmpeg_command(self) -> str:
        """Executable used for rendering."""
        return self._binary(self.ffmpeg_binary)

    @property
    def ffprobe_command(self) -> str:
        """Executable used for duration probing."""
        return self._binary(self.ffprobe_binary)

    def _binary(self, name: str) -> str:
        if self.ffmpeg_path:
            return str(Path(self.ffmpeg_path) / name)
        return name

    @classmethod
    def from_env(cls, **overrides) -> "MixerConfig":
        """Build a config from ``MINDFRAME_*`` environment variables.

        Call ``load_dotenv()`` first to pick up a ``.env`` file.
        Keyword arguments override anything read from the environment.
        """
        values = {
            "assets_root": os.getenv("MINDFRAME_ASSETS_ROOT", "."),
            "backend": os.getenv("MINDFRAME_MIXER_BACKEND", "ffmpeg"),
            "ffmpeg_path": os.getenv("FFMPEG_PATH") or None,
            "timeout_s": float(os.getenv("MINDFRAME_MIX_TIMEOUT", "60")),
            "temp_dir": os.getenv("MINDFRAME_TEMP_DIR") or None,
            "elevenlabs_api_key": os.getenv("ELEVENLABS_API_KEY") or None,
            "verbose": os.getenv("MINDFRAME_VERBOSE", "").lower() in ("1", "true", "yes"),
        }
        values.update(overrides)
        return cls(**values)
