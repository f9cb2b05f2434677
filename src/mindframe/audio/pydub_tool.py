"""In-process media tool built on pydub.

Renders the same mix as the ffmpeg filter graph, but with AudioSegment
operations. pydub still shells out to ffmpeg for MP3 decode/encode, so
availability depends on the same binaries being installed.

Decoding always names the input codec. Without it pydub asks ffprobe for
stream info through a PATH lookup, bypassing ``MixerConfig.ffmpeg_path``.
Durations are measured with the configured ffprobe, as in ``FFmpegTool``.

The summed output is scaled by ``makeup_gain / 2`` to match ffmpeg's
``amix``, which divides a two-input sum by two before the makeup gain.
"""

import asyncio
import logging
import shutil
from pathlib import Path
from typing import List

from pydub import AudioSegment
from pydub.exceptions import CouldntDecodeError, CouldntEncodeError
from pydub.utils import ratio_to_db

from ..core.config import MixerConfig
from .models import ProbeResult, RenderResult, RenderSpec
from .tools import ffprobe_duration

logger = logging.getLogger(__name__)

SILENCE_DB = -120.0

# (format, decoder) per input; voice comes from TTS as MP3, beds are 16-bit WAV
VOICE_INPUT = ("mp3", "mp3")
BINAURAL_INPUT = ("wav", "pcm_s16le")


class PydubTool:
    """pydub backed media tool."""

    def __init__(
        self,
        ffmpeg: str = "ffmpeg",
        ffprobe: str = "ffprobe",
        timeout_s: float = 60.0,
    ):
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe
        self.timeout_s = timeout_s

        # Process-wide in pydub; set once here, never from worker threads
        AudioSegment.converter = ffmpeg

    @classmethod
    def from_config(cls, config: MixerConfig) -> "PydubTool":
        return cls(
            ffmpeg=config.ffmpeg_command,
            ffprobe=config.ffprobe_command,
            timeout_s=config.timeout_s,
        )

    def describe(self) -> str:
        return f"pydub ({self.ffmpeg})"

    def missing_binaries(self) -> List[str]:
        """Binaries that cannot be found."""
        return [b for b in (self.ffmpeg, self.ffprobe) if shutil.which(b) is None]

    def is_available(self) -> bool:
        return not self.missing_binaries()

    async def probe_duration(self, path: Path) -> ProbeResult:
        return await ffprobe_duration(self.ffprobe, path, self.timeout_s)

    async def render_mix(self, spec: RenderSpec) -> RenderResult:
        logger.debug(
            f"Rendering with pydub: {Path(spec.voice_path).name} + {Path(spec.binaural_path).name}"
        )
        try:
            await asyncio.wait_for(
                asyncio.to_thread(self._render, spec),
                timeout=spec.timeout_s,
            )
        except asyncio.TimeoutError:
            return RenderResult.failed(f"pydub render timed out after {spec.timeout_s:g}s")
        except (CouldntDecodeError, CouldntEncodeError, OSError) as e:
            return RenderResult.failed(f"pydub render failed: {e}")

        output = Path(spec.output_path)
        if not output.is_file() or output.stat().st_size == 0:
            return RenderResult.failed(f"pydub produced no output at {output}")
        return RenderResult.ok(output)

    # =========================================================================
    # Blocking helpers (run in a worker thread)
    # =========================================================================

    @staticmethod
    def _load(path: Path, input_format) -> AudioSegment:
        fmt, codec = input_format
        return AudioSegment.from_file(str(path), format=fmt, codec=codec)

    def _render(self, spec: RenderSpec) -> None:
        plan = spec.plan
        config = spec.mix_config
        total_ms = plan.total_duration_ms

        voice = self._load(spec.voice_path, VOICE_INPUT) + ratio_to_db(config.voice_volume)
        voice_track = AudioSegment.silent(duration=total_ms, frame_rate=voice.frame_rate)
        voice_track = voice_track.overlay(voice, position=plan.pad_before_ms)

        bed = self._loop_to_duration(self._load(spec.binaural_path, BINAURAL_INPUT), total_ms)
        bed = bed + ratio_to_db(config.binaural_volume)

        fade_in_end = min(total_ms, int(round(plan.fade_in_duration * 1000)))
        if fade_in_end > 0:
            bed = bed.fade(from_gain=SILENCE_DB, start=0, end=fade_in_end)

        fade_out_start = int(round(plan.fade_out_start * 1000))
        fade_out_end = min(total_ms, fade_out_start + int(round(plan.fade_out_duration * 1000)))
        if fade_out_end > fade_out_start:
            bed = bed.fade(to_gain=SILENCE_DB, start=fade_out_start, end=fade_out_end)

        mixed = voice_track.overlay(bed)
        mixed = mixed + ratio_to_db(spec.makeup_gain / 2)

        mixed.export(
            str(spec.output_path),
            format="mp3",
            codec="libmp3lame",
            parameters=["-q:a", str(spec.mp3_quality)],
        )

    @staticmethod
    def _loop_to_duration(audio: AudioSegment, target_ms: int) -> AudioSegment:
        """Repeat audio end to end and cut it to ``target_ms``."""
        if len(audio) == 0:
            raise CouldntDecodeError("Binaural track is empty")
        repeats = target_ms // len(audio) + 1
        return (audio * repeats)[:target_ms]
