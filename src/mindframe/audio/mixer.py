"""Binaural mixer: best-effort voice + binaural-beat mixing.

Takes a synthesized voice buffer and a scenario, and returns the voice
laid over the scenario's looping binaural track. Mixing never fails the
caller: a disabled flag, missing asset or tool, failed probe, bad plan
or failed render all return the original voice buffer with
``has_binaural=False``.

State flow:
    START -> CHECKING_AVAILABILITY -> (MIXING | SKIPPING) -> DONE

Usage:
    from mindframe.audio import BinauralMixer

    mixer = BinauralMixer(config)
    result = await mixer.mix(voice_bytes, "morning")
    if not result.has_binaural:
        logger.info(f"Voice only: {result.skip_reason}")
"""

import logging
import tempfile
import uuid
from pathlib import Path
from typing import Optional, Union

from ..core.config import MixerConfig
from ..core.enums import BinauralPreset, MixState, Scenario
from .availability import check_mixing_available
from .binaural import (
    get_binaural_preset,
    get_mix_config,
    resolve_binaural_path,
    to_scenario,
)
from .models import MixPlanError, MixResult, RenderSpec
from .planner import plan_mix
from .tools import MediaTool, check_ffmpeg_available, create_media_tool

logger = logging.getLogger(__name__)

OUTPUT_FORMAT = "mp3"


class MixFailed(Exception):
    """A mixing step failed; the caller falls back to the voice buffer."""


class BinauralMixer:
    """Orchestrates availability check, probe, plan and render.

    Holds no per-call state: concurrent ``mix()`` calls each get their
    own temporary directory, removed on every exit path.
    """

    def __init__(
        self,
        config: Optional[MixerConfig] = None,
        tool: Optional[MediaTool] = None,
    ):
        """Initialize the mixer.

        Args:
            config: Mixer configuration (defaults if None)
            tool: Media tool to use (built from ``config.backend`` if None)
        """
        self.config = config or MixerConfig()
        self.tool = tool if tool is not None else create_media_tool(self.config)

    async def mix(
        self,
        voice_buffer: bytes,
        scenario: Union[Scenario, str],
        binaural_enabled: bool = True,
    ) -> MixResult:
        """Mix voice audio with the scenario's binaural track.

        Args:
            voice_buffer: Encoded voice audio (MP3 from TTS)
            scenario: Scenario name or enum
            binaural_enabled: If False, return the voice untouched

        Returns:
            MixResult; ``has_binaural`` tells whether mixing happened
        """
        state = MixState.START

        if not binaural_enabled:
            self._transition(state, MixState.DONE)
            logger.debug("Binaural disabled, returning voice only")
            return self._voice_only(voice_buffer, None, None, "binaural disabled")

        scenario = to_scenario(scenario)
        preset = get_binaural_preset(scenario)

        state = self._transition(state, MixState.CHECKING_AVAILABILITY)
        available, reason = check_mixing_available(scenario, self.config.assets_root, self.tool)
        if not available:
            state = self._transition(state, MixState.SKIPPING)
            self._transition(state, MixState.DONE)
            logger.warning(f"Skipping binaural mix: {reason}")
            return self._voice_only(voice_buffer, scenario, preset, reason)

        state = self._transition(state, MixState.MIXING)
        try:
            mixed = await self._render(voice_buffer, scenario, preset)
        except (MixFailed, MixPlanError, OSError) as e:
            state = self._transition(state, MixState.SKIPPING)
            self._transition(state, MixState.DONE)
            logger.warning(f"Failed to mix audio, returning voice only: {e}")
            return self._voice_only(voice_buffer, scenario, preset, str(e))
        except Exception as e:
            state = self._transition(state, MixState.SKIPPING)
            self._transition(state, MixState.DONE)
            logger.warning(
                f"Unexpected error while mixing, returning voice only: {e}",
                exc_info=True,
            )
            return self._voice_only(voice_buffer, scenario, preset, f"unexpected error: {e}")

        self._transition(state, MixState.DONE)
        logger.info(
            f"Audio mixed with {preset.value} binaural "
            f"({len(voice_buffer)} -> {len(mixed)} bytes)"
        )
        return MixResult(
            buffer=mixed,
            format=OUTPUT_FORMAT,
            has_binaural=True,
            scenario=scenario,
            preset=preset,
        )

    async def _render(
        self,
        voice_buffer: bytes,
        scenario: Scenario,
        preset: BinauralPreset,
    ) -> bytes:
        """Probe, plan and render inside a private temporary directory."""
        if not voice_buffer:
            raise MixFailed("voice buffer is empty")

        mix_config = get_mix_config(scenario)
        binaural_path = resolve_binaural_path(preset, self.config.assets_root).resolve()
        call_id = uuid.uuid4().hex[:12]

        with tempfile.TemporaryDirectory(
            prefix=f"mindframe-mix-{call_id}-",
            dir=self.config.temp_dir,
        ) as work_dir:
            voice_path = Path(work_dir) / f"voice_{call_id}.mp3"
            output_path = Path(work_dir) / f"mixed_{call_id}.mp3"
            voice_path.write_bytes(voice_buffer)

            probe = await self.tool.probe_duration(voice_path)
            if not probe.succeeded:
                raise MixFailed(f"duration probe failed: {probe.error}")

            plan = plan_mix(
                probe.duration_s,
                mix_config,
                pad_before=self.config.pad_before_s,
                pad_after=self.config.pad_after_s,
            )
            logger.debug(
                f"Mix plan for {scenario.value}: voice={plan.voice_duration:.2f}s "
                f"total={plan.total_duration:.2f}s fade_out_start={plan.fade_out_start:.2f}s"
            )

            spec = RenderSpec(
                voice_path=voice_path,
                binaural_path=binaural_path,
                output_path=output_path,
                plan=plan,
                mix_config=mix_config,
                makeup_gain=self.config.makeup_gain,
                mp3_quality=self.config.mp3_quality,
                timeout_s=self.config.timeout_s,
            )
            render = await self.tool.render_mix(spec)
            if not render.succeeded:
                raise MixFailed(f"render failed: {render.error}")

            return Path(render.output_path).read_bytes()

    @staticmethod
    def _transition(current: MixState, new: MixState) -> MixState:
        logger.debug(f"Mix state: {current.value} -> {new.value}")
        return new

    @staticmethod
    def _voice_only(
        voice_buffer: bytes,
        scenario: Optional[Scenario],
        preset: Optional[BinauralPreset],
        reason: Optional[str],
    ) -> MixResult:
        return MixResult(
            buffer=voice_buffer,
            format=OUTPUT_FORMAT,
            has_binaural=False,
            scenario=scenario,
            preset=preset,
            skip_reason=reason,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

async def mix_audio_with_binaural(
    voice_buffer: bytes,
    scenario: Union[Scenario, str],
    binaural_enabled: bool = True,
    config: Optional[MixerConfig] = None,
) -> MixResult:
    """One-off mix with a freshly built mixer.

    Args:
        voice_buffer: Encoded voice audio
        scenario: Scenario name or enum
        binaural_enabled: If False, return the voice untouched
        config: Mixer configuration (defaults if None)

    Returns:
        MixResult
    """
    mixer = BinauralMixer(config)
    return await mixer.mix(voice_buffer, scenario, binaural_enabled)


def get_scenario_binaural_preset(scenario: Union[Scenario, str]) -> BinauralPreset:
    """Get the binaural preset used for a scenario."""
    return get_binaural_preset(scenario)


__all__ = [
    "BinauralMixer",
    "MixFailed",
    "mix_audio_with_binaural",
    "get_scenario_binaural_preset",
    "check_ffmpeg_available",
]
