"""Mix planning: timing arithmetic for one mix."""

import math

from .models import MixConfiguration, MixPlan, MixPlanError

PAD_BEFORE_S = 2.0
PAD_AFTER_S = 2.0


def plan_mix(
    voice_duration: float,
    mix_config: MixConfiguration,
    pad_before: float = PAD_BEFORE_S,
    pad_after: float = PAD_AFTER_S,
) -> MixPlan:
    """Derive the mix timing from the measured voice duration.

    The binaural bed runs ``pad_before`` seconds ahead of the voice and
    ``pad_after`` seconds past its end. A fade-out longer than the whole
    mix starts at 0 instead of a negative offset.

    Args:
        voice_duration: Measured voice length in seconds (> 0)
        mix_config: Scenario mixing constants
        pad_before: Silence ahead of the voice in seconds
        pad_after: Bed tail after the voice in seconds

    Returns:
        MixPlan for this call

    Raises:
        MixPlanError: If the duration or padding is degenerate
    """
    if not isinstance(voice_duration, (int, float)) or not math.isfinite(voice_duration):
        raise MixPlanError(f"Voice duration must be a finite number, got {voice_duration!r}")
    if voice_duration <= 0:
        raise MixPlanError(f"Voice duration must be positive, got {voice_duration}")
    if pad_before < 0 or pad_after < 0:
        raise MixPlanError(f"Padding must be non-negative, got {pad_before}/{pad_after}")

    total = voice_duration + pad_before + pad_after
    fade_out_start = max(0.0, total - mix_config.fade_out_duration)

    return MixPlan(
        voice_duration=float(voice_duration),
        pad_before=float(pad_before),
        pad_after=float(pad_after),
        total_duration=float(total),
        fade_in_duration=float(mix_config.fade_in_duration),
        fade_out_duration=float(mix_config.fade_out_duration),
        fade_out_start=float(fade_out_start),
    )
