"""Tests for mix planning arithmetic."""

import math

import pytest

from mindframe.audio.models import MixConfiguration, MixPlanError
from mindframe.audio.planner import plan_mix


def make_config(fade_in=2.0, fade_out=3.0):
    return MixConfiguration(
        voice_volume=0.85,
        binaural_volume=0.45,
        fade_in_duration=fade_in,
        fade_out_duration=fade_out,
    )


class TestPlanMix:
    """Tests for plan_mix."""

    def test_ten_second_voice(self):
        """Padding adds to the voice and the fade ends with the mix."""
        plan = plan_mix(10.0, make_config(fade_out=3.0), pad_before=2.0, pad_after=2.0)

        assert plan.total_duration == 14.0
        assert plan.fade_out_start == 11.0
        assert plan.pad_before == 2.0
        assert plan.pad_after == 2.0
        assert plan.voice_duration == 10.0

    def test_default_padding_is_two_seconds(self):
        plan = plan_mix(12.0, make_config())

        assert plan.pad_before == 2.0
        assert plan.pad_after == 2.0
        assert plan.total_duration == 16.0

    def test_fade_out_longer_than_mix_is_clamped(self):
        """A fade-out longer than the whole mix starts at zero."""
        plan = plan_mix(0.5, make_config(fade_out=5.0), pad_before=2.0, pad_after=2.0)

        assert plan.total_duration == 4.5
        assert plan.fade_out_start == 0.0

    def test_fade_out_equal_to_total(self):
        plan = plan_mix(1.0, make_config(fade_out=5.0))

        assert plan.total_duration == 5.0
        assert plan.fade_out_start == 0.0

    def test_fades_copied_from_config(self):
        plan = plan_mix(8.0, make_config(fade_in=3.0, fade_out=5.0))

        assert plan.fade_in_duration == 3.0
        assert plan.fade_out_duration == 5.0
        assert plan.fade_out_start == 7.0

    def test_millisecond_helpers(self):
        plan = plan_mix(10.25, make_config())

        assert plan.pad_before_ms == 2000
        assert plan.total_duration_ms == 14250

    def test_custom_padding(self):
        plan = plan_mix(10.0, make_config(fade_out=3.0), pad_before=0.0, pad_after=1.0)

        assert plan.total_duration == 11.0
        assert plan.fade_out_start == 8.0

    @pytest.mark.parametrize("duration", [0.0, -1.0, math.nan, math.inf])
    def test_degenerate_duration_rejected(self, duration):
        with pytest.raises(MixPlanError):
            plan_mix(duration, make_config())

    def test_negative_padding_rejected(self):
        with pytest.raises(MixPlanError):
            plan_mix(10.0, make_config(), pad_before=-1.0)

    def test_plan_error_is_value_error(self):
        with pytest.raises(ValueError):
            plan_mix(0.0, make_config())
