"""Binaural preset catalog and scenario lookup tables.

Defines the prerecorded binaural tracks bundled with the app and the
per-scenario mixing constants.

This module provides:
- Preset metadata (carrier and beat frequencies, descriptions)
- Asset paths for each preset, relative to the deployment root
- Scenario to preset and scenario to mix configuration lookups

Usage:
    from mindframe.audio.binaural import (
        get_binaural_preset,
        get_mix_config,
        resolve_binaural_path,
    )

    preset = get_binaural_preset("evening")        # BinauralPreset.THETA
    config = get_mix_config("evening")             # MixConfiguration(...)
    path = resolve_binaural_path(preset, "/srv/mindframe")

Note:
    Only ``morning`` and ``evening`` have their own entries. Every other
    scenario resolves through the ``morning`` entry.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Mapping, Union

from ..core.enums import BinauralPreset, Scenario
from .models import MixConfiguration

logger = logging.getLogger(__name__)

DEFAULT_SCENARIO = Scenario.MORNING


# =============================================================================
# PRESET CATALOG
# =============================================================================

@dataclass(frozen=True)
class BinauralPresetInfo:
    """Description of a binaural preset.

    Attributes:
        preset: Preset identifier
        base_frequency: Carrier frequency in Hz (left ear)
        beat_frequency: Beat frequency in Hz (right ear = base + beat)
        description: Short label shown to users
        effect: Intended effect on the listener
    """
    preset: BinauralPreset
    base_frequency: float
    beat_frequency: float
    description: str
    effect: str

    @property
    def right_frequency(self) -> float:
        return self.base_frequency + self.beat_frequency


BINAURAL_PRESETS: Mapping[BinauralPreset, BinauralPresetInfo] = MappingProxyType({
    BinauralPreset.GAMMA: BinauralPresetInfo(
        preset=BinauralPreset.GAMMA,
        base_frequency=200.0,
        beat_frequency=40.0,
        description="Gamma 40Hz - Peak cognitive performance",
        effect="Enhanced focus, memory, learning",
    ),
    BinauralPreset.BETA: BinauralPresetInfo(
        preset=BinauralPreset.BETA,
        base_frequency=200.0,
        beat_frequency=20.0,
        description="Beta 20Hz - Active alertness",
        effect="Concentration, analytical thinking",
    ),
    BinauralPreset.ALPHA: BinauralPresetInfo(
        preset=BinauralPreset.ALPHA,
        base_frequency=200.0,
        beat_frequency=10.0,
        description="Alpha 10Hz - Relaxed focus",
        effect="Flow state, creativity, stress reduction",
    ),
    BinauralPreset.THETA: BinauralPresetInfo(
        preset=BinauralPreset.THETA,
        base_frequency=180.0,
        beat_frequency=6.0,
        description="Theta 6Hz - Deep relaxation",
        effect="Meditation, intuition, sleep preparation",
    ),
    BinauralPreset.DELTA: BinauralPresetInfo(
        preset=BinauralPreset.DELTA,
        base_frequency=180.0,
        beat_frequency=3.0,
        description="Delta 3Hz - Deep sleep",
        effect="Deep sleep, physical recovery",
    ),
})

# Relative to the deployment root
BINAURAL_ASSET_PATHS: Mapping[BinauralPreset, str] = MappingProxyType({
    BinauralPreset.GAMMA: "public/audio/binaural/gamma_40hz.wav",
    BinauralPreset.BETA: "public/audio/binaural/beta_20hz.wav",
    # No dedicated alpha track yet; beta is the closest frequency
    BinauralPreset.ALPHA: "public/audio/binaural/beta_20hz.wav",
    BinauralPreset.THETA: "public/audio/binaural/theta_6hz.wav",
    BinauralPreset.DELTA: "public/audio/binaural/delta_3hz.wav",
})


# =============================================================================
# SCENARIO TABLES
# =============================================================================

SCENARIO_BINAURAL_MAP: Mapping[Scenario, BinauralPreset] = MappingProxyType({
    Scenario.MORNING: BinauralPreset.GAMMA,  # Activation
    Scenario.EVENING: BinauralPreset.THETA,  # Deactivation
})

SCENARIO_MIX_CONFIG: Mapping[Scenario, MixConfiguration] = MappingProxyType({
    Scenario.MORNING: MixConfiguration(
        voice_volume=0.85,
        binaural_volume=0.45,
        fade_in_duration=2.0,
        fade_out_duration=3.0,
    ),
    Scenario.EVENING: MixConfiguration(
        voice_volume=0.75,
        binaural_volume=0.55,  # Higher for the relaxation effect
        fade_in_duration=3.0,
        fade_out_duration=5.0,
    ),
})


# =============================================================================
# LOOKUPS
# =============================================================================

def to_scenario(scenario: Union[Scenario, str]) -> Scenario:
    """Coerce a scenario name to ``Scenario``.

    Unknown names map to the default scenario rather than raising.
    """
    if isinstance(scenario, Scenario):
        return scenario
    try:
        return Scenario(str(scenario).lower())
    except ValueError:
        logger.warning(f"Unknown scenario {scenario!r}, using {DEFAULT_SCENARIO.value}")
        return DEFAULT_SCENARIO


def get_binaural_preset(scenario: Union[Scenario, str]) -> BinauralPreset:
    """Get the binaural preset for a scenario."""
    scenario = to_scenario(scenario)
    preset = SCENARIO_BINAURAL_MAP.get(scenario)
    if preset is None:
        logger.debug(f"No binaural preset for {scenario.value}, using {DEFAULT_SCENARIO.value}")
        preset = SCENARIO_BINAURAL_MAP[DEFAULT_SCENARIO]
    return preset


def get_mix_config(scenario: Union[Scenario, str]) -> MixConfiguration:
    """Get the mix configuration for a scenario."""
    scenario = to_scenario(scenario)
    config = SCENARIO_MIX_CONFIG.get(scenario)
    if config is None:
        logger.debug(f"No mix config for {scenario.value}, using {DEFAULT_SCENARIO.value}")
        config = SCENARIO_MIX_CONFIG[DEFAULT_SCENARIO]
    return config


def get_binaural_info(scenario: Union[Scenario, str]) -> BinauralPresetInfo:
    """Get preset metadata for a scenario."""
    return BINAURAL_PRESETS[get_binaural_preset(scenario)]


def get_binaural_asset_path(preset: BinauralPreset) -> str:
    """Asset path of a preset relative to the deployment root."""
    return BINAURAL_ASSET_PATHS[preset]


def resolve_binaural_path(
    preset: BinauralPreset,
    assets_root: Union[str, Path] = ".",
) -> Path:
    """Absolute-or-root-relative filesystem path of a preset's track."""
    return Path(assets_root) / BINAURAL_ASSET_PATHS[preset]


def describe_scenario(scenario: Union[Scenario, str]) -> Dict[str, object]:
    """Preset and mix settings for a scenario, as a plain dict."""
    scenario = to_scenario(scenario)
    info = get_binaural_info(scenario)
    config = get_mix_config(scenario)
    return {
        "scenario": scenario.value,
        "preset": info.preset.value,
        "description": info.description,
        "effect": info.effect,
        "base_frequency": info.base_frequency,
        "beat_frequency": info.beat_frequency,
        "asset_path": get_binaural_asset_path(info.preset),
        "voice_volume": config.voice_volume,
        "binaural_volume": config.binaural_volume,
        "fade_in_duration": config.fade_in_duration,
        "fade_out_duration": config.fade_out_duration,
        "uses_default": scenario not in SCENARIO_MIX_CONFIG,
    }
