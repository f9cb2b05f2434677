"""MindFrame audio pipeline.

Turns a synthesized affirmation voice track into the final render, mixed
with a scenario-specific binaural-beat background when possible.

Usage:
    from mindframe.audio import BinauralMixer, MixerConfig

    mixer = BinauralMixer(MixerConfig(assets_root="/srv/mindframe"))
    result = await mixer.mix(voice_bytes, "evening")
    upload(result.buffer, has_binaural=result.has_binaural)
"""

from ..core.config import MixerConfig

# Data models
from .models import (
    MixConfiguration,
    MixPlan,
    MixPlanError,
    MixResult,
    ProbeResult,
    RenderResult,
    RenderSpec,
)

# Preset catalog and scenario tables
from .binaural import (
    BINAURAL_ASSET_PATHS,
    BINAURAL_PRESETS,
    SCENARIO_BINAURAL_MAP,
    SCENARIO_MIX_CONFIG,
    BinauralPresetInfo,
    describe_scenario,
    get_binaural_asset_path,
    get_binaural_info,
    get_binaural_preset,
    get_mix_config,
    resolve_binaural_path,
)

# Planning and checks
from .planner import plan_mix
from .availability import binaural_asset_available, check_mixing_available

# Media tools
from .tools import (
    FFmpegTool,
    MediaTool,
    build_filter_graph,
    build_mix_command,
    check_ffmpeg_available,
    create_media_tool,
)

# Orchestration
from .mixer import (
    BinauralMixer,
    MixFailed,
    get_scenario_binaural_preset,
    mix_audio_with_binaural,
)

# TTS
from .elevenlabs_client import (
    ElevenLabsAPIError,
    ElevenLabsClient,
    ElevenLabsModel,
    SynthesisResult,
    VoiceSettings,
)

__all__ = [
    "MixerConfig",
    "MixConfiguration",
    "MixPlan",
    "MixPlanError",
    "MixResult",
    "ProbeResult",
    "RenderResult",
    "RenderSpec",
    "BINAURAL_ASSET_PATHS",
    "BINAURAL_PRESETS",
    "SCENARIO_BINAURAL_MAP",
    "SCENARIO_MIX_CONFIG",
    "BinauralPresetInfo",
    "describe_scenario",
    "get_binaural_asset_path",
    "get_binaural_info",
    "get_binaural_preset",
    "get_mix_config",
    "resolve_binaural_path",
    "plan_mix",
    "binaural_asset_available",
    "check_mixing_available",
    "FFmpegTool",
    "MediaTool",
    "build_filter_graph",
    "build_mix_command",
    "check_ffmpeg_available",
    "create_media_tool",
    "BinauralMixer",
    "MixFailed",
    "get_scenario_binaural_preset",
    "mix_audio_with_binaural",
    "ElevenLabsAPIError",
    "ElevenLabsClient",
    "ElevenLabsModel",
    "SynthesisResult",
    "VoiceSettings",
]
