"""Core configuration and enumerations."""

from .config import MixerConfig
from .enums import BinauralPreset, MixState, Scenario

__all__ = [
    "MixerConfig",
    "BinauralPreset",
    "MixState",
    "Scenario",
]
