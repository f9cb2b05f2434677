"""Enumerations for scenarios, binaural presets and mix states."""

from enum import Enum


class Scenario(str, Enum):
    """Affirmation scenario selected by the user."""

    MORNING = "morning"
    EVENING = "evening"
    FOCUS = "focus"
    SPORT = "sport"
    SOS = "sos"


class BinauralPreset(str, Enum):
    """Brainwave band of a prerecorded binaural-beat track."""

    GAMMA = "gamma"  # 30-100 Hz, peak awareness
    BETA = "beta"    # 13-30 Hz, active alertness
    ALPHA = "alpha"  # 8-12 Hz, relaxed focus
    THETA = "theta"  # 4-8 Hz, deep relaxation
    DELTA = "delta"  # 0.1-4 Hz, deep sleep


class MixState(str, Enum):
    """States of the mixing fallback policy."""

    START = "start"
    CHECKING_AVAILABILITY = "checking_availability"
    MIXING = "mixing"
    SKIPPING = "skipping"
    DONE = "done"
