#!/usr/bin/env python3
"""Generate the bundled binaural-beat tracks for MindFrame.

Each preset is a stereo sine pair: the left ear plays the carrier, the
right ear the carrier plus the beat frequency. The mixer loops these
files, so every track is a whole number of seconds at integer
frequencies, which makes the loop point seamless.

Dependencies:
    numpy

Usage:
    python scripts/generate_binaural_assets.py [--root .] [--duration 30]

Output:
    public/audio/binaural/gamma_40hz.wav
    public/audio/binaural/beta_20hz.wav
    public/audio/binaural/theta_6hz.wav
    public/audio/binaural/delta_3hz.wav
"""

import argparse
import os
import sys
import wave
from pathlib import Path
from typing import Tuple

import numpy as np

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mindframe.audio.binaural import BINAURAL_ASSET_PATHS, BINAURAL_PRESETS  # noqa: E402

# Audio parameters
SAMPLE_RATE = 44100
AMPLITUDE = 0.5


def generate_binaural(
    base_hz: float,
    beat_hz: float,
    duration_sec: int,
    sample_rate: int = SAMPLE_RATE,
    amplitude: float = AMPLITUDE,
) -> np.ndarray:
    """Generate a stereo binaural beat as an (n, 2) float array in [-1, 1]."""
    t = np.arange(int(duration_sec * sample_rate)) / sample_rate
    left = np.sin(2 * np.pi * base_hz * t)
    right = np.sin(2 * np.pi * (base_hz + beat_hz) * t)
    return amplitude * np.stack([left, right], axis=1)


def audio_to_wav(audio: np.ndarray, filepath: str, sample_rate: int = SAMPLE_RATE) -> None:
    """Save a stereo float array as a 16-bit PCM WAV file."""
    audio_int = (np.clip(audio, -1.0, 1.0) * 32767).astype(np.int16)

    with wave.open(filepath, "wb") as wav_file:
        wav_file.setnchannels(2)
        wav_file.setsampwidth(2)  # 16-bit = 2 bytes
        wav_file.setframerate(sample_rate)
        wav_file.writeframes(audio_int.tobytes())


def generate_and_save(preset, root: str, duration_sec: int) -> Tuple[bool, str]:
    """Generate one preset track.

    Returns:
        Tuple of (success, message)
    """
    info = BINAURAL_PRESETS[preset]
    rel_path = BINAURAL_ASSET_PATHS[preset]
    out_path = os.path.join(root, rel_path)

    # alpha shares the beta file
    expected_name = f"{preset.value}_{int(info.beat_frequency)}hz.wav"
    if os.path.basename(rel_path) != expected_name:
        return True, f"Skipped {preset.value} (uses {os.path.basename(rel_path)})"

    try:
        os.makedirs(os.path.dirname(out_path), exist_ok=True)
        audio = generate_binaural(info.base_frequency, info.beat_frequency, duration_sec)
        audio_to_wav(audio, out_path)
        return True, f"Created {rel_path} ({info.description})"
    except (OSError, ValueError) as e:
        return False, f"Failed to generate {rel_path}: {e}"


def main() -> int:
    parser = argparse.ArgumentParser(description="Generate binaural-beat assets")
    parser.add_argument("--root", default=".", help="Deployment root")
    parser.add_argument("--duration", type=int, default=30, help="Track length in whole seconds")
    args = parser.parse_args()

    if args.duration <= 0:
        parser.error("--duration must be positive")

    print("=" * 60)
    print("MindFrame Binaural Asset Generator")
    print("=" * 60)

    failures = 0
    for preset in BINAURAL_PRESETS:
        success, msg = generate_and_save(preset, args.root, args.duration)
        failures += 0 if success else 1
        print(f"  {'✓' if success else '✗'} {msg}")

    print("=" * 60)
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
