#!/usr/bin/env python3
"""Generate the demo affirmation samples shown on the landing page.

Synthesizes each sample with ElevenLabs, then mixes it with the
scenario's binaural track. A sample whose mix fails is written voice
only, exactly as the app would serve it.

Usage:
    python scripts/generate_samples.py [--out public/audio/samples] [--dry-run]

Environment:
    ELEVENLABS_API_KEY          ElevenLabs API key (dry-run if missing)
    ELEVENLABS_VOICE_MALE_EN    Voice for morning samples
    ELEVENLABS_VOICE_FEMALE_EN  Voice for evening samples
    FFMPEG_PATH                 Directory with ffmpeg/ffprobe (optional)
"""

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

import aiohttp
from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mindframe.audio import BinauralMixer, ElevenLabsAPIError, ElevenLabsClient  # noqa: E402
from mindframe.core import MixerConfig, Scenario  # noqa: E402
from mindframe.utils import setup_logger  # noqa: E402

logger = logging.getLogger("mindframe.samples")


@dataclass
class SampleConfig:
    """A demo sample to render."""
    name: str
    scenario: Scenario
    voice_env: str
    default_voice_id: str
    text: str


# Affirmations are first person: the listener repeats them
SAMPLES = [
    SampleConfig(
        name="morning_en",
        scenario=Scenario.MORNING,
        voice_env="ELEVENLABS_VOICE_MALE_EN",
        default_voice_id="RMSJCUQZ5aP84TBCul7v",
        text=(
            "Good morning! [short pause] A new day! New opportunities!\n[pause]\n"
            "I feel powerful energy rising within me!\n[short pause]\n"
            "I am full of strength! Determination! Confidence!\n[pause]\n"
            "Today I will take a powerful step towards my goals!\n[short pause]\n"
            "I act now! I am capable of greatness!"
        ),
    ),
    SampleConfig(
        name="evening_en",
        scenario=Scenario.EVENING,
        voice_env="ELEVENLABS_VOICE_FEMALE_EN",
        default_voice_id="VWgyT3VwwgjcSDAT2wEa",
        text=(
            "Evening has come. [pause] I release all the tension of the day.\n[long pause]\n"
            "My breathing becomes deeper and calmer.\n[pause]\n"
            "Each exhale carries away fatigue. [short pause] I deserve this rest.\n[pause]\n"
            "I allow myself to relax completely."
        ),
    ),
]


async def generate_sample(
    sample: SampleConfig,
    client: ElevenLabsClient,
    mixer: BinauralMixer,
    out_dir: Path,
) -> bool:
    """Synthesize, mix and write one sample."""
    voice_id = os.getenv(sample.voice_env, sample.default_voice_id)
    logger.info(f"Generating {sample.name} (voice={voice_id})")

    try:
        synthesis = await client.text_to_speech(
            text=sample.text,
            voice_id=voice_id,
            scenario=sample.scenario,
        )
    except (ElevenLabsAPIError, aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"Failed to synthesize {sample.name}: {e}")
        return False

    result = await mixer.mix(synthesis.audio_data, sample.scenario)

    out_path = out_dir / f"{sample.name}.{result.format}"
    out_path.write_bytes(result.buffer)

    if result.has_binaural:
        logger.info(f"✓ {out_path} (voice + {result.preset.value})")
    else:
        logger.warning(f"⚠ {out_path} (voice only: {result.skip_reason})")
    return True


async def run(out_dir: Path, dry_run: bool) -> int:
    config = MixerConfig.from_env()
    mixer = BinauralMixer(config)
    out_dir.mkdir(parents=True, exist_ok=True)

    async with ElevenLabsClient(api_key=config.elevenlabs_api_key, dry_run=dry_run) as client:
        results = [
            await generate_sample(sample, client, mixer, out_dir)
            for sample in SAMPLES
        ]

    return 0 if all(results) else 1


def main() -> int:
    load_dotenv()

    parser = argparse.ArgumentParser(description="Generate demo affirmation samples")
    parser.add_argument("--out", type=Path, default=Path("public/audio/samples"))
    parser.add_argument("--dry-run", action="store_true", help="Skip ElevenLabs API calls")
    parser.add_argument("-v", "--verbose", action="store_true")
    args = parser.parse_args()

    setup_logger(verbose=args.verbose, save_to_file=False)
    return asyncio.run(run(args.out, args.dry_run))


if __name__ == "__main__":
    sys.exit(main())
