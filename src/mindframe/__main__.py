"""Command-line entry point for the MindFrame mixing pipeline.

Commands:
    check  Report whether ffmpeg and the binaural assets are in place
    info   Show the preset and mix settings for a scenario
    mix    Mix a voice file with its scenario's binaural track
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .core.config import MixerConfig
from .core.enums import Scenario
from .audio.availability import binaural_asset_available
from .audio.binaural import describe_scenario, get_binaural_preset, resolve_binaural_path
from .audio.mixer import BinauralMixer
from .audio.tools import check_ffmpeg_available, create_media_tool
from .utils.logger import setup_logger

logger = logging.getLogger("mindframe.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mindframe",
        description="Mix affirmation voice tracks with binaural beats",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    parser.add_argument("--assets-root", help="Deployment root holding public/audio/binaural")
    parser.add_argument(
        "--backend",
        choices=["ffmpeg", "pydub"],
        help="Media backend (default from MINDFRAME_MIXER_BACKEND or ffmpeg)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Check ffmpeg and binaural assets")
    check.add_argument(
        "--scenario",
        choices=[s.value for s in Scenario],
        help="Only check this scenario",
    )

    info = sub.add_parser("info", help="Show preset and mix settings")
    info.add_argument("scenario", choices=[s.value for s in Scenario])

    mix = sub.add_parser("mix", help="Mix a voice file with binaural beats")
    mix.add_argument("voice", type=Path, help="Voice audio file (MP3)")
    mix.add_argument(
        "--scenario",
        choices=[s.value for s in Scenario],
        default=Scenario.MORNING.value,
    )
    mix.add_argument("-o", "--output", type=Path, required=True, help="Output MP3 path")
    mix.add_argument("--no-binaural", action="store_true", help="Copy the voice unmixed")

    return parser


def _config_from_args(args: argparse.Namespace) -> MixerConfig:
    overrides = {}
    if args.assets_root:
        overrides["assets_root"] = args.assets_root
    if args.backend:
        overrides["backend"] = args.backend
    if args.verbose:
        overrides["verbose"] = True
    return MixerConfig.from_env(**overrides)


def cmd_check(config: MixerConfig, scenario: Optional[str] = None) -> int:
    """Print tool and asset status; non-zero if mixing cannot happen."""
    tool = create_media_tool(config)
    tool_ok = tool.is_available() and asyncio.run(check_ffmpeg_available(config))
    print(f"{'✓' if tool_ok else '✗'} {tool.describe()}")

    scenarios = [Scenario(scenario)] if scenario else list(Scenario)
    assets_ok = True
    for s in scenarios:
        path = resolve_binaural_path(get_binaural_preset(s), config.assets_root)
        present = binaural_asset_available(s, config.assets_root)
        assets_ok = assets_ok and present
        print(f"{'✓' if present else '✗'} {s.value:<8} {path}")

    return 0 if tool_ok and assets_ok else 1


def cmd_info(scenario: str) -> int:
    print(json.dumps(describe_scenario(scenario), indent=2))
    return 0


def cmd_mix(config: MixerConfig, voice: Path, scenario: str, output: Path, enabled: bool) -> int:
    try:
        voice_buffer = voice.read_bytes()
    except OSError as e:
        logger.error(f"Cannot read voice file {voice}: {e}")
        return 2

    mixer = BinauralMixer(config)
    result = asyncio.run(mixer.mix(voice_buffer, scenario, binaural_enabled=enabled))

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_bytes(result.buffer)

    if result.has_binaural:
        logger.info(f"Mixed with {result.preset.value} binaural: {output}")
    else:
        logger.info(f"Voice only ({result.skip_reason}): {output}")
    print(json.dumps(result.to_dict()))
    return 0


def main(argv=None) -> int:
    """Main entry point."""
    load_dotenv()

    args = _build_parser().parse_args(argv)
    try:
        config = _config_from_args(args)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logger(verbose=config.verbose, save_to_file=False)

    if args.command == "check":
        return cmd_check(config, args.scenario)
    if args.command == "info":
        return cmd_info(args.scenario)
    return cmd_mix(config, args.voice, args.scenario, args.output, not args.no_binaural)


if __name__ == "__main__":
    sys.exit(main())
