"""Media tool interface and the ffmpeg implementation.

The mixer never talks to ffmpeg directly; it goes through a ``MediaTool``
so the backend can be swapped (ffmpeg child processes in production,
pydub in process, fakes in tests).

Two operations are needed:
- Duration probing of an encoded voice file (ffprobe)
- Rendering the voice + looping binaural mix to MP3 (ffmpeg filter graph)

Both are single-attempt, bounded by a timeout, and report failure through
``ProbeResult``/``RenderResult`` instead of raising.

Usage:
    from mindframe.audio.tools import create_media_tool

    tool = create_media_tool(config)
    if tool.is_available():
        probe = await tool.probe_duration(voice_path)
"""

import asyncio
import logging
import math
import shutil
from pathlib import Path
from typing import List, Optional, Protocol, Sequence, Tuple

from ..core.config import MixerConfig
from .models import ProbeResult, RenderResult, RenderSpec

logger = logging.getLogger(__name__)


# ============================================================================
# Interface
# ============================================================================


class MediaTool(Protocol):
    """Protocol for the external audio tool.

    Implementations:
    - FFmpegTool: ffprobe/ffmpeg child processes
    - PydubTool: in-process rendering via pydub
    """

    def is_available(self) -> bool:
        """Check that the tool can be used at all (binaries present)."""
        ...

    def describe(self) -> str:
        """Short name used in log messages."""
        ...

    async def probe_duration(self, path: Path) -> ProbeResult:
        """Measure the playable duration of an audio file in seconds."""
        ...

    async def render_mix(self, spec: RenderSpec) -> RenderResult:
        """Render the mixed output described by ``spec``."""
        ...


class ProcessTimeout(Exception):
    """An external command exceeded its time bound."""


# ============================================================================
# Filter graph
# ============================================================================


def _num(value: float) -> str:
    """Format a number for an ffmpeg filter argument."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text or "0"


def build_filter_graph(spec: RenderSpec) -> str:
    """Build the ``-filter_complex`` graph for a mix.

    Input 0 is the voice, input 1 the (looped) binaural track.

    1. Voice: delayed by the lead-in padding, gained, then padded with
       silence and cut to exactly the total duration.
    2. Binaural: cut to the total duration, gained, faded in at the
       start and out at the end.
    3. Both summed with the voice governing the length, then makeup gain.
    """
    plan = spec.plan
    config = spec.mix_config
    total = _num(plan.total_duration)
    delay_ms = plan.pad_before_ms

    voice_chain = (
        f"[0:a]adelay={delay_ms}|{delay_ms},"
        f"volume={_num(config.voice_volume)},"
        f"apad,atrim=0:{total}[voice]"
    )

    binaural_filters = [
        f"atrim=0:{total}",
        f"volume={_num(config.binaural_volume)}",
    ]
    if plan.fade_in_duration > 0:
        binaural_filters.append(f"afade=t=in:st=0:d={_num(plan.fade_in_duration)}")
    if plan.fade_out_duration > 0:
        binaural_filters.append(
            f"afade=t=out:st={_num(plan.fade_out_start)}:d={_num(plan.fade_out_duration)}"
        )
    binaural_chain = "[1:a]" + ",".join(binaural_filters) + "[binaural]"

    mix_chain = (
        "[voice][binaural]amix=inputs=2:duration=first:dropout_transition=0,"
        f"volume={_num(spec.makeup_gain)}[out]"
    )

    return ";".join([voice_chain, binaural_chain, mix_chain])


def build_mix_command(ffmpeg: str, spec: RenderSpec) -> List[str]:
    """Full ffmpeg argv for rendering ``spec``."""
    return [
        ffmpeg,
        "-y",  # Overwrite output
        "-hide_banner",
        "-loglevel", "error",
        "-i", str(spec.voice_path),
        "-stream_loop", "-1",  # Loop binaural indefinitely, trimmed in the graph
        "-i", str(spec.binaural_path),
        "-filter_complex", build_filter_graph(spec),
        "-map", "[out]",
        "-t", _num(spec.plan.total_duration),
        "-vn",
        "-acodec", "libmp3lame",
        "-q:a", str(spec.mp3_quality),
        str(spec.output_path),
    ]


def build_probe_command(ffprobe: str, path: Path) -> List[str]:
    """ffprobe argv printing only the container duration."""
    return [
        ffprobe,
        "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        str(path),
    ]


def parse_duration(output: str) -> Optional[float]:
    """Parse ffprobe's duration output; None unless a positive finite number."""
    text = output.strip().splitlines()[0].strip() if output.strip() else ""
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


# ============================================================================
# Child processes
# ============================================================================


async def _reap(proc: asyncio.subprocess.Process) -> None:
    """Kill a child that may still be running and wait for it to exit."""
    try:
        proc.kill()
    except ProcessLookupError:
        pass  # Already exited
    await proc.wait()


async def run_command(cmd: Sequence[str], timeout_s: float) -> Tuple[int, str, str]:
    """Run a command, bounded by ``timeout_s``.

    The child is killed and reaped on every abnormal exit, including
    cancellation of the calling task.

    Returns:
        Tuple of (returncode, stdout, stderr)

    Raises:
        FileNotFoundError: If the executable does not exist
        ProcessTimeout: If the command runs past the timeout (it is killed)
    """
    proc = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
    )
    try:
        stdout, stderr = await asyncio.wait_for(proc.communicate(), timeout=timeout_s)
    except asyncio.TimeoutError:
        await _reap(proc)
        raise ProcessTimeout(f"{Path(cmd[0]).name} timed out after {timeout_s:g}s")
    except BaseException:
        await _reap(proc)
        raise

    return (
        proc.returncode,
        stdout.decode("utf-8", errors="replace"),
        stderr.decode("utf-8", errors="replace"),
    )


async def ffprobe_duration(ffprobe: str, path: Path, timeout_s: float) -> ProbeResult:
    """Measure a file's duration with ffprobe; failures come back as results."""
    cmd = build_probe_command(ffprobe, path)
    logger.debug(f"Probing duration: {' '.join(cmd)}")

    try:
        returncode, stdout, stderr = await run_command(cmd, timeout_s)
    except FileNotFoundError:
        return ProbeResult.failed(f"ffprobe not found: {ffprobe}")
    except ProcessTimeout as e:
        return ProbeResult.failed(str(e))
    except OSError as e:
        return ProbeResult.failed(f"ffprobe could not start: {e}")

    if returncode != 0:
        return ProbeResult.failed(
            f"ffprobe exited with {returncode}: {stderr.strip()[-500:]}"
        )

    duration = parse_duration(stdout)
    if duration is None:
        return ProbeResult.failed(f"Unusable ffprobe duration: {stdout.strip()!r}")

    return ProbeResult.ok(duration)


class FFmpegTool:
    """ffmpeg/ffprobe backed media tool."""

    def __init__(
        self,
        ffmpeg: str = "ffmpeg",
        ffprobe: str = "ffprobe",
        timeout_s: float = 60.0,
    ):
        self.ffmpeg = ffmpeg
        self.ffprobe = ffprobe
        self.timeout_s = timeout_s

    @classmethod
    def from_config(cls, config: MixerConfig) -> "FFmpegTool":
        return cls(
            ffmpeg=config.ffmpeg_command,
            ffprobe=config.ffprobe_command,
            timeout_s=config.timeout_s,
        )

    def describe(self) -> str:
        return f"ffmpeg ({self.ffmpeg})"

    def missing_binaries(self) -> List[str]:
        """Binaries that cannot be found."""
        return [b for b in (self.ffmpeg, self.ffprobe) if shutil.which(b) is None]

    def is_available(self) -> bool:
        return not self.missing_binaries()

    async def probe_duration(self, path: Path) -> ProbeResult:
        return await ffprobe_duration(self.ffprobe, path, self.timeout_s)

    async def render_mix(self, spec: RenderSpec) -> RenderResult:
        cmd = build_mix_command(self.ffmpeg, spec)
        logger.debug(f"Running ffmpeg: {' '.join(cmd)}")

        try:
            returncode, _, stderr = await run_command(cmd, spec.timeout_s)
        except FileNotFoundError:
            return RenderResult.failed(f"ffmpeg not found: {self.ffmpeg}")
        except ProcessTimeout as e:
            return RenderResult.failed(str(e))
        except OSError as e:
            return RenderResult.failed(f"ffmpeg could not start: {e}")

        if returncode != 0:
            return RenderResult.failed(
                f"ffmpeg exited with {returncode}: {stderr.strip()[-500:]}"
            )

        output = Path(spec.output_path)
        if not output.is_file() or output.stat().st_size == 0:
            return RenderResult.failed(f"ffmpeg produced no output at {output}")

        return RenderResult.ok(output)


# ============================================================================
# Factory
# ============================================================================


def create_media_tool(config: Optional[MixerConfig] = None) -> MediaTool:
    """Create the media tool selected by ``config.backend``."""
    config = config or MixerConfig()

    if config.backend == "pydub":
        from .pydub_tool import PydubTool

        return PydubTool.from_config(config)

    return FFmpegTool.from_config(config)


async def check_ffmpeg_available(config: Optional[MixerConfig] = None) -> bool:
    """Check that ffmpeg runs (``ffmpeg -version`` exits cleanly)."""
    config = config or MixerConfig()
    try:
        returncode, _, _ = await run_command(
            [config.ffmpeg_command, "-version"], timeout_s=config.timeout_s
        )
    except (OSError, ProcessTimeout):
        return False
    return returncode == 0
