"""Pytest configuration and fixtures."""

import asyncio
from pathlib import Path
from typing import List, Optional

import pytest

from mindframe.core.config import MixerConfig
from mindframe.audio.binaural import BINAURAL_ASSET_PATHS
from mindframe.audio.models import ProbeResult, RenderResult, RenderSpec


class FakeMediaTool:
    """In-memory media tool.

    ``render_mix`` writes ``MIXED|`` followed by the voice file's bytes to
    the requested output path, so each result can be traced back to its
    input.
    """

    def __init__(
        self,
        available: bool = True,
        duration: Optional[float] = 12.0,
        probe_error: Optional[str] = None,
        render_error: Optional[str] = None,
        raise_on_render: Optional[Exception] = None,
        delay_s: float = 0.0,
    ):
        self.available = available
        self.duration = duration
        self.probe_error = probe_error
        self.render_error = render_error
        self.raise_on_render = raise_on_render
        self.delay_s = delay_s
        self.probed: List[Path] = []
        self.rendered: List[RenderSpec] = []
        self.availability_checks = 0

    def describe(self) -> str:
        return "fake"

    def is_available(self) -> bool:
        self.availability_checks += 1
        return self.available

    async def probe_duration(self, path: Path) -> ProbeResult:
        self.probed.append(Path(path))
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.probe_error:
            return ProbeResult.failed(self.probe_error)
        return ProbeResult.ok(self.duration)

    async def render_mix(self, spec: RenderSpec) -> RenderResult:
        self.rendered.append(spec)
        if self.delay_s:
            await asyncio.sleep(self.delay_s)
        if self.raise_on_render is not None:
            raise self.raise_on_render
        if self.render_error:
            return RenderResult.failed(self.render_error)
        spec.output_path.write_bytes(b"MIXED|" + spec.voice_path.read_bytes())
        return RenderResult.ok(spec.output_path)

    @property
    def called(self) -> bool:
        return bool(self.availability_checks or self.probed or self.rendered)


class FakeProcess:
    """Stand-in for asyncio.subprocess.Process."""

    def __init__(self, returncode=0, stdout=b"", stderr=b"", hang=False, on_run=None):
        self.returncode = returncode
        self._stdout = stdout
        self._stderr = stderr
        self._hang = hang
        self._on_run = on_run
        self.killed = False

    async def communicate(self):
        if self._hang:
            await asyncio.sleep(10)
        if self._on_run:
            self._on_run()
        return self._stdout, self._stderr

    def kill(self):
        self.killed = True
        self.returncode = -9

    async def wait(self):
        return self.returncode


@pytest.fixture
def assets_root(tmp_path):
    """Deployment root with every binaural asset present."""
    root = tmp_path / "deploy"
    for rel_path in set(BINAURAL_ASSET_PATHS.values()):
        asset = root / rel_path
        asset.parent.mkdir(parents=True, exist_ok=True)
        asset.write_bytes(b"RIFF-binaural")
    return root


@pytest.fixture
def empty_assets_root(tmp_path):
    """Deployment root without any binaural assets."""
    root = tmp_path / "empty-deploy"
    root.mkdir()
    return root


@pytest.fixture
def work_dir(tmp_path):
    """Temp directory the mixer is confined to."""
    path = tmp_path / "work"
    path.mkdir()
    return path


@pytest.fixture
def mixer_config(assets_root, work_dir):
    """Create a test mixer configuration."""
    return MixerConfig(
        assets_root=str(assets_root),
        temp_dir=str(work_dir),
        timeout_s=5.0,
    )


@pytest.fixture
def fake_tool():
    """A media tool that always succeeds."""
    return FakeMediaTool()


@pytest.fixture
def voice_buffer():
    """Bytes standing in for TTS output."""
    return b"ID3\x04voice-take-1" + bytes(range(256))


@pytest.fixture
def fake_exec(monkeypatch):
    """Patch create_subprocess_exec; set ``.process`` or ``.error`` per test."""

    class Exec:
        process = FakeProcess()
        error = None
        calls = []

        async def __call__(self, *cmd, **kwargs):
            self.calls.append(list(cmd))
            if self.error is not None:
                raise self.error
            return self.process

    fake = Exec()
    fake.calls = []
    monkeypatch.setattr(asyncio, "create_subprocess_exec", fake)
    return fake
