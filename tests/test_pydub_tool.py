"""Tests for the pydub media tool (no real ffmpeg needed)."""

import asyncio
import stat

import pytest
from pydub import AudioSegment

from mindframe.core.config import MixerConfig
from mindframe.audio.pydub_tool import BINAURAL_INPUT, VOICE_INPUT, PydubTool
from mindframe.audio.tools import create_media_tool

from conftest import FakeProcess


def make_bin_dir(root, *names):
    """Directory holding stub executables, kept off PATH."""
    bin_dir = root / "ffmpeg-bin"
    bin_dir.mkdir()
    for name in names:
        exe = bin_dir / name
        exe.write_text("#!/bin/sh\nexit 0\n")
        exe.chmod(exe.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return bin_dir


@pytest.fixture
def empty_path(monkeypatch, tmp_path):
    """PATH that contains no ffmpeg or ffprobe."""
    path_dir = tmp_path / "empty-path"
    path_dir.mkdir()
    monkeypatch.setenv("PATH", str(path_dir))


@pytest.fixture(autouse=True)
def restore_converter():
    original = AudioSegment.converter
    yield
    AudioSegment.converter = original


class TestBinaryLookup:
    """Binaries are taken from ffmpeg_path, never from PATH."""

    def test_available_with_binaries_only_in_ffmpeg_path(self, tmp_path, empty_path):
        bin_dir = make_bin_dir(tmp_path, "ffmpeg", "ffprobe")
        config = MixerConfig(backend="pydub", ffmpeg_path=str(bin_dir))

        tool = create_media_tool(config)

        assert isinstance(tool, PydubTool)
        assert tool.ffmpeg == str(bin_dir / "ffmpeg")
        assert tool.ffprobe == str(bin_dir / "ffprobe")
        assert tool.is_available()

    def test_missing_ffprobe_makes_tool_unavailable(self, tmp_path, empty_path):
        bin_dir = make_bin_dir(tmp_path, "ffmpeg")
        tool = PydubTool.from_config(MixerConfig(backend="pydub", ffmpeg_path=str(bin_dir)))

        assert not tool.is_available()
        assert tool.missing_binaries() == [str(bin_dir / "ffprobe")]

    def test_converter_set_once_at_construction(self, tmp_path):
        bin_dir = make_bin_dir(tmp_path, "ffmpeg", "ffprobe")

        PydubTool.from_config(MixerConfig(backend="pydub", ffmpeg_path=str(bin_dir)))

        assert AudioSegment.converter == str(bin_dir / "ffmpeg")

    def test_probe_runs_configured_ffprobe(self, tmp_path, empty_path, fake_exec):
        bin_dir = make_bin_dir(tmp_path, "ffmpeg", "ffprobe")
        fake_exec.process = FakeProcess(stdout=b"12.500000\n")
        tool = PydubTool.from_config(MixerConfig(backend="pydub", ffmpeg_path=str(bin_dir)))

        result = asyncio.run(tool.probe_duration(tmp_path / "voice.mp3"))

        assert result.succeeded
        assert result.duration_s == 12.5
        assert fake_exec.calls[0][0] == str(bin_dir / "ffprobe")

    def test_probe_failure_is_reported(self, tmp_path, fake_exec):
        fake_exec.error = FileNotFoundError(2, "No such file", "ffprobe")
        tool = PydubTool(ffprobe="/missing/ffprobe")

        result = asyncio.run(tool.probe_duration(tmp_path / "voice.mp3"))

        assert not result.succeeded
        assert "/missing/ffprobe" in result.error


class TestDecoding:
    """Inputs are decoded with an explicit codec."""

    def test_load_names_codec(self, tmp_path, monkeypatch):
        calls = []

        def fake_from_file(path, format=None, codec=None, **kwargs):
            calls.append((path, format, codec))
            return AudioSegment.silent(duration=100)

        monkeypatch.setattr(AudioSegment, "from_file", fake_from_file)

        PydubTool._load(tmp_path / "voice.mp3", VOICE_INPUT)
        PydubTool._load(tmp_path / "gamma_40hz.wav", BINAURAL_INPUT)

        assert calls == [
            (str(tmp_path / "voice.mp3"), "mp3", "mp3"),
            (str(tmp_path / "gamma_40hz.wav"), "wav", "pcm_s16le"),
        ]
        assert all(codec for _, _, codec in calls)

    def test_loop_to_duration(self):
        tone = AudioSegment.silent(duration=300)

        looped = PydubTool._loop_to_duration(tone, 1000)

        assert len(looped) == 1000
