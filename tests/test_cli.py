"""Tests for the mindframe command line."""

import json

import pytest

from mindframe.__main__ import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ("MINDFRAME_ASSETS_ROOT", "MINDFRAME_MIXER_BACKEND", "FFMPEG_PATH", "MINDFRAME_TEMP_DIR"):
        monkeypatch.delenv(name, raising=False)
    # Keep load_dotenv away from any developer .env
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def voice_file(tmp_path, voice_buffer):
    path = tmp_path / "voice.mp3"
    path.write_bytes(voice_buffer)
    return path


class TestInfo:
    """Tests for `mindframe info`."""

    def test_evening(self, capsys):
        assert main(["info", "evening"]) == 0

        info = json.loads(capsys.readouterr().out)
        assert info["scenario"] == "evening"
        assert info["preset"] == "theta"
        assert info["uses_default"] is False

    def test_unmapped_scenario(self, capsys):
        assert main(["info", "sos"]) == 0

        info = json.loads(capsys.readouterr().out)
        assert info["preset"] == "gamma"
        assert info["uses_default"] is True


class TestMix:
    """Tests for `mindframe mix`."""

    def test_no_binaural_copies_voice(self, voice_file, tmp_path, capsys):
        out = tmp_path / "out" / "mixed.mp3"

        code = main(["mix", str(voice_file), "--scenario", "morning", "-o", str(out), "--no-binaural"])

        assert code == 0
        assert out.read_bytes() == voice_file.read_bytes()
        summary = json.loads(capsys.readouterr().out)
        assert summary["has_binaural"] is False
        assert summary["skip_reason"] == "binaural disabled"

    def test_missing_assets_falls_back(self, voice_file, empty_assets_root, tmp_path, capsys):
        out = tmp_path / "mixed.mp3"

        code = main([
            "--assets-root", str(empty_assets_root),
            "mix", str(voice_file), "--scenario", "evening", "-o", str(out),
        ])

        assert code == 0
        assert out.read_bytes() == voice_file.read_bytes()
        summary = json.loads(capsys.readouterr().out)
        assert summary["has_binaural"] is False
        assert "not found" in summary["skip_reason"]

    def test_missing_voice_file(self, tmp_path):
        code = main(["mix", str(tmp_path / "nope.mp3"), "-o", str(tmp_path / "out.mp3")])

        assert code == 2


class TestCheck:
    """Tests for `mindframe check`."""

    def test_missing_assets_fail(self, empty_assets_root, capsys):
        code = main(["--assets-root", str(empty_assets_root), "check", "--scenario", "morning"])

        assert code == 1
        assert "✗ morning" in capsys.readouterr().out

    def test_without_scenario_lists_every_scenario(self, empty_assets_root, capsys):
        code = main(["--assets-root", str(empty_assets_root), "check"])

        out = capsys.readouterr().out
        assert code == 1
        for scenario in ("morning", "evening", "focus", "sport", "sos"):
            assert f"✗ {scenario}" in out
