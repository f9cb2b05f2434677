"""Tests for pre-flight availability checks."""

import pytest

from mindframe.core.enums import Scenario
from mindframe.audio.availability import binaural_asset_available, check_mixing_available

from conftest import FakeMediaTool


class TestBinauralAssetAvailable:
    """Tests for binaural_asset_available."""

    @pytest.mark.parametrize("scenario", list(Scenario))
    def test_present(self, assets_root, scenario):
        assert binaural_asset_available(scenario, assets_root) is True

    @pytest.mark.parametrize("scenario", list(Scenario))
    def test_absent(self, empty_assets_root, scenario):
        assert binaural_asset_available(scenario, empty_assets_root) is False

    def test_only_evening_asset_missing(self, assets_root):
        (assets_root / "public/audio/binaural/theta_6hz.wav").unlink()

        assert binaural_asset_available("morning", assets_root) is True
        assert binaural_asset_available("evening", assets_root) is False

    def test_directory_is_not_an_asset(self, empty_assets_root):
        (empty_assets_root / "public/audio/binaural/gamma_40hz.wav").mkdir(parents=True)

        assert binaural_asset_available("morning", empty_assets_root) is False


class TestCheckMixingAvailable:
    """Tests for check_mixing_available."""

    def test_available(self, assets_root):
        ok, reason = check_mixing_available("morning", assets_root, FakeMediaTool())

        assert ok is True
        assert reason is None

    def test_missing_asset_names_path(self, empty_assets_root):
        tool = FakeMediaTool()
        ok, reason = check_mixing_available("evening", empty_assets_root, tool)

        assert ok is False
        assert "theta_6hz.wav" in reason
        assert tool.availability_checks == 0

    def test_missing_tool(self, assets_root):
        ok, reason = check_mixing_available("morning", assets_root, FakeMediaTool(available=False))

        assert ok is False
        assert reason == "Media tool not available: fake"

    def test_no_tool(self, assets_root):
        ok, reason = check_mixing_available("morning", assets_root, None)

        assert ok is False
        assert "No media tool" in reason

    def test_tool_check_error(self, assets_root):
        class BrokenTool(FakeMediaTool):
            def is_available(self):
                raise PermissionError("denied")

        ok, reason = check_mixing_available("morning", assets_root, BrokenTool())

        assert ok is False
        assert "denied" in reason
