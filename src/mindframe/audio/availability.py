"""Pre-flight checks run before any probing or mixing."""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

from ..core.enums import Scenario
from .binaural import get_binaural_preset, resolve_binaural_path
from .tools import MediaTool

logger = logging.getLogger(__name__)


def binaural_asset_available(
    scenario: Union[Scenario, str],
    assets_root: Union[str, Path] = ".",
) -> bool:
    """Check that the scenario's binaural track exists on disk.

    A missing asset is an expected outcome (not deployed, wrong
    environment), so this never raises.
    """
    path = resolve_binaural_path(get_binaural_preset(scenario), assets_root)
    try:
        return path.is_file()
    except OSError as e:
        logger.debug(f"Cannot stat {path}: {e}")
        return False


def check_mixing_available(
    scenario: Union[Scenario, str],
    assets_root: Union[str, Path],
    tool: Optional[MediaTool],
) -> Tuple[bool, Optional[str]]:
    """Check both the binaural asset and the media tool.

    Returns:
        Tuple of (available, reason). ``reason`` names the missing path or
        tool when unavailable, None otherwise.
    """
    if not binaural_asset_available(scenario, assets_root):
        path = resolve_binaural_path(get_binaural_preset(scenario), assets_root)
        return False, f"Binaural file not found: {path}"

    if tool is None:
        return False, "No media tool configured"

    try:
        tool_ok = tool.is_available()
    except OSError as e:
        return False, f"Media tool check failed: {e}"
    if not tool_ok:
        return False, f"Media tool not available: {tool.describe()}"

    return True, None
