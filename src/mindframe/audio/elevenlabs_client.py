"""ElevenLabs text-to-speech for MindFrame affirmations.

Produces the voice buffer that the binaural mixer consumes. Voice
settings follow the scenario: natural delivery in the morning, a stable
and calm one in the evening. Without an API key the client runs dry and
returns silent MP3 frames of roughly the expected length, which the
mixer can still probe and mix.

Usage:
    from mindframe.audio import ElevenLabsClient

    async with ElevenLabsClient(api_key="your-key") as client:
        result = await client.text_to_speech(
            text="Good morning! [short pause] A new day!",
            voice_id="RMSJCUQZ5aP84TBCul7v",
            scenario="morning",
        )
    voice_bytes = result.audio_data
"""

import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Union

import aiohttp

from ..core.enums import Scenario

logger = logging.getLogger(__name__)

# Speaking rate used to size dry-run audio
CHARS_PER_SECOND = 12.5

# Silent MPEG-1 Layer III frame: 128 kbps, 44.1 kHz, ~26 ms
_SILENT_FRAME = b"\xff\xfb\x90\x00" + bytes(413)
_FRAME_SECONDS = 0.026


class ElevenLabsModel(str, Enum):
    """Models used for affirmations."""
    ELEVEN_V3 = "eleven_v3"                            # Supports [pause] tags
    ELEVEN_MULTILINGUAL_V2 = "eleven_multilingual_v2"
    ELEVEN_FLASH_V2_5 = "eleven_flash_v2_5"


@dataclass(frozen=True)
class VoiceSettings:
    """Synthesis settings sent with each request.

    eleven_v3 accepts only 0.0, 0.5 or 1.0 for stability.
    """
    stability: float = 0.5
    similarity_boost: float = 0.75

    def to_dict(self) -> Dict[str, float]:
        return {
            "stability": self.stability,
            "similarity_boost": self.similarity_boost,
        }


SCENARIO_VOICE_SETTINGS: Dict[Scenario, VoiceSettings] = {
    Scenario.MORNING: VoiceSettings(stability=0.5, similarity_boost=0.75),
    Scenario.EVENING: VoiceSettings(stability=1.0, similarity_boost=0.8),
}


def get_voice_settings(scenario: Union[Scenario, str, None]) -> VoiceSettings:
    """Voice settings for a scenario (morning settings when undefined)."""
    try:
        scenario = Scenario(scenario) if scenario is not None else Scenario.MORNING
    except ValueError:
        scenario = Scenario.MORNING
    return SCENARIO_VOICE_SETTINGS.get(scenario, SCENARIO_VOICE_SETTINGS[Scenario.MORNING])


@dataclass
class SynthesisResult:
    """Audio returned for one affirmation."""
    audio_data: bytes  # MP3
    character_count: int
    model_used: str
    voice_id: str
    is_dry_run: bool = False


class ElevenLabsAPIError(Exception):
    """Non-200 answer from the ElevenLabs API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"ElevenLabs API error {status_code}: {message}")


def silent_mp3(duration_s: float) -> bytes:
    """Silent MP3 of about ``duration_s`` seconds (at least one frame)."""
    return _SILENT_FRAME * max(1, int(duration_s / _FRAME_SECONDS))


class ElevenLabsClient:
    """Async client for the ElevenLabs text-to-speech endpoint."""

    BASE_URL = "https://api.elevenlabs.io/v1"

    def __init__(
        self,
        api_key: Optional[str] = None,
        dry_run: bool = False,
        default_model: str = ElevenLabsModel.ELEVEN_V3.value,
        timeout_s: float = 60.0,
    ):
        """Initialize the client.

        Args:
            api_key: API key; falls back to ELEVENLABS_API_KEY. Without
                one the client runs dry.
            dry_run: Return silent audio instead of calling the API
            default_model: Model used when a request names none
            timeout_s: Total timeout per request
        """
        self.api_key = api_key or os.environ.get("ELEVENLABS_API_KEY")
        self.dry_run = dry_run or not self.api_key
        self.default_model = default_model
        self.timeout_s = timeout_s
        self._session: Optional[aiohttp.ClientSession] = None

        if not self.api_key and not dry_run:
            logger.warning("No ElevenLabs API key configured, synthesizing silent audio")

    async def __aenter__(self) -> "ElevenLabsClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._session and not self._session.closed:
            await self._session.close()

    def _session_for_requests(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"xi-api-key": self.api_key},
                timeout=aiohttp.ClientTimeout(total=self.timeout_s),
            )
        return self._session

    async def text_to_speech(
        self,
        text: str,
        voice_id: str,
        scenario: Union[Scenario, str, None] = None,
        model: Optional[str] = None,
        voice_settings: Optional[VoiceSettings] = None,
        output_format: str = "mp3_44100_128",
    ) -> SynthesisResult:
        """Synthesize ``text`` with one voice.

        Args:
            text: Affirmation text, may include [pause] style tags
            voice_id: ElevenLabs voice ID
            scenario: Picks the voice settings
            model: Overrides ``default_model``
            voice_settings: Overrides the scenario's settings
            output_format: Format requested from the API

        Raises:
            ElevenLabsAPIError: On a non-200 response
        """
        model = model or self.default_model
        settings = voice_settings or get_voice_settings(scenario)

        logger.info(f"TTS request: {len(text)} chars, voice={voice_id}, model={model}")

        if self.dry_run:
            return SynthesisResult(
                audio_data=silent_mp3(len(text) / CHARS_PER_SECOND),
                character_count=len(text),
                model_used=model,
                voice_id=voice_id,
                is_dry_run=True,
            )

        session = self._session_for_requests()
        async with session.post(
            f"{self.BASE_URL}/text-to-speech/{voice_id}",
            params={"output_format": output_format},
            json={
                "text": text,
                "model_id": model,
                "voice_settings": settings.to_dict(),
            },
        ) as response:
            if response.status != 200:
                detail = await response.text()
                logger.error(f"ElevenLabs API error {response.status}: {detail}")
                raise ElevenLabsAPIError(response.status, detail)
            audio = await response.read()

        return SynthesisResult(
            audio_data=audio,
            character_count=len(text),
            model_used=model,
            voice_id=voice_id,
        )
