"""
Audio Service - step narration with text-to-speech.

This service is pure Python with no Streamlit dependencies.
Uses edge-tts for high-quality neural text-to-speech.

The narrator plays one utterance at a time. Calling speak() cancels
whatever was still being prepared and returns a Narration handle for the
new text. Synthesis runs on a single background worker so speak() never
blocks the caller; the view collects the finished audio when it renders.
"""

import asyncio
import logging
import threading
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Callable, Optional, Protocol

import edge_tts

from models.voice import (
    VOICE_OPTIONS,
    DEFAULT_VOICE_NAME,
    DEFAULT_VOICE_RATE,
)

logger = logging.getLogger(__name__)


class Narration:
    """Handle for a single utterance."""

    def __init__(self, text: str):
        self.text = text
        self._future: Optional[Future] = None
        self._cancelled = threading.Event()

    def attach(self, future: Future):
        self._future = future

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        return self._future is not None and self._future.done()

    def cancel(self):
        """Stop this utterance. Audio is never returned afterwards."""
        self._cancelled.set()
        if self._future is not None:
            self._future.cancel()

    def audio(self, timeout: Optional[float] = None) -> Optional[bytes]:
        """
        Wait for the synthesized audio.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            MP3 audio bytes, or None if cancelled, failed or timed out
        """
        if self.cancelled or self._future is None:
            return None
        try:
            audio = self._future.result(timeout=timeout)
        except (CancelledError, FutureTimeoutError):
            return None
        return None if self.cancelled else audio


class Narrator(Protocol):
    """Speaks text aloud, one utterance at a time."""

    def speak(self, text: str) -> Narration:
        ...

    def cancel(self) -> None:
        ...


class AudioService:
    """Service for text-to-speech synthesis."""

    async def _text_to_speech_async(
        self,
        text: str,
        voice: str = DEFAULT_VOICE_NAME,
        rate: str = DEFAULT_VOICE_RATE
    ) -> Optional[bytes]:
        """
        Async implementation of text-to-speech using edge-tts.

        Args:
            text: Text to convert
            voice: Edge-TTS voice ID (e.g., 'en-US-AriaNeural')
            rate: Speech rate (e.g., '+20%', '-10%')

        Returns:
            MP3 audio bytes, or None if TTS failed
        """
        try:
            communicate = edge_tts.Communicate(text, voice, rate=rate)
            audio_bytes = b""
            async for chunk in communicate.stream():
                if chunk["type"] == "audio":
                    audio_bytes += chunk["data"]
            return audio_bytes if audio_bytes else None
        except Exception as e:
            logger.error(f"Edge-TTS error: {e}")
            return None

    def text_to_speech(
        self,
        text: str,
        voice: str = DEFAULT_VOICE_NAME,
        rate: str = DEFAULT_VOICE_RATE
    ) -> Optional[bytes]:
        """
        Convert text to speech audio using edge-tts.

        Returns:
            MP3 audio bytes, or None if TTS failed
        """
        try:
            # Each worker call gets its own event loop
            return asyncio.run(self._text_to_speech_async(text, voice, rate))
        except Exception as e:
            logger.error(f"TTS error: {e}")
            return None

    @staticmethod
    def get_available_voices() -> dict[str, str]:
        """Get available voice options as {voice_id: display_name}."""
        return VOICE_OPTIONS.copy()


class EdgeTTSNarrator:
    """
    Narrator backed by edge-tts.

    Args:
        voice: Edge-TTS voice ID
        rate: Speech rate (e.g., '-10%')
        on_start: Called with the text when synthesis of an utterance begins
        on_end: Called with the text when synthesis of an utterance ends
    """

    def __init__(
        self,
        voice: str = DEFAULT_VOICE_NAME,
        rate: str = DEFAULT_VOICE_RATE,
        on_start: Optional[Callable[[str], None]] = None,
        on_end: Optional[Callable[[str], None]] = None,
        audio: Optional[AudioService] = None,
    ):
        self.voice = voice
        self.rate = rate
        self.on_start = on_start
        self.on_end = on_end
        self.audio = audio or AudioService()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="narrator")
        self._lock = threading.Lock()
        self._current: Optional[Narration] = None

    @property
    def current(self) -> Optional[Narration]:
        """The most recent utterance that has not been cancelled."""
        with self._lock:
            if self._current is not None and self._current.cancelled:
                return None
            return self._current

    @property
    def is_speaking(self) -> bool:
        current = self.current
        return current is not None and not current.done

    def speak(self, text: str) -> Narration:
        """Start narrating text, superseding any previous utterance."""
        narration = Narration(text)
        with self._lock:
            if self._current is not None:
                self._current.cancel()
            self._current = narration
        narration.attach(self._executor.submit(self._synthesize, narration))
        return narration

    def cancel(self):
        """Cancel the current utterance, if any."""
        with self._lock:
            if self._current is not None:
                self._current.cancel()
            self._current = None

    def shutdown(self):
        self.cancel()
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _synthesize(self, narration: Narration) -> Optional[bytes]:
        if narration.cancelled:
            return None

        if self.on_start:
            self.on_start(narration.text)
        try:
            audio_bytes = self.audio.text_to_speech(narration.text, voice=self.voice, rate=self.rate)
        finally:
            if self.on_end:
                self.on_end(narration.text)

        if narration.cancelled:
            logger.debug(f"Discarding superseded narration: {narration.text[:40]}")
            return None
        return audio_bytes
