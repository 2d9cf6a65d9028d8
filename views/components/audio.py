"""
Audio UI components for narration playback.
"""

import streamlit as st
from typing import Optional


def render_audio_playback(audio_bytes: Optional[bytes]):
    """
    Render audio playback if audio is available.

    Args:
        audio_bytes: MP3 audio bytes to play
    """
    if audio_bytes:
        st.audio(audio_bytes, format="audio/mp3", autoplay=True)
