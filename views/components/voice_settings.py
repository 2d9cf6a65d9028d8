"""
Voice Settings Component - narration voice and speed controls.
"""

import streamlit as st
from typing import Callable

from models.voice import SPEED_LABELS, SPEED_OPTIONS


def render_voice_settings(
    voices: dict[str, str],
    current_voice: str,
    current_speed: int,
    on_voice_change: Callable[[str], None],
    on_speed_change: Callable[[int], None],
):
    """
    Render the narration voice controls.

    Args:
        voices: Dict of {voice_id: display_name}
        current_voice: Currently selected voice ID
        current_speed: Current speed slider value
        on_voice_change: Callback when voice changes (receives voice_id)
        on_speed_change: Callback when speed changes (receives slider value)
    """
    st.markdown("**Voice**")
    voice_ids = list(voices.keys())
    voice_names = list(voices.values())

    current_idx = 0
    if current_voice in voice_ids:
        current_idx = voice_ids.index(current_voice)

    selected_name = st.selectbox(
        "Select voice:",
        options=voice_names,
        index=current_idx,
        label_visibility="collapsed",
        key="narration_voice"
    )

    # Map back to voice ID
    selected_voice_id = voice_ids[voice_names.index(selected_name)]
    if selected_voice_id != current_voice:
        on_voice_change(selected_voice_id)

    st.markdown("**Speed**")
    selected_speed = st.slider(
        "Narration speed",
        min_value=min(SPEED_OPTIONS),
        max_value=max(SPEED_OPTIONS),
        value=current_speed,
        step=1,
        format="%d",
        label_visibility="collapsed",
        key="narration_speed",
    )
    st.caption(f"Speed: {SPEED_LABELS.get(selected_speed, 'Normal')}")

    if selected_speed != current_speed:
        on_speed_change(selected_speed)
