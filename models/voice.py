"""
Voice settings for step narration.
"""

# Available edge-tts voices for English (US, UK, Ireland)
VOICE_OPTIONS = {
    "en-US-AriaNeural": "Aria (US, Female)",
    "en-US-GuyNeural": "Guy (US, Male)",
    "en-US-JennyNeural": "Jenny (US, Female)",
    "en-US-ChristopherNeural": "Christopher (US, Male)",
    "en-GB-SoniaNeural": "Sonia (UK, Female)",
    "en-GB-RyanNeural": "Ryan (UK, Male)",
    "en-GB-LibbyNeural": "Libby (UK, Female)",
    "en-GB-ThomasNeural": "Thomas (UK, Male)",
    "en-IE-EmilyNeural": "Emily (Ireland, Female)",
    "en-IE-ConnorNeural": "Connor (Ireland, Male)",
}

DEFAULT_VOICE_NAME = "en-US-AriaNeural"
DEFAULT_VOICE_RATE = "+0%"

# Speed presets for the slider (maps slider value to edge-tts rate)
SPEED_OPTIONS = {
    -2: "-20%",
    -1: "-10%",
    0: "+0%",
    1: "+10%",
    2: "+20%",
}

SPEED_LABELS = {
    -2: "Slower",
    -1: "Slow",
    0: "Normal",
    1: "Fast",
    2: "Faster",
}


def rate_to_slider_value(rate: str) -> int:
    """Convert edge-tts rate string to slider value."""
    for slider_val, rate_str in SPEED_OPTIONS.items():
        if rate_str == rate:
            return slider_val
    return 0  # Default to normal


def slider_value_to_rate(slider_val: int) -> str:
    """Convert slider value to edge-tts rate string."""
    return SPEED_OPTIONS.get(slider_val, DEFAULT_VOICE_RATE)
