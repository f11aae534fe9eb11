"""
Audio exports.
"""

from engine_settings.audio.audio_mixer import AudioMixer, Bus, db_to_linear

__all__ = [
    'AudioMixer',
    'Bus',
    'db_to_linear',
]
