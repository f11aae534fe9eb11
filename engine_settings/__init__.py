"""
engine_settings
---------------
Video, audio, control and gameplay settings for pygame games.
"""

from engine_settings.core.services.settings_store import SettingsStore

__version__ = "0.1.0"

__all__ = ['SettingsStore']
