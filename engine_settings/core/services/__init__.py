"""
Core services exports.

Provides the settings store, its event channel, engine surfaces and
settings file I/O.
"""

from engine_settings.core.services.config_manager import (
    SettingsFileError,
    default_settings_path,
)
from engine_settings.core.services.event_manager import (
    EventManager,
    BaseEvent,
    SettingChangedEvent,
    SettingsSavedEvent,
    SettingsLoadedEvent,
    SettingsResetEvent,
)
from engine_settings.core.services.capabilities import (
    VSyncMode,
    WindowMode,
    SensitivityReceiver,
    InvertYReceiver,
    CameraProvider,
    PlayerBinding,
)
from engine_settings.core.services.settings_store import SettingsStore, FIELDS

__all__ = [
    # Persistence
    'SettingsFileError',
    'default_settings_path',
    # Events
    'EventManager',
    'BaseEvent',
    'SettingChangedEvent',
    'SettingsSavedEvent',
    'SettingsLoadedEvent',
    'SettingsResetEvent',
    # Capabilities
    'VSyncMode',
    'WindowMode',
    'SensitivityReceiver',
    'InvertYReceiver',
    'CameraProvider',
    'PlayerBinding',
    # Store
    'SettingsStore',
    'FIELDS',
]
