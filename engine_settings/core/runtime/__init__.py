"""
Runtime configuration exports.

Provides the settings component's constants. All exports are lightweight
class constants with no initialization overhead.
"""

from engine_settings.core.runtime.game_settings import (
    Display,
    Audio,
    Controls,
    Gameplay,
    Persistence,
)

__all__ = [
    'Display',
    'Audio',
    'Controls',
    'Gameplay',
    'Persistence',
]
