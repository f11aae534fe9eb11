"""
game_settings.py
----------------
Centralized constants for the settings component: defaults, domains,
audio bus names and persistence layout.
"""


# ===========================================================
# Display & Performance
# ===========================================================

class Display:
    """Video defaults and limits."""
    CAPTION: str = "engine-settings"

    DEFAULT_VSYNC: bool = True
    DEFAULT_MAX_FPS: int = 0  # 0 = uncapped
    DEFAULT_FULLSCREEN: bool = False
    DEFAULT_RESOLUTION: tuple = (1920, 1080)

    MAX_FPS_RANGE: tuple = (0, 500)
    MIN_RESOLUTION: int = 1


# ===========================================================
# Audio
# ===========================================================

class Audio:
    """Volume defaults and mixer bus names."""
    DEFAULT_MASTER_VOLUME: float = 0.8
    DEFAULT_MUSIC_VOLUME: float = 0.7
    DEFAULT_SFX_VOLUME: float = 0.8

    VOLUME_RANGE: tuple = (0.0, 1.0)

    MASTER_BUS: str = "Master"
    MUSIC_BUS: str = "Music"
    SFX_BUS: str = "SFX"
    BUSES: tuple = (MASTER_BUS, MUSIC_BUS, SFX_BUS)

    # Gain floor used when converting a muted / silent bus back to linear
    SILENCE_DB: float = -80.0


# ===========================================================
# Controls
# ===========================================================

class Controls:
    """Mouse look defaults."""
    DEFAULT_MOUSE_SENSITIVITY: float = 0.3
    DEFAULT_INVERT_Y: bool = False

    MOUSE_SENSITIVITY_RANGE: tuple = (0.05, 2.0)


# ===========================================================
# Gameplay
# ===========================================================

class Gameplay:
    """Camera defaults."""
    DEFAULT_FIELD_OF_VIEW: int = 85

    FIELD_OF_VIEW_RANGE: tuple = (60, 120)


# ===========================================================
# Persistence
# ===========================================================

class Persistence:
    """Settings file location and section layout."""
    APP_DIR: str = "engine_settings"
    FILE_NAME: str = "game_settings.cfg"

    # File sections, in write order
    SECTIONS: tuple = ("video", "audio", "controls", "gameplay")
