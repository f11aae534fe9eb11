"""
conftest.py
-----------
Shared pytest configuration and fixtures for engine-settings tests.

Contains:
- Global pygame mock so tests never open a window or audio device
- Mock display / mixer surfaces for the settings store
- Small player rigs exposing the optional player capabilities
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Make the package importable without installation
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

# Mock pygame globally before any imports that might use it
mock_pygame = MagicMock()
sys.modules["pygame"] = mock_pygame
sys.modules["pygame.display"] = mock_pygame.display
sys.modules["pygame.mixer"] = mock_pygame.mixer
sys.modules["pygame.time"] = mock_pygame.time
sys.modules["pygame._sdl2"] = mock_pygame._sdl2
sys.modules["pygame._sdl2.video"] = mock_pygame._sdl2.video


class PygameError(Exception):
    """Stand-in for pygame.error so except clauses can match it."""


mock_pygame.error = PygameError
mock_pygame.FULLSCREEN = 0x80000000
mock_pygame.DOUBLEBUF = 0x40000000
mock_pygame.HWSURFACE = 0x00000001

from engine_settings.core.debug.debug_logger import LoggerConfig  # noqa: E402
from engine_settings.core.scene.node import Camera3D, CharacterBody3D, Node  # noqa: E402
from engine_settings.core.services.settings_store import SettingsStore  # noqa: E402

LoggerConfig.USE_COLORS = False

BUS_INDICES = {"Master": 0, "Music": 1, "SFX": 2}


# ===========================================================
# Player Rigs
# ===========================================================

class LookController(Node):
    """Node exposing sensitivity and invert-y capabilities."""

    def __init__(self, name="Look"):
        super().__init__(name)
        self.sensitivity_calls = []
        self.invert_calls = []

    def set_mouse_sensitivity(self, value):
        self.sensitivity_calls.append(value)

    def set_invert_y(self, inverted):
        self.invert_calls.append(inverted)


class CameraRig(Node):
    """Node exposing the camera-accessor capability."""

    def __init__(self, camera):
        super().__init__("CameraRig")
        self.camera = camera

    def get_camera(self):
        return self.camera


# ===========================================================
# Fixtures
# ===========================================================

@pytest.fixture(autouse=True)
def reset_pygame_mock():
    """Clear recorded pygame calls between tests."""
    mock_pygame.reset_mock(return_value=True, side_effect=True)
    yield


@pytest.fixture
def mock_display():
    """Mock display surface with a 2560x1440 primary screen."""
    display = MagicMock()
    display.get_screen_size.return_value = (2560, 1440)
    return display


@pytest.fixture
def mock_mixer():
    """Mock audio surface with Master, Music and SFX buses."""
    mixer = MagicMock()
    mixer.get_bus_index.side_effect = lambda name: BUS_INDICES.get(name, -1)
    return mixer


@pytest.fixture
def settings_path(tmp_path):
    return str(tmp_path / "config" / "game_settings.cfg")


@pytest.fixture
def store(mock_display, mock_mixer, settings_path):
    return SettingsStore(mock_display, mock_mixer, settings_path=settings_path)


@pytest.fixture
def player_with_camera():
    """Player -> Body (CharacterBody3D) -> Camera, plus a look controller child."""
    player = Node("Player")
    look = player.add_child(LookController())
    body = player.add_child(CharacterBody3D("Body"))
    camera = body.add_child(Camera3D("Camera"))
    return player, look, camera


# Pytest configuration
def pytest_configure(config):
    """Custom pytest configuration."""
    config.addinivalue_line("markers", "integration: marks tests touching the filesystem")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
