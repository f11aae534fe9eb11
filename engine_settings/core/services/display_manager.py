"""
display_manager.py
------------------
pygame window management for the settings store.

Responsibilities:
- Window creation and fullscreen / windowed switching
- Vsync toggling (requires recreating the window in pygame)
- Window size and position
- Frame rate cap via pygame.time.Clock
"""

import os

import pygame
from pygame._sdl2.video import Window

from engine_settings.core.debug.debug_logger import DebugLogger
from engine_settings.core.runtime.game_settings import Display
from engine_settings.core.services.capabilities import VSyncMode, WindowMode


class DisplayManager:
    """
    Implements the display surface consumed by SettingsStore.

    Settings can be changed before open(); they are stored and used when
    the window is created. After open(), mode, vsync and size changes
    recreate the window.
    """

    # ===========================================================
    # Initialization
    # ===========================================================

    def __init__(self, window_size=Display.DEFAULT_RESOLUTION, caption=Display.CAPTION):
        """
        Args:
            window_size: Initial windowed size (width, height)
            caption: Window title
        """
        self.caption = caption
        self.window = None

        self.window_size = tuple(window_size)
        self.window_position = None
        self.window_mode = WindowMode.WINDOWED
        self.vsync_mode = VSyncMode.ENABLED

        self.max_fps = 0
        self.clock = pygame.time.Clock()

    @property
    def is_open(self) -> bool:
        return self.window is not None

    @property
    def is_fullscreen(self) -> bool:
        return self.window_mode == WindowMode.FULLSCREEN

    def open(self):
        """Create the window with the current settings."""
        if not pygame.display.get_init():
            pygame.display.init()
        self._create_window()
        pygame.display.set_caption(self.caption)
        DebugLogger.init_entry("DisplayManager")

    def close(self):
        if self.window is not None:
            pygame.display.quit()
            self.window = None

    # ===========================================================
    # Display Surface
    # ===========================================================

    def set_vsync_mode(self, mode: VSyncMode):
        if mode == self.vsync_mode:
            return
        self.vsync_mode = mode
        DebugLogger.state(f"Vsync → {mode.name}", category="display")
        self._recreate_if_open()

    def set_window_mode(self, mode: WindowMode):
        if mode == self.window_mode:
            return
        self.window_mode = mode
        DebugLogger.state(f"Window mode → {mode.name}", category="display")
        self._recreate_if_open()

    def set_window_size(self, size):
        size = tuple(size)
        if size == self.window_size:
            return
        self.window_size = size
        DebugLogger.state(f"Window size → {size[0]}x{size[1]}", category="display")
        if not self.is_fullscreen:
            self._recreate_if_open()

    def set_window_position(self, position):
        """Move the window. Before open(), the position is used at creation."""
        self.window_position = tuple(position)
        x, y = self.window_position
        os.environ["SDL_VIDEO_WINDOW_POS"] = f"{x},{y}"

        if self.is_open and not self.is_fullscreen:
            Window.from_display_module().position = self.window_position
        DebugLogger.trace(f"Window position → ({x},{y})", category="display")

    def get_screen_size(self):
        """Size of the primary desktop in pixels."""
        if not pygame.display.get_init():
            pygame.display.init()
        sizes = pygame.display.get_desktop_sizes()
        if not sizes:
            return self.window_size
        return tuple(sizes[0])

    def set_max_fps(self, fps: int):
        """Cap the frame rate; 0 disables the cap."""
        self.max_fps = max(0, int(fps))
        DebugLogger.state(f"Max FPS → {self.max_fps or 'uncapped'}", category="display")

    # ===========================================================
    # Frame Limiter
    # ===========================================================

    def tick(self) -> float:
        """
        Wait for the next frame under the current cap.

        Returns:
            Seconds elapsed since the previous tick
        """
        return self.clock.tick(self.max_fps) / 1000.0

    # ===========================================================
    # Internal: Window Creation
    # ===========================================================

    def _recreate_if_open(self):
        if self.is_open:
            self._create_window()

    def _create_window(self):
        """Create the pygame window with the current mode, size and vsync."""
        if self.is_fullscreen:
            size = (0, 0)
            flags = pygame.FULLSCREEN | pygame.DOUBLEBUF | pygame.HWSURFACE
        else:
            size = self.window_size
            flags = pygame.DOUBLEBUF | pygame.HWSURFACE

        vsync = 1 if self.vsync_mode == VSyncMode.ENABLED else 0
        try:
            self.window = pygame.display.set_mode(size, flags, vsync=vsync)
        except pygame.error as e:
            # Some renderers refuse vsync for software surfaces
            DebugLogger.warn(f"Vsync unavailable ({e}) - creating window without it",
                             category="display")
            self.window = pygame.display.set_mode(size, flags)
