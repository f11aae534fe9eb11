"""
capabilities.py
---------------
Interfaces the settings store talks to, and the player binding that
resolves player capabilities once instead of probing on every change.

Engine surfaces (DisplaySurface, AudioSurface) are implemented by
DisplayManager and AudioMixer. Player capabilities are optional: an
object that lacks one is simply skipped.
"""

import weakref
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Iterable, Optional, Protocol, Tuple, runtime_checkable

from engine_settings.core.debug.debug_logger import DebugLogger
from engine_settings.core.scene.node import Camera3D, CharacterBody3D


# ===========================================================
# Engine Enums
# ===========================================================

class VSyncMode(IntEnum):
    DISABLED = 0
    ENABLED = 1


class WindowMode(IntEnum):
    WINDOWED = 0
    FULLSCREEN = 1


# ===========================================================
# Engine Surfaces
# ===========================================================

class DisplaySurface(Protocol):
    """Window, vsync and frame limiter controls."""

    def set_vsync_mode(self, mode: VSyncMode) -> None: ...

    def set_window_mode(self, mode: WindowMode) -> None: ...

    def set_window_size(self, size: Tuple[int, int]) -> None: ...

    def set_window_position(self, position: Tuple[int, int]) -> None: ...

    def get_screen_size(self) -> Tuple[int, int]: ...

    def set_max_fps(self, fps: int) -> None: ...


class AudioSurface(Protocol):
    """Named mixer buses with mute and decibel gain."""

    def get_bus_index(self, name: str) -> int:
        """Return the bus index, or -1 if no bus has that name."""
        ...

    def set_bus_mute(self, index: int, muted: bool) -> None: ...

    def set_bus_volume_db(self, index: int, volume_db: float) -> None: ...


# ===========================================================
# Player Capabilities
# ===========================================================

@runtime_checkable
class SensitivityReceiver(Protocol):
    def set_mouse_sensitivity(self, value: float) -> None: ...


@runtime_checkable
class InvertYReceiver(Protocol):
    def set_invert_y(self, inverted: bool) -> None: ...


@runtime_checkable
class CameraProvider(Protocol):
    def get_camera(self) -> Optional[Camera3D]: ...


@runtime_checkable
class HasChildren(Protocol):
    def get_children(self) -> Iterable[Any]: ...


# ===========================================================
# Resolution Policies
# ===========================================================

def _children(obj) -> list:
    if isinstance(obj, HasChildren):
        return list(obj.get_children())
    return []


def find_capability_target(player, capability: type):
    """
    Pick the object that should receive a player capability call.

    The player itself wins; otherwise the first direct child implementing
    the capability. Only one target is ever returned.
    """
    if player is None:
        return None
    if isinstance(player, capability):
        return player
    for child in _children(player):
        if isinstance(child, capability):
            return child
    return None


def find_camera(player) -> Optional[Camera3D]:
    """
    Resolve the player's camera.

    Order: player.get_camera(), then a Camera3D among direct children,
    then a Camera3D among the children of any CharacterBody3D child.
    """
    if player is None:
        return None
    if isinstance(player, CameraProvider):
        return player.get_camera()

    children = _children(player)
    for child in children:
        if isinstance(child, Camera3D):
            return child

    for child in children:
        if isinstance(child, CharacterBody3D):
            for grandchild in _children(child):
                if isinstance(grandchild, Camera3D):
                    return grandchild
    return None


# ===========================================================
# Player Binding
# ===========================================================

def _weak(obj) -> Optional[weakref.ref]:
    return weakref.ref(obj) if obj is not None else None


def _deref(ref: Optional[weakref.ref]):
    return ref() if ref is not None else None


@dataclass
class PlayerBinding:
    """Weak references to the player and its resolved capability targets."""

    player_ref: Optional[weakref.ref] = None
    sensitivity_ref: Optional[weakref.ref] = None
    invert_ref: Optional[weakref.ref] = None
    camera_ref: Optional[weakref.ref] = None

    @classmethod
    def resolve(cls, player) -> "PlayerBinding":
        """Probe the player once and cache what it supports."""
        if player is None:
            return cls()

        binding = cls(
            player_ref=_weak(player),
            sensitivity_ref=_weak(find_capability_target(player, SensitivityReceiver)),
            invert_ref=_weak(find_capability_target(player, InvertYReceiver)),
            camera_ref=_weak(find_camera(player)),
        )
        DebugLogger.trace(
            f"Bound player {player!r}: sensitivity={binding.sensitivity is not None}, "
            f"invert_y={binding.invert_target is not None}, camera={binding.camera is not None}",
            category="player"
        )
        return binding

    @property
    def player(self):
        return _deref(self.player_ref)

    @property
    def sensitivity(self) -> Optional[SensitivityReceiver]:
        if self.player is None:
            return None
        return _deref(self.sensitivity_ref)

    @property
    def invert_target(self) -> Optional[InvertYReceiver]:
        if self.player is None:
            return None
        return _deref(self.invert_ref)

    @property
    def camera(self) -> Optional[Camera3D]:
        if self.player is None:
            return None
        return _deref(self.camera_ref)
