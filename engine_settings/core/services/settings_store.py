"""
settings_store.py
-----------------
User-tunable video, audio, control and gameplay settings.

Each setting is exposed as a property. Assigning one:
1. stores the value (coerced to its type and clamped to its domain)
2. applies it to the display, mixer or player
3. saves the settings file when auto_save is on
4. dispatches SettingChangedEvent(name, value)

Bulk operations (apply_all, load, reset_to_defaults) reuse the same
steps but never save once per field.
"""

import math
from configparser import ConfigParser
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from engine_settings.core.debug.debug_logger import DebugLogger
from engine_settings.core.runtime.game_settings import (
    Display, Audio, Controls, Gameplay, Persistence
)
from engine_settings.core.services.capabilities import (
    AudioSurface, DisplaySurface, PlayerBinding, VSyncMode, WindowMode
)
from engine_settings.core.services.config_manager import (
    SettingsFileError, default_settings_path, read_settings_file, read_value,
    write_settings_file
)
from engine_settings.core.services.event_manager import (
    EventManager, SettingChangedEvent, SettingsLoadedEvent, SettingsResetEvent,
    SettingsSavedEvent
)


# ===========================================================
# Field Definitions
# ===========================================================

@dataclass(frozen=True)
class SettingField:
    """Declaration of one persisted setting."""
    name: str
    kind: type
    default: Any
    section: str
    domain: Optional[Tuple[Any, Any]] = None


# Declaration order is the apply_all order
FIELDS: Tuple[SettingField, ...] = (
    SettingField("vsync_enabled", bool, Display.DEFAULT_VSYNC, "video"),
    SettingField("max_fps", int, Display.DEFAULT_MAX_FPS, "video", Display.MAX_FPS_RANGE),
    SettingField("fullscreen", bool, Display.DEFAULT_FULLSCREEN, "video"),
    SettingField("resolution", tuple, Display.DEFAULT_RESOLUTION, "video"),
    SettingField("master_volume", float, Audio.DEFAULT_MASTER_VOLUME, "audio", Audio.VOLUME_RANGE),
    SettingField("music_volume", float, Audio.DEFAULT_MUSIC_VOLUME, "audio", Audio.VOLUME_RANGE),
    SettingField("sfx_volume", float, Audio.DEFAULT_SFX_VOLUME, "audio", Audio.VOLUME_RANGE),
    SettingField("mouse_sensitivity", float, Controls.DEFAULT_MOUSE_SENSITIVITY, "controls",
                 Controls.MOUSE_SENSITIVITY_RANGE),
    SettingField("invert_y_axis", bool, Controls.DEFAULT_INVERT_Y, "controls"),
    SettingField("field_of_view", int, Gameplay.DEFAULT_FIELD_OF_VIEW, "gameplay",
                 Gameplay.FIELD_OF_VIEW_RANGE),
)

FIELDS_BY_NAME: Dict[str, SettingField] = {f.name: f for f in FIELDS}


def volume_to_db(volume: float) -> float:
    """Linear gain (0, 1] to decibels: 1.0 -> 0 dB, 0.1 -> -20 dB."""
    return 20.0 * math.log10(volume)


# ===========================================================
# Value Coercion
# ===========================================================

def _to_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        state = ConfigParser.BOOLEAN_STATES.get(value.strip().lower())
        if state is not None:
            return state
    raise ValueError(f"Not a boolean: {value!r}")


def _to_int(value) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Not an integer: {value!r}") from e


def _to_float(value) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Not a number: {value!r}") from e
    if math.isnan(result):
        raise ValueError("NaN is not a valid setting value")
    return result


def _to_resolution(value) -> Tuple[int, int]:
    try:
        width, height = value
    except (TypeError, ValueError) as e:
        raise ValueError(f"Resolution must be a (width, height) pair: {value!r}") from e
    return (max(Display.MIN_RESOLUTION, _to_int(width)),
            max(Display.MIN_RESOLUTION, _to_int(height)))


_COERCERS: Dict[type, Callable[[Any], Any]] = {
    bool: _to_bool,
    int: _to_int,
    float: _to_float,
    tuple: _to_resolution,
}


# ===========================================================
# Property Descriptor
# ===========================================================

class SettingProperty:
    """Routes attribute writes through SettingsStore.set_setting."""

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance._values[self.name]

    def __set__(self, instance, value):
        instance.set_setting(self.name, value)


# ===========================================================
# Settings Store
# ===========================================================

class SettingsStore:
    """Owns the settings, applies them to the engine and persists them."""

    # Video
    vsync_enabled = SettingProperty()
    max_fps = SettingProperty()
    fullscreen = SettingProperty()
    resolution = SettingProperty()

    # Audio
    master_volume = SettingProperty()
    music_volume = SettingProperty()
    sfx_volume = SettingProperty()

    # Controls
    mouse_sensitivity = SettingProperty()
    invert_y_axis = SettingProperty()

    # Gameplay
    field_of_view = SettingProperty()

    def __init__(self, display: Optional[DisplaySurface] = None,
                 mixer: Optional[AudioSurface] = None,
                 settings_path: Optional[str] = None,
                 auto_save: bool = True,
                 load_on_ready: bool = True,
                 editor_hint: bool = False):
        """
        Initialize the store with default values. Nothing is applied or
        read from disk until ready(), load() or apply_all() is called.

        Args:
            display: Window / vsync / frame limiter surface (optional)
            mixer: Audio bus surface (optional)
            settings_path: Settings file; defaults to the user config dir
            auto_save: Save after every individual setting change
            load_on_ready: ready() loads from disk instead of applying current values
            editor_hint: ready() does nothing (tooling / editor context)
        """
        self.display = display
        self.mixer = mixer
        self.settings_path = settings_path or default_settings_path()

        self.auto_save = auto_save
        self.load_on_ready = load_on_ready
        self.editor_hint = editor_hint

        self.events = EventManager()
        self._binding = PlayerBinding()
        self._values: Dict[str, Any] = {f.name: f.default for f in FIELDS}

        self._appliers: Dict[str, Callable[[], None]] = {
            "vsync_enabled": self._apply_vsync,
            "max_fps": self._apply_max_fps,
            "fullscreen": self._apply_fullscreen,
            "resolution": self._apply_resolution,
            "master_volume": lambda: self._apply_volume(Audio.MASTER_BUS, self.master_volume),
            "music_volume": lambda: self._apply_volume(Audio.MUSIC_BUS, self.music_volume),
            "sfx_volume": lambda: self._apply_volume(Audio.SFX_BUS, self.sfx_volume),
            "mouse_sensitivity": self._apply_mouse_sensitivity,
            "invert_y_axis": self._apply_invert_y,
            "field_of_view": self._apply_field_of_view,
        }

    # ===========================================================
    # Public API
    # ===========================================================

    def get_setting(self, name: str) -> Any:
        """Return the current value of a setting by name."""
        if name not in FIELDS_BY_NAME:
            raise KeyError(f"Unknown setting: {name}")
        return self._values[name]

    def set_setting(self, name: str, value: Any) -> None:
        """
        Store, apply, optionally save, then announce one setting.

        Args:
            name: Setting name (e.g. "master_volume")
            value: New value; coerced to the setting's type and clamped

        Raises:
            KeyError: Unknown setting name
            ValueError: Value cannot be converted to the setting's type
        """
        self._assign(name, value)
        DebugLogger.state(f"{name} -> {self._values[name]!r}")
        self._apply(name)
        if self.auto_save:
            self.save()
        self._emit_changed(name)

    def as_dict(self) -> Dict[str, Any]:
        """Snapshot of every setting value."""
        return dict(self._values)

    def subscribe(self, callback: Callable[[SettingChangedEvent], None]) -> None:
        """Call callback(SettingChangedEvent) after every setting change."""
        self.events.subscribe(SettingChangedEvent, callback)

    def unsubscribe(self, callback: Callable[[SettingChangedEvent], None]) -> None:
        self.events.unsubscribe(SettingChangedEvent, callback)

    # ===========================================================
    # Player Reference
    # ===========================================================

    @property
    def player_reference(self):
        """The bound player, or None if unset or already garbage collected."""
        return self._binding.player

    @player_reference.setter
    def player_reference(self, player) -> None:
        self._binding = PlayerBinding.resolve(player)

    def refresh_player_binding(self) -> None:
        """Re-resolve player capabilities after the player's node tree changed."""
        self._binding = PlayerBinding.resolve(self._binding.player)

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def ready(self) -> None:
        """Startup hook: load from disk, or push current values to the engine."""
        if self.editor_hint:
            return
        if self.load_on_ready:
            self.load()
        else:
            self.apply_all()

    def apply_all(self) -> None:
        """Push every setting to the engine once, in declaration order."""
        for field in FIELDS:
            self._apply(field.name)

    def reset_to_defaults(self) -> None:
        """Restore defaults, apply them, and save once when auto_save is on."""
        previous = self.as_dict()
        for field in FIELDS:
            self._assign(field.name, field.default)

        self.apply_all()
        if self.auto_save:
            self.save()

        self._emit_changes_since(previous)
        self.events.dispatch(SettingsResetEvent())
        DebugLogger.system("Settings reset to defaults", category="settings")

    # ===========================================================
    # Persistence
    # ===========================================================

    def save(self) -> bool:
        """
        Write every persisted setting to settings_path.

        Returns:
            True on success, False if the file could not be written
        """
        try:
            write_settings_file(self.settings_path, self._to_sections())
        except OSError as e:
            DebugLogger.fail(f"Failed to save settings to {self.settings_path}: {e}",
                             category="settings")
            return False

        DebugLogger.trace(f"Saved settings to {self.settings_path}")
        self.events.dispatch(SettingsSavedEvent(self.settings_path))
        return True

    def load(self) -> bool:
        """
        Read settings from settings_path and apply them.

        Keys missing from the file keep their current value. A missing or
        unreadable file applies the current values and writes a fresh file.

        Returns:
            True if values were read from the file, False if defaults were used
        """
        try:
            parser = read_settings_file(self.settings_path)
        except SettingsFileError as e:
            DebugLogger.warn(f"{e} - using defaults", category="settings")
            self.apply_all()
            self.save()
            self.events.dispatch(SettingsLoadedEvent(self.settings_path, False))
            return False

        previous = self.as_dict()
        for name, value in self._from_parser(parser).items():
            self._assign(name, value)

        self.apply_all()
        self._emit_changes_since(previous)
        self.events.dispatch(SettingsLoadedEvent(self.settings_path, True))
        DebugLogger.system(f"Loaded settings from {self.settings_path}", category="settings")
        return True

    def _to_sections(self) -> Dict[str, Dict[str, Any]]:
        """Group values into the file's sections, splitting resolution in two."""
        sections: Dict[str, Dict[str, Any]] = {name: {} for name in Persistence.SECTIONS}
        for field in FIELDS:
            value = self._values[field.name]
            if field.name == "resolution":
                sections[field.section]["resolution_x"] = value[0]
                sections[field.section]["resolution_y"] = value[1]
            else:
                sections[field.section][field.name] = value
        return sections

    def _from_parser(self, parser: ConfigParser) -> Dict[str, Any]:
        """Read each field from the parser, falling back to current values."""
        loaded = {}
        for field in FIELDS:
            current = self._values[field.name]
            if field.name == "resolution":
                loaded[field.name] = (
                    read_value(parser, field.section, "resolution_x", int, current[0]),
                    read_value(parser, field.section, "resolution_y", int, current[1]),
                )
            else:
                loaded[field.name] = read_value(parser, field.section, field.name,
                                                field.kind, current)
        return loaded

    # ===========================================================
    # Internal: Store / Notify
    # ===========================================================

    def _assign(self, name: str, value: Any) -> None:
        """Coerce, clamp and store a value. No side effects beyond the field."""
        field = FIELDS_BY_NAME.get(name)
        if field is None:
            raise KeyError(f"Unknown setting: {name}")

        coerced = _COERCERS[field.kind](value)
        if field.domain is not None:
            low, high = field.domain
            clamped = min(max(coerced, low), high)
            if clamped != coerced:
                DebugLogger.warn(
                    f"{name}={coerced!r} outside [{low}, {high}] - clamped to {clamped!r}",
                    category="settings"
                )
            coerced = clamped

        self._values[name] = coerced

    def _emit_changed(self, name: str) -> None:
        self.events.dispatch(SettingChangedEvent(name, self._values[name]))

    def _emit_changes_since(self, previous: Dict[str, Any]) -> None:
        for field in FIELDS:
            if self._values[field.name] != previous[field.name]:
                self._emit_changed(field.name)

    # ===========================================================
    # Internal: Apply Routines
    # ===========================================================

    def _apply(self, name: str) -> None:
        self._appliers[name]()

    def _apply_vsync(self):
        if self.display is None:
            return
        mode = VSyncMode.ENABLED if self.vsync_enabled else VSyncMode.DISABLED
        self.display.set_vsync_mode(mode)

    def _apply_max_fps(self):
        if self.display is None:
            return
        self.display.set_max_fps(self.max_fps)

    def _apply_fullscreen(self):
        if self.display is None:
            return
        mode = WindowMode.FULLSCREEN if self.fullscreen else WindowMode.WINDOWED
        self.display.set_window_mode(mode)

    def _apply_resolution(self):
        if self.display is None or self.fullscreen:
            return
        width, height = self.resolution
        self.display.set_window_size((width, height))

        screen_w, screen_h = self.display.get_screen_size()
        self.display.set_window_position(((screen_w - width) // 2, (screen_h - height) // 2))

    def _apply_volume(self, bus_name: str, volume: float):
        if self.mixer is None:
            return
        bus = self.mixer.get_bus_index(bus_name)
        if bus < 0:
            DebugLogger.warn(f"Audio bus '{bus_name}' not found", category="audio")
            return

        if volume <= 0.0:
            self.mixer.set_bus_mute(bus, True)
        else:
            self.mixer.set_bus_mute(bus, False)
            self.mixer.set_bus_volume_db(bus, volume_to_db(volume))

    def _apply_mouse_sensitivity(self):
        target = self._binding.sensitivity
        if target is not None:
            target.set_mouse_sensitivity(self.mouse_sensitivity)

    def _apply_invert_y(self):
        target = self._binding.invert_target
        if target is not None:
            target.set_invert_y(self.invert_y_axis)

    def _apply_field_of_view(self):
        camera = self._binding.camera
        if camera is not None:
            camera.fov = self.field_of_view
