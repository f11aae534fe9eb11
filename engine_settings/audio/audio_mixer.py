"""
audio_mixer.py
--------------
Named mixer buses (Master, Music, SFX) on top of pygame.mixer.

Each bus has a decibel gain and a mute flag. The effective volume of a
sound is master gain * bus gain, pushed to pygame whenever a bus changes.
"""

from dataclasses import dataclass

import pygame

from engine_settings.core.debug.debug_logger import DebugLogger
from engine_settings.core.runtime.game_settings import Audio


def db_to_linear(volume_db: float) -> float:
    if volume_db <= Audio.SILENCE_DB:
        return 0.0
    return min(10.0 ** (volume_db / 20.0), 1.0)


@dataclass
class Bus:
    name: str
    volume_db: float = 0.0
    muted: bool = False

    @property
    def gain(self) -> float:
        return 0.0 if self.muted else db_to_linear(self.volume_db)


class AudioMixer:
    """Implements the audio surface consumed by SettingsStore."""

    def __init__(self, buses=Audio.BUSES):
        """
        Args:
            buses: Bus names in index order; the first one is the master bus
        """
        self.buses = [Bus(name) for name in buses]
        self.sfx = {}
        self.music_tracks = {}
        self.current_music_id = None

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            self.enabled = True
        except pygame.error as e:
            DebugLogger.warn(f"Audio device unavailable: {e}", category="audio")
            self.enabled = False

    # ===========================================================
    # Bus Control
    # ===========================================================

    def get_bus_index(self, name: str) -> int:
        """Index of the bus called name, or -1."""
        for index, bus in enumerate(self.buses):
            if bus.name == name:
                return index
        return -1

    def set_bus_mute(self, index: int, muted: bool):
        bus = self._bus(index)
        if bus is None or bus.muted == muted:
            return
        bus.muted = muted
        DebugLogger.state(f"Bus '{bus.name}' {'muted' if muted else 'unmuted'}", category="audio")
        self._refresh_volumes()

    def set_bus_volume_db(self, index: int, volume_db: float):
        bus = self._bus(index)
        if bus is None:
            return
        bus.volume_db = float(volume_db)
        DebugLogger.trace(f"Bus '{bus.name}' → {bus.volume_db:.1f} dB", category="audio")
        self._refresh_volumes()

    def get_bus_volume_db(self, index: int) -> float:
        return self.buses[index].volume_db

    def is_bus_muted(self, index: int) -> bool:
        return self.buses[index].muted

    def effective_volume(self, bus_name: str) -> float:
        """Linear volume a sound on bus_name plays at, after the master bus."""
        master = self.buses[0].gain
        index = self.get_bus_index(bus_name)
        if index <= 0:
            return master
        return master * self.buses[index].gain

    # ===========================================================
    # Playback
    # ===========================================================

    def load_sfx(self, name: str, path: str):
        if not self.enabled:
            return
        sound = self.sfx[name] = pygame.mixer.Sound(path)
        sound.set_volume(self.effective_volume(Audio.SFX_BUS))

    def play_sfx(self, name: str):
        sound = self.sfx.get(name)
        if sound is None:
            DebugLogger.warn(f"Unknown sound effect '{name}'", category="audio")
            return
        sound.play()

    def load_music(self, name: str, path: str):
        self.music_tracks[name] = path

    def play_music(self, name: str, loops: int = -1):
        if not self.enabled or self.current_music_id == name:
            return
        path = self.music_tracks.get(name)
        if path is None:
            DebugLogger.warn(f"Unknown music track '{name}'", category="audio")
            return

        pygame.mixer.music.load(path)
        pygame.mixer.music.set_volume(self.effective_volume(Audio.MUSIC_BUS))
        pygame.mixer.music.play(loops=loops)
        self.current_music_id = name

    def stop_music(self):
        if self.enabled:
            pygame.mixer.music.stop()
        self.current_music_id = None

    # ===========================================================
    # Internal
    # ===========================================================

    def _bus(self, index: int):
        if 0 <= index < len(self.buses):
            return self.buses[index]
        DebugLogger.warn(f"Invalid bus index {index}", category="audio")
        return None

    def _refresh_volumes(self):
        if not self.enabled:
            return
        sfx_volume = self.effective_volume(Audio.SFX_BUS)
        for sound in self.sfx.values():
            sound.set_volume(sfx_volume)
        pygame.mixer.music.set_volume(self.effective_volume(Audio.MUSIC_BUS))
