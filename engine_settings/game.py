import pygame

from engine_settings.audio.audio_mixer import AudioMixer
from engine_settings.core.debug.debug_logger import DebugLogger
from engine_settings.core.scene.node import Camera3D, CharacterBody3D, Node
from engine_settings.core.services.display_manager import DisplayManager
from engine_settings.core.services.settings_store import SettingsStore


class PlayerController(Node):
    """Mouse-look player rig: body with a camera child."""

    def __init__(self, name="Player"):
        super().__init__(name)
        self.mouse_sensitivity = 1.0
        self.invert_y = False
        self.yaw = 0.0
        self.pitch = 0.0

        self.body = self.add_child(CharacterBody3D("Body"))
        self.camera = self.body.add_child(Camera3D("Camera"))

    def set_mouse_sensitivity(self, value: float):
        self.mouse_sensitivity = value

    def set_invert_y(self, inverted: bool):
        self.invert_y = inverted

    def look(self, dx: float, dy: float):
        sign = 1.0 if self.invert_y else -1.0
        self.yaw += dx * self.mouse_sensitivity
        self.pitch = max(-89.0, min(89.0, self.pitch + sign * dy * self.mouse_sensitivity))


class Game:
    def __init__(self, settings_path=None):
        pygame.init()
        self.display = DisplayManager()
        self.mixer = AudioMixer()
        self.settings = SettingsStore(self.display, self.mixer, settings_path=settings_path)
        self.running = True

        self.player = PlayerController()
        self.settings.player_reference = self.player
        self.settings.ready()
        self.display.open()
        DebugLogger.init_entry("SettingsStore")

    def run(self):
        while self.running:
            self._handle_events()
            self._draw()
            self.display.tick()

        self.display.close()
        pygame.quit()

    def _handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEMOTION:
                self.player.look(*event.rel)
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                self.settings.fullscreen = not self.settings.fullscreen

    def _draw(self):
        self.display.window.fill((10, 10, 40))
        pygame.display.flip()


def main():
    Game().run()


if __name__ == "__main__":
    main()
