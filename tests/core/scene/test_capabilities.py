"""
test_capabilities.py
--------------------
Tests for player capability detection, camera resolution and the
scene-tree types they walk.
"""

from engine_settings.core.scene.node import Camera3D, CharacterBody3D, Node
from engine_settings.core.services.capabilities import (
    CameraProvider, InvertYReceiver, PlayerBinding, SensitivityReceiver,
    find_camera, find_capability_target
)


class Sensitive:
    """Plain object (not a Node) with the sensitivity capability."""

    def set_mouse_sensitivity(self, value):
        self.value = value


class Inverter(Node):
    def set_invert_y(self, inverted):
        self.inverted = inverted


class CameraOwner(Node):
    def __init__(self, camera):
        super().__init__("CameraOwner")
        self._camera = camera

    def get_camera(self):
        return self._camera


# ===========================================================
# Node
# ===========================================================

def test_add_child_reparents():
    a, b = Node("A"), Node("B")
    child = a.add_child(Node("Child"))

    b.add_child(child)

    assert a.get_children() == []
    assert b.get_children() == [child]
    assert child.parent is b


def test_find_child_by_name():
    root = Node("Root")
    cam = root.add_child(Camera3D("Cam", fov=90))
    assert root.find_child("Cam") is cam
    assert root.find_child("Missing") is None


def test_default_name_is_class_name():
    assert CharacterBody3D().name == "CharacterBody3D"


# ===========================================================
# Capability Detection
# ===========================================================

def test_protocols_match_by_method_presence():
    assert isinstance(Sensitive(), SensitivityReceiver)
    assert not isinstance(Node(), SensitivityReceiver)
    assert isinstance(Inverter(), InvertYReceiver)
    assert isinstance(CameraOwner(None), CameraProvider)


def test_target_is_player_itself_when_capable():
    player = Inverter("Player")
    player.add_child(Inverter("Child"))
    assert find_capability_target(player, InvertYReceiver) is player


def test_target_is_first_capable_child():
    player = Node("Player")
    player.add_child(Node("Mesh"))
    first = player.add_child(Inverter("First"))
    player.add_child(Inverter("Second"))

    assert find_capability_target(player, InvertYReceiver) is first


def test_target_does_not_search_grandchildren():
    player = Node("Player")
    body = player.add_child(CharacterBody3D())
    body.add_child(Inverter())

    assert find_capability_target(player, InvertYReceiver) is None


def test_target_for_player_without_children():
    assert find_capability_target(object(), SensitivityReceiver) is None
    assert find_capability_target(None, SensitivityReceiver) is None


# ===========================================================
# Camera Resolution
# ===========================================================

def test_camera_accessor_wins():
    own = Camera3D("Own")
    player = CameraOwner(own)
    player.add_child(Camera3D("Child"))

    assert find_camera(player) is own


def test_camera_accessor_returning_none_is_final():
    player = CameraOwner(None)
    player.add_child(Camera3D("Child"))
    assert find_camera(player) is None


def test_direct_camera_child():
    player = Node("Player")
    player.add_child(Node("Mesh"))
    cam = player.add_child(Camera3D())
    assert find_camera(player) is cam


def test_camera_under_character_body():
    player = Node("Player")
    body = player.add_child(CharacterBody3D())
    cam = body.add_child(Camera3D())
    assert find_camera(player) is cam


def test_camera_under_plain_node_is_not_found():
    player = Node("Player")
    pivot = player.add_child(Node("Pivot"))
    pivot.add_child(Camera3D())
    assert find_camera(player) is None


# ===========================================================
# Player Binding
# ===========================================================

def test_binding_resolves_all_targets():
    player = Node("Player")
    inverter = player.add_child(Inverter())
    body = player.add_child(CharacterBody3D())
    cam = body.add_child(Camera3D())

    binding = PlayerBinding.resolve(player)

    assert binding.player is player
    assert binding.invert_target is inverter
    assert binding.sensitivity is None
    assert binding.camera is cam


def test_empty_binding():
    binding = PlayerBinding.resolve(None)
    assert binding.player is None
    assert binding.sensitivity is None
    assert binding.invert_target is None
    assert binding.camera is None
