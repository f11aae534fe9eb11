"""
Scene-tree exports.
"""

from engine_settings.core.scene.node import Node, Camera3D, CharacterBody3D

__all__ = [
    'Node',
    'Camera3D',
    'CharacterBody3D',
]
