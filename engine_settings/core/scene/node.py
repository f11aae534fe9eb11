"""
node.py
-------
Minimal scene-tree types the settings store inspects when it looks for
the player's camera: a generic Node, a Camera3D and a CharacterBody3D.
"""

from typing import List, Optional


class Node:
    """Named tree node with ordered children."""

    def __init__(self, name: str = ""):
        self.name = name or self.__class__.__name__
        self.parent: Optional["Node"] = None
        self._children: List["Node"] = []

    def add_child(self, child: "Node") -> "Node":
        """
        Attach a child node, detaching it from any previous parent.

        Returns:
            The attached child, for chaining
        """
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.append(child)
        return child

    def remove_child(self, child: "Node") -> None:
        if child in self._children:
            self._children.remove(child)
            child.parent = None

    def get_children(self) -> List["Node"]:
        """Direct children, in insertion order."""
        return list(self._children)

    def find_child(self, name: str) -> Optional["Node"]:
        for child in self._children:
            if child.name == name:
                return child
        return None

    def __repr__(self):
        return f"<{self.__class__.__name__} '{self.name}'>"


class Camera3D(Node):
    """Perspective camera. fov is the vertical field of view in degrees."""

    def __init__(self, name: str = "", fov: float = 75.0):
        super().__init__(name)
        self.fov = fov


class CharacterBody3D(Node):
    """Physics body node; player rigs often nest their camera under one."""
    pass
