"""Navigation tree for the generated site."""

from .tree import Folder, NavTree

__all__ = ["Folder", "NavTree"]
