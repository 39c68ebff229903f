"""Things that live on the slope."""

from downhill.entities.entity import Entity
from downhill.entities.obstacles import Obstacle, ObstacleKind, ObstacleManager
from downhill.entities.skier import Direction, Skier, SkierState
from downhill.entities.rhino import Rhino, RhinoState

__all__ = [
    "Entity",
    "Obstacle",
    "ObstacleKind",
    "ObstacleManager",
    "Direction",
    "Skier",
    "SkierState",
    "Rhino",
    "RhinoState",
]
