from .animation import AnimationPhase, AnimationState, AnimationTiming
from .models import Entity, EntityKind, LogOrientation
from .registry import EntityRegistry

__all__ = [
    "AnimationPhase",
    "AnimationState",
    "AnimationTiming",
    "Entity",
    "EntityKind",
    "EntityRegistry",
    "LogOrientation",
]
