"""Animation engine and session types."""

from .engine import AnimationEngine
from .session import AnimationMode, AnimationSession

__all__ = [
    "AnimationEngine",
    "AnimationMode",
    "AnimationSession",
]
