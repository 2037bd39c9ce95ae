from bugcross.entities import Avatar, Collectible, Entity, EntityKind, FieldView, Obstacle
from bugcross.events import SoundEvent
from bugcross.round_state import Drawable, RoundState

__all__ = [
    "Avatar",
    "Collectible",
    "Drawable",
    "Entity",
    "EntityKind",
    "FieldView",
    "Obstacle",
    "RoundState",
    "SoundEvent",
]
