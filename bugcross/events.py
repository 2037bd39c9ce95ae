from enum import Enum


class SoundEvent(Enum):
    """Named signals for whatever plays the sounds. Values double as sound keys."""

    MOVE = "move"
    BONUS = "bonus"
    WATER = "water"
    LIFE_LOST = "life-lost"
    GAME_OVER = "game-over"
    VARIANT = "variant"
