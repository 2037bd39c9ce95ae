import logging
import math
from enum import Enum

from bugcross.constants import (
    AVATAR_SPRITES,
    COLLECTIBLE_HIDDEN_RANGE,
    COLLECTIBLE_POINTS,
    COLLECTIBLE_SPRITES,
    COLLECTIBLE_VISIBLE_RANGE,
    COLLECTIBLE_WEIGHTS,
    COLS,
    CYCLE_SPRITE,
    HEAD_OFFSET,
    LANE_ROWS,
    MAX_LIVES,
    MOVE_DOWN,
    MOVE_LEFT,
    MOVE_RIGHT,
    MOVE_UP,
    OBSTACLE_SPEED_RANGE,
    OBSTACLE_SPRITE,
    OBSTACLE_START_COL,
    PLACEMENT_ATTEMPTS,
    PLAYER_COL,
    PLAYER_ROW,
    ROWS,
    TAIL_OFFSET,
    WATER_BONUS,
    WATER_ROW,
)
from bugcross.events import SoundEvent

logger = logging.getLogger(__name__)


class EntityKind(Enum):
    OBSTACLE = "obstacle"
    AVATAR = "avatar"
    COLLECTIBLE = "collectible"


class Entity:
    """Something that sits on the grid and gets one update per frame."""

    kind = None

    def __init__(self, sprite):
        self.sprite = sprite
        self.row = 0
        self.col = 0

    def update(self, dt):
        pass

    def occupies(self, col, row):
        return self.col == col and self.row == row


class Obstacle(Entity):
    """A bug crawling left to right along one stone lane."""

    kind = EntityKind.OBSTACLE

    def __init__(self, rng):
        super().__init__(OBSTACLE_SPRITE)
        self.rng = rng
        self.speed = 0.0
        self.reset()

    def reset(self):
        self.row = int(self.rng.choice(LANE_ROWS))
        self.col = float(OBSTACLE_START_COL)
        self.speed = float(self.rng.uniform(*OBSTACLE_SPEED_RANGE))

    def update(self, dt):
        self.col += self.speed * dt

        # Crawled off the right edge: come back on a new lane
        if self.col > COLS:
            self.reset()

    def footprint(self):
        return math.floor(self.col + TAIL_OFFSET), math.floor(self.col + HEAD_OFFSET)

    def occupies(self, col, row):
        tail, head = self.footprint()
        return row == self.row and (col == tail or col == head)


class Avatar(Entity):
    """The player. Owns position, score, lives and the sprite choice."""

    kind = EntityKind.AVATAR

    STEPS = {
        MOVE_UP: (-1, 0),
        MOVE_DOWN: (1, 0),
        MOVE_LEFT: (0, -1),
        MOVE_RIGHT: (0, 1),
    }

    def __init__(self, emit=None):
        super().__init__(AVATAR_SPRITES[0])
        self.emit = emit if emit is not None else _discard
        self.variant = 0
        self.score = 0
        self.lives = MAX_LIVES
        self.reset()

    def reset_position(self):
        self.row = PLAYER_ROW
        self.col = PLAYER_COL

    def reset(self):
        self.lives = MAX_LIVES
        self.score = 0
        self.reset_position()

    def reached_water(self):
        return self.row <= WATER_ROW

    def update(self, dt):
        if self.reached_water():
            self.collect_points(WATER_BONUS, False)
            self.reset_position()

    def handle_input(self, command):
        if command == CYCLE_SPRITE:
            self.cycle_variant()
            return

        step = self.STEPS.get(command)
        if step is None:
            return

        self.row = min(max(self.row + step[0], 0), ROWS - 1)
        self.col = min(max(self.col + step[1], 0), COLS - 1)
        self.emit(SoundEvent.MOVE)

    def cycle_variant(self):
        self.variant = (self.variant + 1) % len(AVATAR_SPRITES)
        self.sprite = AVATAR_SPRITES[self.variant]
        self.emit(SoundEvent.VARIANT)

    def lose_life(self):
        """Send the avatar home one life poorer. Returns True when none are left."""
        self.lives = max(self.lives - 1, 0)
        self.reset_position()
        self.emit(SoundEvent.LIFE_LOST)
        return self.lives == 0

    def collect_points(self, amount, bonus_item):
        self.score += amount
        self.emit(SoundEvent.BONUS if bonus_item else SoundEvent.WATER)


class FieldView:
    """Read-only look at the avatar and collectibles, used for placement."""

    def __init__(self, avatar, collectibles):
        self._avatar = avatar
        self._collectibles = collectibles

    def is_free(self, col, row, ignore=None):
        if self._avatar.occupies(col, row):
            return False
        return not any(
            other.occupies(col, row)
            for other in self._collectibles
            if other is not ignore
        )


class Collectible(Entity):
    """
    A gem that alternates between hidden and visible on random timers.

    While hidden its position is only a reservation for the next showing and
    it occupies nothing. `placed` is False when the last placement ran out of
    attempts; the next expiry of the hidden timer retries it.
    """

    kind = EntityKind.COLLECTIBLE

    def __init__(self, rng, view):
        super().__init__(COLLECTIBLE_SPRITES[COLLECTIBLE_POINTS[0]])
        self.rng = rng
        self.view = view
        self.visible = False
        self.placed = False
        self.timer = 0.0
        self.points = COLLECTIBLE_POINTS[0]
        self.reset()

    def reset(self):
        self._hide()
        self.place()

    def _hide(self):
        self.visible = False
        self.timer = float(self.rng.uniform(*COLLECTIBLE_HIDDEN_RANGE))
        self.points = int(self.rng.choice(COLLECTIBLE_POINTS, p=COLLECTIBLE_WEIGHTS))
        self.sprite = COLLECTIBLE_SPRITES[self.points]

    def show(self):
        self.visible = True
        self.timer = float(self.rng.uniform(*COLLECTIBLE_VISIBLE_RANGE))

    def update(self, dt):
        self.timer -= dt
        if self.timer > 0:
            return

        if self.visible:
            self.reset()
        elif self.placed or self.place():
            self.show()

    def place(self):
        for _ in range(PLACEMENT_ATTEMPTS):
            row = int(self.rng.choice(LANE_ROWS))
            col = int(self.rng.integers(0, COLS))
            if self.view.is_free(col, row, ignore=self):
                self.row = row
                self.col = col
                self.placed = True
                return True

        # No free cell found; stay hidden and try again when the timer runs out
        logger.debug("placement deferred after %d attempts", PLACEMENT_ATTEMPTS)
        self._hide()
        self.placed = False
        return False

    def occupies(self, col, row):
        return self.visible and super().occupies(col, row)


def _discard(event):
    pass
