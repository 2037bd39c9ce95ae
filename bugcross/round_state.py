import logging
from collections import namedtuple

import numpy as np

from bugcross.constants import COLLECTIBLE_COUNT, OBSTACLE_COUNT
from bugcross.entities import Avatar, Collectible, FieldView, Obstacle
from bugcross.events import SoundEvent

logger = logging.getLogger(__name__)

# What a renderer needs to draw one entity
Drawable = namedtuple("Drawable", ["kind", "row", "col", "sprite"])


class RoundState:
    """
    Owns every entity of one game session and advances them once per frame.

    The round is either playing or over (`paused`). Once over, nothing moves
    and input is ignored until `reset()` is called.
    """

    def __init__(self, rng=None, obstacles=OBSTACLE_COUNT, collectibles=COLLECTIBLE_COUNT):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.paused = False
        self.final_score = None
        self.events = []

        self.avatar = Avatar(emit=self.events.append)
        self.obstacles = [Obstacle(self.rng) for _ in range(obstacles)]

        # Collectibles see the list they live in through the view
        self.collectibles = []
        view = FieldView(self.avatar, self.collectibles)
        for _ in range(collectibles):
            self.collectibles.append(Collectible(self.rng, view))

    @property
    def score(self):
        return self.avatar.score

    @property
    def lives(self):
        return self.avatar.lives

    def reseed(self, rng):
        self.rng = rng
        for entity in self.obstacles + self.collectibles:
            entity.rng = rng

    def reset(self):
        self.paused = False
        self.final_score = None
        self.events.clear()
        self.avatar.reset()
        for obstacle in self.obstacles:
            obstacle.reset()
        for collectible in self.collectibles:
            collectible.reset()
        logger.debug("round reset")

    def handle_input(self, command):
        if self.paused:
            return
        self.avatar.handle_input(command)

    def update(self, dt):
        if self.paused:
            return

        # --- Motion ---
        self.avatar.update(dt)
        for obstacle in self.obstacles:
            obstacle.update(dt)
        for collectible in self.collectibles:
            collectible.update(dt)

        # --- Collisions ---
        avatar = self.avatar
        for obstacle in self.obstacles:
            if obstacle.occupies(avatar.col, avatar.row):
                logger.debug("hit by obstacle in row %d", obstacle.row)
                if avatar.lose_life():
                    self._game_over()
                    return

        # --- Pickups ---
        for collectible in self.collectibles:
            if collectible.occupies(avatar.col, avatar.row):
                avatar.collect_points(collectible.points, True)
                collectible.reset()

    def _game_over(self):
        self.paused = True
        self.final_score = self.avatar.score
        self.events.append(SoundEvent.GAME_OVER)
        logger.info("game over, final score %d", self.final_score)

    def drain_events(self):
        events = list(self.events)
        self.events.clear()
        return events

    def drawables(self):
        """Everything currently on screen, back to front."""
        items = [
            Drawable(c.kind, c.row, c.col, c.sprite)
            for c in self.collectibles
            if c.visible
        ]
        items.extend(Drawable(o.kind, o.row, o.col, o.sprite) for o in self.obstacles)
        items.append(Drawable(self.avatar.kind, self.avatar.row, self.avatar.col, self.avatar.sprite))
        return items
