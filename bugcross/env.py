import gymnasium as gym
from gymnasium.spaces import MultiDiscrete
import numpy as np
import pygame
import pygame.gfxdraw
import os

from bugcross.constants import (
    COL_WIDTH,
    COLS,
    CYCLE_SPRITE,
    LANE_ROWS,
    MAX_LIVES,
    MOVE_DOWN,
    MOVE_LEFT,
    MOVE_RIGHT,
    MOVE_UP,
    ROW_HEIGHT,
    ROWS,
    WATER_ROW,
)
from bugcross.entities import EntityKind
from bugcross.round_state import RoundState

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


class GameEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"]}

    user_guide = (
        "Controls: Arrow keys hop one square. Space changes your character. "
        "Shift starts a new round after game over."
    )

    game_description = (
        "Hop across the stone lanes to the water without getting squashed by bugs. "
        "Grab gems while they last for bonus points."
    )

    # Frames auto-advance for real-time gameplay.
    auto_advance = True

    # --- Constants ---
    FPS = 30
    MAX_STEPS = 9000
    HUD_HEIGHT = 40
    SCREEN_WIDTH = COLS * COL_WIDTH
    SCREEN_HEIGHT = HUD_HEIGHT + ROWS * ROW_HEIGHT + 20

    MOVEMENT_COMMANDS = {1: MOVE_UP, 2: MOVE_DOWN, 3: MOVE_LEFT, 4: MOVE_RIGHT}

    # --- Colors ---
    COLOR_BG = (20, 25, 40)
    COLOR_WATER = (60, 130, 220)
    COLOR_WATER_LIGHT = (110, 170, 240)
    COLOR_STONE = (120, 120, 130)
    COLOR_STONE_EDGE = (95, 95, 105)
    COLOR_GRASS = (90, 180, 80)
    COLOR_GRASS_DARK = (70, 150, 60)
    COLOR_BUG = (220, 50, 50)
    COLOR_BUG_HEAD = (90, 20, 20)
    COLOR_TEXT = (240, 240, 255)
    COLOR_LIFE = (255, 90, 120)
    COLOR_OVERLAY = (0, 0, 0, 170)

    SPRITE_COLORS = {
        "char-boy": (80, 160, 255),
        "char-cat-girl": (255, 170, 60),
        "char-horn-girl": (170, 110, 255),
        "char-pink-girl": (255, 120, 200),
        "char-princess-girl": (255, 220, 80),
        "gem-blue": (70, 120, 255),
        "gem-green": (60, 220, 120),
        "gem-orange": (255, 150, 40),
    }

    def __init__(self, render_mode="rgb_array"):
        super().__init__()
        self.render_mode = render_mode

        self.observation_space = gym.spaces.Box(
            low=0, high=255, shape=(self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3), dtype=np.uint8
        )
        self.action_space = MultiDiscrete([5, 2, 2])

        # Pygame setup
        pygame.init()
        pygame.font.init()
        self.screen = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT))
        self.clock = pygame.time.Clock()
        self.font_small = pygame.font.SysFont("monospace", 18, bold=True)
        self.font_large = pygame.font.SysFont("monospace", 44, bold=True)

        # Game state
        self.round = RoundState(rng=self.np_random)
        self.steps = 0
        self.last_events = []
        self.previous_action = [0, 0, 0]

        self.reset()

        # Validate implementation after full initialization
        self.validate_implementation()

    def reset(self, seed=None, options=None):
        super().reset(seed=seed)

        self.round.reseed(self.np_random)
        self.round.reset()

        self.steps = 0
        self.last_events = []
        self.previous_action = [0, 0, 0]

        return self._get_observation(), self._get_info()

    def step(self, action):
        movement, space_held, shift_held = int(action[0]), action[1] == 1, action[2] == 1
        prev_movement, prev_space_held, prev_shift_held = (
            self.previous_action[0], self.previous_action[1] == 1, self.previous_action[2] == 1
        )
        self.previous_action = [movement, int(space_held), int(shift_held)]

        movement_pressed = movement != 0 and movement != prev_movement
        space_pressed = space_held and not prev_space_held
        shift_pressed = shift_held and not prev_shift_held

        if self.round.paused:
            # Only a new-round request gets through while the game is over
            if shift_pressed:
                self.round.reset()
                self.steps = 0
                self.last_events = []
                return self._get_observation(), 0.0, False, False, self._get_info()
            return self._get_observation(), 0.0, True, False, self._get_info()

        # --- Game Logic ---
        self.steps += 1
        score_before = self.round.score
        lives_before = self.round.lives

        if movement_pressed:
            self.round.handle_input(self.MOVEMENT_COMMANDS[movement])
        if space_pressed:
            self.round.handle_input(CYCLE_SPRITE)

        self.round.update(1.0 / self.FPS)
        self.last_events = [event.value for event in self.round.drain_events()]

        reward = (self.round.score - score_before) / 100.0
        reward -= lives_before - self.round.lives
        if self.round.paused:
            reward -= 5.0

        terminated = self.round.paused or self.steps >= self.MAX_STEPS

        return (
            self._get_observation(),
            reward,
            terminated,
            False,
            self._get_info()
        )

    def _cell_origin(self, col, row):
        return col * COL_WIDTH, self.HUD_HEIGHT + row * ROW_HEIGHT

    def _get_observation(self):
        self.screen.fill(self.COLOR_BG)

        self._render_lanes()
        self._render_game()
        self._render_ui()

        arr = pygame.surfarray.array3d(self.screen)
        return np.transpose(arr, (1, 0, 2)).astype(np.uint8)

    def _render_lanes(self):
        for row in range(ROWS):
            x, y = self._cell_origin(0, row)
            rect = pygame.Rect(x, y, self.SCREEN_WIDTH, ROW_HEIGHT)
            if row == WATER_ROW:
                pygame.draw.rect(self.screen, self.COLOR_WATER, rect)
                for i in range(0, self.SCREEN_WIDTH, 40):
                    wave_y = y + ROW_HEIGHT // 2 + (6 if (i // 40 + self.steps // 10) % 2 else -6)
                    pygame.draw.line(self.screen, self.COLOR_WATER_LIGHT, (i, wave_y), (i + 20, wave_y), 2)
            elif row in LANE_ROWS:
                pygame.draw.rect(self.screen, self.COLOR_STONE, rect)
                pygame.draw.line(self.screen, self.COLOR_STONE_EDGE, rect.topleft, rect.topright, 2)
            else:
                color = self.COLOR_GRASS if row % 2 else self.COLOR_GRASS_DARK
                pygame.draw.rect(self.screen, color, rect)

    def _render_game(self):
        for item in self.round.drawables():
            x, y = self._cell_origin(item.col, item.row)
            cx = int(x + COL_WIDTH / 2)
            cy = int(y + ROW_HEIGHT / 2)
            if item.kind is EntityKind.COLLECTIBLE:
                self._render_gem(cx, cy, self.SPRITE_COLORS[item.sprite])
            elif item.kind is EntityKind.OBSTACLE:
                self._render_bug(cx, cy)
            else:
                self._render_avatar(cx, cy, self.SPRITE_COLORS[item.sprite])

    def _render_gem(self, cx, cy, color):
        points = [(cx, cy - 22), (cx + 16, cy), (cx, cy + 22), (cx - 16, cy)]
        pygame.gfxdraw.aapolygon(self.screen, points, color)
        pygame.gfxdraw.filled_polygon(self.screen, points, color)
        pygame.draw.line(self.screen, (255, 255, 255), (cx - 6, cy - 8), (cx, cy - 16), 2)

    def _render_bug(self, cx, cy):
        body = pygame.Rect(cx - 40, cy - 18, 70, 36)
        pygame.draw.ellipse(self.screen, self.COLOR_BUG, body)
        pygame.gfxdraw.filled_circle(self.screen, cx + 32, cy, 14, self.COLOR_BUG_HEAD)
        pygame.gfxdraw.filled_circle(self.screen, cx + 37, cy - 5, 3, (255, 255, 255))
        pygame.gfxdraw.filled_circle(self.screen, cx + 37, cy + 5, 3, (255, 255, 255))

    def _render_avatar(self, cx, cy, color):
        body = pygame.Rect(cx - 14, cy - 4, 28, 30)
        pygame.draw.rect(self.screen, color, body, border_radius=6)
        pygame.gfxdraw.aacircle(self.screen, cx, cy - 16, 14, color)
        pygame.gfxdraw.filled_circle(self.screen, cx, cy - 16, 14, color)
        pygame.gfxdraw.filled_circle(self.screen, cx - 5, cy - 18, 2, (20, 20, 20))
        pygame.gfxdraw.filled_circle(self.screen, cx + 5, cy - 18, 2, (20, 20, 20))

    def _render_ui(self):
        # Score
        score_text = self.font_small.render(f"SCORE: {self.round.score}", True, self.COLOR_TEXT)
        self.screen.blit(score_text, (10, 10))

        # Lives
        for i in range(MAX_LIVES):
            px = self.SCREEN_WIDTH - 20 - (i * 25)
            py = 20
            if i < self.round.lives:
                pygame.gfxdraw.filled_circle(self.screen, px, py, 8, self.COLOR_LIFE)
            else:
                pygame.gfxdraw.aacircle(self.screen, px, py, 8, self.COLOR_LIFE)

        # Game Over overlay
        if self.round.paused:
            overlay = pygame.Surface((self.SCREEN_WIDTH, self.SCREEN_HEIGHT), pygame.SRCALPHA)
            overlay.fill(self.COLOR_OVERLAY)
            self.screen.blit(overlay, (0, 0))

            end_text = self.font_large.render("GAME OVER", True, (255, 100, 100))
            text_rect = end_text.get_rect(center=(self.SCREEN_WIDTH / 2, self.SCREEN_HEIGHT / 2 - 30))
            self.screen.blit(end_text, text_rect)

            final_text = self.font_small.render(f"FINAL SCORE: {self.round.final_score}", True, self.COLOR_TEXT)
            final_rect = final_text.get_rect(center=(self.SCREEN_WIDTH / 2, self.SCREEN_HEIGHT / 2 + 20))
            self.screen.blit(final_text, final_rect)

            hint_text = self.font_small.render("SHIFT / R TO PLAY AGAIN", True, self.COLOR_TEXT)
            hint_rect = hint_text.get_rect(center=(self.SCREEN_WIDTH / 2, self.SCREEN_HEIGHT / 2 + 50))
            self.screen.blit(hint_text, hint_rect)

    def _get_info(self):
        return {
            "score": self.round.score,
            "lives": self.round.lives,
            "steps": self.steps,
            "game_over": self.round.paused,
            "final_score": self.round.final_score,
            "events": list(self.last_events),
        }

    def close(self):
        pygame.quit()

    def validate_implementation(self):
        '''
        Call this at the end of __init__ to verify implementation:
        '''
        # Test action space
        assert self.action_space.shape == (3,)
        assert self.action_space.nvec.tolist() == [5, 2, 2]

        # Test observation space
        test_obs = self._get_observation()
        assert test_obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert test_obs.dtype == np.uint8

        # Test reset
        obs, info = self.reset()
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(info, dict)

        # Test step
        test_action = self.action_space.sample()
        obs, reward, term, trunc, info = self.step(test_action)
        assert obs.shape == (self.SCREEN_HEIGHT, self.SCREEN_WIDTH, 3)
        assert isinstance(reward, (int, float))
        assert isinstance(term, bool)
        assert trunc == False
        assert isinstance(info, dict)

        # Leave the env freshly reset
        self.reset()

        print("✓ Implementation validated successfully")


if __name__ == '__main__':
    # Play the game directly with the keyboard
    env = GameEnv()
    obs, info = env.reset()

    pygame.display.set_caption("Bug Crossing")
    screen = pygame.display.set_mode((env.SCREEN_WIDTH, env.SCREEN_HEIGHT))

    terminated = False
    total_reward = 0

    running = True
    while running:
        # --- Human Controls ---
        movement = 0 # No-op
        space_held = 0
        shift_held = 0

        keys = pygame.key.get_pressed()
        if keys[pygame.K_UP]: movement = 1
        elif keys[pygame.K_DOWN]: movement = 2
        elif keys[pygame.K_LEFT]: movement = 3
        elif keys[pygame.K_RIGHT]: movement = 4

        if keys[pygame.K_SPACE]: space_held = 1
        if keys[pygame.K_LSHIFT] or keys[pygame.K_RSHIFT]: shift_held = 1

        action = [movement, space_held, shift_held]

        # --- Environment Step ---
        was_over = terminated
        obs, reward, terminated, truncated, info = env.step(action)
        total_reward += reward
        if terminated and not was_over:
            print(f"Game Over! Final Score: {info['final_score']}, Total Reward: {total_reward:.2f}")
        if was_over and not terminated:
            total_reward = 0

        # --- Pygame Event Handling ---
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                if event.key == pygame.K_r: # Press 'R' to reset
                    obs, info = env.reset()
                    terminated = False
                    total_reward = 0
                    print("--- Game Reset ---")

        # --- Rendering ---
        surf = pygame.surfarray.make_surface(np.transpose(obs, (1, 0, 2)))
        screen.blit(surf, (0, 0))
        pygame.display.flip()

        env.clock.tick(env.FPS)

    env.close()
