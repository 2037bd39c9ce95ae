import pytest

from bugcross.constants import PLAYER_ROW
from bugcross.env import GameEnv
from bugcross.policy import policy


@pytest.fixture
def env():
    env = GameEnv()
    env.reset(seed=0)
    yield env
    env.close()


def test_policy_hops_up_from_home(env):
    assert policy(env) == [1, 0, 0]


def test_policy_releases_repeated_move(env):
    env.step([1, 0, 0])
    assert env.round.avatar.row == PLAYER_ROW - 1
    action = policy(env)
    assert action[0] != 1


def test_policy_waits_when_lane_above_is_blocked(env):
    for obstacle in env.round.obstacles:
        obstacle.col = -10.0
    env.round.avatar.row = 4
    blocker = env.round.obstacles[0]
    blocker.row, blocker.col, blocker.speed = 3, 2.0, 0.0

    assert policy(env) == [0, 0, 0]


def test_policy_requests_new_round_after_game_over(env):
    env.round.avatar.lives = 1
    obstacle = env.round.obstacles[0]
    obstacle.row, obstacle.col, obstacle.speed = PLAYER_ROW, 1.7, 0.0
    env.step([0, 0, 0])
    assert env.round.paused

    action = policy(env)
    assert action == [0, 0, 1]
    env.step(action)
    assert not env.round.paused


def test_policy_plays_valid_actions(env):
    for _ in range(600):
        action = policy(env)
        assert env.action_space.contains(action)
        env.step(action)
