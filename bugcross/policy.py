import math

from bugcross.constants import HEAD_OFFSET, ROWS, TAIL_OFFSET

LOOKAHEAD = (0.0, 0.15, 0.3, 0.45)  # seconds


def _threatened(env, col, row):
    for obstacle in env.round.obstacles:
        if obstacle.row != row:
            continue
        for t in LOOKAHEAD:
            future = obstacle.col + obstacle.speed * t
            if col in (math.floor(future + TAIL_OFFSET), math.floor(future + HEAD_OFFSET)):
                return True
    return False


def policy(env):
    # Strategy: Hop up whenever the square above stays clear of bugs for the next
    # half second. Otherwise grab a gem sitting right beside us if that square is
    # clear, step back down if our own square is about to be hit, or wait.
    # A move equal to the previous one is released first so the next press registers.
    state = env.round
    if state.paused:
        return [0, 0, 0 if env.previous_action[2] == 1 else 1]  # Ask for a new round

    row, col = state.avatar.row, state.avatar.col
    movement = 0

    if not _threatened(env, col, row - 1):
        movement = 1  # Up
    else:
        for gem in state.collectibles:
            if gem.visible and gem.row == row and abs(gem.col - col) == 1 and not _threatened(env, gem.col, row):
                movement = 3 if gem.col < col else 4
                break
        else:
            if _threatened(env, col, row) and row < ROWS - 1 and not _threatened(env, col, row + 1):
                movement = 2  # Down

    if movement == env.previous_action[0]:
        movement = 0
    return [movement, 0, 0]
