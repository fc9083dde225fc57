"""Per-tick ball integration.

One call to ``tick`` is one 20 ms step of the game. Goals and bounces are
detected against the candidate position, so a paddle bounce only reverses
the displacement on the following tick and the ball may overshoot a wall by
at most one step.
"""
from dataclasses import dataclass
from typing import Optional

from models import Side


@dataclass(frozen=True)
class TickResult:
    wall_bounce: bool = False
    paddle_bounce: bool = False
    scorer: Optional[Side] = None


def _overlaps_paddle(state, side, x, y):
    board = state.board
    paddle_y = state.paddle(side).y
    if side is Side.LEFT:
        in_band = x <= board.paddle_width
    else:
        in_band = x + board.ball_size >= board.width - board.paddle_width
    return in_band and y + board.ball_size >= paddle_y and y <= paddle_y + board.paddle_height


def tick(state):
    board = state.board
    ball = state.ball
    new_x = ball.x + ball.vx
    new_y = ball.y + ball.vy

    wall_bounce = new_y <= 0 or new_y >= board.ball_max_y
    if wall_bounce:
        ball.vy = -ball.vy

    # Goal line is checked before the paddles
    if new_x <= 0:
        return TickResult(wall_bounce=wall_bounce, scorer=Side.RIGHT)
    if new_x >= board.ball_max_x:
        return TickResult(wall_bounce=wall_bounce, scorer=Side.LEFT)

    paddle_bounce = _overlaps_paddle(state, Side.LEFT, new_x, new_y) or \
        _overlaps_paddle(state, Side.RIGHT, new_x, new_y)
    if paddle_bounce:
        ball.vx = -ball.vx

    ball.x = new_x
    ball.y = new_y
    return TickResult(wall_bounce=wall_bounce, paddle_bounce=paddle_bounce)
