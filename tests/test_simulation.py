from models import BallState, GameState, Side
from simulation import TickResult, tick


def make_state(board, x, y, vx, vy, left=None, right=None):
    state = GameState(board=board)
    state.ball = BallState(x=x, y=y, vx=vx, vy=vy)
    if left is not None:
        state.left_paddle.y = left
    if right is not None:
        state.right_paddle.y = right
    return state


def test_plain_move(board):
    state = GameState(board=board)
    assert (state.ball.x, state.ball.y) == (295, 195)

    result = tick(state)

    assert result == TickResult()
    assert (state.ball.x, state.ball.y) == (298, 198)
    assert (state.ball.vx, state.ball.vy) == (3, 3)


def test_bottom_wall_flips_vy_without_clamping(board):
    state = make_state(board, 100, 388, 3, 3)

    result = tick(state)

    assert result.wall_bounce
    assert state.ball.vy == -3
    assert state.ball.y == 391
    tick(state)
    assert state.ball.y == 388


def test_top_wall(board):
    state = make_state(board, 100, 2, 3, -3)

    assert tick(state).wall_bounce
    assert state.ball.vy == 3
    assert state.ball.y == -1


def test_left_goal_scores_for_right_and_freezes_ball(board):
    state = make_state(board, 2, 300, -3, 3)

    result = tick(state)

    assert result.scorer is Side.RIGHT
    assert (state.ball.x, state.ball.y) == (2, 300)
    assert state.score.left == state.score.right == 0


def test_right_goal_scores_for_left(board):
    state = make_state(board, 588, 50, 3, 3, right=300)

    result = tick(state)

    assert result.scorer is Side.LEFT
    assert state.ball.x == 588


def test_goal_takes_priority_over_paddle(board):
    state = make_state(board, 2, 180, -3, 3, left=160)

    result = tick(state)

    assert result.scorer is Side.RIGHT
    assert not result.paddle_bounce
    assert state.ball.vx == -3


def test_right_paddle_bounce_reverses_on_next_tick(board):
    state = make_state(board, 578, 180, 3, 3, right=160)

    result = tick(state)

    assert result.paddle_bounce
    assert state.ball.vx == -3
    # the bounce tick still moves with the old direction
    assert (state.ball.x, state.ball.y) == (581, 183)
    tick(state)
    assert state.ball.x == 578


def test_ball_in_band_flips_regardless_of_direction(board):
    state = make_state(board, 584, 150, -3, 3, right=160)

    assert tick(state).paddle_bounce
    assert state.ball.vx == 3


def test_left_paddle_overlap_is_inclusive(board):
    state = make_state(board, 13, 147, -3, 3, left=160)

    assert tick(state).paddle_bounce
    assert state.ball.vx == 3
    assert (state.ball.x, state.ball.y) == (10, 150)


def test_ball_misses_paddle(board):
    state = make_state(board, 578, 300, 3, 3, right=0)

    result = tick(state)

    assert not result.paddle_bounce
    assert state.ball.vx == 3
    assert state.ball.x == 581


def test_ball_never_teleports(board):
    state = GameState(board=board)
    speed = board.ball_speed

    for _ in range(2000):
        before = (state.ball.x, state.ball.y)
        result = tick(state)
        if result.scorer is not None:
            assert (state.ball.x, state.ball.y) == before
            break
        assert abs(state.ball.x - before[0]) == speed
        assert abs(state.ball.y - before[1]) == speed
        assert -speed <= state.ball.y <= board.ball_max_y + speed
        assert 0 < state.ball.x < board.ball_max_x
    else:
        raise AssertionError('ball never reached a goal')
