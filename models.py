import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class BoardConfig:
    width: int = 600
    height: int = 400
    paddle_width: int = 10
    paddle_height: int = 80
    ball_size: int = 10
    paddle_step: int = 20
    ball_speed: int = 3
    pause_ms: int = 1000  # pause after scoring
    winning_score: int = 3
    tick_ms: int = 20

    @property
    def paddle_max_y(self):
        return self.height - self.paddle_height

    @property
    def ball_max_x(self):
        return self.width - self.ball_size

    @property
    def ball_max_y(self):
        return self.height - self.ball_size

    @property
    def paddle_start_y(self):
        return self.height / 2 - self.paddle_height / 2

    @property
    def ball_start(self):
        return self.width / 2 - self.ball_size / 2, self.height / 2 - self.ball_size / 2


class Side(str, Enum):
    LEFT = 'left'
    RIGHT = 'right'

    @property
    def label(self):
        return 'Player 1' if self is Side.LEFT else 'Player 2'


class GamePhase(str, Enum):
    NOT_STARTED = 'not_started'
    RUNNING = 'running'
    PAUSED_FOR_SCORE = 'paused_for_score'
    PAUSED_BY_USER = 'paused_by_user'
    GAME_OVER = 'game_over'


@dataclass
class PaddleState:
    y: float


@dataclass
class BallState:
    x: float
    y: float
    vx: float
    vy: float


@dataclass
class ScoreState:
    left: int = 0
    right: int = 0

    def of(self, side):
        return self.left if side is Side.LEFT else self.right

    def increment(self, side):
        if side is Side.LEFT:
            self.left += 1
        else:
            self.right += 1
        return self.of(side)


@dataclass
class TransientMessage:
    text: str
    generation: int
    expires_at: float


@dataclass
class GameState:
    """Authoritative state of one game.

    Everything the renderer shows is read from here through ``snapshot()``;
    the pause and message flags live on this object rather than as
    free-standing globals so a single lock covers all of them.
    """

    board: BoardConfig = field(default_factory=BoardConfig)
    left_paddle: Optional[PaddleState] = None
    right_paddle: Optional[PaddleState] = None
    ball: Optional[BallState] = None
    score: ScoreState = field(default_factory=ScoreState)
    phase: GamePhase = GamePhase.NOT_STARTED
    message: Optional[TransientMessage] = None
    loser: Optional[Side] = None
    taunt: Optional[str] = None
    # Bumped on restart and on every point so older timers can tell they are stale
    generation: int = 0

    def __post_init__(self):
        if self.left_paddle is None or self.right_paddle is None:
            self.reset_paddles()
        if self.ball is None:
            self.reset_ball()

    @property
    def paddle_step(self):
        if self.phase is GamePhase.PAUSED_BY_USER:
            return 0
        return self.board.paddle_step

    def paddle(self, side):
        return self.left_paddle if side is Side.LEFT else self.right_paddle

    def reset_ball(self):
        x, y = self.board.ball_start
        speed = self.board.ball_speed
        self.ball = BallState(x=x, y=y, vx=speed, vy=speed)

    def reset_paddles(self):
        self.left_paddle = PaddleState(self.board.paddle_start_y)
        self.right_paddle = PaddleState(self.board.paddle_start_y)

    def snapshot(self):
        """What should be sent to the client."""
        return {
            'board': {
                'width': self.board.width,
                'height': self.board.height,
                'paddle_width': self.board.paddle_width,
                'paddle_height': self.board.paddle_height,
                'ball_size': self.board.ball_size,
            },
            'paddles': {'left': self.left_paddle.y, 'right': self.right_paddle.y},
            'ball': {'x': self.ball.x, 'y': self.ball.y, 'vx': self.ball.vx, 'vy': self.ball.vy},
            'score': {'left': self.score.left, 'right': self.score.right},
            'phase': self.phase.value,
            'message': self.message.text if self.message else None,
            'loser': self.loser.label if self.loser else None,
            'taunt': self.taunt,
        }


class GameSession:
    def __init__(self, sid, controller=None):
        self.sid = sid
        self.controller = controller
        self.lock = threading.Lock()
        self.ticker_id = 0  # id of the only tick loop allowed to run
