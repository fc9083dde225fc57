import logging
import random
import time

import controls
import simulation
from models import BoardConfig, GamePhase, GameState, Side, TransientMessage

logger = logging.getLogger(__name__)

TAUNTS = (
    '"Looks like {loser} needs more practice!"',
    '"Better luck next time, {loser}!"',
    '"Is {loser} even trying? \U0001F61C"',
    '"It\'s okay {loser}, losing builds character!"',
    '"Don\'t worry {loser}, it\'s just a game!"',
)


class NullScheduler:
    """Scheduler that never fires. Timers have to be driven by hand."""

    def call_later(self, delay, callback):
        pass

    def arm_ticker(self):
        pass


def pick_loser(score):
    # Only one side can reach the winning score first, so ties never get here
    return Side.LEFT if score.left < score.right else Side.RIGHT


class GameController:
    """Phase state machine wrapped around one GameState.

    The scheduler gets ``arm_ticker()`` every time the phase enters RUNNING
    and ``call_later(seconds, callback)`` for the reset after a point. Tick
    loops are expected to stop by themselves once ``is_running`` is False.
    """

    def __init__(self, board=None, scheduler=None, rng=None, clock=time.monotonic):
        self.state = GameState(board=board or BoardConfig())
        self.scheduler = scheduler or NullScheduler()
        self.rng = rng or random.Random()
        self.clock = clock

    @property
    def board(self):
        return self.state.board

    @property
    def phase(self):
        return self.state.phase

    @property
    def is_running(self):
        return self.state.phase is GamePhase.RUNNING

    def snapshot(self):
        return self.state.snapshot()

    def _enter_running(self):
        self.state.phase = GamePhase.RUNNING
        self.scheduler.arm_ticker()

    # User actions

    def start(self):
        if self.state.phase is not GamePhase.NOT_STARTED:
            return False
        logger.info('Game started')
        self._enter_running()
        return True

    def toggle_pause(self):
        if self.state.phase is GamePhase.RUNNING:
            self.state.phase = GamePhase.PAUSED_BY_USER
            return True
        if self.state.phase is GamePhase.PAUSED_BY_USER:
            self._enter_running()
            return True
        return False

    def restart(self):
        if self.state.phase is GamePhase.NOT_STARTED:
            return self.start()

        state = self.state
        state.generation += 1
        state.score.left = state.score.right = 0
        state.reset_ball()
        state.reset_paddles()
        state.message = None
        state.loser = None
        state.taunt = None
        logger.info('Game restarted (generation %d)', state.generation)
        self._enter_running()
        return True

    def key_down(self, key):
        return controls.on_key_down(self.state, key)

    # Timed events

    def tick(self):
        if not self.is_running:
            return None
        result = simulation.tick(self.state)
        if result.scorer is not None:
            self._goal(result.scorer)
        return result

    def _goal(self, scorer):
        state = self.state
        points = state.score.increment(scorer)
        logger.info('%s scored (%d-%d)', scorer.label, state.score.left, state.score.right)

        if points == self.board.winning_score:
            state.phase = GamePhase.GAME_OVER
            state.message = None
            state.loser = pick_loser(state.score)
            state.taunt = self.rng.choice(TAUNTS).format(loser=state.loser.label)
            logger.info('Game over, %s lost', state.loser.label)
            return

        state.phase = GamePhase.PAUSED_FOR_SCORE
        pause = self.board.pause_ms / 1000
        state.generation += 1
        generation = state.generation
        state.message = TransientMessage(
            text=f'{scorer.label} Scored!',
            generation=generation,
            expires_at=self.clock() + pause,
        )
        self.scheduler.call_later(pause, lambda: self.resume_after_score(generation))

    def resume_after_score(self, generation):
        state = self.state
        if generation != state.generation or state.phase is not GamePhase.PAUSED_FOR_SCORE:
            logger.debug('Discarding stale resume (generation %d, now %d, phase %s)',
                         generation, state.generation, state.phase.value)
            return False
        state.reset_ball()
        state.message = None
        self._enter_running()
        return True
