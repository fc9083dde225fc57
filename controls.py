from models import GamePhase, Side

# key -> (paddle, direction)
KEY_BINDINGS = {
    'ArrowUp': (Side.RIGHT, -1),
    'ArrowDown': (Side.RIGHT, 1),
    'w': (Side.LEFT, -1),
    's': (Side.LEFT, 1),
}


def on_key_down(state, key):
    """Move a paddle for a key press. Returns False for keys that aren't bound."""
    if state.phase is GamePhase.NOT_STARTED or not isinstance(key, str):
        return False
    binding = KEY_BINDINGS.get(key)
    if binding is None:
        return False

    side, direction = binding
    paddle = state.paddle(side)
    paddle.y = max(0, min(paddle.y + direction * state.paddle_step, state.board.paddle_max_y))
    return True
