import logging

from flask import Flask, render_template, request
from flask_socketio import SocketIO, emit

from config import Config
from controller import GameController
from models import BoardConfig, GameSession

app = Flask(__name__)
app.config.from_object(Config)
app.config.from_prefixed_env('PONG')
app.logger.setLevel(app.config['LOG_LEVEL'])
socketio = SocketIO(
    app,
    engineio_logger=app.config['ENGINEIO_LOGGER'],
    ping_timeout=app.config['PING_TIMEOUT'],
    ping_interval=app.config['PING_INTERVAL'],
)

# Session management
sessions = {}  # {socket_id: GameSession}


class TaskScheduler:
    """Runs a session's timers as Socket.IO background tasks."""

    def __init__(self, session):
        self.session = session

    def arm_ticker(self):
        # Called with the session lock held; older loops see the new id and exit
        self.session.ticker_id += 1
        socketio.start_background_task(game_loop, self.session.sid, self.session.ticker_id)

    def call_later(self, delay, callback):
        socketio.start_background_task(run_later, self.session.sid, delay, callback)


def create_session(sid):
    session = GameSession(sid)
    session.controller = GameController(scheduler=TaskScheduler(session))
    sessions[sid] = session
    return session


def remove_session(sid):
    session = sessions.pop(sid, None)
    if session is None:
        return
    with session.lock:
        session.ticker_id += 1  # stop the tick loop


def broadcast(session, snapshot):
    socketio.emit('game_update', snapshot, to=session.sid)


# Game loop
def game_loop(sid, ticker_id):
    session = sessions.get(sid)
    if not session:
        return
    app.logger.debug('Tick loop %d start for session %s', ticker_id, sid)
    interval = session.controller.board.tick_ms / 1000

    while True:
        socketio.sleep(interval)
        with session.lock:
            if (sessions.get(sid) is not session or session.ticker_id != ticker_id
                    or not session.controller.is_running):
                break
            session.controller.tick()
            snapshot = session.controller.snapshot()
        broadcast(session, snapshot)

    app.logger.debug('Tick loop %d stop for session %s', ticker_id, sid)


def run_later(sid, delay, callback):
    socketio.sleep(delay)
    session = sessions.get(sid)
    if not session:
        return
    with session.lock:
        callback()
        snapshot = session.controller.snapshot()
    broadcast(session, snapshot)


def apply_command(action, *args):
    """Run a controller method for the requesting client and send back the new state."""
    session = sessions.get(request.sid)
    if not session:
        app.logger.debug('Ignoring %s from unknown client %s', action, request.sid)
        return
    with session.lock:
        getattr(session.controller, action)(*args)
        snapshot = session.controller.snapshot()
    emit('game_update', snapshot)


# Socket events
@socketio.on('connect')
def handle_connect(auth=None):
    app.logger.info('Client connected: %s', request.sid)
    session = create_session(request.sid)
    emit('connected', {'sid': request.sid})
    emit('game_update', session.controller.snapshot())


@socketio.on('disconnect')
def handle_disconnect(reason=None):
    app.logger.info('Client disconnected: %s', request.sid)
    remove_session(request.sid)


@socketio.on('start_game')
def handle_start_game():
    apply_command('start')


@socketio.on('toggle_pause')
def handle_toggle_pause():
    apply_command('toggle_pause')


@socketio.on('restart_game')
def handle_restart_game():
    apply_command('restart')


@socketio.on('key_down')
def handle_key_down(data):
    if not isinstance(data, dict) or 'key' not in data:
        app.logger.debug('Malformed key_down from %s: %r', request.sid, data)
        return
    apply_command('key_down', data['key'])


@app.route('/')
def index():
    return render_template('index.html', board=BoardConfig())


def main():
    logging.basicConfig(level=app.config['LOG_LEVEL'])
    socketio.run(app, host=app.config['HOST'], port=app.config['PORT'], allow_unsafe_werkzeug=True)


if __name__ == '__main__':
    main()
