"""Server settings.

Every key can be overridden from the environment with a ``PONG_`` prefix,
e.g. ``PONG_PORT=8000`` or ``PONG_ENGINEIO_LOGGER=true``.
"""


class Config:
    SECRET_KEY = 'change-me'
    HOST = '0.0.0.0'
    PORT = 5000
    PING_TIMEOUT = 60
    PING_INTERVAL = 25
    ENGINEIO_LOGGER = False
    LOG_LEVEL = 'INFO'


class TestingConfig(Config):
    TESTING = True
    LOG_LEVEL = 'DEBUG'
