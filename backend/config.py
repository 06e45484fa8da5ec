import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    HOST = os.environ.get('HOST', '127.0.0.1')
    PORT = int(os.environ.get('PORT', '3000'))
    # Comma separated list, or '*' for any origin
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*')
    # Everyone auto-joins this room on connect
    DEFAULT_ROOM_ID = os.environ.get('DEFAULT_ROOM_ID', 'LOBBY')
    MAX_SEATS = int(os.environ.get('MAX_SEATS', '6'))
    # Advisory only: start-game requires a single seated player
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '3'))
    MAX_PLAYERS = int(os.environ.get('MAX_PLAYERS', '6'))
    # Catch rules, in normalized-space units and milliseconds
    CATCH_DIST = float(os.environ.get('CATCH_DIST', '0.06'))
    CATCH_HOLD_MS = int(os.environ.get('CATCH_HOLD_MS', '1200'))
    TICK_INTERVAL_MS = int(os.environ.get('TICK_INTERVAL_MS', '150'))
    # Heartbeat interval for tick worker logs (sec). 0 disables.
    TICK_HEARTBEAT_SEC = int(os.environ.get('TICK_HEARTBEAT_SEC', '0'))
    TESTING = os.environ.get('TESTING', '').lower() in ('1', 'true', 'yes')
    # The round tick stays off under TESTING unless this is set
    ENABLE_TICK_IN_TESTS = os.environ.get('ENABLE_TICK_IN_TESTS', '').lower() in ('1', 'true', 'yes')
