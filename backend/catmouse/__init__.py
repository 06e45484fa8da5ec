import errno
import socket

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
import click
from config import Config

socketio = SocketIO(async_mode=None)

# Socket.IO namespace the game events live on
NAMESPACE = '/'


def _allowed_origins(raw):
    if not raw or raw == '*':
        return '*'
    return [origin.strip() for origin in raw.split(',') if origin.strip()]


def create_app(config_class=Config, clock=None, rng=None):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS'))
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from catmouse.services.game import BroadcastGateway, GameSession, GameSettings
    settings = GameSettings.from_config(flask_app.config)
    flask_app.extensions['catmouse'] = GameSession(
        settings,
        BroadcastGateway(socketio, namespace=NAMESPACE),
        socketio=socketio,
        clock=clock,
        rng=rng,
        logger=flask_app.logger,
    )

    # Import and register blueprints here
    from catmouse.main import main
    flask_app.register_blueprint(main)

    from catmouse.api.rooms import rooms
    flask_app.register_blueprint(rooms, url_prefix='/api')

    # Register Socket.IO event handlers
    from catmouse.socketio_events import register_socketio_handlers
    register_socketio_handlers(NAMESPACE)

    @click.command('serve')
    @click.option('--host', default=None, help='Interface to bind (defaults to HOST).')
    @click.option('--port', default=None, type=int, help='Port to bind (defaults to PORT).')
    def serve_command(host, port):
        """Runs the game server with websocket support."""
        raise SystemExit(serve(flask_app, host=host, port=port))

    flask_app.cli.add_command(serve_command)

    return flask_app


def _check_bind(host, port):
    """Bind and release host:port, raising the OSError a real bind would hit."""
    sock = socket.create_server((host, port))
    sock.close()


def _report_bind_error(flask_app, exc, host, port):
    if exc.errno == errno.EADDRINUSE:
        flask_app.logger.error(f"[startup] Port {port} is already in use.")
        flask_app.logger.error(f"[startup] Try: PORT={port + 1} python run.py")
        return 1
    if exc.errno in (errno.EACCES, errno.EPERM):
        flask_app.logger.error(f"[startup] Permission denied for {host}:{port}.")
        flask_app.logger.error(f"[startup] Try: HOST=127.0.0.1 PORT={port + 1} python run.py")
        return 1
    flask_app.logger.error(f"[startup] Server failed to start: {exc}")
    return None


def serve(flask_app, host=None, port=None, **kwargs):
    """Bind and run the Socket.IO server. Returns a process exit status."""
    host = host or flask_app.config.get('HOST', '127.0.0.1')
    port = port or flask_app.config.get('PORT', 3000)
    # Only consulted in threading mode
    kwargs.setdefault('allow_unsafe_werkzeug', True)
    try:
        # Werkzeug exits on its own bind errors, so check the address first
        _check_bind(host, port)
        flask_app.logger.info(f"[startup] Server running: http://{host}:{port}")
        flask_app.logger.info(f"[startup] LAN access: http://<your-ip>:{port}")
        socketio.run(flask_app, host=host, port=port, **kwargs)
    except OSError as exc:
        status = _report_bind_error(flask_app, exc, host, port)
        if status is None:
            raise
        return status
    return 0
