from flask import current_app, request
from flask_socketio import emit

from catmouse import socketio
from catmouse.services.game import GameSession


def _session() -> GameSession:
    return current_app.extensions['catmouse']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _payload(data) -> dict:
    return data if isinstance(data, dict) else {}


def _tick_enabled() -> bool:
    cfg = current_app.config
    return not cfg.get('TESTING') or bool(cfg.get('ENABLE_TICK_IN_TESTS'))


def handle_connect(auth=None):
    session = _session()
    session.connect(_get_sid())
    if _tick_enabled():
        session.ensure_ticking()


def handle_disconnect(reason=None):
    _session().disconnect(_get_sid())


def handle_take_seat(data):
    _session().take_seat(_get_sid(), _payload(data).get('seatIndex'))


def handle_set_host(data):
    _session().set_host(_get_sid(), bool(_payload(data).get('asHost')))


def handle_leave_seat(data=None):
    _session().leave_seat(_get_sid())


def handle_start_game(data=None):
    _session().start_game(_get_sid())


def handle_pos(data):
    payload = _payload(data)
    _session().update_position(_get_sid(), payload.get('x'), payload.get('y'))


def handle_gps(data):
    payload = _payload(data)
    _session().update_geo_position(
        _get_sid(),
        payload.get('lat'),
        payload.get('lon'),
        accuracy=payload.get('accuracy'),
        ts=payload.get('ts'),
    )


def handle_ping(data=None):
    emit('pong', data or {})


def handle_error(exc):
    current_app.logger.exception(f"[socket-error] sid={_get_sid()} event={request.event!r}")


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on the game namespace."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('take-seat', handle_take_seat, namespace=namespace)
    socketio.on_event('set-host', handle_set_host, namespace=namespace)
    socketio.on_event('leave-seat', handle_leave_seat, namespace=namespace)
    socketio.on_event('start-game', handle_start_game, namespace=namespace)
    socketio.on_event('pos', handle_pos, namespace=namespace)
    socketio.on_event('gps', handle_gps, namespace=namespace)
    socketio.on_event('ping', handle_ping, namespace=namespace)
    socketio.on_error_default(handle_error)
