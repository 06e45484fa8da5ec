import errno
import logging
import random
import socket

import pytest

import catmouse
from catmouse import create_app, serve, socketio
from config import Config
from conftest import TestConfig


def _startup_errors(caplog):
    return [r.getMessage() for r in caplog.records if r.levelno == logging.ERROR and '[startup]' in r.getMessage()]


def test_serve_reports_port_in_use(flask_app, caplog, monkeypatch):
    ran = []
    monkeypatch.setattr(socketio, 'run', lambda *a, **kw: ran.append(1))
    holder = socket.create_server(('127.0.0.1', 0))
    port = holder.getsockname()[1]
    try:
        with caplog.at_level(logging.INFO):
            status = serve(flask_app, host='127.0.0.1', port=port)
    finally:
        holder.close()
    assert status == 1
    assert ran == []
    errors = _startup_errors(caplog)
    assert errors[0] == f"[startup] Port {port} is already in use."
    assert errors[1] == f"[startup] Try: PORT={port + 1} python run.py"


@pytest.mark.parametrize('code', [errno.EACCES, errno.EPERM])
def test_serve_reports_permission_denied(flask_app, caplog, monkeypatch, code):
    def denied(address):
        raise OSError(code, 'Permission denied')

    monkeypatch.setattr(catmouse.socket, 'create_server', denied)
    monkeypatch.setattr(socketio, 'run', lambda *a, **kw: None)
    with caplog.at_level(logging.INFO):
        assert serve(flask_app, host='0.0.0.0', port=80) == 1
    assert _startup_errors(caplog)[0] == '[startup] Permission denied for 0.0.0.0:80.'


def test_serve_reraises_unknown_bind_error(flask_app, caplog, monkeypatch):
    def broken(address):
        raise OSError(errno.EADDRNOTAVAIL, 'Cannot assign requested address')

    monkeypatch.setattr(catmouse.socket, 'create_server', broken)
    with caplog.at_level(logging.INFO):
        with pytest.raises(OSError):
            serve(flask_app, host='10.255.255.1', port=3000)
    assert _startup_errors(caplog)[0].startswith('[startup] Server failed to start:')


def test_serve_runs_when_address_free(flask_app, monkeypatch):
    calls = []
    monkeypatch.setattr(catmouse.socket, 'create_server', lambda address: socket.socket())
    monkeypatch.setattr(socketio, 'run', lambda app, **kw: calls.append(kw))
    assert serve(flask_app, host='127.0.0.1', port=3100) == 0
    assert calls[0]['host'] == '127.0.0.1'
    assert calls[0]['port'] == 3100
    assert calls[0]['allow_unsafe_werkzeug'] is True


def test_config_declares_test_flags():
    assert hasattr(Config, 'TESTING')
    assert hasattr(Config, 'ENABLE_TICK_IN_TESTS')
    assert isinstance(Config.TESTING, bool)
    assert isinstance(Config.ENABLE_TICK_IN_TESTS, bool)


def test_tick_starts_on_connect_when_enabled(clock):
    class TickingConfig(TestConfig):
        ENABLE_TICK_IN_TESTS = True
        TICK_INTERVAL_MS = 10

    application = create_app(TickingConfig, clock=clock, rng=random.Random(5))
    game = application.extensions['catmouse']
    test_client = socketio.test_client(application)
    try:
        assert game.scheduler.running
    finally:
        game.scheduler.stop()
        test_client.disconnect()


def test_tick_not_started_under_testing(flask_app, connect_player, game):
    connect_player()
    assert not game.scheduler.running
