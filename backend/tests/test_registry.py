import math

from catmouse.models import Role


def test_register_defaults(session):
    p = session.registry.register('abc')
    assert p.id == 'abc'
    assert p.role == Role.OBSERVER
    assert p.display_name == 'player'
    assert p.room_id is None and p.seat_index is None
    assert 0.0 <= p.x <= 1.0 and 0.0 <= p.y <= 1.0
    assert session.registry.get('abc') is p


def test_register_generates_unique_ids(session):
    a = session.registry.register()
    b = session.registry.register()
    assert a.id != b.id
    assert len(session.registry) == 2


def test_update_position_clamps_each_axis(session, clock):
    p = session.connect('a')
    clock.advance(500)
    assert session.update_position('a', -0.5, 1.7)
    assert (p.x, p.y) == (0.0, 1.0)
    assert p.last_update == clock.monotonic_ms()


def test_update_position_rejects_bad_input(session):
    p = session.connect('a')
    before = (p.x, p.y, p.last_update)
    assert not session.update_position('a', 'x', 0.3)
    assert not session.update_position('a', 0.3, None)
    assert not session.update_position('a', math.nan, 0.3)
    assert not session.update_position('a', 0.3, math.inf)
    assert not session.update_position('a', True, 0.3)
    assert not session.update_position('ghost', 0.3, 0.3)
    assert (p.x, p.y, p.last_update) == before


def test_update_position_requires_room(session):
    p = session.registry.register('loner')
    assert not session.registry.update_position('loner', 0.2, 0.2)
    assert p.x != 0.2 or p.y != 0.2


def test_geo_position_clamped(session, clock):
    p = session.connect('a')
    assert session.update_geo_position('a', 123.0, -400.0, accuracy=-3, ts=42)
    assert p.geo.lat == 90.0
    assert p.geo.lon == -180.0
    assert p.geo.accuracy == 0.0
    assert p.geo.ts == 42.0


def test_geo_position_unknown_accuracy_and_default_ts(session, clock):
    p = session.connect('a')
    assert session.update_geo_position('a', 51.5, -0.12, accuracy=math.nan, ts='later')
    assert p.geo.accuracy is None
    assert p.geo.ts == clock.wall_ms()


def test_geo_position_rejects_non_finite(session):
    p = session.connect('a')
    assert not session.update_geo_position('a', math.nan, 10)
    assert not session.update_geo_position('a', 10, '20')
    assert p.geo is None


def test_geo_update_broadcasts_geo_ready(session, gateway):
    session.connect('a')
    session.take_seat('a', 1)
    gateway.clear()
    session.update_geo_position('a', 10, 20, accuracy=5)
    views = gateway.events('room-state')
    assert len(views) == 1
    assert views[0]['seats'][1]['geoReady'] is True
    # Raw GPS stays off the lobby channel
    assert 'geo' not in views[0]['seats'][1]


def test_remove(session):
    session.registry.register('a')
    assert session.registry.remove('a').id == 'a'
    assert session.registry.get('a') is None
    assert session.registry.remove('a') is None
