import logging
import random
import threading
from typing import Optional

from .clock import SystemClock
from .proximity import ProximityTracker
from .registry import ConnectionRegistry
from .rooms import IGNORED, ActionResult, RoomManager
from .scheduler import TickScheduler


class GameSession:
    """Owns participants, rooms and dwell timers for one server process.

    Every public method runs under one re-entrant lock so socket handlers
    and the tick never interleave mid-mutation.
    """

    def __init__(self, settings, gateway, socketio=None, clock=None, rng=None, logger=None):
        self.settings = settings
        self.gateway = gateway
        self.clock = clock or SystemClock()
        self.rng = rng or random.Random()
        self.logger = logger or logging.getLogger(__name__)
        self.lock = threading.RLock()

        self.registry = ConnectionRegistry(self.clock, self.rng)
        self.rooms = RoomManager(self.registry, gateway, settings, self.clock, self.rng, self.logger)
        self.proximity = ProximityTracker(self.registry, self.rooms, gateway, settings, self.clock, self.logger)
        self.scheduler: Optional[TickScheduler] = None
        if socketio is not None:
            self.scheduler = TickScheduler(
                socketio,
                settings.tick_interval_ms,
                self.tick,
                self.logger,
                heartbeat_sec=settings.tick_heartbeat_sec,
            )

    # ---- connection lifecycle ----

    def connect(self, participant_id: Optional[str] = None):
        with self.lock:
            p = self.registry.register(participant_id)
            room = self.rooms.admit(p.id)
            self.gateway.join(p.id, room.id)
            self.logger.info(f"[connect] player={p.id} room={room.id}")
            self.rooms.publish(room)
            self.gateway.send(p.id, 'hello', self.hello_payload(p.id))
            return p

    def disconnect(self, participant_id) -> None:
        with self.lock:
            if participant_id not in self.registry:
                return
            self.rooms.release_participant(participant_id)
            self.registry.remove(participant_id)
            purged = self.proximity.purge(participant_id)
            self.logger.info(f"[disconnect] player={participant_id} timers_purged={purged}")

    def hello_payload(self, participant_id):
        return {
            'id': participant_id,
            'minPlayers': self.settings.min_players,
            'maxPlayers': self.settings.max_players,
            'maxSeats': self.settings.max_seats,
        }

    # ---- inbound actions ----

    def take_seat(self, participant_id, seat_index) -> ActionResult:
        with self.lock:
            result = self.rooms.take_seat(participant_id, seat_index)
            return self._report('take-seat', participant_id, result)

    def set_host(self, participant_id, wants_host) -> ActionResult:
        with self.lock:
            result = self.rooms.set_host(participant_id, wants_host)
            return self._report('set-host', participant_id, result)

    def leave_seat(self, participant_id) -> ActionResult:
        with self.lock:
            return self._report('leave-seat', participant_id, self.rooms.leave_seat(participant_id))

    def start_game(self, participant_id) -> ActionResult:
        with self.lock:
            p = self.registry.get(participant_id)
            room = self.rooms.get_room(p.room_id) if p else None
            if not room:
                return self._report('start-game', participant_id, IGNORED)
            return self._report('start-game', participant_id, self.rooms.start_game(room, participant_id))

    def update_position(self, participant_id, x, y) -> bool:
        with self.lock:
            if self.registry.update_position(participant_id, x, y):
                return True
            self._report('pos', participant_id, IGNORED)
            return False

    def update_geo_position(self, participant_id, lat, lon, accuracy=None, ts=None) -> bool:
        with self.lock:
            p = self.registry.update_geo_position(participant_id, lat, lon, accuracy, ts)
            if not p:
                self._report('gps', participant_id, IGNORED)
                return False
            room = self.rooms.get_room(p.room_id)
            if room:
                # geoReady is part of the seat view
                self.rooms.publish(room)
            return True

    def _report(self, action, participant_id, result: ActionResult) -> ActionResult:
        if result.ok:
            return result
        if not result.message:
            p = self.registry.get(participant_id)
            room_id = p.room_id if p else None
            self.logger.debug(f"[ignored] action={action} room={room_id} player={participant_id}")
            return result
        self.logger.info(f"[room-error] action={action} player={participant_id} message={result.message!r}")
        self.gateway.send(participant_id, 'room-error', {'message': result.message})
        return result

    # ---- tick ----

    def tick(self) -> None:
        with self.lock:
            self.proximity.tick()

    def ensure_ticking(self) -> bool:
        if self.scheduler is None:
            return False
        return self.scheduler.start()

    # ---- read-only views ----

    def room_views(self):
        with self.lock:
            return [self.rooms.room_view(room) for room in self.rooms.rooms.values()]

    def room_view(self, room_id):
        with self.lock:
            room = self.rooms.get_room(room_id)
            return self.rooms.room_view(room) if room else None

    def stats(self):
        with self.lock:
            return {
                'rooms': len(self.rooms.rooms),
                'players': len(self.registry),
                'ticking': bool(self.scheduler and self.scheduler.running),
            }
