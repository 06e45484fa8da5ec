import math
from typing import Dict, Tuple

from catmouse.models import Phase, Role, Room


TimerKey = Tuple[str, str, str]


class ProximityTracker:
    """Turns sustained cat/mouse proximity into catches.

    A (room, cat, mouse) timer starts the first tick the pair is closer
    than ``catch_dist`` and is dropped the first tick they are not. Once
    a timer is ``catch_hold_ms`` old the mouse is caught, a single
    ``caught`` event goes out and every timer on that mouse is discarded.
    """

    def __init__(self, registry, room_manager, gateway, settings, clock, logger):
        self.registry = registry
        self.room_manager = room_manager
        self.gateway = gateway
        self.settings = settings
        self.clock = clock
        self.logger = logger
        self._timers: Dict[TimerKey, float] = {}

    @property
    def timers(self) -> Dict[TimerKey, float]:
        return dict(self._timers)

    def tick(self) -> None:
        for room in list(self.room_manager.rooms.values()):
            if room.phase == Phase.RUNNING:
                self._evaluate_room(room)

    def _evaluate_room(self, room: Room) -> None:
        seated = [p for p in (self.registry.get(pid) for pid in room.occupant_ids()) if p]
        cats = [p for p in seated if p.role == Role.CAT]
        mice = [p for p in seated if p.role == Role.MOUSE and not p.caught]
        now = self.clock.monotonic_ms()

        for cat in cats:
            for mouse in mice:
                if mouse.caught:
                    # Taken by another cat earlier in this tick
                    continue
                key = (room.id, cat.id, mouse.id)
                distance = math.hypot(cat.x - mouse.x, cat.y - mouse.y)
                if distance >= self.settings.catch_dist:
                    self._timers.pop(key, None)
                    continue
                started = self._timers.setdefault(key, now)
                if now - started >= self.settings.catch_hold_ms:
                    mouse.caught = True
                    for stale in [k for k in self._timers if k[0] == room.id and k[2] == mouse.id]:
                        del self._timers[stale]
                    self.logger.info(f"[caught] room={room.id} mouse={mouse.id} cat={cat.id}")
                    self.gateway.notify_caught(room.id, mouse.id, cat.id)

        self.gateway.publish_players(room.id, {p.id: p.to_live_dict() for p in seated})

    def purge(self, participant_id) -> int:
        """Drop every timer naming the participant as cat or mouse."""
        stale = [key for key in self._timers if participant_id in (key[1], key[2])]
        for key in stale:
            del self._timers[key]
        return len(stale)
