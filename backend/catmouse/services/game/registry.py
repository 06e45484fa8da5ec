import math
import uuid
from typing import Dict, Iterator, Optional

from catmouse.models import GeoPosition, Participant


def is_finite_number(value) -> bool:
    # bool is an int subclass; a JSON true is not a coordinate
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))


class ConnectionRegistry:
    """One live Participant per connection, keyed by connection id."""

    def __init__(self, clock, rng):
        self.clock = clock
        self.rng = rng
        self._participants: Dict[str, Participant] = {}

    def __len__(self) -> int:
        return len(self._participants)

    def __contains__(self, participant_id) -> bool:
        return participant_id in self._participants

    def __iter__(self) -> Iterator[Participant]:
        return iter(list(self._participants.values()))

    def register(self, participant_id: Optional[str] = None) -> Participant:
        pid = participant_id or uuid.uuid4().hex
        participant = Participant(
            id=pid,
            x=self.rng.random(),
            y=self.rng.random(),
            last_update=self.clock.monotonic_ms(),
        )
        self._participants[pid] = participant
        return participant

    def get(self, participant_id) -> Optional[Participant]:
        if participant_id is None:
            return None
        return self._participants.get(participant_id)

    def update_position(self, participant_id, x, y) -> bool:
        p = self.get(participant_id)
        if not p or p.room_id is None:
            return False
        if not (is_finite_number(x) and is_finite_number(y)):
            return False
        p.x = _clamp(x, 0.0, 1.0)
        p.y = _clamp(y, 0.0, 1.0)
        p.last_update = self.clock.monotonic_ms()
        return True

    def update_geo_position(self, participant_id, lat, lon, accuracy=None, ts=None) -> Optional[Participant]:
        """Record a GPS fix. Returns the participant when the fix was accepted."""
        p = self.get(participant_id)
        if not p:
            return None
        if not (is_finite_number(lat) and is_finite_number(lon)):
            return None
        p.geo = GeoPosition(
            lat=_clamp(lat, -90.0, 90.0),
            lon=_clamp(lon, -180.0, 180.0),
            accuracy=max(0.0, float(accuracy)) if is_finite_number(accuracy) else None,
            ts=float(ts) if is_finite_number(ts) else self.clock.wall_ms(),
        )
        p.last_update = self.clock.monotonic_ms()
        return p

    def remove(self, participant_id) -> Optional[Participant]:
        return self._participants.pop(participant_id, None)
