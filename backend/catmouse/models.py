from dataclasses import dataclass, field
from typing import List, Optional


class Role:
    OBSERVER = 'observer'
    CAT = 'cat'
    MOUSE = 'mouse'


class Phase:
    LOBBY = 'lobby'
    RUNNING = 'running'


DEFAULT_DISPLAY_NAME = 'player'
HOST_DISPLAY_NAME = 'Host'


def seat_display_name(seat_index: int) -> str:
    """Name shown for a non-host seat, numbered from 1."""
    return f"Player {seat_index + 1}"


@dataclass
class GeoPosition:
    lat: float
    lon: float
    accuracy: Optional[float]
    ts: float

    def to_dict(self):
        return {
            'lat': self.lat,
            'lon': self.lon,
            'accuracy': self.accuracy,
            'ts': self.ts,
        }


@dataclass
class Participant:
    id: str
    x: float
    y: float
    last_update: float
    display_name: str = DEFAULT_DISPLAY_NAME
    role: str = Role.OBSERVER
    room_id: Optional[str] = None
    seat_index: Optional[int] = None
    caught: bool = False
    geo: Optional[GeoPosition] = None

    def reset_seat(self) -> None:
        self.seat_index = None
        self.display_name = DEFAULT_DISPLAY_NAME
        self.role = Role.OBSERVER
        self.caught = False

    def to_live_dict(self):
        """High-frequency fields sent on every tick of a running room."""
        return {
            'id': self.id,
            'displayName': self.display_name,
            'role': self.role,
            'seatIndex': self.seat_index,
            'x': self.x,
            'y': self.y,
            'caught': self.caught,
            'lastUpdateTime': self.last_update,
            'geo': self.geo.to_dict() if self.geo else None,
        }


@dataclass
class Room:
    id: str
    max_seats: int
    target_count: int
    host_id: Optional[str] = None
    phase: str = Phase.LOBBY
    started_at: Optional[float] = None
    seats: List[Optional[str]] = field(default_factory=list)

    def __post_init__(self):
        if not self.seats:
            self.seats = [None] * self.max_seats

    def occupant_ids(self) -> List[str]:
        return [sid for sid in self.seats if sid]

    def free_seat(self) -> Optional[int]:
        """First empty seat other than the center (host) seat."""
        for idx in range(1, len(self.seats)):
            if self.seats[idx] is None:
                return idx
        return None

    def to_dict(self, participants):
        """Public lobby view; raw coordinates and GPS stay off this channel.

        ``participants`` is any mapping-like lookup with a ``get`` method
        returning a Participant or None.
        """
        seats = []
        for index, pid in enumerate(self.seats):
            p = participants.get(pid) if pid else None
            if not p:
                seats.append({'index': index, 'empty': True})
                continue
            seats.append({
                'index': index,
                'empty': False,
                'participantId': p.id,
                'displayName': p.display_name,
                'role': p.role,
                'geoReady': p.geo is not None,
            })
        return {
            'id': self.id,
            'hostId': self.host_id,
            'targetCount': self.target_count,
            'phase': self.phase,
            'startedAt': self.started_at,
            'seats': seats,
        }
