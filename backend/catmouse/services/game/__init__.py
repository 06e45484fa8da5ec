"""Game domain services: seating, catch detection and the round tick.

This package holds the room/session state machine. Socket handlers and
HTTP routes import `GameSession` and never touch the registries
directly, keeping transport concerns separated from game mechanics.
"""

from .clock import SystemClock
from .settings import GameSettings
from .registry import ConnectionRegistry
from .rooms import ActionResult, RoomManager
from .proximity import ProximityTracker
from .broadcast import BroadcastGateway
from .scheduler import TickScheduler
from .session import GameSession

__all__ = [
    'ActionResult',
    'BroadcastGateway',
    'ConnectionRegistry',
    'GameSession',
    'GameSettings',
    'ProximityTracker',
    'RoomManager',
    'SystemClock',
    'TickScheduler',
]
