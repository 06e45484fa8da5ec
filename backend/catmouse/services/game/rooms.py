from typing import Dict, NamedTuple, Optional, Tuple

from catmouse.models import (
    HOST_DISPLAY_NAME,
    Participant,
    Phase,
    Role,
    Room,
    seat_display_name,
)


class ActionResult(NamedTuple):
    """Outcome of a requester-initiated action.

    ``message`` is set only for failures the requester should be told
    about; a failed result without a message is a silent rejection.
    """
    ok: bool
    message: Optional[str] = None


APPLIED = ActionResult(True)
IGNORED = ActionResult(False)

ONLY_HOST_CAN_START = 'Only host can start the game.'
ALREADY_STARTED = 'Game already started.'
NEED_SEATED_PLAYER = 'Need at least 1 seated player before start.'
NO_FREE_SEAT_FOR_CENTER = 'No free seat to move current center player.'


def _is_seat_index(value, max_seats: int) -> bool:
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value < max_seats


class RoomManager:
    """Owns room records: seats, host pointer, phase and round start."""

    def __init__(self, registry, gateway, settings, clock, rng, logger):
        self.registry = registry
        self.gateway = gateway
        self.settings = settings
        self.clock = clock
        self.rng = rng
        self.logger = logger
        self.rooms: Dict[str, Room] = {}

    # ---- room records ----

    def ensure_default_room(self) -> Room:
        room = self.rooms.get(self.settings.default_room_id)
        if room is None:
            room = self.create_room(self.settings.default_room_id)
        return room

    def create_room(self, room_id: str) -> Room:
        if room_id in self.rooms:
            return self.rooms[room_id]
        room = Room(
            id=room_id,
            max_seats=self.settings.max_seats,
            target_count=self.settings.min_players,
        )
        self.rooms[room_id] = room
        self.logger.info(f"[room-create] room={room_id}")
        return room

    def get_room(self, room_id) -> Optional[Room]:
        if room_id is None:
            return None
        return self.rooms.get(room_id)

    def room_view(self, room: Room):
        return room.to_dict(self.registry)

    def publish(self, room: Room) -> None:
        self.gateway.publish_room_state(room.id, self.room_view(room))

    def admit(self, participant_id) -> Optional[Room]:
        """Place a fresh participant in the default room as an observer."""
        p = self.registry.get(participant_id)
        if not p:
            return None
        room = self.ensure_default_room()
        p.room_id = room.id
        return room

    def _lobby_context(self, participant_id) -> Tuple[Optional[Participant], Optional[Room]]:
        p = self.registry.get(participant_id)
        room = self.get_room(p.room_id) if p else None
        if not room or room.phase != Phase.LOBBY:
            return None, None
        return p, room

    def _holds_seat(self, p: Participant, room: Room) -> bool:
        return p.seat_index is not None and room.seats[p.seat_index] == p.id

    # ---- seating ----

    def take_seat(self, participant_id, seat_index) -> ActionResult:
        p, room = self._lobby_context(participant_id)
        if not room:
            return IGNORED
        if not _is_seat_index(seat_index, len(room.seats)):
            return IGNORED
        if seat_index == 0 and room.host_id and room.host_id != p.id:
            return IGNORED
        occupant = room.seats[seat_index]
        if occupant and occupant != p.id:
            return IGNORED

        if occupant == p.id:
            self.publish(room)
            return APPLIED

        if self._holds_seat(p, room):
            room.seats[p.seat_index] = None
            if room.host_id == p.id:
                # The host always sits in seat 0
                room.host_id = None
        room.seats[seat_index] = p.id
        p.seat_index = seat_index
        p.display_name = seat_display_name(seat_index)
        self.logger.info(f"[seat] room={room.id} player={p.id} seat={seat_index}")
        self.publish(room)
        return APPLIED

    def set_host(self, participant_id, wants_host) -> ActionResult:
        p, room = self._lobby_context(participant_id)
        if not room:
            return IGNORED

        if not wants_host:
            if room.host_id != p.id:
                return IGNORED
            room.host_id = None
            if p.seat_index is not None:
                p.display_name = seat_display_name(p.seat_index)
            self.logger.info(f"[host-release] room={room.id} player={p.id}")
            self.publish(room)
            return APPLIED

        center_id = room.seats[0]
        center = self.registry.get(center_id) if center_id else None

        if p.seat_index is None:
            if center_id and center_id != p.id:
                free = room.free_seat()
                if free is None:
                    return ActionResult(False, NO_FREE_SEAT_FOR_CENTER)
                room.seats[free] = center_id
                if center:
                    center.seat_index = free
                    center.display_name = seat_display_name(free)
            room.seats[0] = p.id
            p.seat_index = 0
        elif p.seat_index != 0:
            vacated = p.seat_index
            room.seats[vacated] = center_id
            room.seats[0] = p.id
            if center:
                center.seat_index = vacated
                center.display_name = seat_display_name(vacated)
            p.seat_index = 0

        p.display_name = HOST_DISPLAY_NAME
        room.host_id = p.id
        self.logger.info(f"[host] room={room.id} player={p.id}")
        self.publish(room)
        return APPLIED

    def leave_seat(self, participant_id) -> ActionResult:
        p, room = self._lobby_context(participant_id)
        if not room or not self._holds_seat(p, room):
            return IGNORED
        if room.host_id == p.id:
            room.host_id = None
        room.seats[p.seat_index] = None
        p.reset_seat()
        self.logger.info(f"[leave-seat] room={room.id} player={p.id}")
        self.publish(room)
        return APPLIED

    # ---- round ----

    def start_game(self, room: Room, requester_id) -> ActionResult:
        if room.host_id is None or room.host_id != requester_id:
            return ActionResult(False, ONLY_HOST_CAN_START)
        if room.phase != Phase.LOBBY:
            return ActionResult(False, ALREADY_STARTED)

        seated = [p for p in (self.registry.get(pid) for pid in room.occupant_ids()) if p]
        if not seated:
            return ActionResult(False, NEED_SEATED_PLAYER)

        cat = seated[self.rng.randrange(len(seated))]
        now = self.clock.monotonic_ms()
        for p in seated:
            p.role = Role.CAT if p.id == cat.id else Role.MOUSE
            p.caught = False
            p.x = self.rng.random()
            p.y = self.rng.random()
            p.last_update = now

        room.target_count = len(seated)
        room.phase = Phase.RUNNING
        room.started_at = self.clock.wall_ms()
        self.logger.info(f"[start] room={room.id} cat={cat.id} players={room.target_count}")
        self.publish(room)
        self.gateway.notify_game_started(room.id, room.target_count, cat.id)
        return APPLIED

    # ---- disconnect ----

    def release_participant(self, participant_id) -> None:
        p = self.registry.get(participant_id)
        if not p:
            return
        room = self.get_room(p.room_id)
        if not room:
            p.room_id = None
            p.seat_index = None
            return

        if self._holds_seat(p, room):
            room.seats[p.seat_index] = None
        if room.host_id == p.id:
            room.host_id = None
        p.room_id = None
        p.seat_index = None
        p.role = Role.OBSERVER

        if not room.occupant_ids() and room.id != self.settings.default_room_id:
            del self.rooms[room.id]
            self.logger.info(f"[room-destroy] room={room.id}")
            return
        self.publish(room)
