class BroadcastGateway:
    """Stateless relay from the game session to Socket.IO rooms.

    Every send goes through ``_emit``; ``socketio.emit`` queues the packet
    and returns, so the tick never waits on a slow client.
    """

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def _emit(self, event: str, payload, to: str) -> None:
        self.socketio.emit(event, payload, to=to, namespace=self.namespace)

    def join(self, participant_id: str, room_id: str) -> None:
        self.socketio.server.enter_room(participant_id, room_id, namespace=self.namespace)

    def send(self, participant_id: str, event: str, payload) -> None:
        self._emit(event, payload, to=participant_id)

    def publish_room_state(self, room_id: str, view) -> None:
        self._emit('room-state', view, to=room_id)

    def publish_players(self, room_id: str, live_fields) -> None:
        self._emit('players', live_fields, to=room_id)

    def notify_game_started(self, room_id: str, target_count: int, cat_id: str) -> None:
        self._emit('game-started', {
            'roomId': room_id,
            'targetCount': target_count,
            'catId': cat_id,
        }, to=room_id)

    def notify_caught(self, room_id: str, mouse_id: str, cat_id: str) -> None:
        self._emit('caught', {
            'roomId': room_id,
            'mouseId': mouse_id,
            'byCatId': cat_id,
        }, to=room_id)
