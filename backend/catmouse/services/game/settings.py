from dataclasses import dataclass


@dataclass(frozen=True)
class GameSettings:
    default_room_id: str = 'LOBBY'
    max_seats: int = 6
    min_players: int = 3
    max_players: int = 6
    catch_dist: float = 0.06
    catch_hold_ms: int = 1200
    tick_interval_ms: int = 150
    tick_heartbeat_sec: int = 0

    @classmethod
    def from_config(cls, config) -> 'GameSettings':
        defaults = cls()
        return cls(
            default_room_id=str(config.get('DEFAULT_ROOM_ID', defaults.default_room_id)),
            max_seats=int(config.get('MAX_SEATS', defaults.max_seats)),
            min_players=int(config.get('MIN_PLAYERS', defaults.min_players)),
            max_players=int(config.get('MAX_PLAYERS', defaults.max_players)),
            catch_dist=float(config.get('CATCH_DIST', defaults.catch_dist)),
            catch_hold_ms=int(config.get('CATCH_HOLD_MS', defaults.catch_hold_ms)),
            tick_interval_ms=int(config.get('TICK_INTERVAL_MS', defaults.tick_interval_ms)),
            tick_heartbeat_sec=int(config.get('TICK_HEARTBEAT_SEC', defaults.tick_heartbeat_sec)),
        )

    def to_dict(self):
        return {
            'maxSeats': self.max_seats,
            'minPlayers': self.min_players,
            'maxPlayers': self.max_players,
            'catchDist': self.catch_dist,
            'catchHoldMs': self.catch_hold_ms,
            'tickIntervalMs': self.tick_interval_ms,
        }
