import time


class SystemClock:
    """Millisecond clock used by the session.

    Dwell timers and ``lastUpdateTime`` use the monotonic reading; values
    shown to clients as dates (round start, GPS fallback) use wall time.
    """

    def monotonic_ms(self) -> float:
        return time.monotonic() * 1000.0

    def wall_ms(self) -> float:
        return time.time() * 1000.0
