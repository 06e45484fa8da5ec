from typing import Callable


class TickScheduler:
    """Single recurring task that drives the game tick.

    - ``start`` is idempotent; one background task per scheduler
    - Sleeps with ``socketio.sleep`` so eventlet/gevent workers cooperate
    - ``stop`` lets the loop exit after its current sleep
    - An optional heartbeat logs the tick count every ``heartbeat_sec``
    """

    def __init__(self, socketio, interval_ms: int, callback: Callable[[], None], logger, heartbeat_sec: int = 0):
        self.socketio = socketio
        self.interval_ms = interval_ms
        self.callback = callback
        self.logger = logger
        self.heartbeat_sec = heartbeat_sec
        self.ticks = 0
        self._running = False
        self._task = None

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> bool:
        if self._running:
            return False
        self._running = True
        self.logger.info(f"[tick-start] interval={self.interval_ms}ms")
        self._task = self.socketio.start_background_task(self._worker)
        return True

    def stop(self) -> None:
        if self._running:
            self.logger.info(f"[tick-stop] ticks={self.ticks}")
        self._running = False

    def run_once(self) -> None:
        try:
            self.callback()
        except Exception:
            # Keep ticking; the next snapshot supersedes this one
            self.logger.exception(f"[tick-error] tick={self.ticks}")
        self.ticks += 1

    def _worker(self) -> None:
        delay = self.interval_ms / 1000.0
        hb_every = 0
        if self.heartbeat_sec and self.heartbeat_sec > 0:
            hb_every = max(1, int(self.heartbeat_sec * 1000 / self.interval_ms))
        while self._running:
            self.socketio.sleep(delay)
            if not self._running:
                break
            self.run_once()
            if hb_every and self.ticks % hb_every == 0:
                self.logger.info(f"[tick-heartbeat] ticks={self.ticks}")
