"""join_coordinator.py - fire-and-forget minimize after joining a server"""

import threading
from enum import Enum

from seeder.process_monitor import find_game_process
from seeder.window_mgr import minimize_game_window

MINIMIZE_TIMEOUT_SECONDS = 300


class CoordinatorState(Enum):
    IDLE = "idle"
    MINIMIZING = "minimizing"


class JoinCoordinator:
    """Runs the minimize action once per join in a background thread.

    The action is called as ``minimize_action(get_game, cancel_event)``; the
    cancel event is set when the timeout budget runs out.
    """

    def __init__(self, session, minimize_action=None, game_accessor=None,
                 timeout_seconds: float = MINIMIZE_TIMEOUT_SECONDS,
                 timer_factory=threading.Timer):
        if session is None:
            raise ValueError("session is required")
        self._session = session
        self._minimize = minimize_action or minimize_game_window
        self._get_game = game_accessor or (
            lambda: find_game_process(self._session.process_name)
        )
        self._timeout = timeout_seconds
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._state = CoordinatorState.IDLE
        self._cancel_event: threading.Event | None = None
        self._worker: threading.Thread | None = None

    @property
    def state(self) -> CoordinatorState:
        return self._state

    def join_server(self) -> bool:
        """Schedule the minimize action; returns immediately.

        False when auto-minimize is off or a minimize is already in progress.
        """
        if not self._session.auto_minimize_enabled:
            return False
        with self._lock:
            if self._state == CoordinatorState.MINIMIZING:
                print("[minimize] already waiting for the game window.")
                return False
            self._state = CoordinatorState.MINIMIZING
            cancel_event = threading.Event()
            timer = self._timer_factory(self._timeout, cancel_event.set)
            timer.daemon = True
            self._cancel_event = cancel_event
            self._worker = threading.Thread(
                target=self._run, args=(cancel_event, timer), daemon=True,
            )
        timer.start()
        self._worker.start()
        return True

    def _run(self, cancel_event: threading.Event, timer) -> None:
        try:
            self._minimize(self._get_game, cancel_event)
        except Exception as e:
            print(f"[error] minimize failed: {e}")
        finally:
            timer.cancel()
            with self._lock:
                self._state = CoordinatorState.IDLE
                self._cancel_event = None

    def cancel(self) -> None:
        with self._lock:
            if self._cancel_event is not None:
                self._cancel_event.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Join the background worker; True when nothing is left running."""
        worker = self._worker
        if worker is None:
            return True
        worker.join(timeout)
        return not worker.is_alive()
