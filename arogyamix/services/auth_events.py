"""In-process auth state notifications (sign-in, sign-out, profile changes)."""
import logging
import threading
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class AuthEvent(str, Enum):
    signed_up = "SIGNED_UP"
    signed_in = "SIGNED_IN"
    signed_out = "SIGNED_OUT"
    user_updated = "USER_UPDATED"


Listener = Callable[[AuthEvent, dict], None]


class AuthEventBus:
    def __init__(self):
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register `listener`; returns a callable that unsubscribes it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def publish(self, event: AuthEvent, payload: dict) -> None:
        with self._lock:
            listeners = list(self._listeners)
        logger.info("Auth event %s for user %s", event.value, payload.get("user_id"))
        for listener in listeners:
            try:
                listener(event, payload)
            except Exception:
                logger.exception("Auth event listener failed for %s", event.value)


auth_events = AuthEventBus()
