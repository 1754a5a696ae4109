"""events.py - explicit publish/subscribe for observable state"""

from typing import Any, Callable


class Observable:
    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callable]] = {}

    def subscribe(self, event: str, callback: Callable) -> None:
        callbacks = self._subscribers.setdefault(event, [])
        if callback not in callbacks:
            callbacks.append(callback)

    def unsubscribe(self, event: str, callback: Callable) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def _publish(self, event: str, *args: Any) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(*args)

    def _set_field(self, name: str, value: Any) -> bool:
        """Store `value` in `_<name>`; publish property_changed only on change."""
        attr = f"_{name}"
        if getattr(self, attr) == value:
            return False
        setattr(self, attr, value)
        self._publish("property_changed", self, name, value)
        return True
