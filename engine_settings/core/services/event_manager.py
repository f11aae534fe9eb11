"""
event_manager.py
----------------
Typed publish/subscribe channel owned by the settings store.
Lets UI and gameplay code react to settings changes without polling.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Type
from engine_settings.core.debug.debug_logger import DebugLogger


# ===========================================================
# Event Definitions
# ===========================================================

@dataclass(frozen=True)
class BaseEvent:
    """Base class for all events."""
    pass


@dataclass(frozen=True)
class SettingChangedEvent(BaseEvent):
    """Dispatched after a setting has been stored and applied."""
    name: str
    value: Any


@dataclass(frozen=True)
class SettingsSavedEvent(BaseEvent):
    """Dispatched after the settings file was written."""
    path: str


@dataclass(frozen=True)
class SettingsLoadedEvent(BaseEvent):
    """Dispatched after load; from_file is False when defaults were used."""
    path: str
    from_file: bool


@dataclass(frozen=True)
class SettingsResetEvent(BaseEvent):
    """Dispatched after every setting was restored to its default."""
    pass


# ===========================================================
# Event Manager
# ===========================================================

class EventManager:
    """Event dispatcher using pub-sub pattern. Callbacks run in subscription order."""

    def __init__(self):
        self._subscribers: Dict[Type[BaseEvent], List[Callable]] = {}

    # ===========================================================
    # Subscription
    # ===========================================================

    def subscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """
        Register a callback for an event type.

        Args:
            event_type: Event class to listen for
            callback: Function to call when event fires
        """
        subscribers = self._subscribers.setdefault(event_type, [])
        if callback in subscribers:
            return

        subscribers.append(callback)
        callback_name = getattr(callback, '__name__', repr(callback))
        DebugLogger.trace(
            f"Subscribed '{callback_name}' to '{event_type.__name__}'",
            category="event_manager"
        )

    def unsubscribe(self, event_type: Type[BaseEvent], callback: Callable) -> None:
        """Remove a callback from an event type. Unknown callbacks are ignored."""
        subscribers = self._subscribers.get(event_type)
        if subscribers and callback in subscribers:
            subscribers.remove(callback)

    def unsubscribe_all(self, callback: Callable) -> None:
        """Remove a callback from every event type."""
        for subscribers in self._subscribers.values():
            if callback in subscribers:
                subscribers.remove(callback)

    # ===========================================================
    # Dispatch
    # ===========================================================

    def dispatch(self, event: BaseEvent) -> None:
        """
        Send event to all registered callbacks.

        A failing callback is logged and does not stop later callbacks.

        Args:
            event: Event instance to dispatch
        """
        for callback in list(self._subscribers.get(type(event), ())):
            try:
                callback(event)
            except Exception as e:
                callback_name = getattr(callback, '__name__', repr(callback))
                DebugLogger.warn(
                    f"Error in event callback {callback_name}: {e}",
                    category="settings"
                )

    # ===========================================================
    # Lifecycle
    # ===========================================================

    def clear_all(self) -> None:
        """Remove all subscribers."""
        self._subscribers.clear()

    def get_subscriber_count(self, event_type: Type[BaseEvent] = None) -> int:
        """
        Get count of subscribers.

        Args:
            event_type: Specific event type, or None for total
        """
        if event_type:
            return len(self._subscribers.get(event_type, []))
        return sum(len(subs) for subs in self._subscribers.values())
