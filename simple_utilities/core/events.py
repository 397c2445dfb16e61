import inspect
import logging
from typing import Any, Callable, Dict, List, Type, Union

from simple_utilities.contracts.event import Event
from simple_utilities.contracts.event_listener import EventListener

Listener = Union[Callable[[Any], Any], Type[EventListener]]
EventKey = Union[str, Event, Type[Event]]


def get_event_name(event: EventKey) -> str:
    if isinstance(event, str):
        return event
    return event.get_event_name()


class EventDispatcher:
    """
    In-process event dispatcher. Listeners run synchronously in registration order.

        dispatcher = EventDispatcher()
        dispatcher.listen("user_registered", send_welcome_mail)
        dispatcher.listen(UserRegisteredEvent, AuditListener)
        dispatcher.dispatch(UserRegisteredEvent(user_id="42"))
    """

    def __init__(self):
        self._listeners: Dict[str, List[Listener]] = {}

    def listen(self, event: EventKey, listener: Listener) -> None:
        if not callable(listener):
            raise TypeError(f"Listener for `{get_event_name(event)}` must be callable or an EventListener class")
        self._listeners.setdefault(get_event_name(event), []).append(listener)

    def dispatch(self, event: EventKey, payload: Any = None) -> None:
        """
        Call every listener registered for the event.

        When `event` is an Event instance and no payload is given, the event
        itself is handed to the listeners.
        """
        event_name = get_event_name(event)
        if payload is None and isinstance(event, Event):
            payload = event

        listeners = list(self._listeners.get(event_name, []))
        if not listeners:
            logging.debug(f"[EVENTS] No listeners registered for {event_name}")
            return

        logging.debug(f"[EVENTS] Dispatching {event_name} to {len(listeners)} listener(s)")
        for listener in listeners:
            self._call(listener, event_name, payload)

    def remove_listener(self, event: EventKey, listener: Listener) -> None:
        event_name = get_event_name(event)
        remaining = [registered for registered in self._listeners.get(event_name, []) if registered is not listener]
        if remaining:
            self._listeners[event_name] = remaining
        else:
            self._listeners.pop(event_name, None)

    def has_listeners(self, event: EventKey) -> bool:
        return bool(self._listeners.get(get_event_name(event)))

    def forget(self, event: EventKey) -> None:
        self._listeners.pop(get_event_name(event), None)

    @staticmethod
    def _call(listener: Listener, event_name: str, payload: Any) -> None:
        listener_name = getattr(listener, "__name__", type(listener).__name__)
        try:
            if inspect.isclass(listener) and issubclass(listener, EventListener):
                listener().handle(payload)
            else:
                listener(payload)
        except Exception as e:
            logging.error(f"[EVENTS] Error processing {listener_name} for {event_name}: {e}")
            raise
