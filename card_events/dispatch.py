"""
Dispatch core.

Two pieces:
- ListenerRegistry: the ordered list of (event type, callback) pairs the
  host invokes on native lifecycle events and that derived card events are
  forwarded to.
- CardEventDispatcher: stamps a CardEvent and runs it through the handler
  tiers in a fixed order.

Handler order for one derived event:
1. default handler for the event type (DefaultRegistry)
2. default catch-all handler ``HypeCardEvent`` (DefaultRegistry)
3. user catch-all handler ``HypeCardEvent`` (document.functions())
4. user handler for the event type (document.functions())
5. registered listeners for the event type, in registration order

Steps 2 and 3 are skipped when the event type is ``HypeCardEvent`` itself.
Only listeners can stop dispatch, by returning ``False`` or a ``Halt``.
Exceptions from any handler propagate to the caller.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Tuple, Union

from models import CardEvent, CardEventType
from card_events.defaults import DefaultRegistry
from card_events.logging import get_logger, emit_record

log = get_logger('dispatch')

Listener = Callable[..., Any]


@dataclass(frozen=True)
class Halt:
    """A listener asked to stop dispatch; ``value`` is the overall result."""
    value: Any = False


class _Continue:
    """Dispatch ran to completion."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return True

    def __repr__(self) -> str:
        return "CONTINUE"


CONTINUE = _Continue()

ListenerResult = Union[_Continue, Halt]


def to_listener_result(returned: Any) -> ListenerResult:
    """Normalize a listener's return value; a literal ``False`` halts."""
    if isinstance(returned, Halt):
        return returned
    if returned is False:
        return Halt(False)
    return CONTINUE


def _type_name(event_type: Union[str, CardEventType]) -> str:
    return event_type.value if isinstance(event_type, CardEventType) else str(event_type)


class ListenerRegistry:
    """
    Ordered, append-only collection of (event type, callback) pairs.

    Usage:
        listeners = ListenerRegistry()
        listeners.register("HypeCardLoad", on_load)
        result = listeners.notify("HypeCardLoad", document, element, event)
        if isinstance(result, Halt):
            ...
    """

    def __init__(self):
        self._entries: List[Tuple[str, Listener]] = []

    def register(self, event_type: Union[str, CardEventType], callback: Listener) -> None:
        """Append a listener for an event type."""
        if not callable(callback):
            raise TypeError(f"Listener for {_type_name(event_type)} is not callable")
        self._entries.append((_type_name(event_type), callback))

    def is_registered(self, event_type: Union[str, CardEventType], callback: Listener) -> bool:
        return (_type_name(event_type), callback) in self._entries

    def listeners_for(self, event_type: Union[str, CardEventType]) -> List[Listener]:
        """Callbacks registered for an event type, in registration order."""
        name = _type_name(event_type)
        return [callback for registered, callback in self._entries if registered == name]

    def notify(self, event_type: Union[str, CardEventType], *args) -> ListenerResult:
        """
        Call every listener of ``event_type`` with ``args`` until one halts.

        Returns:
            CONTINUE, or the Halt returned by the listener that stopped dispatch
        """
        for callback in self.listeners_for(event_type):
            result = to_listener_result(callback(*args))
            if isinstance(result, Halt):
                log.debug("Listener %r halted %s", callback, _type_name(event_type))
                return result
        return CONTINUE

    def __iter__(self) -> Iterator[Tuple[str, Listener]]:
        return iter(list(self._entries))

    def __len__(self) -> int:
        return len(self._entries)


class CardEventDispatcher:
    """Runs derived card events through defaults, user handlers and listeners."""

    def __init__(self, defaults: DefaultRegistry, listeners: ListenerRegistry):
        self.defaults = defaults
        self.listeners = listeners

    def _user_handler(self, document: Any, event_type: str) -> Optional[Callable[..., Any]]:
        functions = document.functions() if hasattr(document, 'functions') else None
        if not functions:
            return None
        handler = functions.get(event_type)
        return handler if callable(handler) else None

    def resolve_handlers(self, event_type: Union[str, CardEventType], document: Any) -> List[Callable[..., Any]]:
        """
        Handlers that will run for ``event_type`` before listeners, in order.
        """
        name = _type_name(event_type)
        generic = CardEventType.GENERIC.value
        is_generic = name == generic

        slots = [
            self.defaults.get_handler(name),
            None if is_generic else self.defaults.get_handler(generic),
            None if is_generic else self._user_handler(document, generic),
            self._user_handler(document, name),
        ]
        return [handler for handler in slots if handler is not None]

    def dispatch(
        self,
        event_type: Union[str, CardEventType],
        document: Any,
        element: Any,
        event: CardEvent,
    ) -> ListenerResult:
        """
        Stamp and deliver one derived event.

        Args:
            event_type: Derived event type
            document: Host document the event belongs to
            element: Element stamped as the event target
            event: Payload; ``type`` and ``target`` are overwritten

        Returns:
            CONTINUE, or the Halt returned by a listener
        """
        name = _type_name(event_type)
        event.type = name
        event.target = element

        handlers = self.resolve_handlers(name, document)
        for handler in handlers:
            handler(document, element, event)

        result = self.listeners.notify(name, document, element, event)

        emit_record('dispatch', {
            'type': name,
            'previous_card_name': event.previous_card_name,
            'current_card_name': event.current_card_name,
            'handlers': len(handlers),
            'halted': isinstance(result, Halt),
        })
        log.trace("Dispatched %s (%d handlers, result=%r)", name, len(handlers), result)
        return result
