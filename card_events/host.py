"""
Host runtime interfaces.

The dispatcher never owns documents, elements or pointer input; it talks
to them through these narrow protocols. Anything with matching methods
works (the tests use small fakes).
"""

from typing import Any, Callable, Dict, Mapping, Optional, Protocol, runtime_checkable


@runtime_checkable
class HostElement(Protocol):
    """A DOM-like element that can deliver native pointer events."""

    def add_event_listener(
        self,
        event_type: str,
        callback: Callable[[Any], Any],
        passive: bool = True,
    ) -> None:
        ...


@runtime_checkable
class HostDocument(Protocol):
    """
    One loaded document instance.

    Besides these methods the document must expose the scene-name accessor
    named by the ``scene_name_function`` default (``current_scene_name``
    unless reconfigured). The lifecycle adapter installs
    ``get_last_interaction_time`` and ``get_last_interaction_age`` on it.
    """

    def document_id(self) -> str:
        ...

    def current_scene_name(self) -> str:
        ...

    def functions(self) -> Mapping[str, Callable[..., Any]]:
        ...

    def get_element_by_id(self, element_id: str) -> Optional[HostElement]:
        ...


NATIVE_POINTER_FIELDS = (
    'type',
    'client_x',
    'client_y',
    'target',
    'pointer_id',
    'pointer_type',
    'button',
    'timestamp',
)


def native_event_fields(event: Any) -> Dict[str, Any]:
    """
    Copy the public fields of a native event.

    Native events may be plain mappings or attribute objects. Objects
    without an instance ``__dict__`` (``__slots__`` classes, extension
    types) contribute whichever of NATIVE_POINTER_FIELDS they carry.
    """
    if event is None:
        return {}
    if isinstance(event, Mapping):
        return dict(event)
    if hasattr(event, '__dict__'):
        return {
            name: value
            for name, value in vars(event).items()
            if not name.startswith('_')
        }
    return {
        name: getattr(event, name)
        for name in NATIVE_POINTER_FIELDS
        if hasattr(event, name)
    }


def pointer_coordinates(event: Any) -> tuple:
    """(client_x, client_y) from a native pointer event."""
    if isinstance(event, Mapping):
        return float(event['client_x']), float(event['client_y'])
    return float(event.client_x), float(event.client_y)


def pointer_target(event: Any) -> Any:
    if isinstance(event, Mapping):
        return event.get('target')
    return getattr(event, 'target', None)
