"""
Card Events

Scene-transition event dispatcher for a host document runtime. Derives
HypeCardPrepare / HypeCardUnload / HypeCardLoad / HypeCardInteraction from
the host's native scene lifecycle and pointer events.

The module-level functions operate on a shared session:

    import card_events

    card_events.install(host_listeners)
    card_events.set_default('max_swipe_duration', 500)
    card_events.get_default('max_swipe_duration')   # 500
"""

from typing import Any, Optional

from .dispatch import (
    CONTINUE,
    Halt,
    ListenerRegistry,
    CardEventDispatcher,
)
from .defaults import DefaultRegistry
from .state import DocumentRegistry, DocumentState
from .session import CardEventsSession

version = '1.0.0'
__version__ = version

_session = CardEventsSession()


def default_session() -> CardEventsSession:
    """The shared module-level session."""
    return _session


def install(listeners: Optional[ListenerRegistry] = None) -> ListenerRegistry:
    """Register the shared session's lifecycle callbacks."""
    return _session.install(listeners)


def set_default(key: Any, *value: Any) -> None:
    """Set one default (key, value) or replace all defaults (mapping)."""
    _session.set_default(key, *value)


def get_default(key: Optional[str] = None) -> Any:
    """One default, or all of them when no key is given."""
    return _session.get_default(key)


__all__ = [
    'version',
    'CONTINUE',
    'Halt',
    'ListenerRegistry',
    'CardEventDispatcher',
    'DefaultRegistry',
    'DocumentRegistry',
    'DocumentState',
    'CardEventsSession',
    'default_session',
    'install',
    'set_default',
    'get_default',
]
