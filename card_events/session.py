"""
Card Events Session

The main interface between a host document runtime and card event users.
Owns every piece of dispatcher state and wires the components together.

Usage:
    listeners = ListenerRegistry()          # the host's listener list
    session = CardEventsSession()
    session.install(listeners)

    # Host delivers native lifecycle events:
    listeners.notify("HypeDocumentLoad", document, element, event)
    listeners.notify("HypeScenePrepareForDisplay", document, element, event)
    listeners.notify("HypeSceneLoad", document, element, event)

    # Users observe derived events:
    listeners.register("HypeCardUnload", on_unload)
    session.set_default("min_swipe_distance", 50)
"""

import time
from typing import Any, Callable, Optional

from models import NativeEventType
from card_events.composer import CardEventComposer
from card_events.defaults import DefaultRegistry
from card_events.dispatch import CardEventDispatcher, ListenerRegistry
from card_events.lifecycle import LifecycleAdapters
from card_events.logging import get_logger
from card_events.state import DocumentRegistry
from card_events.tracker import InteractionTracker

log = get_logger('session')


def wall_clock_ms() -> float:
    """Current wall-clock time in milliseconds."""
    return time.time() * 1000.0


class CardEventsSession:
    """
    Card events session.

    Responsibilities:
    1. Hold defaults, per-document state and the listener registry
    2. Register the lifecycle adapters with the host's listener list
    3. Expose default get/set and per-document teardown
    """

    def __init__(
        self,
        listeners: Optional[ListenerRegistry] = None,
        defaults: Optional[DefaultRegistry] = None,
        clock: Callable[[], float] = wall_clock_ms,
    ):
        """
        Args:
            listeners: Listener registry shared with the host (new one if None)
            defaults: Default registry (configured starting values if None)
            clock: Wall-clock source in milliseconds
        """
        self.listeners = listeners if listeners is not None else ListenerRegistry()
        self.defaults = defaults if defaults is not None else DefaultRegistry()
        self.documents = DocumentRegistry()
        self.clock = clock

        self.dispatcher = CardEventDispatcher(self.defaults, self.listeners)
        self.composer = CardEventComposer(self.documents, clock)
        self.tracker = InteractionTracker(self.documents, self.defaults, self.dispatcher, clock)
        self.adapters = LifecycleAdapters(
            self.documents,
            self.defaults,
            self.composer,
            self.dispatcher,
            self.tracker,
            clock,
        )

    def install(self, listeners: Optional[ListenerRegistry] = None) -> ListenerRegistry:
        """
        Register the native lifecycle callbacks.

        Installing twice into the same registry does nothing the second time.

        Args:
            listeners: Registry to install into; defaults to the session's own.
                Passing a different registry makes it the session's registry.

        Returns:
            The registry the callbacks live in
        """
        if listeners is not None and listeners is not self.listeners:
            self.listeners = listeners
            self.dispatcher.listeners = listeners

        callbacks = (
            (NativeEventType.DOCUMENT_LOAD, self.adapters.on_document_load),
            (NativeEventType.SCENE_PREPARE, self.adapters.on_scene_prepare),
            (NativeEventType.SCENE_LOAD, self.adapters.on_scene_load),
        )
        for event_type, callback in callbacks:
            if not self.listeners.is_registered(event_type.value, callback):
                self.listeners.register(event_type.value, callback)

        log.debug("Installed lifecycle callbacks (%d listeners)", len(self.listeners))
        return self.listeners

    def set_default(self, key: Any, *value: Any) -> None:
        """set_default(key, value) or set_default(mapping)."""
        if len(value) > 1:
            raise TypeError("set_default() takes (key, value) or a single mapping")
        self.defaults.set(key, *value)

    def get_default(self, key: Optional[str] = None) -> Any:
        return self.defaults.get(key)

    def reset_document(self, document_id: str) -> bool:
        """Forget everything recorded for a document that went away."""
        return self.documents.forget(document_id)
