"""
Interaction tracker.

Watches native pointerdown/pointerup on a document's root element and
turns each down/up pair into an InteractionRecord:

    Idle --pointerdown--> DownRecorded --pointerup--> Idle

Only the most recent pointer-down counts. A pointer-up without one is
still recorded, with no distance, duration or direction. Every pointer-up
dispatches a ``HypeCardInteraction`` event.
"""

from typing import Any, Callable, Optional, Set

from models import CardEvent, CardEventType, InteractionRecord, PointerSample
from card_events import config
from card_events.defaults import DefaultRegistry, MIN_SWIPE_DISTANCE, MAX_SWIPE_DURATION
from card_events.dispatch import CardEventDispatcher, ListenerResult
from card_events.host import HostDocument, native_event_fields, pointer_coordinates, pointer_target
from card_events.logging import get_logger
from card_events.state import DocumentRegistry

log = get_logger('tracker')

POINTER_DOWN = 'pointerdown'
POINTER_UP = 'pointerup'


class InteractionTracker:
    """
    Per-document pointer gesture tracking.

    Usage:
        tracker = InteractionTracker(documents, defaults, dispatcher, clock)
        tracker.attach(document)    # once per document id; repeats are no-ops
    """

    def __init__(
        self,
        documents: DocumentRegistry,
        defaults: DefaultRegistry,
        dispatcher: CardEventDispatcher,
        clock: Callable[[], float],
    ):
        self.documents = documents
        self.defaults = defaults
        self.dispatcher = dispatcher
        self.clock = clock
        self._attached: Set[str] = set()

    def is_attached(self, document_id: str) -> bool:
        return document_id in self._attached

    def attach(self, document: HostDocument) -> bool:
        """
        Listen to the document's native pointer events.

        Returns:
            True if listeners were attached, False if already attached or
            the document has no root element
        """
        document_id = document.document_id()
        if document_id in self._attached:
            log.debug("Pointer tracking already attached to %s", document_id)
            return False

        root = document.get_element_by_id(document_id)
        if root is None:
            log.warning("Document %s has no root element; pointer tracking disabled", document_id)
            return False

        root.add_event_listener(
            POINTER_DOWN, lambda event: self.pointer_down(document, event), passive=True
        )
        root.add_event_listener(
            POINTER_UP, lambda event: self.pointer_up(document, event, root), passive=True
        )
        self._attached.add(document_id)
        log.debug("Pointer tracking attached to %s", document_id)
        return True

    def _threshold(self, key: str, fallback: float) -> float:
        value = self.defaults.get(key)
        return fallback if value is None else value

    def pointer_down(self, document: HostDocument, event: Any) -> None:
        """Remember where and when the gesture started."""
        x, y = pointer_coordinates(event)
        state = self.documents.get(document.document_id())
        state.pending_pointer_down = PointerSample(x=x, y=y, time=self.clock())

    def pointer_up(self, document: HostDocument, event: Any, root: Optional[Any] = None) -> ListenerResult:
        """Complete the gesture, record it and dispatch HypeCardInteraction."""
        now = self.clock()
        x, y = pointer_coordinates(event)
        state = self.documents.get(document.document_id())

        record = InteractionRecord.from_pointer(
            state.pending_pointer_down,
            PointerSample(x=x, y=y, time=now),
            min_swipe_distance=self._threshold(MIN_SWIPE_DISTANCE, config.MIN_SWIPE_DISTANCE),
            max_swipe_duration=self._threshold(MAX_SWIPE_DURATION, config.MAX_SWIPE_DURATION),
        )
        state.last_pointer_interaction = record
        state.last_interaction_time = now
        state.pending_pointer_down = None

        if record.is_swipe:
            log.debug("Swipe %s on %s (%.0fpx in %.0fms)",
                      record.swipe_direction.value, state.document_id,
                      record.distance, record.duration)

        event_data = CardEvent(**native_event_fields(event)).merge(record.as_fields())
        target = pointer_target(event)
        element = target if target is not None else root
        return self.dispatcher.dispatch(CardEventType.INTERACTION, document, element, event_data)
