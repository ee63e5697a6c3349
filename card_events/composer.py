"""
Event composer.

Builds CardEvent payloads from transition names and interaction state.
Unload events take the pending interaction telemetry with them: a gesture
is reported on exactly one unload and then discarded.
"""

from typing import Any, Callable, Optional

from models import CardEvent, CardEventType
from card_events.state import DocumentRegistry


class CardEventComposer:
    """Builds payloads for derived card events."""

    def __init__(self, documents: DocumentRegistry, clock: Callable[[], float]):
        """
        Args:
            documents: Per-document state
            clock: Wall-clock source in milliseconds
        """
        self.documents = documents
        self.clock = clock

    def interaction_age(self, document: Any) -> Optional[float]:
        """
        Milliseconds since the document's last pointer-up, or None.

        Uses the document's own ``get_last_interaction_age`` when installed.
        """
        accessor = getattr(document, 'get_last_interaction_age', None)
        if callable(accessor):
            return accessor()
        state = self.documents.peek(document.document_id())
        if state is None:
            return None
        return state.interaction_age(self.clock())

    def compose(
        self,
        event_type: CardEventType,
        document: Any,
        previous_card_name: Optional[str],
        current_card_name: Optional[str],
        next_card_name: Optional[str] = None,
    ) -> CardEvent:
        """
        Build the payload for a transition event.

        ``next_card_name`` is only put on unload events.
        """
        event = CardEvent(
            type=event_type.value,
            previous_card_name=previous_card_name,
            current_card_name=current_card_name,
            last_interaction_age=self.interaction_age(document),
        )

        if event_type is CardEventType.UNLOAD:
            event.next_card_name = next_card_name
            record = self.documents.get(document.document_id()).take_interaction()
            if record is not None:
                event.merge(record.as_fields())

        return event
