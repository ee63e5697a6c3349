"""
Per-document transition and interaction state.

Each loaded document instance gets one DocumentState, created lazily the
first time its identifier is seen. The registry is owned by the session
and handed to the tracker, composer and lifecycle adapters.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from models import InteractionRecord, PointerSample


@dataclass
class DocumentState:
    """
    Everything remembered about one document instance.

    Attributes:
        document_id: Host identifier of the document
        current_card_name: Name of the most recently loaded scene
        prior_card_name: Name loaded before current_card_name
        last_interaction_time: Wall-clock ms of the last pointer-up
        pending_pointer_down: Down sample awaiting its pointer-up
        last_pointer_interaction: Last completed gesture, until reported
    """
    document_id: str
    current_card_name: Optional[str] = None
    prior_card_name: Optional[str] = None
    last_interaction_time: Optional[float] = None
    pending_pointer_down: Optional[PointerSample] = None
    last_pointer_interaction: Optional[InteractionRecord] = None

    def reset_transitions(self) -> None:
        """Forget scene names (document reloaded)."""
        self.current_card_name = None
        self.prior_card_name = None

    def is_transition(self, name: str) -> bool:
        """True when ``name`` would change the recorded scene."""
        return self.current_card_name is None or self.current_card_name != name

    def record_load(self, name: str) -> None:
        """Shift the recorded names after a scene finished loading."""
        self.prior_card_name = self.current_card_name
        self.current_card_name = name

    def interaction_age(self, now: float) -> Optional[float]:
        """Milliseconds since the last pointer-up, None if there was none."""
        if self.last_interaction_time is None:
            return None
        return now - self.last_interaction_time

    def take_interaction(self) -> Optional[InteractionRecord]:
        """Hand off the last gesture once and clear all interaction state."""
        record = self.last_pointer_interaction
        self.last_pointer_interaction = None
        self.pending_pointer_down = None
        self.last_interaction_time = None
        return record


class DocumentRegistry:
    """Mapping of document identifier to DocumentState."""

    def __init__(self):
        self._states: Dict[str, DocumentState] = {}

    def get(self, document_id: str) -> DocumentState:
        """State for ``document_id``, created on first use."""
        state = self._states.get(document_id)
        if state is None:
            state = DocumentState(document_id=document_id)
            self._states[document_id] = state
        return state

    def peek(self, document_id: str) -> Optional[DocumentState]:
        """State for ``document_id`` without creating it."""
        return self._states.get(document_id)

    def forget(self, document_id: str) -> bool:
        """
        Drop a document's state. Returns True if it existed.

        Pointer tracking attachment is owned by InteractionTracker and
        survives this.
        """
        return self._states.pop(document_id, None) is not None

    def clear(self) -> None:
        self._states.clear()

    def __contains__(self, document_id: str) -> bool:
        return document_id in self._states

    def __iter__(self) -> Iterator[DocumentState]:
        return iter(list(self._states.values()))

    def __len__(self) -> int:
        return len(self._states)
