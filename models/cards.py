"""
Card event models.

Defines the data that flows out of the card event dispatcher:
- CardEventType: the closed catalog of derived event names
- InteractionRecord: one completed pointer gesture with swipe classification
- CardEvent: the payload handed to handlers and listeners

Event type values are the names handlers and listeners are registered
under, so they are kept exactly as the host runtime spells them.
"""

from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .primitives import PointerSample


class CardEventType(str, Enum):
    """Derived event types, plus the catch-all slot."""
    PREPARE = "HypeCardPrepare"
    UNLOAD = "HypeCardUnload"
    LOAD = "HypeCardLoad"
    INTERACTION = "HypeCardInteraction"
    GENERIC = "HypeCardEvent"  # Catch-all, never dispatched on its own


class NativeEventType(str, Enum):
    """Host lifecycle events the dispatcher listens to."""
    DOCUMENT_LOAD = "HypeDocumentLoad"
    SCENE_PREPARE = "HypeScenePrepareForDisplay"
    SCENE_LOAD = "HypeSceneLoad"


class SwipeDirection(str, Enum):
    """Dominant axis and sign of a pointer gesture."""
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"


def swipe_direction(dx: float, dy: float) -> SwipeDirection:
    """
    Classify a displacement into a swipe direction.

    Horizontal wins only when |dx| is strictly larger than |dy|; equal
    magnitudes resolve on the vertical axis. Screen y grows downward.

    Examples:
        >>> swipe_direction(-50, 5)
        <SwipeDirection.LEFT: 'left'>
        >>> swipe_direction(30, 30)
        <SwipeDirection.DOWN: 'down'>
    """
    if abs(dx) > abs(dy):
        return SwipeDirection.RIGHT if dx > 0 else SwipeDirection.LEFT
    return SwipeDirection.DOWN if dy > 0 else SwipeDirection.UP


def is_swipe(
    distance: Optional[float],
    duration: Optional[float],
    min_swipe_distance: float,
    max_swipe_duration: float,
) -> bool:
    """True iff the gesture travelled far enough, fast enough."""
    if distance is None or duration is None:
        return False
    return distance >= min_swipe_distance and duration <= max_swipe_duration


class InteractionRecord(BaseModel):
    """
    Result of one completed pointer gesture (down followed by up).

    A pointer-up without a recorded pointer-down still produces a record;
    distance, duration and direction are then None and is_swipe is False.
    """
    pointer_down: Optional[PointerSample] = Field(default=None, description="Where the gesture started")
    pointer_up: PointerSample = Field(..., description="Where the gesture ended")
    distance: Optional[float] = Field(default=None, description="Euclidean distance in px")
    duration: Optional[float] = Field(default=None, description="Up time minus down time in ms")
    is_swipe: bool = Field(default=False)
    swipe_direction: Optional[SwipeDirection] = Field(default=None)
    min_swipe_distance: float = Field(..., description="Threshold in effect (px)")
    max_swipe_duration: float = Field(..., description="Threshold in effect (ms)")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_pointer(
        cls,
        pointer_down: Optional[PointerSample],
        pointer_up: PointerSample,
        min_swipe_distance: float,
        max_swipe_duration: float,
    ) -> "InteractionRecord":
        """Measure and classify a gesture from its end points."""
        distance = duration = direction = None
        if pointer_down is not None:
            distance = pointer_down.distance_to(pointer_up)
            duration = pointer_up.time - pointer_down.time
            direction = swipe_direction(
                pointer_up.x - pointer_down.x,
                pointer_up.y - pointer_down.y,
            )

        return cls(
            pointer_down=pointer_down,
            pointer_up=pointer_up,
            distance=distance,
            duration=duration,
            is_swipe=is_swipe(distance, duration, min_swipe_distance, max_swipe_duration),
            swipe_direction=direction,
            min_swipe_distance=min_swipe_distance,
            max_swipe_duration=max_swipe_duration,
        )

    def as_fields(self) -> Dict[str, Any]:
        """Fields to merge into an event payload."""
        return {name: getattr(self, name) for name in type(self).model_fields}


class CardEvent(BaseModel):
    """
    Payload of a derived card event.

    Mutable: the dispatcher stamps ``type`` and ``target`` just before
    handlers run. Fields that were never assigned are left out of
    ``to_payload()``, so a prepare event carries no ``next_card_name`` key
    at all rather than one set to None.

    Interaction events also carry whatever fields the native pointer event
    had (``client_x``, ``client_y``, ...) as extra attributes.
    """
    type: Optional[str] = None
    target: Any = None

    previous_card_name: Optional[str] = None
    current_card_name: Optional[str] = None
    next_card_name: Optional[str] = None
    last_interaction_age: Optional[float] = None

    # Interaction telemetry (unload and interaction events only)
    pointer_down: Optional[PointerSample] = None
    pointer_up: Optional[PointerSample] = None
    distance: Optional[float] = None
    duration: Optional[float] = None
    is_swipe: Optional[bool] = None
    swipe_direction: Optional[SwipeDirection] = None
    min_swipe_distance: Optional[float] = None
    max_swipe_duration: Optional[float] = None

    model_config = ConfigDict(extra="allow")

    def merge(self, fields: Dict[str, Any]) -> "CardEvent":
        """Assign each of ``fields`` onto this event (marks them as set)."""
        for name, value in fields.items():
            setattr(self, name, value)
        return self

    def to_payload(self) -> Dict[str, Any]:
        """Dict of every field that was set, extras included."""
        payload = self.model_dump(exclude_unset=True)
        payload.update(self.model_extra or {})
        return payload
