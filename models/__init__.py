"""
Models library for card events.

This package provides the Pydantic data models shared by the dispatcher
and its tests:
- Primitives: Point2D, PointerSample
- Cards: event type catalog, swipe classification, InteractionRecord, CardEvent

Usage:
    >>> from models import CardEvent, CardEventType, InteractionRecord
    >>> from models.primitives import PointerSample
"""

from .primitives import (
    Point2D,
    PointerSample,
)

from .cards import (
    CardEventType,
    NativeEventType,
    SwipeDirection,
    InteractionRecord,
    CardEvent,
    swipe_direction,
    is_swipe,
)

__all__ = [
    'Point2D',
    'PointerSample',
    'CardEventType',
    'NativeEventType',
    'SwipeDirection',
    'InteractionRecord',
    'CardEvent',
    'swipe_direction',
    'is_swipe',
]
