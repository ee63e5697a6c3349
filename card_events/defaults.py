"""
Default registry.

Holds the configurable values the dispatcher consults at event time:
swipe thresholds, the scene-name accessor name, and optional built-in
handlers keyed by event type name (``HypeCardLoad``, ...) or by the
catch-all ``HypeCardEvent``.

Keys are not validated; unknown keys are stored and ignored.
"""

from typing import Any, Dict, Mapping, Optional

from card_events import config

MIN_SWIPE_DISTANCE = 'min_swipe_distance'
MAX_SWIPE_DURATION = 'max_swipe_duration'
SCENE_NAME_FUNCTION = 'scene_name_function'

_MISSING = object()


def initial_defaults() -> Dict[str, Any]:
    """Fresh copy of the configured starting values."""
    return {
        MIN_SWIPE_DISTANCE: config.MIN_SWIPE_DISTANCE,
        MAX_SWIPE_DURATION: config.MAX_SWIPE_DURATION,
        SCENE_NAME_FUNCTION: config.SCENE_NAME_FUNCTION,
    }


class DefaultRegistry:
    """
    Get/set store for default values.

    Usage:
        defaults = DefaultRegistry()
        defaults.set('min_swipe_distance', 50)
        defaults.set({'max_swipe_duration': 500})   # replaces everything
        defaults.get('max_swipe_duration')          # 500
        defaults.get()                              # whole mapping (copy)
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None):
        self._values: Dict[str, Any] = dict(values) if values is not None else initial_defaults()

    def set(self, key: Any, value: Any = _MISSING) -> None:
        """
        Set one default, or replace all of them.

        Args:
            key: Default name, or a mapping that replaces the whole registry
            value: New value (required when key is a name)
        """
        if value is _MISSING:
            if not isinstance(key, Mapping):
                raise TypeError(
                    f"set() needs a key and a value, or a single mapping; got {type(key).__name__}"
                )
            self._values = dict(key)
            return

        if not isinstance(key, str):
            raise TypeError(f"Default keys must be strings, got {type(key).__name__}")
        self._values[key] = value

    def get(self, key: Optional[str] = None) -> Any:
        """Value for ``key`` (None if unset), or a copy of all defaults."""
        if key is None:
            return dict(self._values)
        return self._values.get(key)

    def get_handler(self, event_type: str):
        """Built-in default handler for an event type name, if callable."""
        handler = self._values.get(event_type)
        return handler if callable(handler) else None

    def reset(self) -> None:
        """Restore the configured starting values."""
        self._values = initial_defaults()

    def __contains__(self, key: str) -> bool:
        return key in self._values
