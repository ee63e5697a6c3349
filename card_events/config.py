"""
Card Events - Configuration loader.

Initial values for the default registry, overridable from the environment
or a .env file next to this package.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)


def _get_str(key: str, default: str) -> str:
    """Get string from environment."""
    return os.getenv(key, default)


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(key, str(default)))


# Swipe classification
MIN_SWIPE_DISTANCE = _get_float('CARD_EVENTS_MIN_SWIPE_DISTANCE', 30)    # px
MAX_SWIPE_DURATION = _get_float('CARD_EVENTS_MAX_SWIPE_DURATION', 750)   # ms

# Name of the document method that returns the visible scene's name
SCENE_NAME_FUNCTION = _get_str('CARD_EVENTS_SCENE_NAME_FUNCTION', 'current_scene_name')
