"""
Mapping of raw device input (keys, touch swipes) to simulation events.
"""

from typing import Dict, Optional

from domain.constants import UP, DOWN, LEFT, RIGHT, TOGGLE_PAUSE, RESTART

KEY_EVENTS: Dict[str, str] = {
    "ARROWUP": UP,
    "W": UP,
    "ARROWDOWN": DOWN,
    "S": DOWN,
    "ARROWLEFT": LEFT,
    "A": LEFT,
    "ARROWRIGHT": RIGHT,
    "D": RIGHT,
    " ": TOGGLE_PAUSE,
    "SPACE": TOGGLE_PAUSE,
    "ENTER": RESTART,
}

# Minimum swipe length in pixels before a touch counts as a turn
MIN_SWIPE_DISTANCE = 30


def event_for_key(key: str) -> Optional[str]:
    """Return the event bound to a key name (case-insensitive), or None."""
    if not key:
        return None
    if key != " ":
        key = key.strip()
    return KEY_EVENTS.get(key.upper())


def direction_for_swipe(dx: float, dy: float, min_distance: float = MIN_SWIPE_DISTANCE) -> Optional[str]:
    """
    Direction of a touch swipe along its dominant axis.

    dy grows downward as on screen. Swipes shorter than min_distance
    are ignored.
    """
    if abs(dx) > abs(dy):
        if abs(dx) > min_distance:
            return RIGHT if dx > 0 else LEFT
        return None
    if abs(dy) > min_distance:
        return DOWN if dy > 0 else UP
    return None
