"""Level curve: converts an XP total into a level and progress toward the next."""

import math

from innovateflow_progress.models.progress import LevelInfo

FIRST_LEVEL_XP = 100  # XP needed to go from level 1 to level 2
LEVEL_CURVE_BASE = 100
LEVEL_CURVE_EXPONENT = 1.5


def _level_span(level: int) -> int:
    """XP added to the threshold when ``level`` is entered."""
    return math.floor(LEVEL_CURVE_BASE * math.pow(level, LEVEL_CURVE_EXPONENT))


def resolve_level(xp: int) -> LevelInfo:
    """Walk the thresholds to find the level for ``xp``.

    A threshold belongs to the level being entered: 100 XP is level 2.
    The loop terminates because the threshold grows on every step.

    Args:
        xp: Non-negative XP total.

    Returns:
        Level, XP into the level, span of the level and percentage progress.
    """
    level = 1
    required_xp = FIRST_LEVEL_XP
    base_xp = 0
    while xp >= required_xp:
        level += 1
        base_xp = required_xp
        required_xp += _level_span(level)

    xp_into_level = xp - base_xp
    xp_to_next_level = required_xp - base_xp
    return LevelInfo(
        level=level,
        base_xp=base_xp,
        xp_into_level=xp_into_level,
        xp_to_next_level=xp_to_next_level,
        progress_percentage=xp_into_level / xp_to_next_level * 100,
    )


def level_threshold(level: int) -> int:
    """Cumulative XP at which ``level`` is entered (0 for level 1)."""
    threshold = 0
    required_xp = FIRST_LEVEL_XP
    for current in range(2, level + 1):
        threshold = required_xp
        required_xp += _level_span(current)
    return threshold
