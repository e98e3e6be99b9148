"""Experience progression toward the next level."""

from sheetwright.engine.policies import ProgressionPolicy
from sheetwright.engine.rounding import round_half_up
from sheetwright.sheet.models import Progression

XP_PER_LEVEL = 10


def xp_for_next_level(next_level: int) -> int:
    """
    Calculate the XP needed to reach a level.

    Args:
        next_level: The level being worked toward (current level + 1)

    Returns:
        next_level * 10

    Examples:
        Level 0→1: 10 XP
        Level 4→5: 50 XP
    """
    return next_level * XP_PER_LEVEL


def xp_progress(xp_current: float, xp_for_next: float) -> int:
    """Progress toward the next level as a whole percentage; 0 if nothing is required."""
    if xp_for_next <= 0:
        return 0
    return round_half_up(xp_current / xp_for_next * 100)


def compute_progression(
    current_level: int,
    current_xp: float,
    stored_next_level_xp: float,
    policy: ProgressionPolicy = ProgressionPolicy.RECOMPUTED,
) -> Progression:
    """
    Calculate a character's progress toward the next level.

    Args:
        current_level: Current character level
        current_xp: XP accumulated so far
        stored_next_level_xp: The XP requirement saved on the sheet
        policy: RECOMPUTED ignores the stored requirement and derives it from
            the level; TRUST_STORED reports the stored value as-is

    Returns:
        Progression with current/next level, XP figures and percentage progress
    """
    next_level = current_level + 1

    if policy is ProgressionPolicy.TRUST_STORED:
        xp_for_next = stored_next_level_xp
    else:
        xp_for_next = xp_for_next_level(next_level)

    return Progression(
        current_level=current_level,
        next_level=next_level,
        xp_current=current_xp,
        xp_for_next=xp_for_next,
        xp_progress=xp_progress(current_xp, xp_for_next),
    )
