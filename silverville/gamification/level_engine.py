"""
Village Leveling System

Derives the village level from cumulative village experience.

Leveling Curve:
- Level 1: 0 EXP
- Level 2: 100 EXP
- Level 3: 250 EXP
- Level 4: 500 EXP
- Level 5: 900 EXP
- Level 6: 1500 EXP
- Level 7: 2400 EXP
- Level 8: 3700 EXP
- Level 9: 5500 EXP
- Level 10: 8000 EXP (plateau, no higher level exists)

EXP Sources:
- Correct walk quiz answer: QUIZ_CORRECT_EXP
- Cafe session result: CAFE_EXP_PER_CORRECT per correct order
"""

from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

MAX_LEVEL = 10

# Minimum cumulative EXP required to reach each level
LEVEL_THRESHOLDS: Dict[int, int] = {
    1: 0,
    2: 100,
    3: 250,
    4: 500,
    5: 900,
    6: 1500,
    7: 2400,
    8: 3700,
    9: 5500,
    10: 8000,
}


def level_for(exp: int) -> int:
    """Greatest level whose threshold is at or below exp, in [1, MAX_LEVEL]"""
    level = 1
    for lv in range(2, MAX_LEVEL + 1):
        if exp >= LEVEL_THRESHOLDS[lv]:
            level = lv
        else:
            break
    return level


def level_progress(exp: int) -> Dict[str, Optional[int]]:
    """
    Calculate level and progress toward the next level from total EXP

    Returns:
        {
            'current_level': int,
            'exp_in_current_level': int,
            'exp_to_next_level': int or None at the plateau,
            'next_level_threshold': int or None at the plateau
        }
    """
    level = level_for(exp)
    exp_in_level = exp - LEVEL_THRESHOLDS[level]

    if level >= MAX_LEVEL:
        return {
            "current_level": level,
            "exp_in_current_level": exp_in_level,
            "exp_to_next_level": None,
            "next_level_threshold": None,
        }

    next_threshold = LEVEL_THRESHOLDS[level + 1]
    return {
        "current_level": level,
        "exp_in_current_level": exp_in_level,
        "exp_to_next_level": next_threshold - exp,
        "next_level_threshold": next_threshold,
    }
