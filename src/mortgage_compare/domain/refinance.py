from __future__ import annotations

from enum import Enum

# Breakeven at or under this many months is a clear win
DEFAULT_RECOMMENDED_MAX_MONTHS = 36


class RefinanceRecommendation(str, Enum):
    NOT_RECOMMENDED = "NOT_RECOMMENDED"
    RECOMMENDED = "RECOMMENDED"
    CONSIDER = "CONSIDER"
