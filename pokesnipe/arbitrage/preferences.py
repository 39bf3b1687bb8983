"""User filter preferences and where they are read from."""

from typing import Optional, Protocol

from ..core.constants import (
    DEFAULT_MAX_GRADE,
    DEFAULT_MIN_GRADE,
    DEFAULT_PREFERRED_GRADERS,
    DEFAULT_UNGRADED_CONDITIONS,
)
from ..core.types import Preferences, TierThresholds
from ..utils.config import settings


def default_preferences() -> Preferences:
    return Preferences(
        allowed_conditions=tuple(DEFAULT_UNGRADED_CONDITIONS),
        min_profit_gbp=settings.MIN_PROFIT_GBP,
        preferred_grading_companies=tuple(DEFAULT_PREFERRED_GRADERS),
        min_grade=DEFAULT_MIN_GRADE,
        max_grade=DEFAULT_MAX_GRADE,
        tier_thresholds=TierThresholds.defaults(),
    )


class PreferenceStore(Protocol):
    async def read(self) -> Preferences:
        ...


class StaticPreferenceStore:
    """Preferences held in memory; `update` replaces them for the next reload."""

    def __init__(self, preferences: Optional[Preferences] = None):
        self._preferences = preferences or default_preferences()
        self.reads = 0

    async def read(self) -> Preferences:
        self.reads += 1
        return self._preferences

    def update(self, preferences: Preferences) -> None:
        self._preferences = preferences
