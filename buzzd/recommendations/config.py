from __future__ import annotations

import os
from dataclasses import dataclass

from ..deals.config import DEFAULT_DEALS_CONFIG, DealsConfig


@dataclass(frozen=True)
class RecommendationConfig:
    preferences_key: str = "userPreferences"
    session_secret: str = os.getenv("SESSION_SECRET", "buzzd-secret-change-in-production")
    deals: DealsConfig = DEFAULT_DEALS_CONFIG


DEFAULT_RECOMMENDATION_CONFIG = RecommendationConfig()
