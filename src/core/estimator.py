"""Per-category trip cost estimates.

The estimates are deterministic placeholders: the same trip always yields the
same numbers. A user-entered cost for a category always replaces the estimate.
"""

from __future__ import annotations

import hashlib
import math

from src.models.schemas import (
    ALLOCATION_ORDER,
    BudgetCategory,
    CategoryCosts,
    CostOverrides,
    TravelSeason,
    TripEstimateInput,
)

# Dollars per traveler per day
DAILY_RATES: dict[BudgetCategory, float] = {
    BudgetCategory.ACCOMMODATIONS: 95.0,
    BudgetCategory.TRANSPORTATION: 25.0,
    BudgetCategory.ACTIVITIES: 40.0,
    BudgetCategory.FOOD: 55.0,
    BudgetCategory.PREPARATION: 3.0,
}

FLIGHT_FARE_PER_LEG = 450.0
PREPARATION_BASE = 120.0  # insurance, documents, gear per traveler

SEASON_MULTIPLIERS: dict[TravelSeason, float] = {
    TravelSeason.PEAK: 1.25,
    TravelSeason.SHOULDER: 1.0,
    TravelSeason.OFF: 0.85,
}

_SEASON_KEYWORDS: dict[TravelSeason, tuple[str, ...]] = {
    TravelSeason.OFF: ("off", "low", "winter"),
    TravelSeason.PEAK: ("peak", "high", "summer", "holiday", "christmas"),
    TravelSeason.SHOULDER: ("shoulder", "spring", "fall", "autumn"),
}


def normalize_season(season: str | None) -> TravelSeason:
    """Map free-text season descriptions onto a pricing season."""
    text = (season or "").strip().lower()
    for value, keywords in _SEASON_KEYWORDS.items():
        if any(k in text for k in keywords):
            return value
    return TravelSeason.SHOULDER


def destination_price_factor(destination: str) -> float:
    """Stable price factor in [0.85, 1.15] for a destination name."""
    key = " ".join(destination.lower().split())
    seed = int(hashlib.md5(key.encode()).hexdigest()[:8], 16)
    return 0.85 + (seed % 3001) / 10000


def _average_factor(destinations: list[str]) -> float:
    return sum(destination_price_factor(d) for d in destinations) / len(destinations)


def mock_estimate(category: BudgetCategory, trip: TripEstimateInput) -> float:
    """Deterministic estimate for one category, in whole dollars."""
    category = BudgetCategory(category)
    season = SEASON_MULTIPLIERS[normalize_season(trip.travel_season)]
    travelers = trip.travelers
    days = trip.trip_duration_days

    if category == BudgetCategory.FLIGHTS:
        # One leg into each destination plus the flight home
        total = sum(
            FLIGHT_FARE_PER_LEG * destination_price_factor(d) for d in trip.destinations
        ) + FLIGHT_FARE_PER_LEG * destination_price_factor(trip.destinations[-1])
        return float(round(total * travelers * season))

    per_day = DAILY_RATES[category] * travelers * days
    if category == BudgetCategory.PREPARATION:
        # Not priced by destination or season
        return float(round(PREPARATION_BASE * travelers + per_day))
    return float(round(per_day * _average_factor(trip.destinations) * season))


def estimate_category_cost(
    category: BudgetCategory,
    trip: TripEstimateInput,
    override: float | None = None,
) -> float:
    """Cost for *category*: the user's figure if they entered one, else the estimate.

    ``None`` means "no override". Zero is a legitimate entry (a free
    category) and is used as-is. Negative and non-finite overrides
    are ignored.
    """
    if override is not None and math.isfinite(override) and override >= 0:
        return float(override)
    return mock_estimate(category, trip)


def estimate_trip_costs(
    trip: TripEstimateInput,
    overrides: CostOverrides | None = None,
) -> CategoryCosts:
    """Estimate all six categories, honoring any overrides."""
    overrides = overrides or CostOverrides()
    return CategoryCosts(**{
        c.value: estimate_category_cost(c, trip, overrides.get(c))
        for c in ALLOCATION_ORDER
    })
