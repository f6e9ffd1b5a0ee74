"""Pure budget calculation functions for trip savings.

All functions take plain numbers or already-built models and return result
dataclasses. No I/O — keeps the allocation rules testable without mocking.

Savings are applied to categories in :data:`ALLOCATION_ORDER`, so a category
can only be booked debt-free once every higher-priority category is covered.
"""

import math
from datetime import date, timedelta

from src.models.results import (
    AllocationState,
    CategoryAllocation,
    CategoryProjection,
    MonthlySavingsRecommendation,
    PointsValuation,
    SavingsProjection,
)
from src.models.schemas import (
    ALLOCATION_ORDER,
    POINTS_CONVERSION_RATE,
    CategoryCosts,
    PointsRedemption,
    clamp_non_negative,
    round_currency,
)

# (exclusive upper bound on total trip cost, months to save)
PAYOFF_TIERS: tuple[tuple[float, int], ...] = (
    (2000, 6),
    (5000, 9),
    (10000, 12),
)
LONGEST_PAYOFF_MONTHS = 15


# --- Points Valuation ---


def calculate_points_value(points: int) -> float:
    """Dollar value of *points* at the fixed conversion rate."""
    return round_currency(max(0, points) * POINTS_CONVERSION_RATE)


def effective_points(
    points_to_use: int,
    use_points: bool,
    connected_balance: int | None = None,
) -> int:
    """Points that actually count toward flights.

    Turning the toggle off zeroes the redemption no matter what is stored.
    A known, positive connected balance caps the redemption; manual entry
    without a balance is uncapped.
    """
    if not use_points:
        return 0
    points = max(0, int(points_to_use or 0))
    if connected_balance is not None and connected_balance > 0:
        points = min(points, connected_balance)
    return points


def apply_points(
    flights_cost: float,
    points_to_use: int,
    use_points: bool,
    connected_balance: int | None = None,
) -> float:
    """Flights cost after redeeming points. Never negative."""
    points = effective_points(points_to_use, use_points, connected_balance)
    dollar_value = calculate_points_value(points)
    return round_currency(max(0.0, clamp_non_negative(flights_cost) - dollar_value))


def value_points(
    flights_cost: float,
    redemption: PointsRedemption | None = None,
) -> PointsValuation:
    """Full breakdown of a points redemption against *flights_cost*."""
    redemption = redemption or PointsRedemption()
    before = round_currency(clamp_non_negative(flights_cost))
    points = effective_points(
        redemption.points_to_use, redemption.use_points, redemption.connected_balance
    )
    after = apply_points(before, points, use_points=True)
    return PointsValuation(
        effective_points=points,
        dollar_value=calculate_points_value(points),
        flights_cost_before=before,
        flights_cost_after=after,
    )


# --- Sequential Allocation ---


def allocate(costs: CategoryCosts, current_savings: float) -> AllocationState:
    """Apply current savings to categories greedily in priority order.

    A later category only receives money once every earlier category is
    fully funded or savings run out.
    """
    remaining = round_currency(clamp_non_negative(current_savings))
    state = AllocationState(current_savings=remaining)

    for category in ALLOCATION_ORDER:
        cost = round_currency(clamp_non_negative(costs.get(category)))
        funded = min(remaining, cost)
        gap = round_currency(cost - funded)
        remaining = round_currency(remaining - funded)
        state.categories[category] = CategoryAllocation(
            category=category,
            cost=cost,
            funded=funded,
            gap=gap,
        )

    return state


# --- Savings Timeline ---


def add_calendar_months(start: date, months: int) -> date:
    """Add calendar months, rolling day overflow into the following month.

    Jan 31 + 1 month is Mar 3 (Mar 2 in a leap year), the same normalization
    a native "set month" performs, rather than clamping to Feb 28.
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    return date(year, month, 1) + timedelta(days=start.day - 1)


def months_to_fund(gap: float, monthly_savings: float) -> int | None:
    """Whole months needed to close *gap*. ``None`` if it never closes."""
    # Divide whole cents so exact multiples never round up an extra month
    gap_cents = round(clamp_non_negative(gap) * 100)
    monthly_cents = round(clamp_non_negative(monthly_savings) * 100)
    if gap_cents == 0:
        return 0
    if monthly_cents == 0:
        return None
    return -(-gap_cents // monthly_cents)


def _booking_date(reference_date: date, months: int | None) -> date | None:
    if months is None:
        return None
    return add_calendar_months(reference_date, months)


def project(
    allocation: AllocationState,
    monthly_savings: float,
    reference_date: date | None = None,
) -> SavingsProjection:
    """Project when each category's gap closes at *monthly_savings* per month.

    Each category also carries a cumulative horizon: the gap of the category
    plus every higher-priority category, since new savings go to those first.
    The last cumulative horizon is the whole-trip aggregate.
    """
    today = reference_date or date.today()
    monthly = clamp_non_negative(monthly_savings)
    projection = SavingsProjection(reference_date=today, monthly_savings=monthly)

    cumulative_gap = 0.0
    for category in ALLOCATION_ORDER:
        entry = allocation.categories.get(category)
        gap = entry.gap if entry else 0.0
        cumulative_gap = round_currency(cumulative_gap + gap)

        months = months_to_fund(gap, monthly)
        booking_date = _booking_date(today, months)
        cumulative_months = months_to_fund(cumulative_gap, monthly)

        projection.categories[category] = CategoryProjection(
            category=category,
            gap=gap,
            months_to_fund=months,
            earliest_booking_date=booking_date,
            is_bookable_now=gap == 0 or (booking_date is not None and today >= booking_date),
            cumulative_gap=cumulative_gap,
            cumulative_months_to_fund=cumulative_months,
            cumulative_booking_date=_booking_date(today, cumulative_months),
        )

    projection.total_gap = cumulative_gap
    projection.months_to_full_funding = months_to_fund(cumulative_gap, monthly)
    projection.full_funding_date = _booking_date(today, projection.months_to_full_funding)
    return projection


# --- Monthly Savings Recommendation ---


def target_payoff_months(total_trip_cost: float) -> int:
    """Months to save for a trip of this size. Bigger trips get longer."""
    for upper_bound, months in PAYOFF_TIERS:
        if total_trip_cost < upper_bound:
            return months
    return LONGEST_PAYOFF_MONTHS


def recommend(total_trip_cost: float, current_savings: float) -> MonthlySavingsRecommendation:
    """Recommend a monthly savings figure, with the numbers behind it."""
    total = round_currency(clamp_non_negative(total_trip_cost))
    savings = clamp_non_negative(current_savings)
    months = target_payoff_months(total)
    if total <= 0:
        return MonthlySavingsRecommendation(
            total_trip_cost=total,
            current_savings=savings,
            amount_to_save=0.0,
            target_months=months,
            recommended_monthly=0,
        )

    amount_to_save = round_currency(max(0.0, total - savings))
    return MonthlySavingsRecommendation(
        total_trip_cost=total,
        current_savings=savings,
        amount_to_save=amount_to_save,
        target_months=months,
        recommended_monthly=math.ceil(amount_to_save / months),
    )


def recommend_monthly_savings(total_trip_cost: float, current_savings: float) -> int:
    """Recommended whole-dollar monthly savings (rounded up to reach the goal)."""
    return recommend(total_trip_cost, current_savings).recommended_monthly


def resolve_monthly_savings(user_monthly: float | None, recommended: float) -> float:
    """A positive user-entered figure wins; otherwise use the recommendation."""
    if user_monthly is not None and user_monthly > 0:
        return float(user_monthly)
    return float(recommended)
