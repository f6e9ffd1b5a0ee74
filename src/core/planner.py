"""Full trip budget snapshot built from the pure calculation functions.

This is the one place that decides which monthly savings figure is used, so
every category is projected with the same rate.
"""

from datetime import date

from src.core.calculations import (
    allocate,
    project,
    recommend_monthly_savings,
    resolve_monthly_savings,
    value_points,
)
from src.core.resolvers import category_label
from src.models.results import BookingStep, SavingsProjection, TripBudgetResult
from src.models.schemas import (
    BudgetCategory,
    CategoryCosts,
    PointsRedemption,
    clamp_non_negative,
    round_currency,
)

NEAR_LIMIT_PCT = 90.0

# Activities, food and preparation are booked together once transport is covered
_EXTRAS = (BudgetCategory.ACTIVITIES, BudgetCategory.FOOD, BudgetCategory.PREPARATION)


def budget_status(total_trip_cost: float, current_savings: float) -> str:
    """How the trip cost compares to what has been saved so far."""
    if current_savings <= 0:
        return "no_savings"
    pct_used = total_trip_cost / current_savings * 100
    if total_trip_cost > current_savings:
        return "over_budget"
    if pct_used >= NEAR_LIMIT_PCT:
        return "near_limit"
    return "on_track"


def _step_status(previous_funded: bool, funded: bool) -> str:
    if not previous_funded:
        return "upcoming"
    return "completed" if funded else "current"


def booking_steps(projection: SavingsProjection) -> list[BookingStep]:
    """Booking stages in order; each opens once the stage before it is funded."""
    def funded(*categories: BudgetCategory) -> bool:
        return all(projection[c].gap == 0 for c in categories)

    flights = funded(BudgetCategory.FLIGHTS)
    accommodations = funded(BudgetCategory.ACCOMMODATIONS)
    transportation = funded(BudgetCategory.TRANSPORTATION)
    extras = funded(*_EXTRAS)

    return [
        BookingStep("flights", "Flights", "completed" if flights else "current"),
        BookingStep(
            "accommodations", "Accommodations", _step_status(flights, accommodations)
        ),
        BookingStep(
            "transportation",
            "Major Transportation",
            _step_status(flights and accommodations, transportation),
        ),
        BookingStep(
            "extras",
            "Activities, Dining & Preparation",
            _step_status(flights and accommodations and transportation, extras),
        ),
    ]


def calculate_trip_budget(
    costs: CategoryCosts,
    current_savings: float,
    monthly_savings: float = 0.0,
    points: PointsRedemption | None = None,
    reference_date: date | None = None,
) -> TripBudgetResult:
    """Compute the complete budget for a trip.

    Points reduce the flights cost before anything else happens. A
    *monthly_savings* of 0 (or less) falls back to the recommended figure.
    """
    savings = clamp_non_negative(current_savings)
    valuation = value_points(costs.flights, points)
    net_costs = costs.with_cost(BudgetCategory.FLIGHTS, valuation.flights_cost_after)

    total_before = costs.total
    total = net_costs.total

    recommended = recommend_monthly_savings(total, savings)
    effective_monthly = resolve_monthly_savings(monthly_savings, recommended)

    allocation = allocate(net_costs, savings)
    projection = project(allocation, effective_monthly, reference_date)

    remaining = round_currency(max(0.0, total - savings))
    progress = min(100.0, savings / total * 100) if total > 0 else 0.0

    return TripBudgetResult(
        costs_before_points=costs.as_dict(),
        total_cost_before_points=total_before,
        points=valuation,
        total_trip_cost=total,
        current_savings=savings,
        monthly_savings=effective_monthly,
        recommended_monthly_savings=recommended,
        uses_recommended_savings=not (monthly_savings and monthly_savings > 0),
        remaining_to_save=remaining,
        savings_progress=round(progress, 1),
        months_to_fully_funded=projection.months_to_full_funding,
        earliest_travel_date=projection.full_funding_date,
        allocation=allocation,
        projection=projection,
        budget_status=budget_status(total, savings),
        booking_steps=booking_steps(projection),
    )


def booking_tooltip(
    category: BudgetCategory,
    is_funded: bool,
    months_to_fund: int | None,
    earliest_date: date | None,
) -> str:
    """Explain when a category's booking button becomes available."""
    name = category_label(category).lower()
    if is_funded:
        return f"You've saved enough for {name}! Book now to lock in prices."
    if months_to_fund is None or earliest_date is None:
        return f"Set a monthly savings amount to see when you can book {name} debt-free."
    if months_to_fund == 1:
        return f"Just 1 more month of saving and you can book {name} debt-free!"
    if months_to_fund <= 3:
        return f"{months_to_fund} months until you can book {name} without going into debt."
    return (
        f"Save for {months_to_fund} more months to book {name} debt-free. "
        f"Target date: {earliest_date.strftime('%B %Y')}."
    )
