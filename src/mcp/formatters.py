"""Markdown formatters for MCP tool responses.

Pure functions that take result objects and return human-readable Markdown strings.
"""

from __future__ import annotations

from datetime import date

from src.core.planner import booking_tooltip
from src.core.resolvers import category_label
from src.models.results import (
    AllocationState,
    MonthlySavingsRecommendation,
    PointsValuation,
    SavingsProjection,
    TripBudgetResult,
)
from src.models.schemas import ALLOCATION_ORDER, BudgetAdvice, CategoryCosts, SavedTrip

NOT_AVAILABLE = "N/A"

_STATUS_TITLES = {
    "over_budget": "Over Budget!",
    "near_limit": "Approaching Budget Limit",
    "on_track": "On Track!",
}

_STEP_MARKS = {"completed": "[x]", "current": "[>]", "upcoming": "[ ]"}


def format_currency(amount: float) -> str:
    """Whole-dollar amount like ``$1,234``."""
    return f"${round(amount):,}"


def format_month_year(d: date | None) -> str:
    """``March 2025``, or ``N/A`` when there is no date."""
    if d is None:
        return NOT_AVAILABLE
    return d.strftime("%B %Y")


def format_date(d: date | None) -> str:
    if d is None:
        return NOT_AVAILABLE
    return d.isoformat()


def format_months(months: int | None) -> str:
    if months is None:
        return NOT_AVAILABLE
    if months == 0:
        return "now"
    return f"{months} month{'s' if months != 1 else ''}"


def format_cost_estimates(costs: CategoryCosts, destinations: list[str] | None = None) -> str:
    title = "## Estimated Trip Costs"
    if destinations:
        title += f": {', '.join(destinations)}"
    lines = [title + "\n"]
    for category in ALLOCATION_ORDER:
        lines.append(f"- **{category_label(category)}**: {format_currency(costs.get(category))}")
    lines.append(f"\n**Total:** {format_currency(costs.total)}")
    return "\n".join(lines)


def format_allocation(state: AllocationState) -> str:
    lines = [
        "## Savings Allocation\n",
        f"Applying **{format_currency(state.current_savings)}** in priority order:\n",
    ]
    for i, category in enumerate(ALLOCATION_ORDER, start=1):
        a = state[category]
        mark = "OK" if a.is_funded else "!!"
        lines.append(
            f"{i}. [{mark}] {category_label(category)}: "
            f"{format_currency(a.funded)} of {format_currency(a.cost)} funded"
            + ("" if a.is_funded else f" | {format_currency(a.gap)} to go")
        )
    lines.append("\n---")
    lines.append(
        f"**Funded:** {format_currency(state.total_funded)} | "
        f"**Still needed:** {format_currency(state.total_gap)}"
    )
    if state.remaining_savings > 0:
        lines.append(f"_{format_currency(state.remaining_savings)} left over after every category._")
    return "\n".join(lines)


def format_savings_timeline(projection: SavingsProjection) -> str:
    lines = [
        "## Savings Timeline\n",
        f"Saving **{format_currency(projection.monthly_savings)}/month** "
        f"from {format_date(projection.reference_date)}.\n",
    ]
    for category in ALLOCATION_ORDER:
        p = projection[category]
        label = category_label(category)
        if p.gap == 0:
            lines.append(f"- **{label}**: funded, book now")
            continue
        lines.append(
            f"- **{label}**: {format_currency(p.gap)} gap | "
            f"own gap closes in {format_months(p.months_to_fund)} "
            f"({format_month_year(p.earliest_booking_date)}) | "
            f"book debt-free by {format_month_year(p.cumulative_booking_date)}"
        )

    lines.append("\n---")
    if projection.months_to_full_funding is None:
        lines.append(
            f"**Full trip:** {format_currency(projection.total_gap)} still needed. "
            "Add a monthly savings amount to see when you can travel."
        )
    elif projection.total_gap == 0:
        lines.append("**Full trip:** fully funded!")
    else:
        lines.append(
            f"**Full trip:** funded in {format_months(projection.months_to_full_funding)} "
            f"({format_month_year(projection.full_funding_date)})"
        )
    return "\n".join(lines)


def format_recommendation(rec: MonthlySavingsRecommendation) -> str:
    if rec.total_trip_cost <= 0:
        return "No trip cost yet, so there's nothing to save for."
    if rec.amount_to_save == 0:
        return (
            f"You've already saved {format_currency(rec.current_savings)} toward a "
            f"{format_currency(rec.total_trip_cost)} trip. No monthly savings needed!"
        )
    return "\n".join([
        "## Recommended Monthly Savings\n",
        f"- Trip cost: {format_currency(rec.total_trip_cost)}",
        f"- Already saved: {format_currency(rec.current_savings)}",
        f"- Still to save: {format_currency(rec.amount_to_save)}",
        f"- Target: {rec.target_months} months",
        f"\n**Save {format_currency(rec.recommended_monthly)}/month** to travel debt-free.",
    ])


def format_points_valuation(valuation: PointsValuation) -> str:
    if valuation.effective_points == 0:
        return (
            f"No points applied. Flights stay at {format_currency(valuation.flights_cost_before)}."
        )
    return "\n".join([
        "## Points Redemption\n",
        f"- Points applied: {valuation.effective_points:,}",
        f"- Value: ${valuation.dollar_value:,.2f}",
        f"- Flights before points: ${valuation.flights_cost_before:,.2f}",
        f"- **Flights after points: ${valuation.flights_cost_after:,.2f}**",
    ])


def format_trip_budget(result: TripBudgetResult, title: str | None = None) -> str:
    lines = [f"## {title or 'Your Trip'}: Budget\n"]

    status_title = _STATUS_TITLES.get(result.budget_status)
    if status_title:
        lines.append(f"**{status_title}**")
        if result.budget_status == "over_budget":
            lines.append(
                f"You're {format_currency(result.remaining_to_save)} short of the full trip cost."
            )
        lines.append("")

    lines.append(f"- Trip cost: {format_currency(result.total_trip_cost)}")
    if result.points.effective_points:
        lines.append(
            f"  _({format_currency(result.total_cost_before_points)} before "
            f"{result.points.effective_points:,} points worth ${result.points.dollar_value:,.2f})_"
        )
    lines.append(
        f"- Saved: {format_currency(result.current_savings)} ({result.savings_progress:.0f}%)"
    )
    lines.append(f"- Remaining: {format_currency(result.remaining_to_save)}")
    source = " (recommended)" if result.uses_recommended_savings else ""
    lines.append(f"- Monthly savings: {format_currency(result.monthly_savings)}{source}")
    lines.append(
        f"- Fully funded: {format_months(result.months_to_fully_funded)} "
        f"({format_month_year(result.earliest_travel_date)})"
    )

    lines.append("\n### Categories")
    for category in ALLOCATION_ORDER:
        a = result.allocation[category]
        p = result.projection[category]
        mark = "OK" if a.is_funded else "!!"
        tip = booking_tooltip(
            category, a.is_funded, p.cumulative_months_to_fund, p.cumulative_booking_date
        )
        lines.append(
            f"  [{mark}] {category_label(category)}: "
            f"{format_currency(a.funded)} / {format_currency(a.cost)} | {tip}"
        )

    lines.append("\n### Booking Steps")
    for step in result.booking_steps:
        lines.append(f"- {_STEP_MARKS.get(step.status, '[ ]')} {step.label}")

    return "\n".join(lines)


def format_budget_advice(advice: BudgetAdvice) -> str:
    lines = ["## Budget Advice\n"]
    if advice.total_estimated_range:
        lines.append(f"**Estimated total:** {advice.total_estimated_range}\n")
    for category in ALLOCATION_ORDER:
        item = advice.for_category(category)
        if item is None:
            continue
        lines.append(f"### {category_label(category)}: {item.estimated_range or NOT_AVAILABLE}")
        if item.explanation:
            lines.append(item.explanation)
        for tip in item.tips:
            lines.append(f"- {tip}")
        lines.append("")
    if advice.general_tips:
        lines.append("### General Tips")
        for tip in advice.general_tips:
            lines.append(f"- {tip}")
    if len(lines) == 1:
        return "No budget advice available for this trip."
    return "\n".join(lines).rstrip()


def format_saved_trip(trip: SavedTrip) -> str:
    return (
        f"Saved **{trip.name}**: {format_currency(trip.costs.total)} trip, "
        f"{format_currency(trip.current_savings)} saved"
        + (f", {format_currency(trip.monthly_savings)}/month" if trip.monthly_savings > 0 else "")
        + "."
    )


def format_saved_trips(trips: list[SavedTrip]) -> str:
    if not trips:
        return "No saved trips."
    lines = ["## Saved Trips\n"]
    for t in trips:
        updated = f" (updated {t.updated_on})" if t.updated_on else ""
        lines.append(
            f"- **{t.name}**: {format_currency(t.costs.total)} | "
            f"{format_currency(t.current_savings)} saved{updated}"
        )
    return "\n".join(lines)
