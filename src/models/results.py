"""Result dataclasses for trip budget calculations.

These are internal types consumed by formatters — lightweight dataclasses
rather than Pydantic models since they don't need validation.
"""

from dataclasses import dataclass, field
from datetime import date

from src.models.schemas import BudgetCategory


@dataclass
class PointsValuation:
    """Dollar offset of redeemed points against the flights cost."""
    effective_points: int
    dollar_value: float          # dollars
    flights_cost_before: float   # dollars
    flights_cost_after: float    # dollars, never negative


@dataclass
class CategoryAllocation:
    """How much of current savings went to one category."""
    category: BudgetCategory
    cost: float      # dollars
    funded: float    # dollars of savings applied
    gap: float       # dollars still needed, never negative

    @property
    def is_funded(self) -> bool:
        return self.gap == 0


@dataclass
class AllocationState:
    """Savings applied to every category in priority order."""
    current_savings: float
    categories: dict[BudgetCategory, CategoryAllocation] = field(default_factory=dict)

    def __getitem__(self, category: BudgetCategory) -> CategoryAllocation:
        return self.categories[BudgetCategory(category)]

    @property
    def total_cost(self) -> float:
        return round(sum(a.cost for a in self.categories.values()), 2)

    @property
    def total_funded(self) -> float:
        return round(sum(a.funded for a in self.categories.values()), 2)

    @property
    def total_gap(self) -> float:
        return round(sum(a.gap for a in self.categories.values()), 2)

    @property
    def remaining_savings(self) -> float:
        """Savings left over once every category is covered."""
        return round(max(0.0, self.current_savings - self.total_funded), 2)


@dataclass
class CategoryProjection:
    """When a category can be booked.

    ``months_to_fund`` and ``earliest_booking_date`` are ``None`` when the gap
    can never close (no monthly savings). The ``cumulative_*`` fields also
    count the gaps of every higher-priority category.
    """
    category: BudgetCategory
    gap: float
    months_to_fund: int | None
    earliest_booking_date: date | None
    is_bookable_now: bool
    cumulative_gap: float = 0.0
    cumulative_months_to_fund: int | None = 0
    cumulative_booking_date: date | None = None

    @property
    def is_unbounded(self) -> bool:
        return self.months_to_fund is None


@dataclass
class SavingsProjection:
    """Per-category booking horizons plus the whole-trip aggregate."""
    reference_date: date
    monthly_savings: float
    categories: dict[BudgetCategory, CategoryProjection] = field(default_factory=dict)
    total_gap: float = 0.0
    months_to_full_funding: int | None = 0
    full_funding_date: date | None = None

    def __getitem__(self, category: BudgetCategory) -> CategoryProjection:
        return self.categories[BudgetCategory(category)]


@dataclass
class MonthlySavingsRecommendation:
    """Suggested monthly savings from the cost-tiered payoff table."""
    total_trip_cost: float
    current_savings: float
    amount_to_save: float
    target_months: int
    recommended_monthly: int


@dataclass
class BookingStep:
    """One stage of the booking sequence shown to the user."""
    key: str
    label: str
    status: str  # "completed", "current" or "upcoming"


@dataclass
class TripBudgetResult:
    """Everything derived from a trip's raw budget figures."""
    costs_before_points: dict[BudgetCategory, float]
    total_cost_before_points: float
    points: PointsValuation
    total_trip_cost: float
    current_savings: float
    monthly_savings: float             # the rate actually used for projections
    recommended_monthly_savings: int
    uses_recommended_savings: bool
    remaining_to_save: float
    savings_progress: float            # 0-100
    months_to_fully_funded: int | None
    earliest_travel_date: date | None
    allocation: AllocationState
    projection: SavingsProjection
    budget_status: str                 # "no_savings", "on_track", "near_limit", "over_budget"
    booking_steps: list[BookingStep] = field(default_factory=list)

    @property
    def is_fully_funded(self) -> bool:
        return self.remaining_to_save == 0

    @property
    def has_savings(self) -> bool:
        return self.current_savings > 0

    def can_book(self, category: BudgetCategory) -> bool:
        return self.projection[category].is_bookable_now
