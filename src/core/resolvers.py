"""Name resolution helpers for budget categories.

Pure functions that resolve user-friendly names (aliases, labels, partial,
case-insensitive) to :class:`BudgetCategory`. No I/O.
"""

from __future__ import annotations

from src.models.schemas import ALLOCATION_ORDER, BudgetCategory

CATEGORY_LABELS: dict[BudgetCategory, str] = {
    BudgetCategory.FLIGHTS: "Flights",
    BudgetCategory.ACCOMMODATIONS: "Accommodations",
    BudgetCategory.TRANSPORTATION: "Transportation",
    BudgetCategory.ACTIVITIES: "Activities",
    BudgetCategory.FOOD: "Food & Dining",
    BudgetCategory.PREPARATION: "Trip Preparation",
}

_CATEGORY_ALIASES: dict[str, BudgetCategory] = {
    "flight": BudgetCategory.FLIGHTS,
    "airfare": BudgetCategory.FLIGHTS,
    "air": BudgetCategory.FLIGHTS,
    "housing": BudgetCategory.ACCOMMODATIONS,
    "lodging": BudgetCategory.ACCOMMODATIONS,
    "hotel": BudgetCategory.ACCOMMODATIONS,
    "hotels": BudgetCategory.ACCOMMODATIONS,
    "stay": BudgetCategory.ACCOMMODATIONS,
    "transport": BudgetCategory.TRANSPORTATION,
    "ground": BudgetCategory.TRANSPORTATION,
    "car": BudgetCategory.TRANSPORTATION,
    "fun": BudgetCategory.ACTIVITIES,
    "tours": BudgetCategory.ACTIVITIES,
    "entertainment": BudgetCategory.ACTIVITIES,
    "dining": BudgetCategory.FOOD,
    "meals": BudgetCategory.FOOD,
    "restaurants": BudgetCategory.FOOD,
    "prep": BudgetCategory.PREPARATION,
    "insurance": BudgetCategory.PREPARATION,
    "gear": BudgetCategory.PREPARATION,
}


class ResolverError(Exception):
    """Raised when an entity cannot be resolved by name."""

    def __init__(
        self,
        entity_type: str,
        query: str,
        available: list[str] | None = None,
    ):
        self.entity_type = entity_type
        self.query = query
        self.available = available or []
        detail = f"No {entity_type} found matching '{query}'."
        if self.available:
            detail += f" Available: {', '.join(self.available)}"
        super().__init__(detail)


def category_label(category: BudgetCategory) -> str:
    """Display label for a category."""
    category = BudgetCategory(category)
    return CATEGORY_LABELS.get(category, category.value)


def resolve_category(name: str) -> BudgetCategory:
    """Find a category by value, label, alias, or partial name.

    Raises :class:`ResolverError` if nothing matches.
    """
    query = (name or "").strip().lower()
    if query:
        for category in ALLOCATION_ORDER:
            if query in (category.value, CATEGORY_LABELS[category].lower()):
                return category

        if query in _CATEGORY_ALIASES:
            return _CATEGORY_ALIASES[query]

        for category in ALLOCATION_ORDER:
            if query in category.value or query in CATEGORY_LABELS[category].lower():
                return category

    raise ResolverError(
        "category",
        name,
        available=[c.value for c in ALLOCATION_ORDER],
    )
