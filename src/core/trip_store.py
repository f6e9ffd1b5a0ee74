"""File-backed storage for trip budget inputs.

Only the raw figures are stored (per-category costs, savings, monthly rate,
points). Allocations and projections are always recomputed.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from src.core.resolvers import ResolverError
from src.models.schemas import SavedTrip

logger = logging.getLogger("trip_budget_mcp.store")

DEFAULT_STORE_FILE = Path.home() / ".trip-budget-assistant" / "trips.json"


class TripStore:
    """Saved trips keyed by case-insensitive name."""

    def __init__(self, store_file: Optional[str] = None):
        self._store_file = store_file or str(DEFAULT_STORE_FILE)
        self._trips: dict[str, dict] = {}
        self._load()

    def _load(self):
        """Load trips from disk."""
        path = Path(self._store_file)
        if path.exists():
            try:
                data = json.loads(path.read_text())
            except (json.JSONDecodeError, OSError) as e:
                logger.warning("Could not read trip store %s: %s", path, e)
                data = {}
            self._trips = data if isinstance(data, dict) else {}

    def _save(self):
        """Persist trips to disk."""
        path = Path(self._store_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(self._trips, indent=2))

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().lower()

    def save(self, trip: SavedTrip) -> SavedTrip:
        """Add or replace a trip."""
        stored = trip.model_copy(update={"updated_on": date.today().isoformat()})
        self._trips[self._key(trip.name)] = stored.model_dump(mode="json")
        self._save()
        return stored

    def get(self, name: str) -> SavedTrip:
        """Find a trip by name. Raises :class:`ResolverError` if not saved."""
        raw = self._trips.get(self._key(name))
        if raw is None:
            raise ResolverError("saved trip", name, available=self.names())
        try:
            return SavedTrip(**raw)
        except ValidationError:
            logger.warning("Saved trip %r is malformed", name)
            raise

    def list(self) -> list[SavedTrip]:
        """All trips that still parse, ordered by name."""
        trips = []
        for key in sorted(self._trips):
            try:
                trips.append(SavedTrip(**self._trips[key]))
            except ValidationError:
                logger.warning("Skipping malformed saved trip %r", key)
        return trips

    def names(self) -> list[str]:
        return [t.get("name", k) for k, t in sorted(self._trips.items())]

    def delete(self, name: str) -> bool:
        """Remove a trip. Returns ``False`` if there was nothing to remove."""
        removed = self._trips.pop(self._key(name), None)
        if removed is None:
            return False
        self._save()
        return True

    def clear(self):
        """Remove all trips."""
        self._trips = {}
        self._save()
