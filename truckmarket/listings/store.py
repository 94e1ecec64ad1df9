from __future__ import annotations

import logging
import math
import threading
import uuid
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd

from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .models import Listing, ListingCreate, ListingPage, ListingUpdate, TruckType

logger = logging.getLogger(__name__)

# Public sort keys (as sent by the frontend) -> Listing attribute
SORT_FIELDS: dict[str, str] = {
    "createdAt": "created_at",
    "departureDate": "departure_date",
    "price": "price",
    "maxWeight": "max_weight",
    "rating": "rating",
}


def load_seed_listings(path: Path) -> list[Listing]:
    """Read demo listings from a CSV file with camelCase headers."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    listings: list[Listing] = []
    for record in df.to_dict(orient="records"):
        # Empty cells fall back to the model defaults
        cleaned = {k: v.strip() for k, v in record.items() if v.strip()}
        if not cleaned.get("id"):
            cleaned["id"] = str(uuid.uuid4())
        if not cleaned.get("createdAt"):
            cleaned["createdAt"] = datetime.now(timezone.utc)
        listings.append(Listing.model_validate(cleaned))
    return listings


class ListingStore:
    """Thread-safe in-memory listing repository."""

    def __init__(self, listings: list[Listing] | None = None) -> None:
        self._lock = threading.Lock()
        self._listings: dict[str, Listing] = {}
        for listing in listings or []:
            self._listings[listing.id] = listing

    def __len__(self) -> int:
        return len(self._listings)

    def list_all(self) -> list[Listing]:
        with self._lock:
            return list(self._listings.values())

    def get(self, listing_id: str) -> Listing | None:
        with self._lock:
            return self._listings.get(listing_id)

    def create(self, payload: ListingCreate, driver_id: str) -> Listing:
        listing = Listing(
            id=str(uuid.uuid4()),
            driver_id=driver_id,
            created_at=datetime.now(timezone.utc),
            **payload.model_dump(),
        )
        with self._lock:
            self._listings[listing.id] = listing
        logger.info("Listing %s created by driver %s", listing.id, driver_id)
        return listing

    def query(
        self,
        page: int = 1,
        limit: int = 10,
        search: str | None = None,
        truck_type: TruckType | None = None,
        sort_by: str = "createdAt",
        order: str = "DESC",
    ) -> ListingPage:
        """Filter, sort and paginate listings the way the browse page expects."""
        rows = self.list_all()

        if search and search.strip():
            needle = search.strip().lower()
            rows = [
                r for r in rows
                if needle in r.origin.lower() or needle in r.destination.lower()
            ]
        if truck_type is not None:
            rows = [r for r in rows if r.truck_type == truck_type]

        attr = SORT_FIELDS.get(sort_by, "created_at")
        descending = order.upper() == "DESC"
        present = [r for r in rows if getattr(r, attr) is not None]
        missing = [r for r in rows if getattr(r, attr) is None]
        present.sort(key=lambda r: getattr(r, attr), reverse=descending)
        rows = present + missing

        total = len(rows)
        offset = (page - 1) * limit
        return ListingPage(
            posts=rows[offset:offset + limit],
            total=total,
            total_pages=math.ceil(total / limit),
            current_page=page,
        )

    def list_by_driver(self, driver_id: str) -> list[Listing]:
        rows = [r for r in self.list_all() if r.driver_id == driver_id]
        rows.sort(key=lambda r: r.created_at, reverse=True)
        return rows

    def update(
        self, listing_id: str, driver_id: str, changes: ListingUpdate,
    ) -> Listing | None:
        """Apply non-null fields of ``changes``. ``None`` if missing or not owned."""
        data = changes.model_dump(exclude_unset=True, exclude_none=True)
        with self._lock:
            current = self._listings.get(listing_id)
            if current is None or current.driver_id != driver_id:
                return None
            updated = current.model_copy(update=data)
            self._listings[listing_id] = updated
        logger.info("Listing %s updated (%s)", listing_id, ", ".join(sorted(data)) or "no changes")
        return updated

    def delete(self, listing_id: str, driver_id: str) -> bool:
        with self._lock:
            current = self._listings.get(listing_id)
            if current is None or current.driver_id != driver_id:
                return False
            del self._listings[listing_id]
        logger.info("Listing %s deleted by driver %s", listing_id, driver_id)
        return True


_store: ListingStore | None = None
_store_lock = threading.Lock()


def get_listing_store(config: StoreConfig = DEFAULT_STORE_CONFIG) -> ListingStore:
    """Return the process-wide listing store, seeding it on first call."""
    global _store
    with _store_lock:
        if _store is None:
            seed: list[Listing] = []
            if config.seed_on_start and config.seed_path.exists():
                seed = load_seed_listings(config.seed_path)
                logger.info("Seeded %d listings from %s", len(seed), config.seed_path)
            _store = ListingStore(seed)
    return _store
