# app/store.py
"""
Booking repository backed by a single JSON file.
The store owns the in-memory collection: it is loaded once at startup and
the whole file is rewritten after every mutation. Callers never touch the
file directly, so swapping in a real datastore needs no caller changes.
"""

import threading
from typing import Iterable, List, Optional

from app.config import settings
from app.models.booking import Booking
from app.utils.json_parser import read_json_file, write_json_file
from app.utils.logger import get_logger

logger = get_logger(__name__)


def _numeric_id(value) -> int:
    """Ids that are not numbers count as 0 when looking for the max."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    return int(value)


class BookingStore:
    def __init__(self, path: str):
        self.path = path
        self._bookings: List[Booking] = []
        self._last_id = 0
        self._lock = threading.RLock()

    # ── I/O ──────────────────────────────────────────────────────────────
    def load(self) -> List[Booking]:
        """Read the bookings file. Missing or malformed files mean no bookings yet."""
        data = read_json_file(self.path)
        if data is None:
            logger.warning(f"[STORE] No readable bookings at {self.path} — starting empty")
            data = []
        elif not isinstance(data, list):
            logger.warning(f"[STORE] {self.path} does not hold a JSON array — starting empty")
            data = []

        bookings = [Booking.from_dict(item) for item in data if isinstance(item, dict)]
        with self._lock:
            self._bookings = bookings
            self._last_id = max((_numeric_id(b.id) for b in bookings), default=0)
        logger.info(f"[STORE] Loaded {len(bookings)} bookings from {self.path}")
        return list(bookings)

    def save(self, bookings: Optional[Iterable[Booking]] = None):
        """Overwrite the file with the full collection (or the given one)."""
        with self._lock:
            items = self._bookings if bookings is None else list(bookings)
            write_json_file(self.path, [b.to_dict() for b in items])

    def next_id(self, bookings: Optional[Iterable[Booking]] = None) -> int:
        """
        max(existing ids) + 1, or 1 when empty. Read-only. Without an explicit
        list it answers for the store itself, which also counts ids already
        handed out and since deleted.
        """
        with self._lock:
            if bookings is not None:
                return max((_numeric_id(b.id) for b in bookings), default=0) + 1
            current_max = max((_numeric_id(b.id) for b in self._bookings), default=0)
            return max(self._last_id, current_max) + 1

    def _issue_id(self) -> int:
        """Reserve the next id; never handed out twice in one run."""
        with self._lock:
            self._last_id = self.next_id()
            return self._last_id

    # ── Queries ──────────────────────────────────────────────────────────
    def all(self) -> List[Booking]:
        with self._lock:
            return list(self._bookings)

    def get(self, booking_id) -> Optional[Booking]:
        with self._lock:
            return next((b for b in self._bookings if b.matches_id(booking_id)), None)

    def __len__(self):
        return len(self._bookings)

    # ── Mutations (each one persists) ────────────────────────────────────
    def add(self, booking: Booking) -> Booking:
        """Assign the next id, append and persist."""
        with self._lock:
            booking.id = self._issue_id()
            self._bookings.append(booking)
            try:
                self.save()
            except OSError:
                self._bookings.pop()
                raise
        return booking

    def update(self, booking_id, **changes) -> Optional[Booking]:
        """Apply attribute changes to one booking and persist. None if not found."""
        with self._lock:
            booking = self.get(booking_id)
            if booking is None:
                return None
            previous = {attr: getattr(booking, attr) for attr in changes}
            for attr, value in changes.items():
                setattr(booking, attr, value)
            try:
                self.save()
            except OSError:
                for attr, value in previous.items():
                    setattr(booking, attr, value)
                raise
            return booking

    def remove(self, booking_id) -> bool:
        """Remove one booking and persist. False if not found."""
        with self._lock:
            idx = next((i for i, b in enumerate(self._bookings) if b.matches_id(booking_id)), None)
            if idx is None:
                return False
            booking = self._bookings.pop(idx)
            try:
                self.save()
            except OSError:
                self._bookings.insert(idx, booking)
                raise
            return True


store = BookingStore(settings.BOOKINGS_FILE)


def get_store() -> BookingStore:
    """FastAPI dependency — the process-wide booking store."""
    return store


def load_bookings():
    """Load the bookings file on startup. Safe to call multiple times."""
    return store.load()
