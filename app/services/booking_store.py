import json
import threading
import time
from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import ValidationError

from app.core.config import settings
from app.core.logger import logger
from app.models.booking import Booking, BookingRequest, BookingStatus
from app.services.storage import KeyValueStorage

# One writer at a time inside this process; separate processes can still race.
_write_lock = threading.Lock()


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BookingStore:
    """
    Append-only list of bookings persisted as one JSON array in a key-value area.

    Stored entries are kept as parsed dicts and written back untouched; only
    the record being created or updated goes through the model. Every
    operation swallows storage and parse errors: reads degrade to an empty
    list, writes return None.
    """

    def __init__(self, storage: Optional[KeyValueStorage], key: str = None):
        self.storage = storage
        self.key = key or settings.BOOKINGS_KEY

    def _read(self) -> List[Any]:
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        data = json.loads(raw)
        if not isinstance(data, list):
            raise ValueError(f"Expected a JSON array under '{self.key}', got {type(data).__name__}")
        return data

    def _write(self, records: List[Any]) -> None:
        self.storage.set_item(self.key, json.dumps(records))

    @staticmethod
    def _next_id(records: List[Any]) -> int:
        candidate = int(time.time() * 1000)
        ids = [
            r["id"] for r in records
            if isinstance(r, dict) and isinstance(r.get("id"), int) and not isinstance(r.get("id"), bool)
        ]
        if ids:
            candidate = max(candidate, max(ids) + 1)
        return candidate

    def save(self, booking: BookingRequest) -> Optional[Booking]:
        if self.storage is None:
            logger.error("❌ Failed to save booking: storage unavailable")
            return None

        try:
            with _write_lock:
                records = self._read()
                new_booking = Booking(
                    **booking.model_dump(exclude={"id", "createdAt"}),
                    id=self._next_id(records),
                    createdAt=_now_iso(),
                )
                records.append(new_booking.model_dump(mode="json"))
                self._write(records)
        except Exception as e:
            logger.error(f"❌ Failed to save booking: {e}")
            return None

        logger.info(f"✅ Booking {new_booking.id} saved ({new_booking.serviceName}, {new_booking.duration}h)")
        return new_booking

    def load(self) -> List[Booking]:
        if self.storage is None:
            return []

        try:
            records = self._read()
        except Exception as e:
            logger.error(f"❌ Failed to load bookings: {e}")
            return []

        bookings = []
        for index, record in enumerate(records):
            try:
                bookings.append(Booking.model_validate(record))
            except ValidationError as e:
                logger.warning(f"⚠️ Skipping unreadable booking at position {index}: {e.error_count()} error(s)")
        return bookings

    def update_status(self, booking_id: int, status: BookingStatus) -> Optional[Booking]:
        """
        Persists a status change for one booking.
        Returns the updated booking, or None if it does not exist or storage failed.
        """
        if self.storage is None:
            logger.error("❌ Failed to update booking: storage unavailable")
            return None

        try:
            with _write_lock:
                records = self._read()
                for index, record in enumerate(records):
                    if isinstance(record, dict) and record.get("id") == booking_id:
                        updated = Booking.model_validate({**record, "status": status.value})
                        records[index] = {**record, "status": status.value}
                        self._write(records)
                        break
                else:
                    logger.warning(f"⚠️ Booking {booking_id} not found")
                    return None
        except Exception as e:
            logger.error(f"❌ Failed to update booking {booking_id}: {e}")
            return None

        logger.info(f"📝 Booking {booking_id} -> {status.value}")
        return updated
