import json
import threading
import pytest

from app.models.booking import Booking, BookingRequest, BookingStatus, Location
from app.services.booking_store import BookingStore
from app.services.storage import MemoryStorage, StorageError


class FailingWriteStorage(MemoryStorage):
    def set_item(self, key, value):
        raise StorageError("quota exceeded")


class FailingReadStorage(MemoryStorage):
    def get_item(self, key):
        raise StorageError("disk unavailable")


def make_request(**overrides) -> BookingRequest:
    data = {
        "serviceId": "s1",
        "serviceName": "Babysitting",
        "duration": 2,
        "location": {"area": "X"},
        "totalCost": 40,
        "status": "Pending",
    }
    data.update(overrides)
    return BookingRequest.model_validate(data)


def test_load_empty_storage():
    store = BookingStore(MemoryStorage())
    assert store.load() == []


def test_load_invalid_json_returns_empty():
    store = BookingStore(MemoryStorage({"bookings": "not json {"}))
    assert store.load() == []


def test_load_non_array_returns_empty():
    store = BookingStore(MemoryStorage({"bookings": json.dumps({"id": 1})}))
    assert store.load() == []




def test_load_read_error_returns_empty():
    store = BookingStore(FailingReadStorage())
    assert store.load() == []


def test_unavailable_storage():
    store = BookingStore(None)
    assert store.load() == []
    assert store.save(make_request()) is None
    assert store.update_status(1, BookingStatus.CANCELLED) is None


def test_save_then_load_example():
    store = BookingStore(MemoryStorage())

    saved = store.save(make_request())
    assert saved is not None
    assert saved.id is not None
    assert saved.createdAt

    bookings = store.load()
    assert len(bookings) == 1
    booking = bookings[0]
    assert booking == saved
    assert booking.status == BookingStatus.PENDING
    assert booking.duration == 2
    assert booking.totalCost == 40
    assert booking.location.area == "X"
    assert booking.location.city == ""


def test_created_at_is_iso_utc():
    store = BookingStore(MemoryStorage())
    saved = store.save(make_request())
    assert saved.createdAt.endswith("Z")
    assert "T" in saved.createdAt


def test_sequential_saves_keep_order_and_unique_ids():
    store = BookingStore(MemoryStorage())
    names = [f"Service {i}" for i in range(10)]

    for name in names:
        assert store.save(make_request(serviceName=name)) is not None

    bookings = store.load()
    assert [b.serviceName for b in bookings] == names
    ids = [b.id for b in bookings]
    assert len(set(ids)) == len(names)
    assert ids == sorted(ids)


def test_save_write_failure_returns_none():
    store = BookingStore(FailingWriteStorage())
    assert store.save(make_request()) is None


def test_save_on_corrupt_value_keeps_it():
    storage = MemoryStorage({"bookings": "[{broken"})
    store = BookingStore(storage)

    assert store.save(make_request()) is None
    assert storage.get_item("bookings") == "[{broken"


def test_persisted_layout_is_json_array():
    storage = MemoryStorage()
    store = BookingStore(storage)
    saved = store.save(make_request(location={"division": "Dhaka", "district": "Dhaka", "city": "Dhaka", "area": "Gulshan"}))

    data = json.loads(storage.get_item("bookings"))
    assert data == [{
        "serviceId": "s1",
        "serviceName": "Babysitting",
        "duration": 2,
        "location": {"division": "Dhaka", "district": "Dhaka", "city": "Dhaka", "area": "Gulshan"},
        "totalCost": 40,
        "status": "Pending",
        "id": saved.id,
        "createdAt": saved.createdAt,
    }]


def test_reads_records_written_by_browser_client():
    raw = json.dumps([{
        "serviceId": "s2",
        "serviceName": "Elderly Care",
        "duration": 3,
        "location": {"division": "", "district": "", "city": "Khulna", "area": "Road 5"},
        "totalCost": 75,
        "status": "Cancelled",
        "id": 1718000000000,
        "createdAt": "2024-06-10T06:13:20.000Z",
    }])
    store = BookingStore(MemoryStorage({"bookings": raw}))

    bookings = store.load()
    assert len(bookings) == 1
    assert bookings[0].status == BookingStatus.CANCELLED
    assert bookings[0].id == 1718000000000


def test_custom_key():
    storage = MemoryStorage()
    store = BookingStore(storage, key="care-bookings")
    store.save(make_request())
    assert storage.get_item("bookings") is None
    assert storage.get_item("care-bookings") is not None


def test_update_status_persists():
    storage = MemoryStorage()
    store = BookingStore(storage)
    first = store.save(make_request())
    second = store.save(make_request(serviceName="Elderly Care"))

    updated = store.update_status(first.id, BookingStatus.CANCELLED)
    assert updated.status == BookingStatus.CANCELLED
    assert updated.id == first.id

    reloaded = BookingStore(storage).load()
    assert [b.status for b in reloaded] == [BookingStatus.CANCELLED, BookingStatus.PENDING]
    assert reloaded[1] == second


def test_update_status_unknown_id():
    store = BookingStore(MemoryStorage())
    store.save(make_request())
    assert store.update_status(42, BookingStatus.CANCELLED) is None


def test_update_status_write_failure():
    storage = FailingWriteStorage()
    storage._items["bookings"] = json.dumps([Booking(
        **make_request().model_dump(), id=1, createdAt="2024-01-01T00:00:00.000Z"
    ).model_dump(mode="json")])
    store = BookingStore(storage)
    assert store.update_status(1, BookingStatus.CANCELLED) is None


def test_duration_below_one_is_rejected_by_model():
    with pytest.raises(ValueError):
        make_request(duration=0)


def stored_record(**overrides) -> dict:
    record = {
        "serviceId": "s1",
        "serviceName": "Babysitting",
        "duration": 2,
        "location": {"division": "", "district": "", "city": "", "area": "X"},
        "totalCost": 40,
        "status": "Pending",
        "id": 1,
        "createdAt": "2024-01-01T00:00:00.000Z",
    }
    record.update(overrides)
    return record


def test_short_duration_record_from_other_client():
    storage = MemoryStorage({"bookings": json.dumps([stored_record(duration=0.5, totalCost=10)])})
    store = BookingStore(storage)

    loaded = store.load()
    assert len(loaded) == 1
    assert loaded[0].duration == 0.5

    saved = store.save(make_request())
    assert saved is not None
    assert saved.id > 1

    loaded = store.load()
    assert [b.id for b in loaded] == [1, saved.id]
    assert store.update_status(1, BookingStatus.CANCELLED).status == BookingStatus.CANCELLED


def test_load_skips_unreadable_record():
    good = stored_record(id=2)
    storage = MemoryStorage({"bookings": json.dumps([{"id": 1, "status": "Unknown"}, good, "junk"])})
    store = BookingStore(storage)

    loaded = store.load()
    assert [b.id for b in loaded] == [2]

    # Saving keeps entries the store cannot read
    saved = store.save(make_request())
    data = json.loads(storage.get_item("bookings"))
    assert data[0] == {"id": 1, "status": "Unknown"}
    assert data[1] == good
    assert data[2] == "junk"
    assert data[3]["id"] == saved.id


def test_unknown_fields_survive_writes():
    storage = MemoryStorage({"bookings": json.dumps([stored_record(userEmail="u@x")])})
    store = BookingStore(storage)

    store.save(make_request())
    first = json.loads(storage.get_item("bookings"))[0]
    assert first["userEmail"] == "u@x"

    updated = store.update_status(1, BookingStatus.CANCELLED)
    first = json.loads(storage.get_item("bookings"))[0]
    assert first["userEmail"] == "u@x"
    assert first["status"] == "Cancelled"
    assert updated.model_extra == {"userEmail": "u@x"}

    assert store.load()[0].model_extra == {"userEmail": "u@x"}


def test_concurrent_saves_are_serialized():
    store = BookingStore(MemoryStorage())
    threads_count, saves_per_thread = 8, 20
    failures = []

    def worker(n):
        for i in range(saves_per_thread):
            if store.save(make_request(serviceName=f"T{n}-{i}")) is None:
                failures.append((n, i))

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(threads_count)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    bookings = store.load()
    assert failures == []
    assert len(bookings) == threads_count * saves_per_thread
    assert len({b.id for b in bookings}) == threads_count * saves_per_thread
    # Each thread's own saves stay in order
    for n in range(threads_count):
        names = [b.serviceName for b in bookings if b.serviceName.startswith(f"T{n}-")]
        assert names == [f"T{n}-{i}" for i in range(saves_per_thread)]
