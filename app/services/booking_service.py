from typing import List, Optional, Tuple

from fastapi import BackgroundTasks

from app.core.logger import logger
from app.models.booking import Booking, BookingRequest, BookingStatus, Location
from app.services.booking_store import BookingStore
from app.services.catalog_service import CatalogService
from app.services.notification_service import send_invoice

SAVE_WARNING = "Warning: Booking may not be saved locally"


class BookingService:
    def __init__(self, store: BookingStore, catalog: CatalogService):
        self.store = store
        self.catalog = catalog

    def book_service(
        self,
        service_id: str,
        duration: float,
        location: Location,
        user_email: str,
        background_tasks: Optional[BackgroundTasks] = None,
    ) -> Tuple[Optional[Booking], Optional[str]]:
        """
        Books a service for the signed-in user.
        The booking is confirmed even when it could not be persisted; the second
        element of the result then carries a warning for the user.
        Raises ServiceNotFoundError for an unknown service.
        """
        service = self.catalog.get_service(service_id)
        quote = self.catalog.quote(service_id, duration)

        logger.info(f"📥 Booking Request - {service.name}, {duration}h, user: {user_email}")

        request = BookingRequest(
            serviceId=service.id,
            serviceName=service.name,
            duration=duration,
            location=location,
            totalCost=quote.totalCost,
            status=BookingStatus.PENDING,
        )

        booking = self.store.save(request)
        warning = None
        if booking is None:
            logger.warning(f"⚠️ Booking for {user_email} was not persisted")
            warning = SAVE_WARNING

        # Invoice is fire-and-forget, its outcome never affects the booking
        invoice_args = (user_email, service.name, quote.totalCost, duration, location)
        if background_tasks is not None:
            background_tasks.add_task(send_invoice, *invoice_args)
        else:
            send_invoice(*invoice_args)

        return booking, warning

    def list_bookings(self) -> List[Booking]:
        return self.store.load()

    def cancel_booking(self, booking_id: int) -> Optional[Booking]:
        return self.store.update_status(booking_id, BookingStatus.CANCELLED)
