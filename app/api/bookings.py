from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException

from app.api.deps import get_booking_service, get_current_user_email
from app.core.logger import logger
from app.models.booking import Booking, BookServiceRequest, BookServiceResponse
from app.services.booking_service import BookingService
from app.services.catalog_service import ServiceNotFoundError

router = APIRouter()

@router.post("/bookings/{service_id}", response_model=BookServiceResponse)
def book_service(
    service_id: str,
    req: BookServiceRequest,
    background_tasks: BackgroundTasks,
    email: str = Depends(get_current_user_email),
    booking_service: BookingService = Depends(get_booking_service),
):
    try:
        booking, warning = booking_service.book_service(
            service_id, req.duration, req.location, email, background_tasks
        )
    except ServiceNotFoundError:
        raise HTTPException(status_code=404, detail="Service Not Found")

    return BookServiceResponse(message="Booking Confirmed!", booking=booking, warning=warning)

@router.get("/bookings", response_model=List[Booking])
def list_bookings(booking_service: BookingService = Depends(get_booking_service)):
    return booking_service.list_bookings()

@router.post("/bookings/{booking_id}/cancel", response_model=Booking)
def cancel_booking(booking_id: int, booking_service: BookingService = Depends(get_booking_service)):
    booking = booking_service.cancel_booking(booking_id)
    if not booking:
        logger.info(f"Cancel failed for booking {booking_id}")
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking
