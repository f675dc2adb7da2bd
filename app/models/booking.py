from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

class BookingStatus(str, Enum):
    PENDING = "Pending"
    CANCELLED = "Cancelled"

class Location(BaseModel):
    # Free text, nothing is validated
    division: str = ""
    district: str = ""
    city: str = ""
    area: str = ""

class BookingRequest(BaseModel):
    """A booking as the form submits it, before the store assigns id/createdAt."""
    serviceId: str
    serviceName: str
    duration: float = Field(ge=1)  # hours
    location: Location = Field(default_factory=Location)
    totalCost: float
    status: BookingStatus = BookingStatus.PENDING

class Booking(BookingRequest):
    # Stored records keep fields written by other clients and are not held to form rules
    model_config = ConfigDict(extra="allow")

    duration: float
    id: int
    createdAt: str

# --- API payloads ---

class BookServiceRequest(BaseModel):
    duration: float = Field(default=1, ge=1)
    location: Location = Field(default_factory=Location)

class BookServiceResponse(BaseModel):
    message: str
    booking: Optional[Booking] = None
    warning: Optional[str] = None

class InvoiceRequest(BaseModel):
    userEmail: str
    serviceName: str
    totalCost: float
    duration: float
    location: Location = Field(default_factory=Location)
