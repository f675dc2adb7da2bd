from pydantic import BaseModel

class Service(BaseModel):
    id: str
    name: str
    description: str = ""
    chargePerHour: float

class Quote(BaseModel):
    serviceId: str
    duration: float
    totalCost: float
