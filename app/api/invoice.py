from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.models.booking import InvoiceRequest
from app.services.notification_service import send_invoice

router = APIRouter()

@router.post("/send-invoice")
def send_invoice_email(req: InvoiceRequest):
    sent = send_invoice(req.userEmail, req.serviceName, req.totalCost, req.duration, req.location)
    if sent:
        return {"message": "Invoice sent successfully"}
    return JSONResponse(status_code=500, content={"error": "Failed to send email"})
