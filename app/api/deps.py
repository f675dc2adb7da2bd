from functools import lru_cache

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.logger import logger
from app.core.security import decode_token
from app.services.booking_service import BookingService
from app.services.booking_store import BookingStore
from app.services.catalog_service import CatalogService
from app.services.storage import KeyValueStorage, storage_for_user

bearer = HTTPBearer(auto_error=False)

def get_current_user_email(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> str:
    if not creds:
        raise HTTPException(status_code=401, detail="Not authenticated")
    try:
        payload = decode_token(creds.credentials)
    except Exception as e:
        logger.warning(f"⚠️ Rejected session token: {e}")
        raise HTTPException(status_code=401, detail="Invalid token")
    email = payload.get("email") or payload.get("sub")
    if not email:
        raise HTTPException(status_code=401, detail="Invalid token")
    return email

@lru_cache
def get_catalog() -> CatalogService:
    return CatalogService()

def get_user_storage(email: str = Depends(get_current_user_email)) -> KeyValueStorage | None:
    return storage_for_user(email)

def get_booking_store(storage: KeyValueStorage | None = Depends(get_user_storage)) -> BookingStore:
    return BookingStore(storage)

def get_booking_service(
    store: BookingStore = Depends(get_booking_store),
    catalog: CatalogService = Depends(get_catalog),
) -> BookingService:
    return BookingService(store, catalog)
