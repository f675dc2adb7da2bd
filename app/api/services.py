from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from app.api.deps import get_catalog
from app.models.service import Quote, Service
from app.services.catalog_service import CatalogService, ServiceNotFoundError

router = APIRouter()

@router.get("/services", response_model=List[Service])
def list_services(catalog: CatalogService = Depends(get_catalog)):
    return catalog.list_services()

@router.get("/services/{service_id}", response_model=Service)
def get_service(service_id: str, catalog: CatalogService = Depends(get_catalog)):
    try:
        return catalog.get_service(service_id)
    except ServiceNotFoundError:
        raise HTTPException(status_code=404, detail="Service Not Found")

@router.get("/services/{service_id}/quote", response_model=Quote)
def quote_service(
    service_id: str,
    duration: float = Query(1, ge=1),
    catalog: CatalogService = Depends(get_catalog),
):
    try:
        return catalog.quote(service_id, duration)
    except ServiceNotFoundError:
        raise HTTPException(status_code=404, detail="Service Not Found")
