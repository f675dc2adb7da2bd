from typing import Dict, List, Optional

from app.core.catalog_loader import load_service_catalog
from app.models.service import Quote, Service


class ServiceNotFoundError(LookupError):
    def __init__(self, service_id: str):
        super().__init__(f"Service '{service_id}' not found")
        self.service_id = service_id


class CatalogService:
    def __init__(self, services: Optional[List[Service]] = None):
        if services is None:
            services = [Service.model_validate(s) for s in load_service_catalog()]
        self._services: Dict[str, Service] = {s.id: s for s in services}

    def list_services(self) -> List[Service]:
        return list(self._services.values())

    def get_service(self, service_id: str) -> Service:
        service = self._services.get(service_id)
        if not service:
            raise ServiceNotFoundError(service_id)
        return service

    def quote(self, service_id: str, duration: float) -> Quote:
        """Total cost is duration (hours) times the hourly rate."""
        service = self.get_service(service_id)
        return Quote(serviceId=service.id, duration=duration, totalCost=duration * service.chargePerHour)
