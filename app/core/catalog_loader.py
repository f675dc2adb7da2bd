import json
import os
import logging
from typing import Any, Dict, List

from app.core.config import settings

logger = logging.getLogger("app")

def load_service_catalog(path: str = None) -> List[Dict[str, Any]]:
    """
    Loads the static service catalog from JSON file.
    Raises FileNotFoundError if the catalog is missing, ValueError if it is not valid JSON.
    Returns: List of service dicts (id, name, description, chargePerHour).
    """
    path = path or settings.SERVICES_FILE

    if not os.path.exists(path):
        logger.critical(f"❌ Service catalog '{path}' not found! The app cannot serve bookings.")
        raise FileNotFoundError(f"Service catalog not found at {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            catalog = json.load(f)
    except json.JSONDecodeError as e:
        logger.critical(f"❌ Service catalog JSON parse error: {e}")
        raise ValueError(f"Invalid JSON in service catalog: {e}")

    services = catalog.get("services", [])
    logger.info(f"✅ Service catalog loaded: {len(services)} services")
    return services
