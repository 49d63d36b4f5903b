"""
Process-wide collaborators for the API views.

Each one is built lazily on first use and then shared by every request:
the dataset is read-only, the visited store handles its own locking and the
routing clients are stateless apart from their HTTP session.
"""
import logging
from functools import lru_cache

from django.conf import settings

from pharmacies import JsonVisitedStore, PharmacyDataset, load_pharmacies
from routing import RoutingClient, get_routing_client

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_dataset() -> PharmacyDataset:
    return load_pharmacies(settings.PHARMACIES_PATH)


@lru_cache(maxsize=1)
def get_visited_store() -> JsonVisitedStore:
    return JsonVisitedStore(settings.VISITED_PATH)


@lru_cache(maxsize=1)
def get_router() -> RoutingClient:
    logger.info("Using routing provider %s", settings.ROUTING_PROVIDER)
    return get_routing_client(settings.ROUTING_PROVIDER, timeout=settings.ROUTING_TIMEOUT_SECONDS)
