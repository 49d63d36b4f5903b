"""
Pharmacies domain package.

Public API:
- Domain model: Pharmacy, waze_url
- Read-only table: PharmacyDataset, load_pharmacies
- Straight-line lookups: nearest_pharmacy, nearest_pharmacies
- Visited flags: JsonVisitedStore, InMemoryVisitedStore
"""
from .models import Pharmacy, waze_url
from .dataset import PharmacyDataset, load_pharmacies
from .lookup import NearbyPharmacy, nearest_pharmacies, nearest_pharmacy
from .visited import InMemoryVisitedStore, JsonVisitedStore, VisitedStore

__all__ = ["Pharmacy",
           "waze_url",
             "PharmacyDataset",
               "load_pharmacies",
               "NearbyPharmacy",
               "nearest_pharmacies",
               "nearest_pharmacy",
               "InMemoryVisitedStore",
               "JsonVisitedStore",
               "VisitedStore",
               ]
