"""
Purpose: Core data models for the pharmacies domain.
What it does:
Defines the structure of a Pharmacy (the point of interest the engine
matches against routes) and how one row of the geocoded dataset maps to it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from routing.geometry import GeoPoint


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _coordinate(value: Any) -> Optional[float]:
    # null, "" or garbage all mean "never geocoded"
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Pharmacy:
    """
    A read-only pharmacy record.

    `location` is None when the address could not be geocoded; such records
    are kept in the dataset but can never be matched against a route.
    """
    cip: str
    name: str
    location: Optional[GeoPoint]

    # Descriptive fields, passed through unchanged
    city: str = ""
    group: str = ""
    chain: str = ""
    address: str = ""
    postcode: str = ""

    @property
    def has_location(self) -> bool:
        return self.location is not None

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> Pharmacy:
        """
        Build a Pharmacy from one row of pharmacies.json.

        Keys follow the prospects spreadsheet export:
        cip, INTITULE_CLIENT, VILLE, MATRICE, GROUPEMENT, adresse, cp,
        latitude, longitude.
        """
        lat = _coordinate(record.get("latitude"))
        lon = _coordinate(record.get("longitude"))

        location = None
        if lat is not None and lon is not None:
            try:
                location = GeoPoint(lat=lat, lon=lon)
            except ValueError:
                location = None

        return cls(
            cip=_text(record.get("cip")),
            name=_text(record.get("INTITULE_CLIENT")),
            location=location,
            city=_text(record.get("VILLE")),
            group=_text(record.get("GROUPEMENT")),
            chain=_text(record.get("MATRICE")),
            address=_text(record.get("adresse")),
            postcode=_text(record.get("cp")),
        )


def waze_url(point: GeoPoint) -> str:
    """Deep link that opens Waze navigation from the current location."""
    return f"https://waze.com/ul?ll={point.lat},{point.lon}&navigate=yes&from=Current+Location"
