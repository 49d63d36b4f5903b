import argparse
import json
import re
import time
from typing import Dict, List, Optional

import requests

NOMINATIM_SEARCH = "https://nominatim.openstreetmap.org/search"
HEADERS = {
    "User-Agent": "pharmaroute/1.0 (geocoding batch)",
    "Accept-Language": "fr",
}
# Nominatim usage policy: at most one request per second
PAUSE_SECONDS = 1.2
PREFERRED_TYPES = {"house", "building"}


def clean(text) -> str:
    if not text:
        return ""
    text = re.sub(r"CEDEX.*", "", str(text), flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", text).strip()


def fetch_geo(query: str, session: requests.Session) -> List[Dict]:
    response = session.get(
        NOMINATIM_SEARCH,
        params={"format": "json", "addressdetails": 1, "limit": 5, "q": query},
        headers=HEADERS,
        timeout=10,
    )
    response.raise_for_status()
    return response.json()


def best_match(results: List[Dict]) -> Optional[Dict]:
    """Prefer a precise hit (house, building, amenity) over the first result."""
    for result in results:
        if result.get("type") in PREFERRED_TYPES or result.get("class") == "amenity":
            return result
    return results[0] if results else None


def geocode_record(record: Dict, session: requests.Session) -> Optional[Dict]:
    full_address = f"{clean(record.get('adresse'))}, {record.get('cp', '')} {clean(record.get('VILLE'))}, France"
    results = fetch_geo(full_address, session)

    if not results:
        # fallback: postcode + city only
        time.sleep(PAUSE_SECONDS)
        results = fetch_geo(f"{record.get('cp', '')} {clean(record.get('VILLE'))}, France", session)

    return best_match(results)


def geocode(source="data/pharmacies_raw.json", destination="data/pharmacies.json",
            errors_path="data/geocode_errors.txt"):
    with open(source, "r", encoding="utf-8") as f:
        pharmacies = json.load(f)

    session = requests.Session()
    results = []
    errors = []

    for record in pharmacies:
        address = f"{clean(record.get('adresse'))}, {record.get('cp', '')} {clean(record.get('VILLE'))}"
        print(f"Geocoding {address}")

        try:
            best = geocode_record(record, session)
        except (requests.RequestException, ValueError) as e:
            print(f"  failed: {e}")
            best = None

        if best:
            results.append({**record, "latitude": float(best["lat"]), "longitude": float(best["lon"])})
        else:
            results.append({**record, "latitude": None, "longitude": None})
            errors.append(address)

        time.sleep(PAUSE_SECONDS)

    with open(destination, "w", encoding="utf-8") as f:
        json.dump(results, f, indent=2, ensure_ascii=False)

    with open(errors_path, "w", encoding="utf-8") as f:
        f.write("\n".join(errors))

    print(f"Wrote {len(results)} pharmacies to '{destination}'.")
    print(f"{len(errors)} addresses could not be geocoded (see '{errors_path}').")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Geocode pharmacies_raw.json with Nominatim")
    parser.add_argument("--source", default="data/pharmacies_raw.json")
    parser.add_argument("--destination", default="data/pharmacies.json")
    parser.add_argument("--errors", default="data/geocode_errors.txt")
    args = parser.parse_args()
    geocode(args.source, args.destination, args.errors)
