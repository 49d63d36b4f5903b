"""
Purpose: The in-memory, read-only pharmacy table.
What it does:
Loads the geocoded dataset once at process start and exposes it to any
number of concurrent requests. Nothing mutates it after load.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Dict, Iterable, Iterator, Optional, Tuple

from dotenv import load_dotenv

from .models import Pharmacy

load_dotenv()
DEFAULT_PHARMACIES_PATH = os.getenv("PHARMACIES_PATH", "data/pharmacies.json")

logger = logging.getLogger(__name__)


class PharmacyDataset:
    """
    Immutable table of pharmacies, in dataset order.
    """

    def __init__(self, pharmacies: Iterable[Pharmacy]):
        self._pharmacies: Tuple[Pharmacy, ...] = tuple(pharmacies)
        self._by_cip: Dict[str, Pharmacy] = {}
        for pharmacy in self._pharmacies:
            # first occurrence wins on duplicate CIPs
            self._by_cip.setdefault(pharmacy.cip, pharmacy)

    def __len__(self) -> int:
        return len(self._pharmacies)

    def __iter__(self) -> Iterator[Pharmacy]:
        return iter(self._pharmacies)

    def get(self, cip: str) -> Optional[Pharmacy]:
        return self._by_cip.get(cip)

    def located(self) -> Iterator[Pharmacy]:
        """Pharmacies that have coordinates."""
        return (p for p in self._pharmacies if p.has_location)


def load_pharmacies(path: str = DEFAULT_PHARMACIES_PATH) -> PharmacyDataset:
    """Load the geocoded pharmacies JSON file (a list of records)."""
    with open(path, 'r', encoding='utf-8') as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"{path}: expected a JSON list of pharmacy records")

    dataset = PharmacyDataset(Pharmacy.from_record(r) for r in records)
    missing = len(dataset) - sum(1 for _ in dataset.located())
    logger.info("Loaded %d pharmacies from %s (%d without coordinates)", len(dataset), path, missing)
    return dataset
