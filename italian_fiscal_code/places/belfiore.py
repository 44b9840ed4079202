"""
Belfiore code database loaded from CSV.

The file has a header row and one row per place:

    code,province,name
    H501,RM,ROMA
    Z404,EE,STATI UNITI D'AMERICA

Foreign countries use province 'EE'. The bundled file is a sample of major
municipalities and countries; pass the full registry with --places.
"""

import csv
import logging
from pathlib import Path
from typing import Optional, Union

from .resolver import InMemoryPlaceResolver
from ..core.data_models import Place

DEFAULT_BELFIORE_FILE = Path(__file__).parent / 'data' / 'belfiore.csv'

_default_database: Optional['BelfioreDatabase'] = None


class BelfioreDatabase(InMemoryPlaceResolver):
    """Place resolver loaded from a Belfiore CSV file."""

    def __init__(self, source: Optional[Union[str, Path]] = None):
        """
        Load the database.

        Args:
            source: Path to the CSV file (default: bundled sample)
        """
        super().__init__()
        self.source = Path(source) if source else DEFAULT_BELFIORE_FILE
        self._load(self.source)

    def _load(self, path: Path) -> None:
        logging.info(f"Loading Belfiore codes from: {path}")

        with open(path, 'r', encoding='utf-8', newline='') as file:
            reader = csv.DictReader(file)

            for row in reader:
                code = (row.get('code') or '').strip()
                name = (row.get('name') or '').strip()
                province = (row.get('province') or '').strip()

                if not code or not name:
                    logging.warning(f"Skipping incomplete Belfiore record: {row}")
                    continue

                self.add(Place(code=code, name=name, province=province))

        logging.info(f"Loaded {len(self)} Belfiore codes")


def get_default_database() -> BelfioreDatabase:
    """Return the bundled database, loading it on first use."""
    global _default_database
    if _default_database is None:
        _default_database = BelfioreDatabase()
    return _default_database
