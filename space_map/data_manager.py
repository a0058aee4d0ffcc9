"""Data loading helpers for the offline CSV files in `data/`.

Provides `get_data_path` and `load_bright_stars` for the
`stars_bright.csv` list of named stars.
"""

import csv
import logging
from pathlib import Path
from typing import List, Dict, Optional

from .settings import DATA_DIR

logger = logging.getLogger(__name__)


def get_data_path(*parts: str) -> Path:
    """Return a `Path` inside the package `data/` directory.

    Usage: `get_data_path('stars_bright.csv')`.
    """
    return DATA_DIR.joinpath(*parts)


def load_bright_stars(path: Optional[Path] = None) -> List[Dict]:
    """Load the named bright stars and return a list of dicts.

    Each dict contains the keys: `name` (str), `ra_hours` (float),
    `dec_deg` (float) and `mag` (float). Values are taken verbatim from
    the CSV, in file order.

    Raises FileNotFoundError if the CSV is missing.
    """
    if path is None:
        path = get_data_path('stars_bright.csv')
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Stars file not found: {path}")

    stars: List[Dict] = []
    with open(path, newline='', encoding='utf-8') as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            # skip rows that fail conversion
            try:
                star = {
                    'name': row['name'].strip(),
                    'ra_hours': float(row['ra_hours']),
                    'dec_deg': float(row['dec_deg']),
                    'mag': float(row['mag']),
                }
            except (KeyError, TypeError, ValueError, AttributeError):
                logger.warning("Skipping malformed star row in %s: %r", path.name, row)
                continue
            stars.append(star)
    logger.debug("Loaded %d named stars from %s", len(stars), path)
    return stars
