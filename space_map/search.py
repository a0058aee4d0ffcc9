"""Search results and their hand-off to the star map.

Remote lookups (asteroid, exoplanet and deep-sky databases) live outside
this package; they hand over :class:`SearchResult` objects and only the
results that carry resolved coordinates end up on the map. For offline use
:func:`search_catalog` ranks the named stars of the built-in catalog.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from difflib import SequenceMatcher
from typing import Dict, Iterable, List, Optional, Sequence

from .catalog import CelestialPoint

logger = logging.getLogger(__name__)

MIN_SCORE = 0.2
SUBSTRING_BONUS = 0.3


@dataclass
class SearchResult:
    name: str
    kind: str
    source: str = ''
    ra_hours: Optional[float] = None
    dec_deg: Optional[float] = None
    details: Dict[str, str] = field(default_factory=dict)

    @property
    def has_coordinates(self) -> bool:
        return self.ra_hours is not None and self.dec_deg is not None


def _score(query: str, name: str) -> float:
    name = name.lower()
    score = SequenceMatcher(None, query, name).ratio()
    if query in name:
        score += SUBSTRING_BONUS
    return score


def search_catalog(catalog: Sequence[CelestialPoint], query: str,
                   limit: int = 5) -> List[SearchResult]:
    """Rank the named catalog stars against `query`, best match first.

    Matching is case-insensitive and fuzzy; a substring hit gets a bonus
    and weak matches are dropped. Raises ValueError for an empty query.
    """
    q = (query or '').strip().lower()
    if not q:
        raise ValueError('Please enter a space object name to search.')

    scored = []
    for p in catalog:
        if p.is_synthetic:
            continue
        score = _score(q, p.name)
        if score >= MIN_SCORE:
            scored.append((score, p))
    scored.sort(key=lambda t: t[0], reverse=True)

    results = [
        SearchResult(
            name=p.name, kind='Star', source='Star Catalog',
            ra_hours=p.ra_hours, dec_deg=p.dec_deg,
            details={'Right Ascension': f'{p.ra_hours:.2f}h',
                     'Declination': f'{p.dec_deg:+.2f}°',
                     'Magnitude': f'{p.mag:.2f}'},
        )
        for _, p in scored[:limit]
    ]
    logger.debug("Catalog search %r: %d result(s)", query, len(results))
    return results


def plot_search_results(view, results: Iterable[SearchResult]) -> int:
    """Replace the plotted objects of `view` with the located `results`.

    Results without coordinates are skipped. The view ends up centred on the
    last plotted result. Returns the number of objects plotted.
    """
    view.clear_plotted_objects()
    count = 0
    for res in results:
        if not res.has_coordinates:
            logger.debug("No coordinates for %s (%s), not plotted", res.name, res.source)
            continue
        view.plot_object(res.name, res.ra_hours, res.dec_deg, res.kind)
        count += 1
    return count
