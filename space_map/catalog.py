"""Static star catalog and constellation-line graph.

The catalog is a fixed list of named bright stars (loaded from
``data/stars_bright.csv``) followed by synthetic faint background points
that fill the map. The constellation graph links pairs of named bright
stars that lie close together on the sky.

Units and conventions
- Right ascension is expressed in hours, [0, 24).
- Declination is expressed in degrees, [-90, +90].
- Magnitude: smaller = brighter.

Both the catalog and the graph are built once and never mutated; edges
reference the catalog's own :class:`CelestialPoint` instances.
"""

import logging
from dataclasses import dataclass
from itertools import combinations
from typing import List, Optional, Sequence

import numpy as np

from .data_manager import load_bright_stars
from .settings import DEFAULTS

logger = logging.getLogger(__name__)

# Name prefix of generated background points.
SYNTHETIC_PREFIX = 'Star_'


@dataclass(frozen=True)
class CelestialPoint:
    """A catalog entry at a fixed sky position.

    Attributes
    - name: Common star name, or ``Star_<n>`` for background points.
    - ra_hours: Right ascension in hours [0, 24).
    - dec_deg: Declination in degrees [-90, 90].
    - mag: Visual magnitude (smaller = brighter).
    """

    name: str
    ra_hours: float
    dec_deg: float
    mag: float

    @property
    def is_synthetic(self) -> bool:
        return not self.name or self.name.startswith(SYNTHETIC_PREFIX)


@dataclass(frozen=True)
class ConstellationEdge:
    """A line between two catalog stars. Both endpoints are shared with the catalog."""

    a: CelestialPoint
    b: CelestialPoint


@dataclass(frozen=True)
class PlottedObject:
    """A search result pinned on the map, keyed by `name`."""

    name: str
    ra_hours: float
    dec_deg: float
    kind: str = 'Object'


def generate_background_stars(count: int, min_mag: float, max_mag: float,
                              seed: Optional[int] = None) -> List[CelestialPoint]:
    """Return `count` random faint points spread over the whole sky.

    RA is uniform in [0, 24), Dec uniform in [-90, 90] and magnitude uniform
    in [min_mag, max_mag]. Passing `seed` makes the result reproducible.
    """
    rng = np.random.default_rng(seed)
    ra = rng.uniform(0.0, 24.0, size=count)
    dec = rng.uniform(-90.0, 90.0, size=count)
    mag = rng.uniform(min_mag, max_mag, size=count)
    return [
        CelestialPoint(name=f'{SYNTHETIC_PREFIX}{i}', ra_hours=float(ra[i]),
                       dec_deg=float(dec[i]), mag=float(mag[i]))
        for i in range(count)
    ]


def build_catalog(background_count: Optional[int] = None,
                  min_mag: Optional[float] = None,
                  max_mag: Optional[float] = None,
                  seed: Optional[int] = None) -> List[CelestialPoint]:
    """Build the full star catalog: named bright stars, then background points.

    Parameters left as ``None`` fall back to ``settings.DEFAULTS``. The named
    stars come first and keep their literal coordinates; only the background
    points depend on `seed`.
    """
    if background_count is None:
        background_count = int(DEFAULTS['background_star_count'])
    if min_mag is None:
        min_mag = float(DEFAULTS['background_min_mag'])
    if max_mag is None:
        max_mag = float(DEFAULTS['background_max_mag'])
    if seed is None:
        seed = DEFAULTS.get('background_seed')

    named = [CelestialPoint(name=s['name'], ra_hours=s['ra_hours'],
                            dec_deg=s['dec_deg'], mag=s['mag'])
             for s in load_bright_stars()]
    background = generate_background_stars(background_count, min_mag, max_mag, seed=seed)
    logger.info("Built catalog: %d named stars, %d background points",
                len(named), len(background))
    return named + background


def angular_distance_deg(p1: CelestialPoint, p2: CelestialPoint) -> float:
    """Great-circle separation of two points in degrees (spherical law of cosines)."""
    ra1 = np.radians(p1.ra_hours * 15.0)
    ra2 = np.radians(p2.ra_hours * 15.0)
    dec1 = np.radians(p1.dec_deg)
    dec2 = np.radians(p2.dec_deg)
    cos_angle = (np.sin(dec1) * np.sin(dec2)
                 + np.cos(dec1) * np.cos(dec2) * np.cos(ra1 - ra2))
    # rounding can push identical positions just past 1.0
    return float(np.degrees(np.arccos(np.clip(cos_angle, -1.0, 1.0))))


def build_constellation_graph(catalog: Sequence[CelestialPoint],
                              max_separation_deg: Optional[float] = None,
                              max_mag: Optional[float] = None) -> List[ConstellationEdge]:
    """Link every pair of named bright stars closer than `max_separation_deg`.

    Only points brighter than `max_mag` with a real name take part, so the
    pairwise pass is quadratic in the handful of named stars rather than in
    the whole catalog.
    """
    if max_separation_deg is None:
        max_separation_deg = float(DEFAULTS['constellation_max_separation_deg'])
    if max_mag is None:
        max_mag = float(DEFAULTS['constellation_max_mag'])

    candidates = [p for p in catalog if p.mag < max_mag and not p.is_synthetic]
    edges = [ConstellationEdge(a=s1, b=s2)
             for s1, s2 in combinations(candidates, 2)
             if angular_distance_deg(s1, s2) < max_separation_deg]
    logger.debug("Constellation graph: %d candidates, %d edges", len(candidates), len(edges))
    return edges


def find_point(catalog: Sequence[CelestialPoint], name: str) -> Optional[CelestialPoint]:
    """Case-insensitive exact name lookup."""
    key = (name or '').strip().lower()
    for p in catalog:
        if p.name.lower() == key:
            return p
    return None
