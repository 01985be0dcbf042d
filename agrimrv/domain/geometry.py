"""Plot boundary area estimation"""

from typing import Sequence
from agrimrv.domain.models import GeoPoint
from agrimrv.utils.numeric import finite_or_zero

METERS_PER_DEGREE = 111_000
SQUARE_METERS_PER_HECTARE = 10_000


def estimate_area_hectares(points: Sequence[GeoPoint]) -> float:
    """
    Approximate the area enclosed by a traced boundary, in hectares.

    Applies the shoelace formula to latitude/longitude as planar coordinates
    (the last point connects back to the first), then scales square degrees
    with a fixed 111 km per degree. The scaling ignores the longitude
    contraction away from the equator, so accuracy degrades at high latitude
    and for large plots.

    Fewer than 3 points cannot bound an area and yield 0.0.
    """
    if len(points) < 3:
        return 0.0

    coords = [(finite_or_zero(p.latitude), finite_or_zero(p.longitude)) for p in points]

    twice_area = 0.0
    for i, (lat_i, lon_i) in enumerate(coords):
        lat_j, lon_j = coords[(i + 1) % len(coords)]
        twice_area += lat_i * lon_j - lat_j * lon_i

    raw_area = abs(twice_area) / 2
    # huge finite coordinates can overflow to inf
    return finite_or_zero(raw_area * METERS_PER_DEGREE * METERS_PER_DEGREE / SQUARE_METERS_PER_HECTARE)
