# Standard library imports
from collections.abc import Sequence
import math

# Third-party imports
from sqlalchemy.ext.asyncio import AsyncSession

# Local application imports
from civictrack.core.exceptions import ValidationError
from civictrack.core.monitoring.logging import get_logger
from civictrack.db_selectors.issues import get_issues_by_location_ids, get_locations_in_box
from civictrack.models.issues import Issue
from civictrack.utils.geospatial import bounding_box, haversine_km
from civictrack.utils.validators.issue_validator import validate_latitude, validate_longitude

logger = get_logger(__name__)


async def find_nearby_issues(
    db: AsyncSession,
    latitude: float,
    longitude: float,
    radius_km: float,
) -> Sequence[Issue]:
    """
    Issues located within ``radius_km`` of a point, newest first.

    Candidates come from a bounding-box query over locations; the Haversine
    distance then drops the ones in the corners of the box.
    """
    latitude = validate_latitude(latitude)
    longitude = validate_longitude(longitude)
    try:
        radius_km = float(radius_km)
    except (TypeError, ValueError):
        raise ValidationError("Radius must be a number")
    if not math.isfinite(radius_km) or radius_km <= 0:
        raise ValidationError("Radius must be greater than 0")

    box = bounding_box(latitude, longitude, radius_km)
    candidates = await get_locations_in_box(db, box)

    location_ids = [
        location.id
        for location in candidates
        if haversine_km(latitude, longitude, location.latitude, location.longitude) <= radius_km
    ]
    logger.debug(
        f"Nearby search at ({latitude}, {longitude}) r={radius_km}km: "
        f"{len(candidates)} candidates, {len(location_ids)} within radius"
    )
    return await get_issues_by_location_ids(db, location_ids)
