# Standard library imports
from collections.abc import Iterable

# Local application imports
from civictrack.core.exceptions import ValidationError
from civictrack.models.issues.issue import IssueCategory
from civictrack.utils.geospatial import is_valid_latitude, is_valid_longitude


def require_text(value: str | None, field: str) -> str:
    """Return the stripped value, rejecting missing or blank input."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def validate_latitude(value: float) -> float:
    try:
        latitude = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Latitude must be a number")
    if not is_valid_latitude(latitude):
        raise ValidationError("Latitude must be between -90 and 90")
    return latitude


def validate_longitude(value: float) -> float:
    try:
        longitude = float(value)
    except (TypeError, ValueError):
        raise ValidationError("Longitude must be a number")
    if not is_valid_longitude(longitude):
        raise ValidationError("Longitude must be between -180 and 180")
    return longitude


def parse_category(value: IssueCategory | str | None) -> IssueCategory:
    if value is None:
        return IssueCategory.OTHER
    try:
        return IssueCategory(value)
    except ValueError:
        raise ValidationError(f"Invalid category: {value}")


def validate_photos(photos: Iterable[str] | None) -> list[str]:
    references = list(photos or [])
    if any(not isinstance(ref, str) or not ref.strip() for ref in references):
        raise ValidationError("Photo references must be non-empty strings")
    return references
