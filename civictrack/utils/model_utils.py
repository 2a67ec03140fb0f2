# Standard library imports
from collections.abc import Iterable, Mapping
from typing import Any

# Local application imports
from civictrack.models.base import Base


def update_model_fields(
    model_instance: Base,
    update_data: Mapping[str, Any],
    allowed_fields: Iterable[str],
    partial_update: bool = True,
) -> list[str]:
    """
    Copy values from ``update_data`` onto the model for the allowed fields.

    - If `partial_update=True` (PATCH), a None value means "keep the current value".
    - If `partial_update=False` (PUT), None values are written as well.

    Returns the names of the fields that actually changed.
    """
    changed = []
    for field in allowed_fields:
        if field not in update_data or not hasattr(model_instance, field):
            continue
        value = update_data[field]
        if partial_update and value is None:
            continue
        if getattr(model_instance, field) != value:
            setattr(model_instance, field, value)
            changed.append(field)
    return changed
