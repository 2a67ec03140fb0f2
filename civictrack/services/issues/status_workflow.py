"""
Issue status transition policy.

By default any status may be set from any other status. With
``STRICT_STATUS_FLOW`` enabled the forward-only table below applies:
issues move through review and work towards resolution, ``resolved`` and
``closed`` can be reached from any earlier state, and ``closed`` is final.
"""

# Local application imports
from civictrack.core.exceptions import ValidationError
from civictrack.models.issues.issue import IssueStatus
from civictrack.settings import settings

STATUS_ORDER: list[IssueStatus] = [
    IssueStatus.REPORTED,
    IssueStatus.UNDER_REVIEW,
    IssueStatus.IN_PROGRESS,
    IssueStatus.RESOLVED,
    IssueStatus.CLOSED,
]

PERMISSIVE_TRANSITIONS: dict[IssueStatus, frozenset[IssueStatus]] = {
    status: frozenset(s for s in IssueStatus if s != status) for status in IssueStatus
}

FORWARD_TRANSITIONS: dict[IssueStatus, frozenset[IssueStatus]] = {
    status: frozenset(STATUS_ORDER[index + 1 :]) for index, status in enumerate(STATUS_ORDER)
}


def allowed_transitions(current: IssueStatus, strict: bool | None = None) -> frozenset[IssueStatus]:
    if strict is None:
        strict = settings.STRICT_STATUS_FLOW
    table = FORWARD_TRANSITIONS if strict else PERMISSIVE_TRANSITIONS
    return table[current]


def is_valid_transition(current: IssueStatus, new: IssueStatus, strict: bool | None = None) -> bool:
    # Same status is a no-op, never a transition
    if current == new:
        return True
    return new in allowed_transitions(current, strict)


def ensure_valid_transition(current: IssueStatus, new: IssueStatus, strict: bool | None = None) -> None:
    if not is_valid_transition(current, new, strict):
        raise ValidationError(f"Invalid status transition from {current.value} to {new.value}")


def parse_status(value: IssueStatus | str) -> IssueStatus:
    try:
        return IssueStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid status: {value}")
