# Third-party imports
import pytest

# Local application imports
from civictrack.core.exceptions import ValidationError
from civictrack.models.issues import IssueStatus
from civictrack.services.issues.status_workflow import (
    allowed_transitions,
    ensure_valid_transition,
    is_valid_transition,
    parse_status,
)


def test_permissive_flow_allows_any_other_status():
    for current in IssueStatus:
        assert allowed_transitions(current, strict=False) == frozenset(set(IssueStatus) - {current})


def test_permissive_flow_allows_reopening_closed_issue():
    assert is_valid_transition(IssueStatus.CLOSED, IssueStatus.REPORTED, strict=False)


@pytest.mark.parametrize(
    "current, new",
    [
        (IssueStatus.REPORTED, IssueStatus.UNDER_REVIEW),
        (IssueStatus.REPORTED, IssueStatus.IN_PROGRESS),
        (IssueStatus.UNDER_REVIEW, IssueStatus.RESOLVED),
        (IssueStatus.IN_PROGRESS, IssueStatus.CLOSED),
        (IssueStatus.RESOLVED, IssueStatus.CLOSED),
    ],
)
def test_strict_flow_allows_forward_moves(current, new):
    assert is_valid_transition(current, new, strict=True)


@pytest.mark.parametrize(
    "current, new",
    [
        (IssueStatus.CLOSED, IssueStatus.REPORTED),
        (IssueStatus.RESOLVED, IssueStatus.IN_PROGRESS),
        (IssueStatus.IN_PROGRESS, IssueStatus.UNDER_REVIEW),
    ],
)
def test_strict_flow_rejects_backward_moves(current, new):
    assert not is_valid_transition(current, new, strict=True)
    with pytest.raises(ValidationError):
        ensure_valid_transition(current, new, strict=True)


def test_closed_is_final_in_strict_flow():
    assert allowed_transitions(IssueStatus.CLOSED, strict=True) == frozenset()


def test_same_status_is_never_rejected():
    assert is_valid_transition(IssueStatus.CLOSED, IssueStatus.CLOSED, strict=True)


def test_parse_status():
    assert parse_status("in_progress") is IssueStatus.IN_PROGRESS
    assert parse_status(IssueStatus.RESOLVED) is IssueStatus.RESOLVED
    with pytest.raises(ValidationError, match="Invalid status"):
        parse_status("fixed")
