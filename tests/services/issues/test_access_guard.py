# Standard library imports
from uuid import uuid4

# Third-party imports
import pytest

# Local application imports
from civictrack.core.exceptions import ForbiddenError
from civictrack.models.auth.user import UserRole
from civictrack.models.issues import Issue
from civictrack.schemas.auth.principal_schemas import Principal
from civictrack.services.issues.access_guard import can_mutate, ensure_admin, ensure_can_mutate


@pytest.fixture
def owner() -> Principal:
    return Principal(id=uuid4())


@pytest.fixture
def issue(owner: Principal) -> Issue:
    return Issue(id=uuid4(), reporter_id=owner.id)


def test_reporter_can_mutate(issue, owner):
    assert can_mutate(issue, owner)
    ensure_can_mutate(issue, owner)


def test_admin_can_mutate_any_issue(issue):
    assert can_mutate(issue, Principal(id=uuid4(), role=UserRole.ADMIN))


def test_other_user_cannot_mutate(issue):
    stranger = Principal(id=uuid4())

    assert not can_mutate(issue, stranger)
    with pytest.raises(ForbiddenError, match="permission to delete"):
        ensure_can_mutate(issue, stranger, "delete")


def test_ensure_admin():
    ensure_admin(Principal(id=uuid4(), role=UserRole.ADMIN))
    with pytest.raises(ForbiddenError):
        ensure_admin(Principal(id=uuid4()))
