# Local application imports
from civictrack.core.exceptions import ForbiddenError
from civictrack.models.issues.issue import Issue
from civictrack.schemas.auth.principal_schemas import Principal


def can_mutate(issue: Issue, principal: Principal) -> bool:
    """True iff the principal reported the issue or is an administrator."""
    return principal.id == issue.reporter_id or principal.is_admin


def ensure_can_mutate(issue: Issue, principal: Principal, action: str = "modify") -> None:
    if not can_mutate(issue, principal):
        raise ForbiddenError(f"You don't have permission to {action} this issue")


def ensure_admin(principal: Principal) -> None:
    if not principal.is_admin:
        raise ForbiddenError("Administrator privileges required")
