# Local application imports
from civictrack.models.issues.flag import Flag
from civictrack.models.issues.issue import Issue, IssueCategory, IssueStatus
from civictrack.models.issues.location import Location
from civictrack.models.issues.status_log import StatusLog
from civictrack.models.issues.status_request import StatusRequest, StatusRequestAction, StatusRequestState

__all__ = [
    "Flag",
    "Issue",
    "IssueCategory",
    "IssueStatus",
    "Location",
    "StatusLog",
    "StatusRequest",
    "StatusRequestAction",
    "StatusRequestState",
]
