# Local application imports
from civictrack.schemas.common.response_schemas import BaseResponse, ErrorDetails

__all__ = ["BaseResponse", "ErrorDetails"]
