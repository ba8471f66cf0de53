from .user import PatientCreate, PatientResponse
from .response import ApiResponse, PaginationMetaResponse, paginated_response

__all__ = [
    "PatientCreate",
    "PatientResponse",
    "ApiResponse",
    "PaginationMetaResponse",
    "paginated_response",
]
