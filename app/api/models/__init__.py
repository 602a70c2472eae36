"""API Pydantic models."""
from app.api.models.errors import ErrorCodes, ErrorDetail, ErrorResponse
from app.api.models.requests import AuditRequest
from app.api.models.responses import AuditReportResponse, HealthResponse, ToolDescriptor

__all__ = [
    "AuditRequest",
    "AuditReportResponse",
    "HealthResponse",
    "ToolDescriptor",
    "ErrorResponse",
    "ErrorDetail",
    "ErrorCodes",
]
