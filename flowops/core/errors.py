"""
Error taxonomy shared by services and routers.

Services raise these; the handlers registered in ``flowops.main`` turn them
into JSON responses with the matching HTTP status.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class FlowOpsError(Exception):
    """Base class for errors that map to a client-facing response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "internal_server_error"
    default_message: str = "An unexpected error occurred. Please try again later."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.code, "detail": self.message}


class Unauthenticated(FlowOpsError):
    """No (valid) session principal on the request."""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "unauthenticated"
    default_message = "Not authenticated"


class Forbidden(FlowOpsError):
    """The principal is known but the policy denies the operation."""
    status_code = status.HTTP_403_FORBIDDEN
    code = "forbidden"
    default_message = "Insufficient permissions"


class NotFound(FlowOpsError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"
    default_message = "Not found"


class ValidationError(FlowOpsError):
    """
    Structurally invalid input.

    Carries every field violation, not just the first one, as a list of
    ``{"field": ..., "message": ...}`` dicts.
    """
    status_code = status.HTTP_400_BAD_REQUEST
    code = "validation_error"
    default_message = "Invalid request data"

    def __init__(self, errors: Optional[List[Dict[str, str]]] = None, message: Optional[str] = None):
        self.errors = errors or []
        if message is None and len(self.errors) == 1:
            message = self.errors[0]["message"]
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([{"field": field, "message": message}])

    @classmethod
    def from_pydantic(cls, exc: Any) -> "ValidationError":
        """Build from a pydantic (or FastAPI request) validation error."""
        errors = []
        for err in exc.errors():
            loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
            errors.append({
                "field": ".".join(loc) or "__root__",
                "message": err.get("msg", "Invalid value"),
            })
        return cls(errors, message=cls.default_message)

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["errors"] = self.errors
        return payload


class InternalError(FlowOpsError):
    """Unexpected failure; the message sent to clients is always generic."""
