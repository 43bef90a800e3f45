"""Application-wide exception hierarchy."""
from typing import Any, Dict, Optional


class ActivityLogError(Exception):
    """Base application error with a machine-readable code."""

    code = "APP_ERROR"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for API responses."""
        result: Dict[str, Any] = {
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(ActivityLogError):
    """Raised when caller-supplied event data is malformed."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, details={"field": field} if field else None)
        self.field = field


class EventNotFoundError(ActivityLogError):
    """Raised when an update targets an event id that does not exist."""

    code = "NOT_FOUND"

    def __init__(self, event_id: int):
        super().__init__(f"Event {event_id} not found", details={"id": event_id})
        self.event_id = event_id
