from .user_service import (
    Created,
    Failed,
    NotFound,
    Rejected,
    Updated,
    UserService,
    create_user,
    update_user,
)
from .validation import FieldViolation, RuleTag, format_violation, iter_violations, validate

__all__ = [
    "Created",
    "Failed",
    "FieldViolation",
    "NotFound",
    "Rejected",
    "RuleTag",
    "Updated",
    "UserService",
    "create_user",
    "format_violation",
    "iter_violations",
    "update_user",
    "validate",
]
