"""
Request authorization pipeline: gates, field validation and outcomes
"""

from .builder import Pipeline
from .context import IdentityResolver, RequestContext
from .gates import authenticate, require_admin, validate_body
from .outcomes import (
    Forbidden,
    Ok,
    Outcome,
    ServerError,
    Unauthenticated,
    ValidationFailed,
)
from .validation import (
    CREATE_PRODUCT_RULES,
    UPDATE_PRODUCT_RULES,
    FieldError,
    ValidationRule,
    validate,
)

__all__ = [
    "Pipeline",
    "IdentityResolver",
    "RequestContext",
    "authenticate",
    "require_admin",
    "validate_body",
    "Forbidden",
    "Ok",
    "Outcome",
    "ServerError",
    "Unauthenticated",
    "ValidationFailed",
    "CREATE_PRODUCT_RULES",
    "UPDATE_PRODUCT_RULES",
    "FieldError",
    "ValidationRule",
    "validate",
]
