"""
Outcomes returned by gates and handlers.

Every stage of a route returns one of these values instead of writing to a
response object. `to_response()` renders the outcome as the HTTP reply.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union

from fastapi import status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from product_api.pipeline.validation import FieldError


@dataclass(frozen=True)
class Ok:
    payload: Any
    status_code: int = status.HTTP_200_OK

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content=jsonable_encoder(self.payload, by_alias=True),
        )


@dataclass(frozen=True)
class ValidationFailed:
    errors: Tuple[FieldError, ...]

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": [error.as_dict() for error in self.errors]},
        )


@dataclass(frozen=True)
class Unauthenticated:
    message: str = "Authentication required"

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_401_UNAUTHORIZED,
            content={"msg": self.message},
            headers={"WWW-Authenticate": "Bearer"},
        )


@dataclass(frozen=True)
class Forbidden:
    message: str = "Access denied: Admins only"

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN,
            content={"msg": self.message},
        )


@dataclass(frozen=True)
class ServerError:
    """Opaque failure; the cause is logged where it happened, never returned."""

    message: str = "Server error"

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"msg": self.message},
        )


Outcome = Union[Ok, ValidationFailed, Unauthenticated, Forbidden, ServerError]

# OpenAPI descriptions for the error outcomes
ERROR_RESPONSES: Dict[Union[int, str], Dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"description": "Validation failed"},
    status.HTTP_401_UNAUTHORIZED: {"description": "Authentication required"},
    status.HTTP_403_FORBIDDEN: {"description": "Access denied: Admins only"},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Server error"},
}


def error_responses(*codes: int) -> Dict[Union[int, str], Dict[str, Any]]:
    """Subset of ERROR_RESPONSES for a route's `responses=` argument"""
    return {code: ERROR_RESPONSES[code] for code in codes}

