"""
Per-request context passed through the pipeline stages
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

from fastapi import Request

from product_api.core.logger import logger
from product_api.models.user import Identity

BODY_METHODS = {"POST", "PUT", "PATCH"}


class IdentityResolver(Protocol):
    """Turns a request credential into an Identity, or None if there is none"""

    async def resolve(self, request: Request) -> Optional[Identity]:
        ...


@dataclass
class RequestContext:
    """
    State for one request. `identity` is set by the authentication gate and
    read-only afterwards.
    """

    request: Request
    identity_resolver: IdentityResolver
    body: Dict[str, Any] = field(default_factory=dict)
    path_params: Dict[str, str] = field(default_factory=dict)
    identity: Optional[Identity] = None

    @classmethod
    async def from_request(cls, request: Request, identity_resolver: IdentityResolver) -> "RequestContext":
        body: Any = {}
        if request.method in BODY_METHODS:
            if await request.body():
                try:
                    body = await request.json()
                except ValueError:
                    logger.warning(
                        "Request body is not valid JSON",
                        metadata={"event": "invalid_json_body", "path": request.url.path}
                    )
                    body = {}

        return cls(
            request=request,
            identity_resolver=identity_resolver,
            body=body if isinstance(body, dict) else {},
            path_params=dict(request.path_params),
        )
