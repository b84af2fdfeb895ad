"""
Authentication dependencies for FastAPI
Resolves the caller's Identity from a JWT bearer token
"""

from typing import Any, Dict, Optional

import jwt
from fastapi import Request

from product_api.core.config import config
from product_api.core.logger import logger
from product_api.models.user import Identity


class AuthError(Exception):
    """Custom authentication error"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def _claims_is_admin(claims: Dict[str, Any]) -> bool:
    if claims.get("isAdmin") is True:
        return True
    roles = claims.get("roles")
    if not isinstance(roles, (list, tuple)):
        return False
    return any(isinstance(role, str) and role.lower() == "admin" for role in roles)


class JwtIdentityResolver:
    """
    Resolves identity from an `Authorization: Bearer <token>` header.

    The token payload may carry the user at top level
    (`id` / `user_id` / `sub`, with `isAdmin` or `roles`) or nested under a
    `user` claim.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self.secret = secret
        self.algorithm = algorithm

    def decode(self, token: str) -> dict:
        """
        Decode and validate JWT token

        Raises:
            AuthError: If token is invalid or expired
        """
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Invalid token: {str(e)}")
            raise AuthError("Invalid token")

    def identity_from_claims(self, payload: dict) -> Identity:
        claims = payload.get("user") if isinstance(payload.get("user"), dict) else payload

        user_id = claims.get("id") or claims.get("user_id") or claims.get("sub")
        if not user_id:
            raise AuthError("Invalid token: Missing user identifier")

        return Identity(id=str(user_id), is_admin=_claims_is_admin(claims))

    async def resolve(self, request: Request) -> Optional[Identity]:
        authorization = request.headers.get("Authorization")
        if not authorization:
            logger.debug("No token provided")
            return None

        scheme, _, token = authorization.partition(" ")
        if scheme.lower() != "bearer" or not token.strip():
            logger.warning("Invalid authorization header format. Expected 'Bearer <token>'")
            return None

        try:
            identity = self.identity_from_claims(self.decode(token.strip()))
        except AuthError as e:
            logger.warning(f"Authentication failed: {e.message}")
            return None

        logger.debug(f"Authentication successful for user: {identity.id}")
        return identity


def get_identity_resolver() -> JwtIdentityResolver:
    """Identity resolver configured from the service settings"""
    return JwtIdentityResolver(config.jwt_secret, config.jwt_algorithm)
