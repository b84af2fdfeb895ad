"""
Gates: pipeline stages that may halt a request before its handler runs.

A gate is an async callable taking the RequestContext and returning None to
let the request continue, or an Outcome to stop it.
"""

from typing import Awaitable, Callable, Optional

from product_api.core.logger import logger
from product_api.pipeline.context import RequestContext
from product_api.pipeline.outcomes import Forbidden, Outcome, Unauthenticated, ValidationFailed
from product_api.pipeline.validation import ValidationRuleSet, validate

Gate = Callable[[RequestContext], Awaitable[Optional[Outcome]]]


async def authenticate(ctx: RequestContext) -> Optional[Outcome]:
    identity = await ctx.identity_resolver.resolve(ctx.request)
    if identity is None:
        logger.warning(
            "Authentication required",
            metadata={
                "event": "unauthenticated",
                "method": ctx.request.method,
                "path": ctx.request.url.path,
            }
        )
        return Unauthenticated()

    ctx.identity = identity
    return None


async def require_admin(ctx: RequestContext) -> Optional[Outcome]:
    """Must run after authenticate."""
    if ctx.identity is None:
        raise RuntimeError("require_admin gate used before authenticate")

    if not ctx.identity.is_admin:
        logger.warning(
            f"Admin access denied for user: {ctx.identity.id}",
            user_id=ctx.identity.id,
            metadata={
                "event": "forbidden",
                "method": ctx.request.method,
                "path": ctx.request.url.path,
            }
        )
        return Forbidden()

    return None


def validate_body(rule_set: ValidationRuleSet) -> Gate:
    """Gate that rejects the request if any rule of `rule_set` fails on its body"""

    async def gate(ctx: RequestContext) -> Optional[Outcome]:
        errors = validate(ctx.body, rule_set)
        if errors:
            logger.warning(
                "Request body failed validation",
                user_id=ctx.identity.id if ctx.identity else None,
                metadata={
                    "event": "validation_failed",
                    "fields": [error.field_name for error in errors],
                }
            )
            return ValidationFailed(errors)
        return None

    return gate
