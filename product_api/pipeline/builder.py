"""
Pipeline builder: composes gates and a handler for one route.
"""

from typing import Awaitable, Callable, Sequence

from fastapi.responses import JSONResponse

from product_api.core.errors import PersistenceError
from product_api.core.logger import logger
from product_api.pipeline.context import RequestContext
from product_api.pipeline.gates import Gate
from product_api.pipeline.outcomes import Outcome, ServerError

Handler = Callable[[RequestContext], Awaitable[Outcome]]


class Pipeline:
    """
    Ordered gates in front of a handler.

    Gates run first to last; the first gate returning an Outcome ends the
    request with it. The handler runs only when every gate passed. Errors
    escaping any stage, or raised while rendering the outcome, become an
    opaque ServerError.

    Example:
        update_pipeline = Pipeline("update_product", authenticate, require_admin)
        outcome = await update_pipeline.run(ctx, service.update_product)
    """

    def __init__(self, name: str, *gates: Gate):
        self.name = name
        self.gates: Sequence[Gate] = tuple(gates)

    async def run(self, ctx: RequestContext, handler: Handler) -> Outcome:
        try:
            for gate in self.gates:
                outcome = await gate(ctx)
                if outcome is not None:
                    return outcome

            return await handler(ctx)
        except Exception as e:
            return self._server_error(ctx, e)

    async def respond(self, ctx: RequestContext, handler: Handler) -> JSONResponse:
        outcome = await self.run(ctx, handler)
        try:
            return outcome.to_response()
        except ValueError as e:
            # Payload that cannot be encoded as JSON, e.g. a stored non-finite float
            return self._server_error(ctx, e).to_response()

    def _server_error(self, ctx: RequestContext, e: Exception) -> ServerError:
        user_id = ctx.identity.id if ctx.identity else None

        if isinstance(e, PersistenceError):
            logger.error(
                f"Persistence failure in {self.name}",
                user_id=user_id,
                metadata={
                    "event": f"{self.name}_error",
                    "operation": e.operation,
                    "error": {
                        "type": type(e.cause).__name__ if e.cause else type(e).__name__,
                        "message": str(e),
                    },
                }
            )
        else:
            logger.error(
                f"Unexpected error in {self.name}",
                user_id=user_id,
                error=e,
                metadata={"event": f"{self.name}_error"}
            )

        return ServerError()
