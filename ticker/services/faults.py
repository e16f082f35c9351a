"""
Fault injection ("sloppy mode") for the mimicked endpoints.

With the wrapper applied, each request either fails outright with a bare
500 or is delayed before the real handler runs:

- 5% of requests are errored
- of the rest, 60% wait 100ms, 10% wait 5s and 30% wait 100-1000ms
"""
import asyncio
import random
from dataclasses import dataclass
from functools import wraps
from typing import Any, Awaitable, Callable, Optional

from fastapi.responses import Response

from ticker.logging import get_logger
from ticker import metrics

logger = get_logger(__name__)

ERROR_PERCENT = 5
FAST_DELAY_MS = 100
STALL_DELAY_MS = 5000
RANDOM_DELAY_RANGE_MS = (100, 1000)


@dataclass(frozen=True)
class FaultDecision:
    """What the injector does to a single request."""
    error: bool
    bucket: Optional[str] = None
    delay_ms: int = 0

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000


class FaultInjector:
    """Wraps async request handlers with random errors and delays."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.rng = rng or random.Random()
        self.sleep = sleep

    def draw(self) -> FaultDecision:
        """Decide the fate of one request."""
        if self.rng.randrange(100) < ERROR_PERCENT:
            return FaultDecision(error=True)

        roll = self.rng.randrange(100)
        if roll < 60:
            return FaultDecision(error=False, bucket="fast", delay_ms=FAST_DELAY_MS)
        if roll < 70:
            return FaultDecision(error=False, bucket="stall", delay_ms=STALL_DELAY_MS)
        return FaultDecision(
            error=False,
            bucket="random",
            delay_ms=self.rng.randrange(*RANDOM_DELAY_RANGE_MS),
        )

    def wrap(self, handler: Callable[..., Awaitable[Any]]) -> Callable[..., Awaitable[Any]]:
        """
        Make a sloppy version of an async endpoint.

        The returned coroutine function keeps the handler's signature so
        FastAPI resolves the same path and query parameters.

        Args:
            handler: The endpoint to wrap

        Returns:
            Endpoint that may return a bare 500 or delay before delegating
        """
        name = handler.__name__

        @wraps(handler)
        async def sloppy_handler(*args, **kwargs):
            decision = self.draw()

            if decision.error:
                logger.debug("fault_injected_error", handler=name)
                metrics.record_injected_error()
                return Response(status_code=500)

            logger.debug(
                "fault_injected_delay",
                handler=name,
                bucket=decision.bucket,
                delay_ms=decision.delay_ms,
            )
            metrics.record_injected_delay(decision.bucket, decision.delay_seconds)
            await self.sleep(decision.delay_seconds)

            return await handler(*args, **kwargs)

        return sloppy_handler
