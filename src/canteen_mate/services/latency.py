"""Artificial latency standing in for network round trips."""

import asyncio
import logging

logger = logging.getLogger(__name__)

# Base delays per operation, in milliseconds
DEFAULT_DELAYS_MS: dict[str, int] = {
    "auth.login": 1000,
    "auth.register": 1000,
    "menu.list": 500,
    "menu.search": 300,
    "orders.create": 1000,
    "orders.list": 500,
    "contact.send": 1000,
}


class LatencySimulator:
    """Pauses service operations to model a remote backend.

    A scale of 0 disables all delays; 1.0 reproduces the base delays.
    """

    def __init__(self, scale: float = 0.0, delays_ms: dict[str, int] | None = None) -> None:
        """Initialize the simulator.

        Args:
            scale: Multiplier applied to every base delay
            delays_ms: Optional override of the base delay table

        Raises:
            ValueError: If scale is negative
        """
        if scale < 0:
            raise ValueError("Latency scale must be non-negative")

        self.scale = scale
        self.delays_ms = dict(DEFAULT_DELAYS_MS if delays_ms is None else delays_ms)

    def delay_for(self, operation: str) -> float:
        """Return the delay in seconds applied to an operation."""
        return self.delays_ms.get(operation, 0) / 1000 * self.scale

    async def pause(self, operation: str) -> None:
        delay = self.delay_for(operation)
        if delay > 0:
            await asyncio.sleep(delay)
