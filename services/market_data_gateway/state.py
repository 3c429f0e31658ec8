"""
Mutable gateway state

One GatewayState per gateway, one gateway per process.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class ProviderMode(str, Enum):
    """Which provider serves outbound requests"""

    PRIMARY = "primary"
    FALLBACK = "fallback"


@dataclass
class GatewayState:
    """
    Pacing clock + provider switch

    Attributes:
        last_request_at: Monotonic time of the last outbound attempt (None before the first)
        mode: PRIMARY until the first non-429 primary failure, then FALLBACK for good
        pacing_lock: Serializes callers through the pacing clock
    """

    last_request_at: float | None = None
    mode: ProviderMode = ProviderMode.PRIMARY
    pacing_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def in_fallback(self) -> bool:
        return self.mode is ProviderMode.FALLBACK

    def switch_to_fallback(self, reason: str) -> bool:
        """
        Flip to FALLBACK (one-way)

        Returns:
            True if this call performed the switch
        """
        if self.in_fallback:
            return False
        self.mode = ProviderMode.FALLBACK
        logger.warning(f"⚠️ Switching to fallback provider permanently: {reason}")
        return True
