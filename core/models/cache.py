"""
Structured cache keys

A key is (endpoint, params) where params is a sorted tuple of (name, value)
pairs, so two requests collide only when every parameter matches.
"""

import json
from typing import Any, NamedTuple


class CacheKey(NamedTuple):
    """
    Cache key for one logical upstream request

    Example:
        >>> CacheKey.build("top_coins", limit=10)
        CacheKey(endpoint='top_coins', params=(('limit', 10),))
    """

    endpoint: str
    params: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def build(cls, endpoint: str, **params: Any) -> "CacheKey":
        return cls(endpoint, tuple(sorted(params.items())))

    def render(self) -> str:
        """Stable string form for remote stores (Redis)"""
        return json.dumps(
            [self.endpoint, [list(p) for p in self.params]],
            separators=(",", ":"),
            default=str,
        )
