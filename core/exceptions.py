"""
Exception hierarchy

MarketDataError
├── UpstreamError            request to a provider failed (network, status, timeout)
│   ├── RateLimitedError     provider answered 429
│   └── MalformedPayloadError  response could not be parsed into models
PaperTradingError
├── PortfolioNotFoundError
└── InsufficientFundsError
"""


class MarketDataError(Exception):
    """Base class for market data failures"""


class UpstreamError(MarketDataError):
    """Upstream provider request failed"""

    def __init__(self, provider: str, message: str, status: int | None = None):
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status = status


class RateLimitedError(UpstreamError):
    """Upstream provider rejected the request with 429 Too Many Requests"""

    def __init__(self, provider: str, message: str = "rate limited"):
        super().__init__(provider, message, status=429)


class MalformedPayloadError(UpstreamError):
    """Upstream response had an unexpected shape"""


class PaperTradingError(Exception):
    """Base class for paper trading failures"""


class PortfolioNotFoundError(PaperTradingError, KeyError):
    """No portfolio exists for the user"""

    def __init__(self, user_id: str):
        super().__init__(f"Portfolio not found: {user_id}")
        self.user_id = user_id

    def __str__(self) -> str:
        return self.args[0]


class InsufficientFundsError(PaperTradingError, ValueError):
    """Trade cost exceeds the portfolio balance or holdings"""
