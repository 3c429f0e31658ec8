"""
Application Settings - Load from YAML configs + .env secrets

Design Philosophy:
- Service configs (providers, TTLs, pacing, denylist) → YAML files (public, versioned in git)
- Secrets (API keys, passwords) and deployment knobs → .env file (gitignored)

Uses Pydantic for validation and type safety
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import load_yaml_safe

DEFAULT_STABLECOINS = ["tether", "usd-coin", "dai", "binance-usd", "true-usd"]


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - Gateway, provider and ETH configs → config/providers/market_data.yaml (public)
    - Secrets, ports and environment → .env (gitignored)

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.CACHE_TTL_SECONDS)  # From market_data.yaml
        print(settings.COINGECKO_API_KEY)  # From .env
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Load YAML configs from files (cached at class level)
        if not hasattr(Settings, "_yaml_loaded"):
            Settings._market_data_config = load_yaml_safe("config/providers/market_data.yaml")
            Settings._yaml_loaded = True

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FILE: str | None = Field(default=None, description="Optional rotating log file path")

    # ============================================
    # HTTP API (.env only)
    # ============================================
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=3001, description="Multi-coin dashboard API")
    ETH_API_PORT: int = Field(default=5000, description="ETH price service API")
    CORS_ORIGINS: list[str] = Field(default=["*"])
    REST_API_TIMEOUT_MS: int = Field(default=10000, description="Upstream HTTP timeout")

    # ============================================
    # SECRETS (.env only)
    # ============================================
    COINGECKO_API_KEY: str | None = Field(default=None)
    REDIS_PASSWORD: str | None = Field(default=None)

    # Optional override of cache.backend in YAML
    CACHE_BACKEND: str | None = Field(default=None, description="memory or redis")

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() in ("prod", "production")

    # ============================================
    # GATEWAY (from YAML)
    # ============================================
    @property
    def _gateway(self) -> dict:
        return self._market_data_config.get("gateway", {})

    @property
    def CACHE_TTL_SECONDS(self) -> float:
        """Read-through cache TTL from market_data.yaml"""
        return float(self._gateway.get("cache_ttl_seconds", 60))

    @property
    def MIN_REQUEST_INTERVAL_SECONDS(self) -> float:
        """Minimum spacing between outbound requests from market_data.yaml"""
        return float(self._gateway.get("min_request_interval_seconds", 1.5))

    @property
    def RATE_LIMIT_BACKOFF_SECONDS(self) -> float:
        """Sleep before the single retry after a 429 from market_data.yaml"""
        return float(self._gateway.get("rate_limit_backoff_seconds", 60))

    @property
    def DEFAULT_TIMEFRAME(self) -> str:
        return self._gateway.get("default_timeframe", "1M")

    @property
    def DEFAULT_RESOLUTION(self) -> str:
        return self._gateway.get("default_resolution", "auto")

    @property
    def TOP_COINS_LIMIT(self) -> int:
        return int(self._gateway.get("top_coins_limit", 30))

    @property
    def STABLECOIN_DENYLIST(self) -> frozenset[str]:
        """Coin ids excluded from top-coin lists"""
        return frozenset(self._market_data_config.get("stablecoins", DEFAULT_STABLECOINS))

    # ============================================
    # CACHE / REDIS (from YAML + .env)
    # ============================================
    @property
    def cache_backend(self) -> str:
        """Effective cache backend (.env override wins over YAML)"""
        if self.CACHE_BACKEND:
            return self.CACHE_BACKEND.lower()
        return self._market_data_config.get("cache", {}).get("backend", "memory").lower()

    @property
    def REDIS_HOST(self) -> str:
        """Redis host from market_data.yaml"""
        return self._market_data_config.get("cache", {}).get("redis", {}).get("host", "redis")

    @property
    def REDIS_PORT(self) -> int:
        """Redis port from market_data.yaml"""
        return self._market_data_config.get("cache", {}).get("redis", {}).get("port", 6379)

    @property
    def REDIS_DB(self) -> int:
        """Redis database from market_data.yaml"""
        return self._market_data_config.get("cache", {}).get("redis", {}).get("db", 0)

    @property
    def redis_url(self) -> str:
        """Redis connection URL"""
        auth = f":{self.REDIS_PASSWORD}@" if self.REDIS_PASSWORD else ""
        return f"redis://{auth}{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ============================================
    # ETH PRICE SERVICE (from YAML)
    # ============================================
    @property
    def _eth(self) -> dict:
        return self._market_data_config.get("eth", {})

    @property
    def ETH_EXCHANGE_SYMBOL(self) -> str:
        return self._eth.get("exchange_symbol", "ETH/USDT")

    @property
    def ETH_STREAM_SYMBOL(self) -> str:
        return self._eth.get("stream_symbol", "ethusdt")

    @property
    def ETH_COINGECKO_ID(self) -> str:
        return self._eth.get("coingecko_id", "ethereum")

    @property
    def ETH_HISTORY_DAYS(self) -> int:
        return int(self._eth.get("history_days", 30))

    @property
    def ETH_POLL_INTERVAL_SECONDS(self) -> float:
        """Polling interval once the websocket has given up"""
        return float(self._eth.get("poll_interval_seconds", 60))

    @property
    def ETH_WEBSOCKET_MAX_RETRIES(self) -> int:
        return int(self._eth.get("websocket_max_retries", 3))

    @property
    def ETH_WEBSOCKET_RECONNECT_DELAY_SECONDS(self) -> float:
        return float(self._eth.get("websocket_reconnect_delay_seconds", 5))

    @property
    def ETH_SIMULATION_THRESHOLD(self) -> float:
        return float(self._eth.get("simulation_threshold", 0.05))


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Returns:
        Settings instance

    Example:
        >>> settings = get_settings()
        >>> print(settings.MIN_REQUEST_INTERVAL_SECONDS)
        1.5
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
