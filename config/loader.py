"""
Configuration loader with YAML support and Pydantic validation
"""

import logging

from pydantic import BaseModel, field_validator

from core.utils.config import load_yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/providers/market_data.yaml"


class ProviderConfig(BaseModel):
    """Single market data provider configuration"""

    name: str
    base_url: str
    vs_currency: str = "usd"

    @field_validator("base_url")
    @classmethod
    def base_url_valid(cls, v):
        if not v.startswith("https://") and not v.startswith("http://"):
            raise ValueError("Provider base URL must start with http:// or https://")
        return v.rstrip("/")


class ProvidersConfig(BaseModel):
    """All providers configuration"""

    providers: dict[str, ProviderConfig]

    @field_validator("providers")
    @classmethod
    def providers_not_empty(cls, v):
        if not v:
            raise ValueError("Providers list cannot be empty")
        return v


def load_providers_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict[str, ProviderConfig]:
    """
    Load and validate market data provider configuration from YAML

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config is invalid

    Example:
        >>> configs = load_providers_config()
        >>> print(configs["coingecko"].base_url)
        https://api.coingecko.com/api/v3
    """
    data = load_yaml(config_path)

    try:
        providers_config = ProvidersConfig(providers=data.get("providers", {}))
        logger.info(f"✓ Loaded {len(providers_config.providers)} provider configurations")
        return providers_config.providers

    except Exception as e:
        logger.error(f"Failed to load provider config: {e}")
        raise


def get_provider_config(
    provider_name: str, config_path: str = DEFAULT_CONFIG_PATH
) -> ProviderConfig:
    """
    Get configuration for a specific provider

    Raises:
        KeyError: If provider not found

    Example:
        >>> get_provider_config("coincap").base_url
        https://api.coincap.io/v2
    """
    all_providers = load_providers_config(config_path)

    if provider_name not in all_providers:
        raise KeyError(
            f"Provider '{provider_name}' not found. Available: {list(all_providers.keys())}"
        )

    return all_providers[provider_name]


def get_gateway_providers(config_path: str = DEFAULT_CONFIG_PATH) -> tuple[str, str]:
    """
    Get the (primary, secondary) provider keys named in the gateway section

    Both must be configured under providers: and must differ.

    Raises:
        KeyError: If either provider is not configured
        ValueError: If primary and secondary are the same provider

    Example:
        >>> get_gateway_providers()
        ('coingecko', 'coincap')
    """
    data = load_yaml(config_path)
    gateway = data.get("gateway", {})
    primary = gateway.get("primary", "coingecko")
    secondary = gateway.get("secondary", "coincap")

    if primary == secondary:
        raise ValueError(f"Gateway primary and secondary must differ, both are '{primary}'")

    for name in (primary, secondary):
        get_provider_config(name, config_path)

    return primary, secondary


# Convenience exports
__all__ = [
    "ProviderConfig",
    "ProvidersConfig",
    "load_providers_config",
    "get_provider_config",
    "get_gateway_providers",
]
