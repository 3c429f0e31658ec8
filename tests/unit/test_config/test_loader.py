"""
Unit tests for provider config loading and validation
"""

import pytest
from pydantic import ValidationError

from config.loader import (
    ProviderConfig,
    get_gateway_providers,
    get_provider_config,
    load_providers_config,
)
from core.utils.config import load_yaml, load_yaml_safe


@pytest.fixture
def config_file(tmp_path):
    def write(content: str):
        path = tmp_path / "market_data.yaml"
        path.write_text(content)
        return str(path)

    return write


@pytest.mark.unit
class TestProviderConfig:
    def test_load_default_config(self):
        providers = load_providers_config()

        assert set(providers) >= {"coingecko", "coincap"}
        assert providers["coingecko"].base_url == "https://api.coingecko.com/api/v3"
        assert providers["coincap"].base_url == "https://api.coincap.io/v2"

    def test_trailing_slash_stripped(self):
        config = ProviderConfig(name="x", base_url="https://example.org/api/")

        assert config.base_url == "https://example.org/api"

    def test_invalid_base_url(self):
        with pytest.raises(ValidationError):
            ProviderConfig(name="x", base_url="ftp://example.org")

    def test_unknown_provider(self):
        with pytest.raises(KeyError, match="messari"):
            get_provider_config("messari")

    def test_empty_providers_rejected(self, config_file):
        path = config_file("providers: {}\n")

        with pytest.raises(ValidationError):
            load_providers_config(path)

    def test_gateway_providers(self):
        assert get_gateway_providers() == ("coingecko", "coincap")

    def test_gateway_provider_must_be_configured(self, config_file):
        path = config_file(
            "gateway:\n"
            "  primary: coingecko\n"
            "  secondary: messari\n"
            "providers:\n"
            "  coingecko:\n"
            "    name: CoinGecko\n"
            "    base_url: https://api.coingecko.com/api/v3\n"
        )

        with pytest.raises(KeyError, match="messari"):
            get_gateway_providers(path)

    def test_gateway_providers_must_differ(self, config_file):
        path = config_file(
            "gateway:\n"
            "  primary: coingecko\n"
            "  secondary: coingecko\n"
            "providers:\n"
            "  coingecko:\n"
            "    name: CoinGecko\n"
            "    base_url: https://api.coingecko.com/api/v3\n"
        )

        with pytest.raises(ValueError, match="must differ"):
            get_gateway_providers(path)


@pytest.mark.unit
class TestYamlHelpers:
    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            load_yaml("config/providers/does_not_exist.yaml")

    def test_missing_file_safe(self):
        assert load_yaml_safe("config/providers/does_not_exist.yaml") == {}

    def test_empty_file(self, config_file):
        assert load_yaml(config_file("")) == {}

    def test_invalid_yaml_safe(self, config_file):
        assert load_yaml_safe(config_file("gateway: [unclosed\n")) == {}
