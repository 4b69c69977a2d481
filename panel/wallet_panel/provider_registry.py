"""
Provider Registry: the wallet providers offered in the connect menu.
Loaded from wallet_providers.yaml when present, built-in defaults otherwise.
Providers are plain names; the connection manager accepts names that are not
registered here.
"""
import os
import yaml
import logging
from typing import Dict, List, Optional

from .errors import ProviderConfigError

logger = logging.getLogger(__name__)

PROVIDERS_ENV_VAR = "WALLET_PANEL_PROVIDERS"
DEFAULT_CONFIG_FILE = "wallet_providers.yaml"


class ProviderConfig:
    """Configuration for a single wallet provider."""
    def __init__(self, name: str, display_name: Optional[str] = None, icon_url: Optional[str] = None):
        self.name = name
        self.display_name = display_name or name
        self.icon_url = icon_url

    def __eq__(self, other):
        if not isinstance(other, ProviderConfig):
            return NotImplemented
        return (self.name, self.display_name, self.icon_url) == (other.name, other.display_name, other.icon_url)

    def __repr__(self):
        return f"Provider({self.name}, {self.display_name})"


DEFAULT_PROVIDERS = [
    ProviderConfig("Phantom", "Phantom Wallet", "https://phantom.app/favicon.ico"),
    ProviderConfig("MetaMask", "MetaMask", "https://metamask.io/favicon.ico"),
    ProviderConfig("Trust Wallet", "Trust Wallet", "https://trustwallet.com/favicon.ico"),
]


def _parse_providers(config_path: str, config) -> List[ProviderConfig]:
    if not isinstance(config, dict) or not isinstance(config.get("providers"), list):
        raise ProviderConfigError(config_path, "expected a top-level 'providers' list")

    providers = []
    for entry in config["providers"]:
        if isinstance(entry, str):
            entry = {"name": entry}
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ProviderConfigError(config_path, f"provider entry without a name: {entry!r}")
        providers.append(ProviderConfig(
            name=str(entry["name"]),
            display_name=entry.get("display_name"),
            icon_url=entry.get("icon_url"),
        ))
    return providers


def load_providers_from_config(config_path: Optional[str] = None) -> List[ProviderConfig]:
    """
    Load provider configurations from YAML.

    Search order: explicit path, $WALLET_PANEL_PROVIDERS, ./wallet_providers.yaml.
    Falls back to DEFAULT_PROVIDERS when no file is found or it is invalid.
    """
    if config_path is None:
        for path in (os.getenv(PROVIDERS_ENV_VAR), DEFAULT_CONFIG_FILE):
            if path and os.path.exists(path):
                config_path = path
                break

    if not config_path or not os.path.exists(config_path):
        logger.info("No provider config found. Using default providers.")
        return list(DEFAULT_PROVIDERS)

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f)
        providers = _parse_providers(config_path, config)
        logger.info(f"Loaded {len(providers)} providers from {config_path}")
        return providers
    except (OSError, yaml.YAMLError, ProviderConfigError) as e:
        logger.error(f"Failed to load provider config: {e}")
        return list(DEFAULT_PROVIDERS)


class ProviderRegistry:
    """
    Known wallet providers, in menu order.
    """

    def __init__(self, providers: Optional[List[ProviderConfig]] = None):
        self.providers: Dict[str, ProviderConfig] = {}
        for provider in (DEFAULT_PROVIDERS if providers is None else providers):
            self.register(provider)

    @classmethod
    def from_config(cls, config_path: Optional[str] = None) -> "ProviderRegistry":
        return cls(load_providers_from_config(config_path))

    def register(self, provider: ProviderConfig):
        self.providers[provider.name] = provider

    def get(self, name: str) -> Optional[ProviderConfig]:
        return self.providers.get(name)

    def resolve(self, name: str) -> str:
        """Match a user-typed name case-insensitively; unknown names pass through."""
        for known in self.providers:
            if known.lower() == name.strip().lower():
                return known
        return name.strip()

    def names(self) -> List[str]:
        return list(self.providers.keys())

    def __contains__(self, name: str) -> bool:
        return name in self.providers

    def __iter__(self):
        return iter(self.providers.values())

    def __len__(self):
        return len(self.providers)
