"""
Adapter Configuration

Loads the adapter's runtime settings: settlement currency, endpoint URLs,
bid TTL and supply-chain serialization order.

Sources, in increasing priority:
- Built-in defaults
- A YAML file (path passed explicitly or via SMILEWANTED_CONFIG)
- Environment variable overrides
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..utils.constants import (
    DEFAULT_CURRENCY,
    DEFAULT_NET_REVENUE,
    DEFAULT_TTL,
    ENDPOINT_URL,
    PREBID_VERSION,
    SCHAIN_FIELDS,
    SYNC_URL,
)


class ConfigError(ValueError):
    """Raised when adapter configuration is invalid."""
    pass


@dataclass
class AdapterConfig:
    """
    Runtime settings for the adapter.

    ad_server_currency mirrors the orchestrator's global
    `currency.adServerCurrency` setting. When unset, the adapter settles
    in DEFAULT_CURRENCY.
    """

    ad_server_currency: Optional[str] = None
    endpoint_url: str = ENDPOINT_URL
    sync_url: str = SYNC_URL
    ttl: int = DEFAULT_TTL
    net_revenue: bool = DEFAULT_NET_REVENUE
    prebid_version: str = PREBID_VERSION
    schain_fields: list[str] = field(default_factory=lambda: list(SCHAIN_FIELDS))

    def __post_init__(self):
        """Validate values that would produce unusable payloads."""
        if self.ad_server_currency is not None:
            if not isinstance(self.ad_server_currency, str) or len(self.ad_server_currency) != 3:
                raise ConfigError(
                    f"ad_server_currency must be an ISO 4217 code, got {self.ad_server_currency!r}"
                )
            self.ad_server_currency = self.ad_server_currency.upper()
        if self.ttl <= 0:
            raise ConfigError(f"ttl must be positive, got {self.ttl}")
        if not self.endpoint_url:
            raise ConfigError("endpoint_url must not be empty")

    @property
    def currency_code(self) -> str:
        """Settlement currency used for floors and bid responses."""
        return self.ad_server_currency or DEFAULT_CURRENCY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "currency": {"adServerCurrency": self.ad_server_currency},
            "endpoint_url": self.endpoint_url,
            "sync_url": self.sync_url,
            "ttl": self.ttl,
            "net_revenue": self.net_revenue,
            "prebid_version": self.prebid_version,
            "schain_fields": self.schain_fields,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AdapterConfig":
        """Create from dictionary (YAML layout)."""
        currency = data.get("currency", {}) or {}
        return cls(
            ad_server_currency=currency.get("adServerCurrency"),
            endpoint_url=data.get("endpoint_url", ENDPOINT_URL),
            sync_url=data.get("sync_url", SYNC_URL),
            ttl=int(data.get("ttl", DEFAULT_TTL)),
            net_revenue=bool(data.get("net_revenue", DEFAULT_NET_REVENUE)),
            prebid_version=data.get("prebid_version", PREBID_VERSION),
            schain_fields=list(data.get("schain_fields", SCHAIN_FIELDS)),
        )


def load_adapter_config(path: str | Path | None = None) -> AdapterConfig:
    """
    Load adapter configuration from YAML and environment.

    Args:
        path: YAML file path. Defaults to $SMILEWANTED_CONFIG if set.

    Returns:
        AdapterConfig with env overrides applied
    """
    data: dict[str, Any] = {}

    if path is None:
        path = os.environ.get("SMILEWANTED_CONFIG")

    if path:
        config_file = Path(path)
        if config_file.exists():
            try:
                with open(config_file) as f:
                    data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigError(f"YAML error in {config_file}: {e}") from e

    # Environment overrides
    currency = os.environ.get("SMILEWANTED_CURRENCY")
    if currency:
        data.setdefault("currency", {})
        data["currency"] = {**(data["currency"] or {}), "adServerCurrency": currency}

    endpoint = os.environ.get("SMILEWANTED_ENDPOINT")
    if endpoint:
        data["endpoint_url"] = endpoint

    ttl = os.environ.get("SMILEWANTED_TTL")
    if ttl:
        try:
            data["ttl"] = int(ttl)
        except ValueError as e:
            raise ConfigError(f"SMILEWANTED_TTL must be an integer, got {ttl!r}") from e

    return AdapterConfig.from_dict(data)


# Global instance for easy access
_config: AdapterConfig | None = None


def get_adapter_config() -> AdapterConfig:
    """Get the global adapter config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_adapter_config()
    return _config


def set_adapter_config(config: AdapterConfig) -> None:
    """Replace the global adapter config."""
    global _config
    _config = config


def reset_adapter_config() -> None:
    """Drop the global adapter config so the next access reloads it."""
    global _config
    _config = None
