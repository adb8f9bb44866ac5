"""
Token configuration.

Defaults, then an optional YAML file, then environment overrides:

  GODS_LEDGER_CONFIG            path to a YAML file
  GODS_LEDGER_NAME              token name
  GODS_LEDGER_SYMBOL            token symbol
  GODS_LEDGER_DECIMALS          fixed-point decimals
  GODS_LEDGER_INITIAL_SUPPLY    initial supply in whole units
  GODS_LEDGER_CONTRACT_ADDRESS  the ledger's own account
"""

from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

DEFAULT_CONTRACT_ADDRESS = "0x5FbDB2315678afecb367f032d93F642f64180aa3"

ENV_PREFIX = "GODS_LEDGER_"

# 10**78 > 2**256, so one whole unit would no longer fit
MAX_DECIMALS = 77


class ConfigError(ValueError):
    pass


@dataclass
class LedgerConfig:
    name: str = "GodsLegacy"
    symbol: str = "GODS"
    decimals: int = 18
    initial_supply_units: int = 1_000_000_000
    contract_address: str = DEFAULT_CONTRACT_ADDRESS

    @property
    def initial_supply(self) -> int:
        """Initial supply in base units (whole units scaled by decimals)."""
        return self.initial_supply_units * 10 ** self.decimals


def load_yaml(path: Path) -> Dict[str, Any]:
    import yaml
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ConfigError(f"{path}: expected a mapping at top level")
    # accept either a flat file or one nested under "token:"
    return data.get("token", data)


def _as_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer, got {value!r}")
    try:
        out = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer, got {value!r}") from None
    if out < 0:
        raise ConfigError(f"{key} must not be negative, got {out}")
    return out


def _as_str(key: str, value: Any) -> str:
    out = str(value).strip() if value is not None else ""
    if not out:
        raise ConfigError(f"{key} must not be empty")
    return out


def validate_metadata(name: Any, symbol: Any, decimals: Any) -> None:
    """Reject token metadata the ledger could not display or scale."""
    for key, value in (("name", name), ("symbol", symbol)):
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{key} must be a non-empty string, got {value!r}")
    if isinstance(decimals, bool) or not isinstance(decimals, int):
        raise ConfigError(f"decimals must be an integer, got {decimals!r}")
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ConfigError(f"decimals must be in [0, {MAX_DECIMALS}], got {decimals}")


def load_config(path: Optional[Union[str, Path]] = None) -> LedgerConfig:
    raw: Dict[str, Any] = {}

    cfg_path = path or os.getenv(ENV_PREFIX + "CONFIG")
    if cfg_path:
        raw.update(load_yaml(Path(cfg_path)))

    env_keys = {
        "name": "NAME",
        "symbol": "SYMBOL",
        "decimals": "DECIMALS",
        "initial_supply_units": "INITIAL_SUPPLY",
        "contract_address": "CONTRACT_ADDRESS",
    }
    for field_name, env_name in env_keys.items():
        val = os.getenv(ENV_PREFIX + env_name)
        if val is not None and val.strip():
            raw[field_name] = val.strip()

    unknown = set(raw) - set(env_keys)
    if unknown:
        raise ConfigError(f"unknown config keys: {sorted(unknown)}")

    cfg = LedgerConfig()
    if "name" in raw:
        cfg.name = _as_str("name", raw["name"])
    if "symbol" in raw:
        cfg.symbol = _as_str("symbol", raw["symbol"])
    if "decimals" in raw:
        cfg.decimals = _as_int("decimals", raw["decimals"])
    if "initial_supply_units" in raw:
        cfg.initial_supply_units = _as_int("initial_supply_units", raw["initial_supply_units"])
    if "contract_address" in raw:
        cfg.contract_address = _as_str("contract_address", raw["contract_address"])

    validate_metadata(cfg.name, cfg.symbol, cfg.decimals)
    if cfg.initial_supply > 2**256 - 1:
        raise ConfigError("initial supply exceeds uint256")
    return cfg
