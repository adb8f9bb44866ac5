"""
GodsLedger Package

Provides:
- GodsLedger: the token ledger (balances, allowances, supply)
- owner access control, the pause gate and the burn-on-transfer policy
- an append-only event log and an integrity report
- a FastAPI surface (gods_ledger.api) for hosts that expose it over HTTP
"""

from .config import LedgerConfig, load_config
from .errors import (
    AlreadyPaused,
    ContractPaused,
    InsufficientAllowance,
    InsufficientBalance,
    InvalidAddress,
    InvalidAmount,
    InvalidBurnRate,
    InvalidRecipient,
    LedgerError,
    NotPaused,
    Overflow,
    Unauthorized,
    Underflow,
)
from .state import ZERO_ADDRESS, LedgerState
from .token import GodsLedger

__all__ = [
    "GodsLedger",
    "LedgerConfig",
    "LedgerState",
    "ZERO_ADDRESS",
    "load_config",
    "LedgerError",
    "Unauthorized",
    "ContractPaused",
    "AlreadyPaused",
    "NotPaused",
    "InvalidBurnRate",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InvalidAddress",
    "InvalidRecipient",
    "InvalidAmount",
    "Overflow",
    "Underflow",
]
