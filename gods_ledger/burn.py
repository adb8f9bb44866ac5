"""
Burn-on-transfer policy.

When enabled, every transfer and transfer_from removes
floor(amount * burn_rate / 1000) from circulation; the recipient is
credited the remainder. The rate is per-mille, so 1000 burns everything.
"""

from __future__ import annotations

import logging
from typing import Any

from .access import require_owner
from .errors import InvalidBurnRate
from .state import Address, LedgerState
from .uint import mul_div

logger = logging.getLogger(__name__)

BURN_RATE_DENOMINATOR = 1000
MAX_BURN_RATE = 1000


def enable_transfer_with_burn(state: LedgerState, caller: Address) -> None:
    require_owner(state, caller)
    state.burn_enabled = True
    logger.info(f"[GodsLedger] Transfer with burn enabled (rate={state.burn_rate})")


def disable_transfer_with_burn(state: LedgerState, caller: Address) -> None:
    require_owner(state, caller)
    state.burn_enabled = False
    logger.info("[GodsLedger] Transfer with burn disabled")


def set_burn_rate(state: LedgerState, caller: Address, rate: Any) -> int:
    """Set the per-mille burn rate. Returns the previous rate."""
    require_owner(state, caller)
    if isinstance(rate, bool) or not isinstance(rate, int):
        raise InvalidBurnRate(f"burn rate must be an integer, got {type(rate).__name__}")
    if rate > MAX_BURN_RATE:
        raise InvalidBurnRate()
    if rate < 0:
        raise InvalidBurnRate(f"burn rate must not be negative, got {rate}")
    previous = state.burn_rate
    state.burn_rate = rate
    logger.info(f"[GodsLedger] Burn rate {previous} -> {rate}")
    return previous


def burn_amount(state: LedgerState, amount: int) -> int:
    if not state.burn_enabled:
        return 0
    return mul_div(amount, state.burn_rate, BURN_RATE_DENOMINATOR)
