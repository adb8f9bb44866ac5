"""
Ledger state.

One LedgerState holds everything the token mutates. The components
(access, pause, burn) and GodsLedger operate on it explicitly; nothing is
kept in module globals.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

from .errors import InvalidAddress, InvalidRecipient

Address = str

ZERO_ADDRESS: Address = "0x" + "0" * 40


def require_address(value: Any, what: str = "address") -> Address:
    if not isinstance(value, str) or not value.strip():
        raise InvalidAddress(f"{what} must be a non-empty string, got {value!r}")
    return value


def require_recipient(value: Any, what: str = "recipient") -> Address:
    if not isinstance(value, str) or not value.strip() or value == ZERO_ADDRESS:
        raise InvalidRecipient(f"invalid {what}: {value!r}")
    return value


@dataclass
class LedgerState:
    owner: Address
    address: Address
    balances: Dict[Address, int] = field(default_factory=dict)
    allowances: Dict[Tuple[Address, Address], int] = field(default_factory=dict)
    total_supply: int = 0
    paused: bool = False
    burn_enabled: bool = False
    burn_rate: int = 0

    def balance(self, who: Address) -> int:
        return self.balances.get(who, 0)

    def allowance(self, owner: Address, spender: Address) -> int:
        return self.allowances.get((owner, spender), 0)

    def set_balance(self, who: Address, amount: int) -> None:
        # zero entries are dropped so snapshots only list holders
        if amount:
            self.balances[who] = amount
        else:
            self.balances.pop(who, None)
