"""
GodsLedger error taxonomy.

Every rejected call raises a LedgerError subclass before any state is
written, so catching one means the requested transition did not happen.
"""

from __future__ import annotations


class LedgerError(Exception):
    """Base class for every ledger rejection."""

    default_message = "ledger operation rejected"

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def code(self) -> str:
        return type(self).__name__


class Unauthorized(LedgerError):
    default_message = "OwnableUnauthorizedAccount"

    def __init__(self, account: str = "") -> None:
        msg = f"{self.default_message}({account})" if account else ""
        super().__init__(msg)
        self.account = account


class ContractPaused(LedgerError):
    default_message = "Pausable: paused"


class AlreadyPaused(LedgerError):
    default_message = "Pausable: paused"


class NotPaused(LedgerError):
    default_message = "Pausable: not paused"


class InvalidBurnRate(LedgerError):
    default_message = "Burn rate must be less than or equal to 1000"


class InsufficientBalance(LedgerError):
    default_message = "transfer amount exceeds balance"


class InsufficientAllowance(LedgerError):
    default_message = "insufficient allowance"


class InvalidAddress(LedgerError):
    default_message = "malformed address"


class InvalidRecipient(InvalidAddress):
    default_message = "invalid recipient"


class InvalidAmount(LedgerError):
    default_message = "amount must be an integer in [0, 2**256 - 1]"


class Overflow(LedgerError):
    default_message = "uint256 overflow"


class Underflow(LedgerError):
    default_message = "uint256 underflow"
