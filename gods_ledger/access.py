"""
Owner access control.

A single owner identity gates configuration and supply operations. The
owner can hand the role to another identity but never leave it empty. The
ledger's own account is never a caller.
"""

from __future__ import annotations

import logging

from .errors import InvalidRecipient, Unauthorized
from .state import Address, LedgerState, require_recipient

logger = logging.getLogger(__name__)


def is_owner(state: LedgerState, caller: Address) -> bool:
    return caller == state.owner


def require_owner(state: LedgerState, caller: Address) -> None:
    if not is_owner(state, caller):
        raise Unauthorized(str(caller))


def require_not_ledger(state: LedgerState, who: Address) -> None:
    """The ledger's own account only ever pays out through the owner's send."""
    if who == state.address:
        raise Unauthorized(str(who))


def transfer_ownership(state: LedgerState, caller: Address, new_owner: Address) -> Address:
    """Hand ownership to new_owner. Returns the previous owner."""
    require_owner(state, caller)
    require_recipient(new_owner, "new owner")
    if new_owner == state.address:
        raise InvalidRecipient("the ledger account cannot own itself")
    previous = state.owner
    state.owner = new_owner
    logger.info(f"[GodsLedger] Ownership transferred {previous} -> {new_owner}")
    return previous
