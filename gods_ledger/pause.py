"""
Pause gate for the transfer family (transfer, transfer_from, send).
"""

from __future__ import annotations

import logging

from .access import require_owner
from .errors import AlreadyPaused, ContractPaused, NotPaused
from .state import Address, LedgerState

logger = logging.getLogger(__name__)


def pause(state: LedgerState, caller: Address) -> None:
    require_owner(state, caller)
    if state.paused:
        raise AlreadyPaused()
    state.paused = True
    logger.info(f"[GodsLedger] Paused by {caller}")


def unpause(state: LedgerState, caller: Address) -> None:
    require_owner(state, caller)
    if not state.paused:
        raise NotPaused()
    state.paused = False
    logger.info(f"[GodsLedger] Unpaused by {caller}")


def require_not_paused(state: LedgerState) -> None:
    if state.paused:
        raise ContractPaused()
