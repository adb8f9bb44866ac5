"""
GodsLedger event log

Append-only record of what the ledger did:
- Transfer (mints come from the zero address, burns go to it)
- Approval
- Paused / Unpaused
- OwnershipTransferred
- TransferWithBurnEnabled / TransferWithBurnDisabled
- BurnRateUpdated

In-memory only; events are appended after the state change succeeded. With
max_events set, the oldest entries are dropped once the log is full; seq
keeps counting so a dropped range is visible as a gap.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import List, Dict, Any, Optional
import json
import logging
import time

logger = logging.getLogger(__name__)

TRANSFER = "Transfer"
APPROVAL = "Approval"
PAUSED = "Paused"
UNPAUSED = "Unpaused"
OWNERSHIP_TRANSFERRED = "OwnershipTransferred"
BURN_ENABLED = "TransferWithBurnEnabled"
BURN_DISABLED = "TransferWithBurnDisabled"
BURN_RATE_UPDATED = "BurnRateUpdated"


@dataclass
class LedgerEvent:
    seq: int
    ts: float
    event_type: str
    payload: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class EventLog:
    def __init__(self, max_events: Optional[int] = None) -> None:
        if max_events is not None and max_events < 1:
            raise ValueError(f"max_events must be at least 1, got {max_events}")
        self._events: List[LedgerEvent] = []
        self._max_events = max_events
        self._seq = 0

    def record(self, event_type: str, **payload: Any) -> LedgerEvent:
        self._seq += 1
        ev = LedgerEvent(
            seq=self._seq,
            ts=time.time(),
            event_type=event_type,
            payload=payload,
        )
        self._events.append(ev)
        if self._max_events is not None and len(self._events) > self._max_events:
            del self._events[: len(self._events) - self._max_events]
        logger.debug(f"[GodsLedger] Event {json.dumps(ev.to_dict(), default=str)}")
        return ev

    def events(self, event_type: Optional[str] = None) -> List[LedgerEvent]:
        if event_type is None:
            return list(self._events)
        return [ev for ev in self._events if ev.event_type == event_type]

    def __len__(self) -> int:
        return len(self._events)
