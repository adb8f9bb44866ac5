"""
GodsLedger token

Single-asset ledger with:
- an owner who mints, pays out of the ledger's own account, and configures
- a pause gate over transfer / transfer_from / send
- optional burn-on-transfer at a per-mille rate

Every mutating method takes the calling identity as its first argument.
Preconditions are all checked before the first write, so a raised
LedgerError leaves the state exactly as it was.
"""

from __future__ import annotations
import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, List, Optional

from . import access, burn, events, pause
from .config import DEFAULT_CONTRACT_ADDRESS, LedgerConfig, load_config, validate_metadata
from .errors import LedgerError, InsufficientAllowance, InsufficientBalance, InvalidRecipient
from .events import EventLog, LedgerEvent
from .state import Address, LedgerState, ZERO_ADDRESS, require_address, require_recipient
from .uint import require_uint, u256_add, u256_sub

logger = logging.getLogger(__name__)


class GodsLedger:
    def __init__(
        self,
        deployer: Address,
        *,
        name: str = "GodsLegacy",
        symbol: str = "GODS",
        decimals: int = 18,
        initial_supply: int = 1_000_000_000 * 10**18,
        address: Optional[Address] = None,
        max_events: Optional[int] = None,
    ) -> None:
        require_recipient(deployer, "deployer")
        require_uint(initial_supply, "initial supply")
        validate_metadata(name, symbol, decimals)
        self._name = name
        self._symbol = symbol
        self._decimals = decimals
        self._lock = threading.Lock()
        self._log = EventLog(max_events)
        self._state = LedgerState(
            owner=deployer,
            address=require_recipient(address or DEFAULT_CONTRACT_ADDRESS, "ledger address"),
        )
        if deployer == self._state.address:
            raise InvalidRecipient("the ledger account cannot deploy itself")
        self._state.set_balance(self._state.address, initial_supply)
        self._state.total_supply = initial_supply
        self._log.record(events.OWNERSHIP_TRANSFERRED, previous_owner=ZERO_ADDRESS, new_owner=deployer)
        self._log.record(events.TRANSFER, **{"from": ZERO_ADDRESS, "to": self._state.address, "value": initial_supply})
        logger.info(f"[GodsLedger] Deployed {symbol} by {deployer} with supply {initial_supply}")

    @classmethod
    def from_config(cls, deployer: Address, config: Optional[LedgerConfig] = None) -> "GodsLedger":
        cfg = config or load_config()
        return cls(
            deployer,
            name=cfg.name,
            symbol=cfg.symbol,
            decimals=cfg.decimals,
            initial_supply=cfg.initial_supply,
            address=cfg.contract_address,
        )

    # ------------------------------------------------------------------ #
    # Views
    # ------------------------------------------------------------------ #
    @property
    def address(self) -> Address:
        return self._state.address

    @property
    def state(self) -> LedgerState:
        return self._state

    def snapshot(self) -> LedgerState:
        """A copy of the state taken between calls, never halfway through one."""
        with self._lock:
            st = self._state
            return replace(st, balances=dict(st.balances), allowances=dict(st.allowances))

    def name(self) -> str:
        return self._name

    def symbol(self) -> str:
        return self._symbol

    def decimals(self) -> int:
        return self._decimals

    def owner(self) -> Address:
        return self._state.owner

    def is_owner(self, caller: Address) -> bool:
        return access.is_owner(self._state, caller)

    def total_supply(self) -> int:
        return self._state.total_supply

    def balance_of(self, who: Address) -> int:
        return self._state.balance(require_address(who))

    def allowance(self, owner: Address, spender: Address) -> int:
        return self._state.allowance(require_address(owner, "owner"), require_address(spender, "spender"))

    def paused(self) -> bool:
        return self._state.paused

    def burn_rate(self) -> int:
        return self._state.burn_rate

    def is_transfer_with_burn_enabled(self) -> bool:
        return self._state.burn_enabled

    def events(self, event_type: Optional[str] = None) -> List[LedgerEvent]:
        with self._lock:
            return self._log.events(event_type)

    # ------------------------------------------------------------------ #
    # Owner configuration
    # ------------------------------------------------------------------ #
    def pause(self, caller: Address) -> None:
        with self._guard("pause", caller):
            pause.pause(self._state, caller)
            self._log.record(events.PAUSED, account=caller)

    def unpause(self, caller: Address) -> None:
        with self._guard("unpause", caller):
            pause.unpause(self._state, caller)
            self._log.record(events.UNPAUSED, account=caller)

    def enable_transfer_with_burn(self, caller: Address) -> None:
        with self._guard("enable_transfer_with_burn", caller):
            burn.enable_transfer_with_burn(self._state, caller)
            self._log.record(events.BURN_ENABLED, account=caller)

    def disable_transfer_with_burn(self, caller: Address) -> None:
        with self._guard("disable_transfer_with_burn", caller):
            burn.disable_transfer_with_burn(self._state, caller)
            self._log.record(events.BURN_DISABLED, account=caller)

    def set_burn_rate(self, caller: Address, rate: int) -> None:
        with self._guard("set_burn_rate", caller):
            previous = burn.set_burn_rate(self._state, caller, rate)
            self._log.record(events.BURN_RATE_UPDATED, previous_rate=previous, new_rate=rate)

    def transfer_ownership(self, caller: Address, new_owner: Address) -> None:
        with self._guard("transfer_ownership", caller):
            previous = access.transfer_ownership(self._state, caller, new_owner)
            self._log.record(events.OWNERSHIP_TRANSFERRED, previous_owner=previous, new_owner=new_owner)

    # ------------------------------------------------------------------ #
    # Supply
    # ------------------------------------------------------------------ #
    def mint(self, caller: Address, amount: int) -> None:
        """Issue amount new units into the ledger's own account."""
        with self._guard("mint", caller):
            access.require_owner(self._state, caller)
            require_uint(amount)
            st = self._state
            new_supply = u256_add(st.total_supply, amount)
            new_balance = u256_add(st.balance(st.address), amount)

            st.total_supply = new_supply
            st.set_balance(st.address, new_balance)
            self._log.record(events.TRANSFER, **{"from": ZERO_ADDRESS, "to": st.address, "value": amount})
            logger.info(f"[GodsLedger] Mint {amount} by {caller}, supply={new_supply}")

    def send(self, caller: Address, to: Address, amount: int) -> None:
        """Pay amount out of the ledger's own account. Never burns."""
        with self._guard("send", caller):
            access.require_owner(self._state, caller)
            pause.require_not_paused(self._state)
            require_recipient(to)
            require_uint(amount)
            self._move(self._state.address, to, amount, burned=0)

    # ------------------------------------------------------------------ #
    # Transfers
    # ------------------------------------------------------------------ #
    def approve(self, caller: Address, spender: Address, amount: int) -> None:
        with self._guard("approve", caller):
            require_address(caller, "caller")
            access.require_not_ledger(self._state, caller)
            require_recipient(spender, "spender")
            require_uint(amount)
            if amount:
                self._state.allowances[(caller, spender)] = amount
            else:
                self._state.allowances.pop((caller, spender), None)
            self._log.record(events.APPROVAL, owner=caller, spender=spender, value=amount)

    def transfer(self, caller: Address, to: Address, amount: int) -> None:
        with self._guard("transfer", caller):
            pause.require_not_paused(self._state)
            require_address(caller, "caller")
            access.require_not_ledger(self._state, caller)
            require_recipient(to)
            require_uint(amount)
            self._move(caller, to, amount, burned=burn.burn_amount(self._state, amount))

    def transfer_from(self, caller: Address, from_: Address, to: Address, amount: int) -> None:
        with self._guard("transfer_from", caller):
            st = self._state
            pause.require_not_paused(st)
            require_address(caller, "caller")
            require_address(from_, "from")
            access.require_not_ledger(st, caller)
            access.require_not_ledger(st, from_)
            require_recipient(to)
            require_uint(amount)
            allowed = st.allowance(from_, caller)
            if allowed < amount:
                raise InsufficientAllowance(f"allowance {allowed} < {amount} for spender {caller}")
            burned = burn.burn_amount(st, amount)
            # balance is checked inside _move before any write
            self._move(from_, to, amount, burned=burned, spender=caller, allowed=allowed)

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #
    def _move(
        self,
        from_: Address,
        to: Address,
        amount: int,
        *,
        burned: int,
        spender: Optional[Address] = None,
        allowed: int = 0,
    ) -> None:
        st = self._state
        from_bal = st.balance(from_)
        if from_bal < amount:
            raise InsufficientBalance(f"balance {from_bal} < {amount} for {from_}")

        net = u256_sub(amount, burned)
        new_from = u256_sub(from_bal, amount)
        to_before = new_from if to == from_ else st.balance(to)
        new_to = u256_add(to_before, net)
        new_supply = u256_sub(st.total_supply, burned)

        # all checks passed; write
        if spender is not None:
            remaining = allowed - amount
            if remaining:
                st.allowances[(from_, spender)] = remaining
            else:
                st.allowances.pop((from_, spender), None)
        st.set_balance(from_, new_from)
        st.set_balance(to, new_to)
        st.total_supply = new_supply

        self._log.record(events.TRANSFER, **{"from": from_, "to": to, "value": net})
        if burned:
            self._log.record(events.TRANSFER, **{"from": from_, "to": ZERO_ADDRESS, "value": burned})
        logger.info(f"[GodsLedger] Transfer {amount} {from_} -> {to} (burned={burned})")

    @contextmanager
    def _guard(self, op: str, caller: Address) -> Iterator[None]:
        """Run one call under the ledger lock; log it if rejected."""
        with self._lock:
            try:
                yield
            except LedgerError as e:
                logger.warning(f"[GodsLedger] {op} by {caller!r} rejected: {e.code}: {e}")
                raise
