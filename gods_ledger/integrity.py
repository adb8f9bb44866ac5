"""
GodsLedger Integrity Check

- Verifies conservation: sum(balances) == total_supply
- Detects:
    * balances / allowances / supply outside uint256
    * burn rate outside [0, 1000]
    * missing owner
- Renders a markdown balance snapshot

Read-only: it never modifies the ledger, only reports. Both reports work on
ledger.snapshot(), so a concurrent transfer is seen either whole or not at all.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List

from .burn import MAX_BURN_RATE
from .token import GodsLedger
from .uint import UINT256_MAX

logger = logging.getLogger(__name__)


@dataclass
class IntegrityReport:
    total_supply: int
    balances_sum: int
    holders: int
    errors: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def _in_range(n: int) -> bool:
    return 0 <= n <= UINT256_MAX


def check_integrity(ledger: GodsLedger) -> IntegrityReport:
    st = ledger.snapshot()
    balances_sum = sum(st.balances.values())
    report = IntegrityReport(
        total_supply=st.total_supply,
        balances_sum=balances_sum,
        holders=sum(1 for v in st.balances.values() if v),
    )

    if balances_sum != st.total_supply:
        report.errors.append(
            f"conservation broken: balances sum {balances_sum} != total supply {st.total_supply}"
        )
    if not _in_range(st.total_supply):
        report.errors.append(f"total supply out of range: {st.total_supply}")
    for who, amt in sorted(st.balances.items()):
        if not _in_range(amt):
            report.errors.append(f"balance out of range for `{who}`: {amt}")
    for (owner, spender), amt in sorted(st.allowances.items()):
        if not _in_range(amt):
            report.errors.append(f"allowance out of range for `{owner}` -> `{spender}`: {amt}")
    if not 0 <= st.burn_rate <= MAX_BURN_RATE:
        report.errors.append(f"burn rate out of range: {st.burn_rate}")
    if not st.owner:
        report.errors.append("ledger has no owner")

    if report.errors:
        logger.warning(f"[GodsLedger] Integrity check failed with {len(report.errors)} issue(s)")
    return report


def format_units(amount: int, decimals: int) -> str:
    """Render base units as whole units, trimming trailing zeros."""
    if decimals == 0:
        return f"{amount:,}"
    whole, frac = divmod(amount, 10 ** decimals)
    frac_s = str(frac).rjust(decimals, "0").rstrip("0")
    return f"{whole:,}.{frac_s}" if frac_s else f"{whole:,}"


def summarize_balances_md(ledger: GodsLedger) -> List[str]:
    """
    Produce human-readable markdown lines for the current balances.
    """
    st = ledger.snapshot()
    sym = ledger.symbol()
    dec = ledger.decimals()
    lines: List[str] = [f"### Balances in {sym}", ""]

    holders = [(who, amt) for who, amt in sorted(st.balances.items()) if amt]
    if not holders:
        lines.append("_No holders yet._")
    for who, amt in holders:
        tag = " (ledger)" if who == st.address else ""
        lines.append(f"- **{who}**{tag}: {format_units(amt, dec)} {sym}")
    lines.append("")
    lines.append(f"- Total supply: `{format_units(st.total_supply, dec)} {sym}`")
    lines.append(f"- Paused: `{st.paused}`")
    burn_state = "enabled" if st.burn_enabled else "disabled"
    lines.append(f"- Burn on transfer: `{burn_state}` at `{st.burn_rate}/1000`")
    lines.append("")
    return lines
