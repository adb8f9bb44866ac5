import threading

from conftest import E18
from gods_ledger.integrity import check_integrity, format_units, summarize_balances_md


def test_fresh_ledger_is_consistent(ledger):
    report = check_integrity(ledger)
    assert report.ok
    assert report.errors == []
    assert report.balances_sum == report.total_supply
    assert report.holders == 1


def test_detects_broken_conservation(ledger, addr1):
    # corrupt the state directly; public calls cannot do this
    ledger.state.balances[addr1] = 5
    report = check_integrity(ledger)
    assert not report.ok
    assert any("conservation broken" in e for e in report.errors)


def test_detects_out_of_range_burn_rate(ledger):
    ledger.state.burn_rate = 1001
    report = check_integrity(ledger)
    assert any("burn rate" in e for e in report.errors)


def test_format_units():
    assert format_units(4975 * 10**16, 18) == "49.75"
    assert format_units(10**18, 18) == "1"
    assert format_units(1, 18) == "0.000000000000000001"
    assert format_units(1234, 0) == "1,234"


def test_balances_markdown(ledger, owner, addr1):
    ledger.send(owner, addr1, 1000 * E18)
    lines = summarize_balances_md(ledger)
    assert lines[0] == "### Balances in GODS"
    assert f"- **{addr1}**: 1,000 GODS" in lines
    assert f"- **{ledger.address}** (ledger): 999,999,000 GODS" in lines
    assert "- Total supply: `1,000,000,000 GODS`" in lines
    assert "- Burn on transfer: `disabled` at `0/1000`" in lines


def test_snapshot_is_a_copy(ledger, owner, addr1):
    ledger.send(owner, addr1, 100)
    snap = ledger.snapshot()
    snap.balances[addr1] = 0
    snap.allowances[(addr1, owner)] = 1
    assert ledger.balance_of(addr1) == 100
    assert ledger.allowance(addr1, owner) == 0


def test_report_waits_for_a_call_in_flight(ledger, owner, addr1, addr2):
    ledger.send(owner, addr1, 100)
    reports = []
    reader = threading.Thread(target=lambda: reports.append(check_integrity(ledger)))

    with ledger._lock:
        # halfway through a move: debited but not yet credited
        ledger.state.balances[addr1] = 90
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
        ledger.state.balances[addr2] = 10

    reader.join(timeout=5)
    assert not reader.is_alive()
    assert reports[0].ok
    assert reports[0].holders == 3


def test_markdown_waits_for_a_call_in_flight(ledger, owner, addr1):
    ledger.send(owner, addr1, 100)
    out = []
    reader = threading.Thread(target=lambda: out.extend(summarize_balances_md(ledger)))

    with ledger._lock:
        reader.start()
        reader.join(timeout=0.2)
        assert reader.is_alive()
        ledger.state.balances[addr1] = 0

    reader.join(timeout=5)
    assert out[0] == "### Balances in GODS"
    # written before the lock was released, so the zero balance is omitted
    assert not any(addr1 in line for line in out)
