import sys
from pathlib import Path

import pytest

# Add project root so `import gods_ledger` works without an install
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from gods_ledger import GodsLedger  # noqa: E402

# hardhat's first three default signers
OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ADDR1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ADDR2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

E18 = 10**18


@pytest.fixture
def owner():
    return OWNER


@pytest.fixture
def addr1():
    return ADDR1


@pytest.fixture
def addr2():
    return ADDR2


@pytest.fixture
def ledger(owner):
    return GodsLedger(owner)


def snapshot(ledger):
    """Everything a rejected call must leave untouched."""
    st = ledger.state
    return (
        dict(st.balances),
        dict(st.allowances),
        st.total_supply,
        st.owner,
        st.paused,
        st.burn_enabled,
        st.burn_rate,
        len(ledger.events()),
    )
