import os
from typing import Optional, Dict, Any

from fastapi import FastAPI, Header, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from .config import ConfigError, LedgerConfig, load_config
from .errors import (
    AlreadyPaused,
    ContractPaused,
    LedgerError,
    NotPaused,
    Unauthorized,
)
from .integrity import check_integrity
from .token import GodsLedger

# ---------------------------
# Config
# ---------------------------
ENV_NAME = os.getenv("ENV_NAME", "prod")
ALLOW_ORIGINS = os.getenv("ALLOW_ORIGINS", "*")
MAX_EVENTS_PAGE = 50


def error_status(err: LedgerError) -> int:
    if isinstance(err, Unauthorized):
        return 403
    if isinstance(err, (ContractPaused, AlreadyPaused, NotPaused)):
        return 409
    return 400


def to_http(err: LedgerError) -> HTTPException:
    return HTTPException(
        status_code=error_status(err),
        detail={"error": err.code, "message": err.message},
    )


def require_caller(x_caller: Optional[str]) -> str:
    if not x_caller or not x_caller.strip():
        raise HTTPException(status_code=401, detail="X-Caller header required.")
    return x_caller.strip()


# ---------------------------
# Models
# ---------------------------
class AmountBody(BaseModel):
    amount: int = Field(ge=0)


class SendBody(BaseModel):
    to: str
    amount: int = Field(ge=0)


class TransferFromBody(BaseModel):
    from_: str = Field(alias="from")
    to: str
    amount: int = Field(ge=0)


class ApproveBody(BaseModel):
    spender: str
    amount: int = Field(ge=0)


class BurnRateBody(BaseModel):
    rate: int


class OwnershipBody(BaseModel):
    new_owner: str


# ---------------------------
# App
# ---------------------------
def create_app(
    ledger: Optional[GodsLedger] = None,
    deployer: Optional[str] = None,
    config: Optional[LedgerConfig] = None,
) -> FastAPI:
    """
    Build the HTTP surface over one ledger.

    Without an explicit ledger, one is deployed from config by `deployer`
    (or the GODS_LEDGER_DEPLOYER env var).
    """
    if ledger is None:
        deployer = deployer or os.getenv("GODS_LEDGER_DEPLOYER", "").strip()
        if not deployer:
            raise ConfigError("GODS_LEDGER_DEPLOYER must be set to deploy a ledger.")
        ledger = GodsLedger.from_config(deployer, config or load_config())

    app = FastAPI(title="GodsLedger-API", version="0.1.0", docs_url="/docs", openapi_url="/openapi.json")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in ALLOW_ORIGINS.split(",")] if ALLOW_ORIGINS else ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.ledger = ledger

    def call(fn, *args) -> Dict[str, Any]:
        try:
            fn(*args)
        except LedgerError as e:
            raise to_http(e)
        return {"ok": True}

    # ---------------------------
    # Health / Views
    # ---------------------------
    @app.get("/v1/ops/health")
    def health():
        report = check_integrity(ledger)
        return {
            "ok": report.ok,
            "env": ENV_NAME,
            "paused": ledger.paused(),
            "integrity_errors": report.errors,
        }

    @app.get("/v1/token")
    def token_info():
        return {
            "address": ledger.address,
            "name": ledger.name(),
            "symbol": ledger.symbol(),
            "decimals": ledger.decimals(),
            "total_supply": ledger.total_supply(),
            "owner": ledger.owner(),
            "paused": ledger.paused(),
            "transfer_with_burn_enabled": ledger.is_transfer_with_burn_enabled(),
            "burn_rate": ledger.burn_rate(),
        }

    @app.get("/v1/token/balances/{address}")
    def balance_of(address: str):
        try:
            return {"address": address, "balance": ledger.balance_of(address)}
        except LedgerError as e:
            raise to_http(e)

    @app.get("/v1/token/allowances/{owner}/{spender}")
    def allowance(owner: str, spender: str):
        try:
            return {"owner": owner, "spender": spender, "allowance": ledger.allowance(owner, spender)}
        except LedgerError as e:
            raise to_http(e)

    @app.get("/v1/token/owner")
    def owner():
        return {"owner": ledger.owner()}

    @app.get("/v1/token/is-owner")
    def is_owner(x_caller: Optional[str] = Header(None)):
        caller = require_caller(x_caller)
        return {"caller": caller, "is_owner": ledger.is_owner(caller)}

    @app.get("/v1/token/events")
    def list_events(event_type: Optional[str] = None, offset: int = 0, limit: int = MAX_EVENTS_PAGE):
        offset = max(0, offset)
        limit = max(1, min(limit, MAX_EVENTS_PAGE))
        page = ledger.events(event_type)[offset:offset + limit]
        return [ev.to_dict() for ev in page]

    # ---------------------------
    # Owner configuration
    # ---------------------------
    @app.post("/v1/token/pause")
    def pause(x_caller: Optional[str] = Header(None)):
        return call(ledger.pause, require_caller(x_caller))

    @app.post("/v1/token/unpause")
    def unpause(x_caller: Optional[str] = Header(None)):
        return call(ledger.unpause, require_caller(x_caller))

    @app.post("/v1/token/burn/enable")
    def enable_burn(x_caller: Optional[str] = Header(None)):
        return call(ledger.enable_transfer_with_burn, require_caller(x_caller))

    @app.post("/v1/token/burn/disable")
    def disable_burn(x_caller: Optional[str] = Header(None)):
        return call(ledger.disable_transfer_with_burn, require_caller(x_caller))

    @app.post("/v1/token/burn/rate")
    def set_burn_rate(body: BurnRateBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.set_burn_rate, require_caller(x_caller), body.rate)

    @app.post("/v1/token/ownership")
    def transfer_ownership(body: OwnershipBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.transfer_ownership, require_caller(x_caller), body.new_owner)

    # ---------------------------
    # Supply / Transfers
    # ---------------------------
    @app.post("/v1/token/mint")
    def mint(body: AmountBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.mint, require_caller(x_caller), body.amount)

    @app.post("/v1/token/send")
    def send(body: SendBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.send, require_caller(x_caller), body.to, body.amount)

    @app.post("/v1/token/approve")
    def approve(body: ApproveBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.approve, require_caller(x_caller), body.spender, body.amount)

    @app.post("/v1/token/transfer")
    def transfer(body: SendBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.transfer, require_caller(x_caller), body.to, body.amount)

    @app.post("/v1/token/transfer-from")
    def transfer_from(body: TransferFromBody, x_caller: Optional[str] = Header(None)):
        return call(ledger.transfer_from, require_caller(x_caller), body.from_, body.to, body.amount)

    return app
