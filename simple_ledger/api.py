"""
FastAPI REST API Module

Binds the ledger operations to HTTP. Every route is a POST under the
configured prefix (``/accountmanager`` by default). Ledger failures are
returned as 400 responses carrying the error message and kind.
"""

from typing import Optional
from fastapi import APIRouter, FastAPI, Depends, Request, Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
import uvicorn

from . import __version__
from .accounts import Account
from .config import LedgerConfig, get_config
from .errors import LedgerError
from .ledger import Ledger
from .logging_config import setup_logging, get_logger


logger = get_logger("simple_ledger.api")


# Pydantic models for API requests/responses
class LedgerRequest(BaseModel):
    """Accepts both snake_case names and the camelCase names of the accountmanager API"""
    model_config = ConfigDict(populate_by_name=True)


class OpenAccountRequest(LedgerRequest):
    owner_id: int = Field(..., alias="ownerId")


class GetAccountRequest(LedgerRequest):
    account_id: int = Field(..., alias="accountId")


class MoneyRequest(LedgerRequest):
    account_id: int = Field(..., alias="accountId")
    money: float = Field(..., description="Amount to deposit or withdraw")


class TransferRequest(LedgerRequest):
    source_account_id: int = Field(..., alias="sourceAccountId")
    target_account_id: int = Field(..., alias="targetAccountId")
    money: float = Field(..., description="Amount to move from source to target")


class AccountModel(BaseModel):
    id: int
    owner_id: int
    balance: float

    @classmethod
    def from_account(cls, account: Account) -> 'AccountModel':
        return cls(**account.to_dict())


router = APIRouter()


# Dependency to get the ledger bound to the running app
def get_ledger(request: Request) -> Ledger:
    return request.app.state.ledger


@router.post("/openAccount", response_model=AccountModel)
async def open_account(request: OpenAccountRequest, ledger: Ledger = Depends(get_ledger)):
    """Open an empty account"""
    account = ledger.open_account(request.owner_id)
    return AccountModel.from_account(account)


@router.post("/getAccount", response_model=AccountModel)
async def get_account(request: GetAccountRequest, ledger: Ledger = Depends(get_ledger)):
    """Get account details"""
    account = ledger.get_account(request.account_id)
    return AccountModel.from_account(account)


@router.post("/deposit")
async def deposit(request: MoneyRequest, ledger: Ledger = Depends(get_ledger)):
    """Deposit money into an account"""
    ledger.deposit(request.account_id, request.money)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/withdraw")
async def withdraw(request: MoneyRequest, ledger: Ledger = Depends(get_ledger)):
    """Withdraw money from an account"""
    ledger.withdraw(request.account_id, request.money)
    return Response(status_code=status.HTTP_200_OK)


@router.post("/transfer")
async def transfer(request: TransferRequest, ledger: Ledger = Depends(get_ledger)):
    """Transfer money between two accounts"""
    ledger.transfer(request.source_account_id, request.target_account_id, request.money)
    return Response(status_code=status.HTTP_200_OK)


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    logger.debug(f"{request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=exc.to_dict())


def create_app(ledger: Optional[Ledger] = None, config: Optional[LedgerConfig] = None) -> FastAPI:
    """
    Create and configure the FastAPI application

    Args:
        ledger: Ledger to serve; built from configuration when omitted
        config: Configuration; the global instance when omitted
    """
    config = config or get_config()

    app = FastAPI(
        title="Simple Ledger API",
        description="In-memory account ledger with balance limits",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )
    app.state.ledger = ledger if ledger is not None else Ledger.from_config(config)

    app.add_exception_handler(LedgerError, ledger_error_handler)
    app.include_router(router, prefix=config.api_prefix, tags=["Accounts"])

    # Health check endpoint
    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "simple_ledger",
            "version": __version__,
            "accounts": len(app.state.ledger)
        }

    return app


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False,
               config: Optional[LedgerConfig] = None):
    """Run the FastAPI server"""
    config = config or get_config()
    app = create_app(config=config)
    logger.info(f"Serving ledger on {host}:{port} (limits {config.min_balance}..{config.max_balance})")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if debug else config.log_level.lower()
    )


def main():
    """Console entry point"""
    config = get_config()
    setup_logging(config.log_level, log_format=config.log_format)
    run_server(host=config.api_host, port=config.api_port, config=config)
