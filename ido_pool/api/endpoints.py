"""API endpoints for the IDO pool program."""

from functools import lru_cache

import structlog
from fastapi import APIRouter, Depends

from ido_pool.clock import SystemClock
from ido_pool.config import ProgramConfig
from ido_pool.ledger import Mint, TokenAccount
from ido_pool.models.api import (
    CreateAccountRequest,
    CreateMintRequest,
    DepositResponse,
    ExchangeDepositRequest,
    ExchangeRedeemableRequest,
    InitializePoolRequest,
    MintResponse,
    MintToRequest,
    PoolStateResponse,
    RedeemResponse,
    SignerResponse,
    TokenAccountResponse,
    WithdrawRequest,
    WithdrawResponse,
)
from ido_pool.models.pool import PoolAccount
from ido_pool.phase import current_phase
from ido_pool.program import IdoProgram
from ido_pool.signer import find_pool_signer

logger = structlog.get_logger()

router = APIRouter()


@lru_cache(maxsize=1)
def get_default_program() -> IdoProgram:
    """Process-wide program instance backed by in-memory ledger and store."""
    return IdoProgram(clock=SystemClock(), config=ProgramConfig.from_env())


def get_program() -> IdoProgram:
    """Dependency provider for the program instance.

    Override this in tests to inject a program with a fixed clock:
        app.dependency_overrides[get_program] = lambda: program
    """
    return get_default_program()


def _mint_response(mint: Mint) -> MintResponse:
    return MintResponse(
        address=mint.address,
        decimals=mint.decimals,
        mint_authority=mint.mint_authority,
        supply=mint.supply,
    )


def _account_response(account: TokenAccount) -> TokenAccountResponse:
    return TokenAccountResponse(
        address=account.address,
        mint=account.mint,
        owner=account.owner,
        amount=account.amount,
    )


# =============================================================================
# Ledger
# =============================================================================


@router.post("/mints", status_code=201)
async def create_mint(
    request: CreateMintRequest,
    program: IdoProgram = Depends(get_program),
) -> MintResponse:
    decimals = request.decimals
    if decimals is None:
        decimals = program.config.default_decimals
    mint = program.ledger.create_mint(request.address, decimals, request.mint_authority)
    return _mint_response(mint)


@router.get("/mints/{address}")
async def get_mint(address: str, program: IdoProgram = Depends(get_program)) -> MintResponse:
    return _mint_response(program.ledger.get_mint(address))


@router.post("/mints/{address}/mint-to")
async def mint_to(
    address: str,
    request: MintToRequest,
    program: IdoProgram = Depends(get_program),
) -> TokenAccountResponse:
    program.ledger.mint_to(address, request.destination, request.amount, request.authority)
    return _account_response(program.ledger.get_account(request.destination))


@router.post("/accounts", status_code=201)
async def create_account(
    request: CreateAccountRequest,
    program: IdoProgram = Depends(get_program),
) -> TokenAccountResponse:
    account = program.ledger.create_account(request.address, request.mint, request.owner)
    return _account_response(account)


@router.get("/accounts/{address}")
async def get_account(
    address: str, program: IdoProgram = Depends(get_program)
) -> TokenAccountResponse:
    return _account_response(program.ledger.get_account(address))


@router.get("/signer")
async def get_pool_signer(
    native_mint: str, program: IdoProgram = Depends(get_program)
) -> SignerResponse:
    """Derive the signer address and bump for a pool over native_mint.

    Clients call this before initialize to create the claim mint and the two
    vaults under the pool signer.
    """
    address, bump = find_pool_signer(native_mint, program.program_id)
    return SignerResponse(address=address, bump=bump)


# =============================================================================
# Pool instructions
# =============================================================================


@router.post("/pools/{pool_address}/initialize", status_code=201)
async def initialize_pool(
    pool_address: str,
    request: InitializePoolRequest,
    program: IdoProgram = Depends(get_program),
) -> PoolAccount:
    logger.info("received_initialize", pool=pool_address, authority=request.authority)
    return program.initialize_pool(
        pool_address,
        request.authority,
        request.accounts,
        total_native_tokens=request.total_native_tokens,
        start_ido_ts=request.start_ido_ts,
        end_ido_ts=request.end_ido_ts,
        withdraw_deposit_token_ts=request.withdraw_deposit_token_ts,
        bump=request.bump,
    )


@router.post("/pools/{pool_address}/deposit")
async def exchange_deposit_token_for_redeemable(
    pool_address: str,
    request: ExchangeDepositRequest,
    program: IdoProgram = Depends(get_program),
) -> DepositResponse:
    result = program.exchange_deposit_token_for_redeemable(
        pool_address, request.authority, request.accounts, request.amount
    )
    return DepositResponse(deposited=result.deposited, redeemable_minted=result.redeemable_minted)


@router.post("/pools/{pool_address}/redeem")
async def exchange_redeemable_for_native(
    pool_address: str,
    request: ExchangeRedeemableRequest,
    program: IdoProgram = Depends(get_program),
) -> RedeemResponse:
    result = program.exchange_redeemable_for_native(
        pool_address, request.authority, request.accounts
    )
    return RedeemResponse(
        redeemable_burned=result.redeemable_burned, native_paid=result.native_paid
    )


@router.post("/pools/{pool_address}/withdraw")
async def withdraw_pool_deposit_token(
    pool_address: str,
    request: WithdrawRequest,
    program: IdoProgram = Depends(get_program),
) -> WithdrawResponse:
    result = program.withdraw_pool_deposit_token(pool_address, request.payer, request.accounts)
    return WithdrawResponse(withdrawn=result.withdrawn)


@router.get("/pools/{pool_address}")
async def get_pool(
    pool_address: str, program: IdoProgram = Depends(get_program)
) -> PoolStateResponse:
    pool = program.get_pool(pool_address)
    now = program.clock.now()
    phase = current_phase(pool, now)
    return PoolStateResponse(
        address=pool_address,
        pool=pool,
        signer=program.pool_signer(pool),
        phase=phase.value if phase is not None else None,
        now=now,
        pool_native_balance=program.ledger.balance(pool.pool_native),
        pool_deposit_token_balance=program.ledger.balance(pool.pool_deposit_token),
        redeemable_supply=program.ledger.supply(pool.redeemable_mint),
    )
