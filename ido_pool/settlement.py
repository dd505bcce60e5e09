"""Proportional settlement of redeemable claims.

The payout is computed against the *current* native vault balance and the
*current* claim supply, so every redemption is priced on what remains. Floor
rounding always favours the pool; the remainder rolls forward to later
redeemers, and dust left after the last one is not swept.
"""

from ido_pool.errors import NothingToRedeem
from ido_pool.safe_int import S


def redeemable_to_native(redeemable: int, pool_native: int, supply: int) -> int:
    """Native tokens owed for a redeemable balance.

    native = floor(redeemable * pool_native / supply)

    Args:
        redeemable: Claim-token balance being redeemed
        pool_native: Current balance of the pool's native vault
        supply: Current total supply of the claim token

    Returns:
        Native token amount (u64)

    Raises:
        NothingToRedeem: If supply is zero
    """
    if supply == 0:
        raise NothingToRedeem("claim token supply is zero")
    return (S(redeemable) * pool_native // supply).to_u64()
