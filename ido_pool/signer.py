"""Program-derived signer addresses.

A pool never holds a private key. Its vaults and its claim mint are owned by
an address derived deterministically from the pool's seeds, a one-byte bump
and the program id. The program proves it may act for that address simply by
re-deriving it from the stored bump, and the ledger accepts the derived
address as the signing authority.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Sequence

PDA_MARKER = b"ProgramDerivedAddress"
MAX_SEED_LENGTH = 32
MAX_SEEDS = 16


class SignerDerivationError(ValueError):
    """Seeds are invalid or no usable bump exists."""

    pass


def create_program_address(seeds: Sequence[bytes], program_id: str) -> str:
    """Derive the address for the given seeds (bump included) and program.

    Raises:
        SignerDerivationError: If there are too many seeds or a seed is too long
    """
    if len(seeds) > MAX_SEEDS:
        raise SignerDerivationError(f"Too many seeds: {len(seeds)} > {MAX_SEEDS}")
    hasher = hashlib.sha256()
    for seed in seeds:
        if len(seed) > MAX_SEED_LENGTH:
            raise SignerDerivationError(f"Seed exceeds {MAX_SEED_LENGTH} bytes: {seed!r}")
        hasher.update(seed)
    hasher.update(program_id.encode())
    hasher.update(PDA_MARKER)
    return hasher.hexdigest()


def find_program_address(
    seeds: Sequence[bytes],
    program_id: str,
    is_taken: Callable[[str], bool] | None = None,
) -> tuple[str, int]:
    """Find the first usable (address, bump) pair, trying bumps 255 down to 0.

    Args:
        seeds: Seeds without the bump
        program_id: Owning program identifier
        is_taken: Optional predicate; addresses for which it returns True
                  (e.g. already occupied by a ledger account) are skipped

    Raises:
        SignerDerivationError: If every bump is rejected
    """
    for bump in range(255, -1, -1):
        address = create_program_address([*seeds, bytes([bump])], program_id)
        if is_taken is None or not is_taken(address):
            return address, bump
    raise SignerDerivationError("Unable to find a viable program address bump")


def pool_signer_seeds(native_mint: str) -> list[bytes]:
    """Seeds of a pool signer, without the bump.

    The mint id is hashed to a single 32-byte seed so that any valid address,
    whatever its length, can back a pool.
    """
    return [hashlib.sha256(native_mint.encode()).digest()]


def find_pool_signer(
    native_mint: str,
    program_id: str,
    is_taken: Callable[[str], bool] | None = None,
) -> tuple[str, int]:
    """Find the signer address and bump for a pool over native_mint."""
    return find_program_address(pool_signer_seeds(native_mint), program_id, is_taken)


def pool_signer_address(native_mint: str, bump: int, program_id: str) -> str:
    """Address of the signer that owns a pool's vaults and claim mint."""
    return create_program_address([*pool_signer_seeds(native_mint), bytes([bump])], program_id)
