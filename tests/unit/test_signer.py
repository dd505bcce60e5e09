"""Tests for program-derived signer addresses."""

import pytest

from ido_pool.signer import (
    SignerDerivationError,
    create_program_address,
    find_pool_signer,
    find_program_address,
    pool_signer_address,
    pool_signer_seeds,
)

LONG_MINT = "m" * 64


class TestCreateProgramAddress:
    def test_deterministic(self):
        a = create_program_address([b"native-mint", bytes([255])], "program")
        b = create_program_address([b"native-mint", bytes([255])], "program")
        assert a == b
        assert len(a) == 64

    def test_depends_on_program(self):
        a = create_program_address([b"native-mint"], "program-a")
        b = create_program_address([b"native-mint"], "program-b")
        assert a != b

    def test_depends_on_bump(self):
        a = create_program_address([b"native-mint", bytes([255])], "program")
        b = create_program_address([b"native-mint", bytes([254])], "program")
        assert a != b

    def test_seed_too_long(self):
        with pytest.raises(SignerDerivationError):
            create_program_address([b"x" * 33], "program")

    def test_too_many_seeds(self):
        with pytest.raises(SignerDerivationError):
            create_program_address([b"x"] * 17, "program")


class TestFindProgramAddress:
    def test_first_bump_is_255(self):
        address, bump = find_program_address([b"native-mint"], "program")
        assert bump == 255
        assert address == create_program_address([b"native-mint", bytes([255])], "program")

    def test_skips_taken_addresses(self):
        taken = {pool_signer_address("native-mint", 255, "program")}
        address, bump = find_pool_signer("native-mint", "program", is_taken=taken.__contains__)
        assert bump == 254
        assert address not in taken

    def test_no_viable_bump(self):
        with pytest.raises(SignerDerivationError):
            find_program_address([b"native-mint"], "program", is_taken=lambda _: True)


class TestPoolSigner:
    def test_seed_is_32_bytes(self):
        assert [len(seed) for seed in pool_signer_seeds(LONG_MINT)] == [32]

    @pytest.mark.parametrize("native_mint", ["n", "native-mint", LONG_MINT])
    def test_any_mint_length_derives(self, native_mint):
        address, bump = find_pool_signer(native_mint, "program")
        assert address == pool_signer_address(native_mint, bump, "program")

    def test_depends_on_mint(self):
        assert pool_signer_address("mint-a", 255, "program") != pool_signer_address(
            "mint-b", 255, "program"
        )
