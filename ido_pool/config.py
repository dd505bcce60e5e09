"""Configuration for the pool program."""

import os
from dataclasses import dataclass

# Identifier the pool signer addresses are derived under
DEFAULT_PROGRAM_ID = "GYpxvUxtesyBSn69gnbfQChoUyJ7qdsG9nXS2Y2dQNH6"


@dataclass(frozen=True)
class ProgramConfig:
    """Settings for one deployed pool program.

    Attributes:
        program_id: Program identifier mixed into every derived signer address
        default_decimals: Decimals used for mints created without an explicit value
    """

    program_id: str = DEFAULT_PROGRAM_ID
    default_decimals: int = 0

    @classmethod
    def from_env(cls) -> "ProgramConfig":
        """Build a config from IDO_PROGRAM_ID / IDO_DEFAULT_DECIMALS."""
        return cls(
            program_id=os.environ.get("IDO_PROGRAM_ID", DEFAULT_PROGRAM_ID),
            default_decimals=int(os.environ.get("IDO_DEFAULT_DECIMALS", "0")),
        )


# Default configuration instance
DEFAULT_PROGRAM_CONFIG = ProgramConfig()
