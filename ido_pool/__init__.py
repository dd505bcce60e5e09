"""IDO pool - phase-gated token exchange pool."""

from ido_pool.program import IdoProgram

__version__ = "0.1.0"
__all__ = ["IdoProgram", "__version__"]
