"""
Domain models and value objects.

Contains accounting entities built on fixed-point math: Rebase, Token.
"""

from src.core.domain.rebase import Rebase
from src.core.domain.units import (
    NORMALIZED_DECIMALS,
    TOKEN_DECIMALS_MIN,
    Token,
    denormalize,
    normalize,
    to_token_precision,
    validate_decimals,
)

__all__ = [
    # Units module
    "NORMALIZED_DECIMALS",
    "TOKEN_DECIMALS_MIN",
    "Token",
    "normalize",
    "denormalize",
    "to_token_precision",
    "validate_decimals",
    # Rebase model
    "Rebase",
]
