"""
Contract Validation Module

Модуль для валидации storage-записей и конверсии моделей в wire-представление.
"""

from .records import (
    int256_from_wire,
    int256_to_wire,
    rebase_from_record,
    rebase_to_record,
    token_from_record,
    token_to_record,
    uint256_from_wire,
    uint256_to_wire,
)
from .validators import (
    REBASE_CONTRACT,
    TOKEN_CONTRACT,
    ContractValidator,
    SchemaLoader,
    validate_rebase_record,
    validate_token_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    # Contracts
    "REBASE_CONTRACT",
    "TOKEN_CONTRACT",
    # Functions
    "validate_rebase_record",
    "validate_token_record",
    # Records
    "uint256_to_wire",
    "uint256_from_wire",
    "int256_to_wire",
    "int256_from_wire",
    "rebase_to_record",
    "rebase_from_record",
    "token_to_record",
    "token_from_record",
]
