"""
Pure domain layer.

This module contains value objects and money helpers with NO dependencies on:
- Persistence
- Network transport
- Time/clock
- I/O

All domain objects are immutable and deterministic.
"""

from settle_kernel.domain.currency import (
    DEFAULT_CURRENCY,
    CurrencyInfo,
    CurrencyRegistry,
)
from settle_kernel.domain.money import (
    format_label,
    format_minor,
    format_with_sign,
    parse_minor,
    round_half_up,
    to_decimal,
)
from settle_kernel.domain.values import (
    UNKNOWN_NAME,
    Expense,
    Participant,
    ParticipantBalance,
    PayerShare,
    Settlement,
    SettlementStatus,
    SimplificationStep,
    SimplifiedDebt,
    SplitShare,
    SplitStrategy,
)

__all__ = [
    "DEFAULT_CURRENCY",
    "CurrencyInfo",
    "CurrencyRegistry",
    "Expense",
    "Participant",
    "ParticipantBalance",
    "PayerShare",
    "Settlement",
    "SettlementStatus",
    "SimplificationStep",
    "SimplifiedDebt",
    "SplitShare",
    "SplitStrategy",
    "UNKNOWN_NAME",
    "format_label",
    "format_minor",
    "format_with_sign",
    "parse_minor",
    "round_half_up",
    "to_decimal",
]
