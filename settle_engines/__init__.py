"""
Module: settle_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure
    calculation engines. This is the canonical import surface for callers.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settle_kernel (and sibling engine modules).
    MUST NOT import settle_config.

Invariants enforced:
    - Integer minor-unit arithmetic; floats never represent money.
    - Determinism: identical inputs always produce identical outputs,
      including tie-breaks between equal balances.

Usage:
    from settle_engines import BalanceAggregator, DebtSimplifier, SplitCalculator

    balances = BalanceAggregator().compute_balances(expenses, settlements)
    debts = DebtSimplifier().simplify(balances)
"""

from settle_engines.balances import BalanceAggregator
from settle_engines.matching import Transfer, iter_transfers, match_balances, partition
from settle_engines.policy import DEFAULT_STRONG_AUTH_THRESHOLD, requires_strong_auth
from settle_engines.simplifier import DebtSimplifier, worst_case_transaction_count
from settle_engines.split import PERCENTAGE_TOLERANCE, SplitCalculator
from settle_engines.tracer import compute_input_fingerprint, traced_engine

__all__ = [
    "BalanceAggregator",
    "DEFAULT_STRONG_AUTH_THRESHOLD",
    "DebtSimplifier",
    "PERCENTAGE_TOLERANCE",
    "SplitCalculator",
    "Transfer",
    "compute_input_fingerprint",
    "iter_transfers",
    "match_balances",
    "partition",
    "requires_strong_auth",
    "traced_engine",
    "worst_case_transaction_count",
]
