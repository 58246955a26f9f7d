"""
settle_engines.matching -- Greedy largest-vs-largest debt matcher.

Responsibility:
    Turn a net-balance map into the pairwise transfers that zero it. This is
    the single matching routine shared by the per-expense debt suggestion
    (``SplitCalculator.compute_debts_for_expense``) and the group-wide
    ``DebtSimplifier``.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Imports nothing beyond the standard library and kernel logging.

Invariants enforced:
    - Deterministic order: creditors and debtors are max-heaps keyed by
      ``(-remaining, participant_id)``, so the party picked is the one with
      the largest remaining amount, ties going to the smallest id.
    - Every transfer amount is > 0.
    - A party leaves its heap exactly when its remaining amount reaches 0.
    - At most ``creditors + debtors - 1`` transfers: each transfer retires
      at least one party, and the final one retires two.

Failure modes:
    - None raised. A balance map that does not sum to zero leaves residue on
      one side; matching stops when either side is exhausted.

Usage:
    from settle_engines.matching import match_balances

    transfers = match_balances({"A": 1000, "B": -600, "C": -400})
    # (Transfer("B", "A", 600), Transfer("C", "A", 400))
"""

from __future__ import annotations

import heapq
from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from settle_kernel.logging_config import get_logger

logger = get_logger("engines.matching")


@dataclass(frozen=True)
class Transfer:
    """A single matching decision: ``debtor_id`` pays ``creditor_id``."""

    debtor_id: str
    creditor_id: str
    amount: int


class _Side:
    """
    One side of the match (creditors or debtors) as a max-heap.

    Amounts are stored positive; the heap key is ``(-amount, id)``.
    """

    def __init__(self, amounts: Mapping[str, int]):
        self._heap = [(-amount, pid) for pid, amount in amounts.items()]
        heapq.heapify(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def pop_largest(self) -> tuple[str, int]:
        neg_amount, pid = heapq.heappop(self._heap)
        return pid, -neg_amount

    def restore(self, pid: str, remaining: int) -> None:
        """Put a partially settled party back; settled parties are dropped."""
        if remaining > 0:
            heapq.heappush(self._heap, (-remaining, pid))


def partition(balances: Mapping[str, int]) -> tuple[dict[str, int], dict[str, int]]:
    """
    Split balances into creditors and debtors, both as positive amounts.

    Zero balances belong to neither side.
    """
    creditors = {pid: amount for pid, amount in balances.items() if amount > 0}
    debtors = {pid: -amount for pid, amount in balances.items() if amount < 0}
    return creditors, debtors


def iter_transfers(balances: Mapping[str, int]) -> Iterator[Transfer]:
    """Yield matching decisions one at a time, in order."""
    creditor_amounts, debtor_amounts = partition(balances)
    creditors = _Side(creditor_amounts)
    debtors = _Side(debtor_amounts)

    logger.debug("matching_started", extra={
        "creditor_count": len(creditors),
        "debtor_count": len(debtors),
    })

    while creditors and debtors:
        creditor_id, owed = creditors.pop_largest()
        debtor_id, owes = debtors.pop_largest()
        amount = min(owed, owes)

        creditors.restore(creditor_id, owed - amount)
        debtors.restore(debtor_id, owes - amount)

        yield Transfer(debtor_id=debtor_id, creditor_id=creditor_id, amount=amount)

    if creditors or debtors:
        # Only reachable when the input does not sum to zero.
        logger.warning("matching_unbalanced_residue", extra={
            "creditors_left": len(creditors),
            "debtors_left": len(debtors),
        })


def match_balances(balances: Mapping[str, int]) -> tuple[Transfer, ...]:
    """Run the greedy matcher to completion."""
    return tuple(iter_transfers(balances))
