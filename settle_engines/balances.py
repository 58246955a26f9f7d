"""
Module: settle_engines.balances
Responsibility:
    Fold expenses and confirmed settlements into one net balance per
    participant.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumes the payer/split records produced at expense-creation time but
    does not depend on the split calculator itself.

Invariants enforced:
    - Sparse result: a participant appears only once an expense or confirmed
      settlement references them. Absent and zero mean the same thing.
    - Only CONFIRMED settlements move balances; pending and rejected ones
      have no effect at all.
    - Zero sum follows from the inputs: when every expense reconciles, the
      result sums to 0. The aggregator does not check this at runtime.

Failure modes:
    - None raised. Unbalanced expenses produce a map that does not sum to
      zero; tests assert the property independently.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping

from settle_engines.tracer import traced_engine
from settle_kernel.domain.values import (
    UNKNOWN_NAME,
    Expense,
    ParticipantBalance,
    Settlement,
)
from settle_kernel.logging_config import get_logger

logger = get_logger("engines.balances")


class BalanceAggregator:
    """
    Compute net balances for a group.

    Contract:
        Recomputes from scratch on every call; there is no incremental mode.
    Guarantees:
        - Positive balance = is owed money, negative = owes money.
    Non-goals:
        - Does not validate expenses; see ``Expense.is_balanced``.
    """

    @traced_engine("balances", "1.0")
    def compute_balances(
        self,
        expenses: Iterable[Expense],
        settlements: Iterable[Settlement] = (),
    ) -> dict[str, int]:
        """
        Net balance per participant across expenses and confirmed settlements.

        Args:
            expenses: Expense records with payer and split shares.
            settlements: Recorded payments; only confirmed ones are applied.

        Returns:
            ``{participant_id: balance}`` containing only referenced
            participants.
        """
        balances: defaultdict[str, int] = defaultdict(int)
        expense_count = 0
        unbalanced = 0

        for expense in expenses:
            expense_count += 1
            if not expense.is_balanced:
                unbalanced += 1
            for payer in expense.payers:
                balances[payer.participant_id] += payer.amount
            for split in expense.splits:
                balances[split.participant_id] -= split.amount

        applied = 0
        skipped = 0
        for settlement in settlements:
            if not settlement.is_confirmed:
                skipped += 1
                continue
            applied += 1
            # Payer has reduced what they owe; payee has been paid down.
            balances[settlement.from_participant_id] += settlement.amount
            balances[settlement.to_participant_id] -= settlement.amount

        if unbalanced:
            logger.warning("balances_unbalanced_expenses", extra={
                "unbalanced_count": unbalanced,
            })

        logger.info("balances_computed", extra={
            "expense_count": expense_count,
            "settlements_applied": applied,
            "settlements_skipped": skipped,
            "participant_count": len(balances),
        })
        return dict(balances)

    def summarize(
        self,
        balances: Mapping[str, int],
        display_names: Mapping[str, str] | None = None,
    ) -> list[ParticipantBalance]:
        """Per-participant view, largest creditor first, ties by id."""
        names = display_names or {}
        ordered = sorted(balances.items(), key=lambda kv: (-kv[1], kv[0]))
        return [
            ParticipantBalance(
                participant_id=pid,
                display_name=names.get(pid, UNKNOWN_NAME),
                balance=balance,
            )
            for pid, balance in ordered
        ]
