"""
Module: settle_engines.simplifier
Responsibility:
    Reduce a group's net balances to the fewest pairwise payments that
    settle everyone, and narrate how that plan was reached.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Delegates the pairing itself to ``settle_engines.matching``.

Invariants enforced:
    - Every debt amount is > 0.
    - Applying every debt to the input (``from += amount``, ``to -= amount``)
      zeroes all entries of a zero-sum balance map.
    - At most ``creditors + debtors - 1`` debts.
    - Ties are resolved by ascending participant id, so output is identical
      for identical input regardless of dict ordering.
    - ``generate_explanation`` narrates the debts returned by ``simplify``
      for the same input; the two can never disagree.

Failure modes:
    - None raised for balance maps that do not sum to zero. Such input is
      outside the contract; the explanation's total line flags it.

Usage:
    from settle_engines.simplifier import DebtSimplifier

    debts = DebtSimplifier().simplify({"A": 1000, "B": -600, "C": -400})
    # [B -> A 600, C -> A 400]
"""

from __future__ import annotations

from collections.abc import Mapping

from settle_engines.matching import match_balances, partition
from settle_engines.tracer import traced_engine
from settle_kernel.domain.currency import DEFAULT_CURRENCY
from settle_kernel.domain.money import format_label
from settle_kernel.domain.values import (
    UNKNOWN_NAME,
    SimplificationStep,
    SimplifiedDebt,
)
from settle_kernel.logging_config import get_logger

logger = get_logger("engines.simplifier")

_DIVIDER = "─" * 17


class DebtSimplifier:
    """
    Greedy minimum-transaction debt simplification.

    Contract:
        Pure functions over a ``{participant_id: balance}`` map where
        positive = is owed money and negative = owes money.
    Guarantees:
        - Largest creditor is matched with largest debtor at every step.
    Non-goals:
        - Not a general min-cost-flow solver; only the payment count is
          minimised, not the amounts moved.
    """

    @traced_engine("simplifier", "1.0", fingerprint_fields=("balances",))
    def simplify(
        self,
        balances: Mapping[str, int],
        display_names: Mapping[str, str] | None = None,
    ) -> list[SimplifiedDebt]:
        """
        Minimal list of payments settling ``balances``.

        Args:
            balances: Net balance per participant.
            display_names: Optional id -> name map; missing names become
                "Unknown".
        """
        names = display_names or {}
        logger.info("simplify_started", extra={"participant_count": len(balances)})

        debts = [
            SimplifiedDebt(
                from_participant_id=t.debtor_id,
                to_participant_id=t.creditor_id,
                amount=t.amount,
                from_name=names.get(t.debtor_id, UNKNOWN_NAME),
                to_name=names.get(t.creditor_id, UNKNOWN_NAME),
            )
            for t in match_balances(balances)
        ]

        logger.info("simplify_completed", extra={"debt_count": len(debts)})
        return debts

    @traced_engine("simplifier_explanation", "1.0", fingerprint_fields=("balances", "currency_label"))
    def generate_explanation(
        self,
        balances: Mapping[str, int],
        currency_label: str = DEFAULT_CURRENCY,
        display_names: Mapping[str, str] | None = None,
    ) -> list[SimplificationStep]:
        """
        Step-by-step trace of the simplification for display or audit.

        Steps, in order: original balances, categorisation into who is owed
        and who owes, one step per payment with the running balances after
        it, and a final summary against the worst case.
        """
        names = display_names or {}
        original = dict(balances)
        steps: list[SimplificationStep] = [
            SimplificationStep(
                title="Original Balances",
                description=_describe_balances(original, names, currency_label),
                balances=original,
            )
        ]

        creditors, debtors = partition(original)
        owed = ", ".join(names.get(pid, UNKNOWN_NAME) for pid in creditors) or "None"
        owing = ", ".join(names.get(pid, UNKNOWN_NAME) for pid in debtors) or "None"
        steps.append(
            SimplificationStep(
                title="Categorize Members",
                description=f"Owed money: {owed}\nOwes money: {owing}",
                balances=original,
            )
        )

        debts = self.simplify(original, names)
        running = dict(original)
        for i, debt in enumerate(debts, start=1):
            running[debt.from_participant_id] = running.get(debt.from_participant_id, 0) + debt.amount
            running[debt.to_participant_id] = running.get(debt.to_participant_id, 0) - debt.amount
            steps.append(
                SimplificationStep(
                    title=f"Step {i}: {debt.from_name} pays {debt.to_name}",
                    description=(
                        f"Amount: {format_label(debt.amount, currency_label)}\n\n"
                        f"{_describe_balances(running, names, currency_label)}"
                    ),
                    balances=running,
                    produced_debt=debt,
                )
            )

        worst_case = worst_case_transaction_count(original)
        plural = "" if len(debts) == 1 else "s"
        steps.append(
            SimplificationStep(
                title="Result",
                description=(
                    f"Simplified to {len(debts)} payment{plural} "
                    f"(from potentially {worst_case})"
                ),
                balances=running,
            )
        )

        logger.debug("explanation_generated", extra={
            "step_count": len(steps),
            "currency": currency_label,
        })
        return steps


def worst_case_transaction_count(balances: Mapping[str, int]) -> int:
    """Payments needed if every debtor paid every creditor directly."""
    creditors, debtors = partition(balances)
    return len(creditors) * len(debtors)


def _describe_balances(
    balances: Mapping[str, int],
    names: Mapping[str, str],
    currency_label: str,
) -> str:
    lines: list[str] = []
    for pid, amount in balances.items():
        name = names.get(pid, UNKNOWN_NAME)
        if amount > 0:
            lines.append(f"{name} is owed {format_label(amount, currency_label)}")
        elif amount < 0:
            lines.append(f"{name} owes {format_label(-amount, currency_label)}")
        else:
            lines.append(f"{name} is settled")

    total = sum(balances.values())
    lines.append(_DIVIDER)
    if total == 0:
        lines.append(f"Total: {format_label(0, currency_label)} ✓")
    else:
        lines.append(f"Total: {format_label(total, currency_label)} (should be 0)")
    return "\n".join(lines)
