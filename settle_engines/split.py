"""
Module: settle_engines.split
Responsibility:
    Divide an expense total among participants using one of four
    strategies (equal, exact, percentage, shares) into integer minor-unit
    shares that reconcile exactly to the total.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import settle_kernel and sibling engine modules.

Invariants enforced:
    - Reconciliation: for every successful split, sum(amounts) == total.
    - Equal: the first ``total % n`` participants (caller order) receive one
      extra minor unit.
    - Percentage / shares: every entry but the last is rounded with
      ``round_half_up``; the last entry absorbs the rounding residual.
    - No float arithmetic on money; ratios are computed in Decimal.

Failure modes:
    - InvalidSplitInput on negative or non-integer totals, missing weights,
      exact amounts that do not sum to the total, percentages outside
      [0, 100] or not summing to 100 (tolerance 0.01), negative share units,
      or zero total share units.

Usage:
    from settle_engines.split import SplitCalculator
    from settle_kernel.domain.values import Participant, SplitStrategy

    calculator = SplitCalculator()
    splits = calculator.compute_split(
        total=10000,
        strategy=SplitStrategy.EQUAL,
        participants=[Participant("a", "Asha"), Participant("b", "Bilal")],
    )
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from settle_engines.matching import match_balances
from settle_engines.tracer import traced_engine
from settle_kernel.domain.money import round_half_up, to_decimal
from settle_kernel.domain.values import (
    UNKNOWN_NAME,
    Participant,
    PayerShare,
    SplitShare,
    SplitStrategy,
)
from settle_kernel.exceptions import InvalidSplitInput
from settle_kernel.logging_config import get_logger

logger = get_logger("engines.split")

PERCENTAGE_TOLERANCE = Decimal("0.01")
_HUNDRED = Decimal("100")


class SplitCalculator:
    """
    Compute per-participant shares of an expense.

    Contract:
        Pure functions with deterministic rounding.
        No I/O, no stored state between calls.
    Guarantees:
        - Every returned list sums exactly to ``total``.
        - Output order follows the caller's participant list (equal) or the
          weights mapping's iteration order (exact, percentage, shares).
    Non-goals:
        - Does not validate that weights reference members of the group;
          unknown ids get the display name "Unknown".
    """

    @traced_engine("split", "1.0", fingerprint_fields=("total", "strategy", "weights"))
    def compute_split(
        self,
        total: int,
        strategy: SplitStrategy,
        participants: Sequence[Participant],
        weights: Mapping[str, int | Decimal | float | str] | None = None,
    ) -> list[SplitShare]:
        """
        Split ``total`` among participants according to ``strategy``.

        Args:
            total: Expense total in minor units.
            strategy: Splitting strategy.
            participants: Members sharing the expense (order matters for equal).
            weights: Strategy-specific mapping of participant id to exact
                amount, percentage, or share units. Ignored for equal.

        Returns:
            One SplitShare per participant (equal) or per weights entry.
        """
        try:
            strategy = SplitStrategy(strategy)
        except ValueError as e:
            logger.error("split_unknown_strategy", extra={"strategy": str(strategy)})
            raise InvalidSplitInput(str(strategy), "unknown strategy") from e

        logger.info("split_started", extra={
            "total": total,
            "strategy": strategy.value,
            "participant_count": len(participants),
        })
        if isinstance(total, bool) or not isinstance(total, int):
            raise InvalidSplitInput(
                strategy.value,
                "total must be an integer number of minor units",
                actual=total,
            )
        if total < 0:
            raise InvalidSplitInput(strategy.value, "total cannot be negative", actual=total)

        names = {p.participant_id: p.display_name for p in participants}

        match strategy:
            case SplitStrategy.EQUAL:
                return self.calculate_equal(total, participants)
            case SplitStrategy.EXACT:
                return self.calculate_exact(total, self._require(strategy, weights), names)
            case SplitStrategy.PERCENTAGE:
                return self.calculate_percentage(total, self._require(strategy, weights), names)
            case SplitStrategy.SHARES:
                return self.calculate_shares(total, self._require(strategy, weights), names)

    def calculate_equal(
        self,
        total: int,
        participants: Sequence[Participant],
    ) -> list[SplitShare]:
        """Split evenly; the first ``total % n`` participants get one extra unit."""
        if not participants:
            logger.warning("split_equal_no_participants", extra={"total": total})
            return []

        base, remainder = divmod(total, len(participants))
        logger.debug("split_equal_calculated", extra={
            "per_person": base,
            "remainder": remainder,
        })
        return [
            SplitShare(
                participant_id=p.participant_id,
                display_name=p.display_name or UNKNOWN_NAME,
                amount=base + (1 if i < remainder else 0),
            )
            for i, p in enumerate(participants)
        ]

    def calculate_exact(
        self,
        total: int,
        amounts: Mapping[str, int],
        names: Mapping[str, str] | None = None,
    ) -> list[SplitShare]:
        """Use caller-supplied amounts; they must sum to ``total`` exactly."""
        names = names or {}
        for pid, amount in amounts.items():
            if isinstance(amount, bool) or not isinstance(amount, int):
                raise InvalidSplitInput(
                    SplitStrategy.EXACT.value,
                    f"amount for {pid} must be an integer number of minor units",
                    actual=amount,
                )

        allocated = sum(amounts.values())
        if allocated != total:
            logger.error("split_exact_mismatch", extra={
                "allocated_total": allocated,
                "expected_total": total,
            })
            raise InvalidSplitInput(
                SplitStrategy.EXACT.value,
                f"exact amounts sum ({allocated}) does not match total ({total})",
                expected=total,
                actual=allocated,
            )

        return [
            SplitShare(
                participant_id=pid,
                display_name=names.get(pid) or UNKNOWN_NAME,
                amount=amount,
            )
            for pid, amount in amounts.items()
        ]

    def calculate_percentage(
        self,
        total: int,
        percentages: Mapping[str, int | Decimal | float | str],
        names: Mapping[str, str] | None = None,
    ) -> list[SplitShare]:
        """Split by percentage; the last entry absorbs rounding."""
        strategy = SplitStrategy.PERCENTAGE.value
        converted: dict[str, Decimal] = {}
        for pid, raw in percentages.items():
            pct = self._as_decimal(strategy, pid, raw)
            if pct < 0 or pct > _HUNDRED:
                raise InvalidSplitInput(
                    strategy, f"percentage for {pid} must be within 0-100", actual=pct
                )
            converted[pid] = pct

        total_pct = sum(converted.values(), Decimal("0"))
        if abs(total_pct - _HUNDRED) > PERCENTAGE_TOLERANCE:
            logger.error("split_percentage_mismatch", extra={
                "total_percentage": total_pct,
            })
            raise InvalidSplitInput(
                strategy,
                f"percentages must sum to 100% (got {total_pct}%)",
                expected=_HUNDRED,
                actual=total_pct,
            )

        return self._allocate_by_ratio(
            total,
            converted,
            denominator=_HUNDRED,
            build=lambda pid, amount, weight: SplitShare(
                participant_id=pid,
                display_name=(names or {}).get(pid) or UNKNOWN_NAME,
                amount=amount,
                percentage=weight,
            ),
        )

    def calculate_shares(
        self,
        total: int,
        shares: Mapping[str, int],
        names: Mapping[str, str] | None = None,
    ) -> list[SplitShare]:
        """
        Split by share units: ``{A: 2, B: 1, C: 1}`` gives A half and B, C a
        quarter each. The last entry absorbs rounding.
        """
        strategy = SplitStrategy.SHARES.value
        if not shares:
            logger.warning("split_shares_empty", extra={"total": total})
            return []

        for pid, units in shares.items():
            if isinstance(units, bool) or not isinstance(units, int):
                raise InvalidSplitInput(
                    strategy, f"share units for {pid} must be an integer", actual=units
                )
            if units < 0:
                raise InvalidSplitInput(
                    strategy, f"share units for {pid} cannot be negative", actual=units
                )

        total_units = sum(shares.values())
        if total_units == 0:
            logger.error("split_shares_zero_total", extra={"entries": len(shares)})
            raise InvalidSplitInput(strategy, "total shares cannot be zero", actual=0)

        return self._allocate_by_ratio(
            total,
            shares,
            denominator=total_units,
            build=lambda pid, amount, weight: SplitShare(
                participant_id=pid,
                display_name=(names or {}).get(pid) or UNKNOWN_NAME,
                amount=amount,
                share_units=weight,
            ),
        )

    def validate_splits(self, total: int, splits: Sequence[SplitShare]) -> bool:
        """Post-condition check for callers: do the splits sum to ``total``?"""
        split_sum = sum(s.amount for s in splits)
        if split_sum != total:
            logger.warning("split_validation_failed", extra={
                "split_sum": split_sum,
                "total": total,
            })
            return False
        return True

    @traced_engine("split_debts", "1.0")
    def compute_debts_for_expense(
        self,
        payers: Sequence[PayerShare],
        splits: Sequence[SplitShare],
    ) -> dict[str, dict[str, int]]:
        """
        Suggest who pays whom for a single expense.

        Payers are creditors and split participants debtors; the pairing uses
        the same greedy matcher as ``DebtSimplifier``.

        Returns:
            ``{debtor_id: {creditor_id: amount}}``
        """
        balances: dict[str, int] = {}
        for payer in payers:
            balances[payer.participant_id] = balances.get(payer.participant_id, 0) + payer.amount
        for split in splits:
            balances[split.participant_id] = balances.get(split.participant_id, 0) - split.amount

        debts: dict[str, dict[str, int]] = {}
        for transfer in match_balances(balances):
            debts.setdefault(transfer.debtor_id, {})[transfer.creditor_id] = transfer.amount

        logger.debug("split_debts_calculated", extra={
            "payers": len(payers),
            "splits": len(splits),
            "debtor_count": len(debts),
        })
        return debts

    def _allocate_by_ratio(
        self,
        total: int,
        weights: Mapping[str, Decimal | int],
        denominator: Decimal | int,
        build: Callable[[str, int, Any], SplitShare],
    ) -> list[SplitShare]:
        """Common logic for percentage and shares splits.

        Preconditions:
            - ``weights`` is non-empty and its values sum to ``denominator``
              (within tolerance for percentages).
        Postconditions:
            - Sum of all amounts == ``total``; the last entry takes the residual.
        """
        entries = list(weights.items())
        if not entries:
            return []

        last = len(entries) - 1
        allocated = 0
        splits: list[SplitShare] = []
        for i, (pid, weight) in enumerate(entries):
            if i == last:
                amount = total - allocated
            else:
                amount = round_half_up(total, denominator, multiplier=to_decimal(weight))
            allocated += amount
            splits.append(build(pid, amount, weight))

        if splits[-1].amount < 0:
            # Rounding up earlier entries overshot a zero-weight last entry.
            logger.warning("split_negative_residual", extra={
                "participant_id": splits[-1].participant_id,
                "amount": splits[-1].amount,
            })

        logger.debug("split_by_ratio_calculated", extra={
            "total": total,
            "line_count": len(splits),
            "last_entry_amount": splits[-1].amount,
        })
        return splits

    @staticmethod
    def _require(strategy: SplitStrategy, weights):
        if weights is None:
            logger.error("split_missing_weights", extra={"strategy": strategy.value})
            raise InvalidSplitInput(strategy.value, f"weights required for {strategy.value} split")
        return weights

    @staticmethod
    def _as_decimal(strategy: str, pid: str, raw) -> Decimal:
        if isinstance(raw, bool):
            raise InvalidSplitInput(strategy, f"weight for {pid} is not a number", actual=raw)
        try:
            value = to_decimal(raw)
        except (InvalidOperation, TypeError, ValueError) as e:
            raise InvalidSplitInput(strategy, f"weight for {pid} is not a number", actual=raw) from e
        if not value.is_finite():
            raise InvalidSplitInput(strategy, f"weight for {pid} is not finite", actual=raw)
        return value
