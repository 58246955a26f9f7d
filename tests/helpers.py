"""Builders shared by the engine and property tests."""

from settle_kernel.domain.values import (
    Expense,
    PayerShare,
    Settlement,
    SettlementStatus,
    SplitShare,
)


def make_expense(expense_id, payers, splits, currency="INR"):
    """
    Build an Expense from ``{pid: amount}`` dicts.

    The total is taken from the payers.
    """
    return Expense(
        expense_id=expense_id,
        total_amount=sum(payers.values()),
        payers=tuple(PayerShare(pid, amount) for pid, amount in payers.items()),
        splits=tuple(SplitShare(pid, amount) for pid, amount in splits.items()),
        currency=currency,
    )


def make_settlement(from_id, to_id, amount, status=SettlementStatus.CONFIRMED):
    return Settlement(
        from_participant_id=from_id,
        to_participant_id=to_id,
        amount=amount,
        status=status,
    )


def apply_debts(balances, debts):
    """Apply payment instructions back onto a balance map."""
    result = dict(balances)
    for debt in debts:
        result[debt.from_participant_id] = result.get(debt.from_participant_id, 0) + debt.amount
        result[debt.to_participant_id] = result.get(debt.to_participant_id, 0) - debt.amount
    return result
