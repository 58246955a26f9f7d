"""
Values -- Immutable domain value objects for expense sharing.

Responsibility:
    Defines the records that flow through the split, balance and
    simplification engines: participants, payer and split shares, expenses,
    settlements, simplified debts and explanation steps.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.
    Imported by every engine. No outward dependencies.

Invariants enforced:
    - All monetary amounts are ``int`` minor units (paisa for INR); floats
      never represent money.
    - PayerShare.amount > 0 and SimplifiedDebt.amount > 0, checked at
      construction.
    - Objects are frozen; changes produce new objects (``dataclasses.replace``).

Non-goals:
    - Expense does NOT check ``sum(payers) == sum(splits) == total_amount``
      at construction. That is a caller guarantee; ``is_balanced`` lets
      callers assert it.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType

UNKNOWN_NAME = "Unknown"


class SplitStrategy(str, Enum):
    """How a total expense amount is divided among participants."""

    EQUAL = "equal"
    EXACT = "exact"
    PERCENTAGE = "percentage"
    SHARES = "shares"

    @property
    def display_name(self) -> str:
        return _STRATEGY_LABELS[self][0]

    @property
    def description(self) -> str:
        return _STRATEGY_LABELS[self][1]


_STRATEGY_LABELS: dict[SplitStrategy, tuple[str, str]] = {
    SplitStrategy.EQUAL: ("Equal", "Split equally among all participants"),
    SplitStrategy.EXACT: ("Exact Amounts", "Specify exact amount for each person"),
    SplitStrategy.PERCENTAGE: ("Percentage", "Split by percentage"),
    SplitStrategy.SHARES: ("Shares", "Split by ratio/shares"),
}


class SettlementStatus(str, Enum):
    """Lifecycle state of a recorded payment."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Participant:
    """A member of an expense. Identity is ``participant_id``."""

    participant_id: str
    display_name: str = field(default="", compare=False)


@dataclass(frozen=True)
class PayerShare:
    """
    Amount one participant contributed toward paying an expense.

    Guarantees:
        - ``amount`` is strictly positive.
    """

    participant_id: str
    amount: int
    display_name: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(
                f"Payer amount must be positive, got {self.amount} "
                f"for {self.participant_id}"
            )


@dataclass(frozen=True)
class SplitShare:
    """
    Amount one participant owes for one expense.

    ``percentage`` and ``share_units`` record how the amount was derived;
    balance aggregation ignores them.
    """

    participant_id: str
    amount: int
    display_name: str = field(default="", compare=False)
    percentage: Decimal | None = None
    share_units: int | None = None
    settled: bool = False


@dataclass(frozen=True)
class Expense:
    """
    A shared expense: who paid and who owes.

    Contract:
        Callers guarantee ``total_paid == total_split == total_amount``.
    """

    expense_id: str
    total_amount: int
    payers: tuple[PayerShare, ...] = ()
    splits: tuple[SplitShare, ...] = ()
    currency: str = "INR"
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "payers", tuple(self.payers))
        object.__setattr__(self, "splits", tuple(self.splits))

    @property
    def total_paid(self) -> int:
        return sum(p.amount for p in self.payers)

    @property
    def total_split(self) -> int:
        return sum(s.amount for s in self.splits)

    @property
    def is_balanced(self) -> bool:
        """True when payers and splits both reconcile to the total."""
        return self.total_paid == self.total_amount == self.total_split

    @property
    def is_multi_payer(self) -> bool:
        return len(self.payers) > 1

    @property
    def participant_ids(self) -> tuple[str, ...]:
        return tuple(s.participant_id for s in self.splits)

    def amount_paid_by(self, participant_id: str) -> int:
        return sum(p.amount for p in self.payers if p.participant_id == participant_id)

    def split_for(self, participant_id: str) -> SplitShare | None:
        for split in self.splits:
            if split.participant_id == participant_id:
                return split
        return None

    def net_balance_for(self, participant_id: str) -> int:
        """Positive = owed to this participant, negative = they owe."""
        split = self.split_for(participant_id)
        owed = split.amount if split is not None else 0
        return self.amount_paid_by(participant_id) - owed


@dataclass(frozen=True)
class Settlement:
    """A recorded payment from one participant to another."""

    from_participant_id: str
    to_participant_id: str
    amount: int
    status: SettlementStatus = SettlementStatus.PENDING
    settlement_id: str = ""

    @property
    def is_confirmed(self) -> bool:
        return self.status == SettlementStatus.CONFIRMED


@dataclass(frozen=True)
class ParticipantBalance:
    """Net position of one participant; positive = owed money."""

    participant_id: str
    display_name: str
    balance: int

    @property
    def is_owed(self) -> bool:
        return self.balance > 0

    @property
    def owes(self) -> bool:
        return self.balance < 0

    @property
    def is_settled(self) -> bool:
        return self.balance == 0


@dataclass(frozen=True)
class SimplifiedDebt:
    """
    One payment instruction in a settlement plan.

    Equality ignores the display names.
    """

    from_participant_id: str
    to_participant_id: str
    amount: int
    from_name: str = field(default=UNKNOWN_NAME, compare=False)
    to_name: str = field(default=UNKNOWN_NAME, compare=False)

    def __post_init__(self) -> None:
        if self.amount <= 0:
            raise ValueError(f"Debt amount must be positive, got {self.amount}")


@dataclass(frozen=True)
class SimplificationStep:
    """
    One entry of the explanation trace produced alongside simplification.

    ``balances`` is a read-only snapshot taken when the step was recorded.
    """

    title: str
    description: str
    balances: Mapping[str, int] = field(hash=False)
    produced_debt: SimplifiedDebt | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "balances", MappingProxyType(dict(self.balances)))
