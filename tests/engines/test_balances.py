"""
Tests for the Balance Aggregator.

Covers:
- Payer credit and split debit
- Confirmed vs pending/rejected settlements
- Sparse output (only referenced participants)
- Zero-sum property over balanced input
- Ordered per-participant summary
"""

from settle_kernel.domain.values import Expense, SettlementStatus
from tests.helpers import make_expense, make_settlement


class TestComputeBalances:
    """Tests for expense aggregation."""

    def test_single_expense(self, aggregator):
        expense = make_expense(
            "e1", payers={"alice": 10000}, splits={"alice": 5000, "bob": 5000}
        )

        balances = aggregator.compute_balances([expense])

        assert balances == {"alice": 5000, "bob": -5000}

    def test_multiple_expenses_net_out(self, aggregator):
        expenses = [
            make_expense("e1", {"alice": 10000}, {"alice": 5000, "bob": 5000}),
            make_expense("e2", {"bob": 6000}, {"alice": 3000, "bob": 3000}),
        ]

        balances = aggregator.compute_balances(expenses)

        assert balances == {"alice": 2000, "bob": -2000}

    def test_multi_payer_expense(self, aggregator):
        expense = make_expense(
            "e1",
            payers={"alice": 6000, "bob": 3000},
            splits={"alice": 3000, "bob": 3000, "carol": 3000},
        )

        balances = aggregator.compute_balances([expense])

        assert balances == {"alice": 3000, "bob": 0, "carol": -3000}

    def test_balances_sum_to_zero(self, aggregator):
        expenses = [
            make_expense("e1", {"alice": 9000}, {"alice": 3000, "bob": 3000, "carol": 3000}),
            make_expense("e2", {"carol": 4000}, {"bob": 1000, "carol": 3000}),
            make_expense("e3", {"bob": 500, "carol": 700}, {"alice": 1200}),
        ]

        balances = aggregator.compute_balances(expenses)

        assert sum(balances.values()) == 0

    def test_no_expenses(self, aggregator):
        assert aggregator.compute_balances([]) == {}

    def test_expense_without_shares(self, aggregator):
        assert aggregator.compute_balances([Expense("empty", 0)]) == {}

    def test_only_referenced_participants_present(self, aggregator):
        expense = make_expense("e1", {"alice": 100}, {"bob": 100})

        balances = aggregator.compute_balances([expense])

        assert "carol" not in balances
        assert set(balances) == {"alice", "bob"}

    def test_accepts_generator(self, aggregator):
        expenses = (
            make_expense(f"e{i}", {"alice": 100}, {"bob": 100}) for i in range(3)
        )

        assert aggregator.compute_balances(expenses) == {"alice": 300, "bob": -300}

    def test_unbalanced_expense_logged_not_raised(self, aggregator, captured_logs):
        expense = make_expense("e1", {"alice": 100}, {"bob": 90})

        balances = aggregator.compute_balances([expense])

        assert balances == {"alice": 100, "bob": -90}
        assert any(
            r["message"] == "balances_unbalanced_expenses" and r["unbalanced_count"] == 1
            for r in captured_logs()
        )


class TestSettlements:
    """Tests for settlement application."""

    def test_confirmed_settlement_applied(self, aggregator):
        expense = make_expense("e1", {"alice": 10000}, {"alice": 5000, "bob": 5000})
        payment = make_settlement("bob", "alice", 5000)

        balances = aggregator.compute_balances([expense], [payment])

        # Settled participants remain present at zero.
        assert balances == {"alice": 0, "bob": 0}

    def test_partial_settlement(self, aggregator):
        expense = make_expense("e1", {"alice": 10000}, {"alice": 5000, "bob": 5000})
        payment = make_settlement("bob", "alice", 2000)

        balances = aggregator.compute_balances([expense], [payment])

        assert balances == {"alice": 3000, "bob": -3000}

    def test_pending_settlement_ignored(self, aggregator):
        expense = make_expense("e1", {"alice": 10000}, {"alice": 5000, "bob": 5000})
        payment = make_settlement("bob", "alice", 5000, status=SettlementStatus.PENDING)

        balances = aggregator.compute_balances([expense], [payment])

        assert balances == {"alice": 5000, "bob": -5000}

    def test_rejected_settlement_ignored(self, aggregator):
        expense = make_expense("e1", {"alice": 10000}, {"alice": 5000, "bob": 5000})
        payment = make_settlement("bob", "alice", 5000, status=SettlementStatus.REJECTED)

        balances = aggregator.compute_balances([expense], [payment])

        assert balances == {"alice": 5000, "bob": -5000}

    def test_settlement_only_participants_appear(self, aggregator):
        payment = make_settlement("dave", "erin", 700)

        balances = aggregator.compute_balances([], [payment])

        assert balances == {"dave": 700, "erin": -700}

    def test_settlement_counts_logged(self, aggregator, captured_logs):
        aggregator.compute_balances(
            [],
            [
                make_settlement("a", "b", 1),
                make_settlement("a", "b", 1, status=SettlementStatus.PENDING),
            ],
        )

        record = next(r for r in captured_logs() if r["message"] == "balances_computed")
        assert record["settlements_applied"] == 1
        assert record["settlements_skipped"] == 1


class TestSummarize:
    """Tests for the per-participant summary view."""

    def test_ordered_by_balance_then_id(self, aggregator):
        summary = aggregator.summarize({"bob": -600, "carol": 600, "alice": 600, "dave": 0})

        assert [p.participant_id for p in summary] == ["alice", "carol", "dave", "bob"]

    def test_flags(self, aggregator):
        summary = aggregator.summarize({"a": 10, "b": 0, "c": -10})

        assert [p.is_owed for p in summary] == [True, False, False]
        assert [p.is_settled for p in summary] == [False, True, False]
        assert [p.owes for p in summary] == [False, False, True]

    def test_display_names_with_unknown_fallback(self, aggregator):
        summary = aggregator.summarize({"a": 10, "b": -10}, {"a": "Asha"})

        assert summary[0].display_name == "Asha"
        assert summary[1].display_name == "Unknown"
