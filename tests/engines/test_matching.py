"""
Tests for the greedy balance matcher shared by split and simplifier engines.
"""

from settle_engines.matching import Transfer, iter_transfers, match_balances, partition


class TestPartition:
    """Tests for creditor/debtor separation."""

    def test_signs_split_and_flipped(self):
        creditors, debtors = partition({"a": 500, "b": -300, "c": -200})

        assert creditors == {"a": 500}
        assert debtors == {"b": 300, "c": 200}

    def test_zero_balances_on_neither_side(self):
        creditors, debtors = partition({"a": 0, "b": 0})

        assert creditors == {}
        assert debtors == {}


class TestMatchBalances:
    """Tests for the transfer sequence."""

    def test_returns_tuple_of_transfers(self):
        transfers = match_balances({"a": 1000, "b": -600, "c": -400})

        assert transfers == (Transfer("b", "a", 600), Transfer("c", "a", 400))

    def test_partially_settled_party_reenters(self):
        """The creditor left with 200 competes again on the next round."""
        transfers = match_balances({"a": 700, "b": 300, "c": -1000})

        assert transfers == (Transfer("c", "a", 700), Transfer("c", "b", 300))

    def test_each_transfer_retires_a_party(self):
        balances = {"a": 400, "b": 400, "c": 200, "d": -500, "e": -500}

        transfers = match_balances(balances)

        assert len(transfers) <= 3 + 2 - 1
        assert sum(t.amount for t in transfers) == 1000

    def test_no_transfers_for_settled_group(self):
        assert match_balances({"a": 0}) == ()

    def test_residue_logged_for_unbalanced_input(self, captured_logs):
        transfers = match_balances({"a": 100, "b": -40})

        assert transfers == (Transfer("b", "a", 40),)
        assert any(r["message"] == "matching_unbalanced_residue" for r in captured_logs())


class TestIterTransfers:
    """Tests for the lazy generator form."""

    def test_yields_in_order(self):
        gen = iter_transfers({"x": -5, "y": -10, "z": 15})

        assert next(gen) == Transfer("y", "z", 10)
        assert next(gen) == Transfer("x", "z", 5)
        assert list(gen) == []

    def test_balanced_input_does_not_log_residue(self, captured_logs):
        list(iter_transfers({"a": 1, "b": -1}))

        assert not any(
            r["message"] == "matching_unbalanced_residue" for r in captured_logs()
        )
