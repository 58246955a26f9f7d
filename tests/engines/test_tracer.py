"""Tests for the engine tracer decorator."""

import pytest

from settle_engines.tracer import compute_input_fingerprint, traced_engine
from settle_kernel.domain.values import SimplifiedDebt, SplitStrategy


class _Engine:

    @traced_engine("demo", "2.1", fingerprint_fields=("total", "weights"))
    def run(self, total, weights=None):
        return total

    @traced_engine("failing", "1.0")
    def fail(self):
        raise RuntimeError("boom")


def _traces(captured_logs):
    return [r for r in captured_logs() if r["message"] == "SETTLE_ENGINE_TRACE"]


class TestInputFingerprint:

    def test_deterministic(self):
        args = {"total": 100, "weights": {"a": 1, "b": 2}}

        assert compute_input_fingerprint(("total", "weights"), args) == \
            compute_input_fingerprint(("total", "weights"), args)

    def test_mapping_order_ignored(self):
        first = compute_input_fingerprint(("w",), {"w": {"a": 1, "b": 2}})
        second = compute_input_fingerprint(("w",), {"w": {"b": 2, "a": 1}})

        assert first == second

    def test_values_change_fingerprint(self):
        first = compute_input_fingerprint(("total",), {"total": 100})
        second = compute_input_fingerprint(("total",), {"total": 101})

        assert first != second

    def test_enum_hashed_by_value(self):
        by_enum = compute_input_fingerprint(("s",), {"s": SplitStrategy.EQUAL})
        by_value = compute_input_fingerprint(("s",), {"s": "equal"})

        assert by_enum == by_value

    def test_dataclasses_supported(self):
        fp = compute_input_fingerprint(("d",), {"d": [SimplifiedDebt("a", "b", 5)]})

        assert len(fp) == 16

    def test_missing_field_recorded_as_null(self):
        assert compute_input_fingerprint(("x",), {}) == compute_input_fingerprint(("x",), {"x": None})


class TestTracedEngine:

    def test_trace_emitted(self, captured_logs):
        assert _Engine().run(5) == 5

        traces = _traces(captured_logs)
        assert len(traces) == 1
        assert traces[0]["engine_name"] == "demo"
        assert traces[0]["engine_version"] == "2.1"
        assert traces[0]["function"] == "_Engine.run"
        assert traces[0]["duration_ms"] >= 0

    def test_positional_and_keyword_fingerprints_match(self, captured_logs):
        _Engine().run(5, {"a": 1})
        _Engine().run(total=5, weights={"a": 1})

        first, second = _traces(captured_logs)
        assert first["input_fingerprint"] == second["input_fingerprint"]

    def test_engine_method_fingerprint(self, captured_logs, simplifier):
        simplifier.simplify({})

        trace = next(t for t in _traces(captured_logs) if t["engine_name"] == "simplifier")
        assert len(trace["input_fingerprint"]) == 16

    def test_exception_propagates_without_trace(self, captured_logs):
        with pytest.raises(RuntimeError, match="boom"):
            _Engine().fail()

        assert _traces(captured_logs) == []

    def test_wraps_preserves_name(self):
        assert _Engine.run.__name__ == "run"
