"""Tests for run history decoding."""

import json

import pytest

from wbglance.api.history import (
    DecodedSnapshot,
    EncodedSnapshot,
    classify_entry,
    decode_history,
    normalize_snapshot,
    numeric_value,
)


def _by_name(series_list):
    return {s.name: [(p.step, p.value) for p in s.points] for s in series_list}


class TestDecodeHistory:
    """Tests for decode_history."""

    def test_mixed_string_and_object_snapshots(self):
        """Test the canonical mixed-representation example."""
        history = [
            '{"_step":0,"loss":0.5,"note":"x"}',
            {"_step": 1, "loss": 0.3, "acc": 1},
        ]

        result = _by_name(decode_history(history))

        assert result == {"loss": [(0, 0.5), (1, 0.3)], "acc": [(1, 1.0)]}

    def test_reserved_keys_are_skipped(self):
        """Test that bookkeeping keys never become series."""
        history = [{"_step": 10, "_runtime": 1.5, "_timestamp": 1700000000.0, "lr": 0.1}]

        result = _by_name(decode_history(history))

        assert list(result) == ["lr"]

    def test_step_is_position_not_recorded_step(self):
        """Test that steps come from history position, not the _step field."""
        history = [{"_step": 100, "loss": 1.0}, {"_step": 200, "loss": 0.5}]

        assert _by_name(decode_history(history))["loss"] == [(0, 1.0), (1, 0.5)]

    def test_integers_are_coerced_to_float(self):
        """Test that integer values become floats."""
        series = decode_history([{"epoch": 3}])[0]

        assert series.points[0].value == 3.0
        assert isinstance(series.points[0].value, float)

    @pytest.mark.parametrize("value", ["text", True, False, None, [1, 2], {"nested": 1}])
    def test_non_numeric_values_are_ignored(self, value):
        """Test that non-numeric values yield no samples."""
        assert decode_history([{"metric": value}]) == []

    def test_key_with_some_numeric_values(self):
        """Test that a key only collects its numeric samples."""
        history = [{"m": "warmup"}, {"m": 2}, {"m": None}, {"m": 4.5}]

        assert _by_name(decode_history(history)) == {"m": [(1, 2.0), (3, 4.5)]}

    def test_undecodable_entries_are_skipped(self):
        """Test that bad entries do not abort the batch or consume a step."""
        history = [
            {"loss": 1.0},
            "not json",
            42,
            None,
            "[1, 2, 3]",
            json.dumps({"loss": 0.8}),
        ]

        assert _by_name(decode_history(history)) == {"loss": [(0, 1.0), (1, 0.8)]}

    def test_steps_strictly_increase_within_series(self):
        """Test ordering of points inside a series."""
        history = [{"a": i, "b": i * 2} if i % 3 else {"b": -1} for i in range(30)]

        for series in decode_history(history):
            steps = series.steps
            assert steps == sorted(steps)
            assert len(set(steps)) == len(steps)

    def test_point_count_matches_numeric_occurrences(self):
        """Test that each series has one point per snapshot with a numeric value."""
        history = [{"a": 1}, {"b": 2}, {"a": 3, "b": "x"}, {"a": 4, "b": 5}]

        result = _by_name(decode_history(history))

        assert len(result["a"]) == 3
        assert len(result["b"]) == 2

    def test_empty_history(self):
        """Test that an empty history produces no series."""
        assert decode_history([]) == []


class TestSnapshotHelpers:
    """Tests for the per-entry helpers."""

    def test_classify_entry(self):
        assert classify_entry('{"a": 1}') == EncodedSnapshot('{"a": 1}')
        assert classify_entry({"a": 1}) == DecodedSnapshot({"a": 1})
        assert classify_entry(3.5) is None
        assert classify_entry(["a"]) is None

    def test_normalize_snapshot(self):
        assert normalize_snapshot(EncodedSnapshot('{"a": 1}')) == {"a": 1}
        assert normalize_snapshot(EncodedSnapshot('"just a string"')) is None
        assert normalize_snapshot(EncodedSnapshot("{broken")) is None
        assert normalize_snapshot(DecodedSnapshot({"b": 2})) == {"b": 2}

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(1, 1.0), (2.5, 2.5), (-3, -3.0), (True, None), ("1", None), (None, None), ({}, None), ([], None)],
    )
    def test_numeric_value(self, value, expected):
        assert numeric_value(value) == expected
