"""Tests for stats cache loading and normalization."""

from __future__ import annotations

from pathlib import Path

from result import Err, Ok

from usage_report.config import Config
from usage_report.data.stats import load_snapshot, normalize_snapshot


class TestNormalizeSnapshot:
    def test_sample(self, sample_stats: dict[str, object]) -> None:
        result = normalize_snapshot(sample_stats)
        assert isinstance(result, Ok)
        snapshot = result.ok_value
        assert list(snapshot.model_usage) == [
            "claude-sonnet-4-5-20250929",
            "claude-opus-4-6",
            "claude-haiku-4-5-20251001",
        ]
        assert snapshot.model_usage["claude-haiku-4-5-20251001"].cache_read_input_tokens == 0
        assert snapshot.hour_counts == {9: 40, 10: 80, 23: 40}
        assert snapshot.daily_activity[2].tool_call_count == 0
        assert snapshot.total_messages == 160
        assert snapshot.first_session_date == "2026-01-01T09:00:00.000Z"

    def test_nulls_and_missing_become_defaults(self) -> None:
        raw = {
            "modelUsage": {"m": {"inputTokens": None, "outputTokens": 3}},
            "dailyActivity": None,
            "hourCounts": None,
        }
        result = normalize_snapshot(raw)
        assert isinstance(result, Ok)
        snapshot = result.ok_value
        assert snapshot.model_usage["m"].input_tokens == 0
        assert snapshot.model_usage["m"].total == 3
        assert snapshot.daily_activity == []
        assert snapshot.hour_counts == {}
        assert snapshot.total_sessions is None

    def test_empty_object(self) -> None:
        result = normalize_snapshot({})
        assert isinstance(result, Ok)
        assert result.ok_value.model_usage == {}

    def test_numeric_strings_are_coerced(self) -> None:
        result = normalize_snapshot({"modelUsage": {"m": {"outputTokens": "12"}}})
        assert isinstance(result, Ok)
        assert result.ok_value.model_usage["m"].output_tokens == 12

    def test_not_an_object(self) -> None:
        result = normalize_snapshot([1, 2])
        assert isinstance(result, Err)
        assert "JSON object" in result.err_value

    def test_negative_counts_rejected(self) -> None:
        result = normalize_snapshot({"modelUsage": {"m": {"inputTokens": -1}}})
        assert isinstance(result, Err)
        assert "modelUsage.m.inputTokens" in result.err_value

    def test_non_numeric_rejected(self) -> None:
        result = normalize_snapshot(
            {"dailyActivity": [{"date": "2026-01-01", "messageCount": "lots"}]}
        )
        assert isinstance(result, Err)
        assert "messageCount" in result.err_value

    def test_wrong_shapes_rejected(self) -> None:
        assert isinstance(normalize_snapshot({"modelUsage": []}), Err)
        assert isinstance(normalize_snapshot({"dailyActivity": {"a": 1}}), Err)
        assert isinstance(normalize_snapshot({"dailyActivity": [{"messageCount": 1}]}), Err)

    def test_hour_out_of_range_rejected(self) -> None:
        result = normalize_snapshot({"hourCounts": {"24": 1}})
        assert isinstance(result, Err)
        assert "hourCounts" in result.err_value

    def test_error_list_truncated(self) -> None:
        raw = {"modelUsage": {f"m{i}": {"inputTokens": -1} for i in range(8)}}
        result = normalize_snapshot(raw)
        assert isinstance(result, Err)
        assert "and 3 more" in result.err_value


class TestLoadSnapshot:
    def test_loads_file(self, test_config: Config) -> None:
        result = load_snapshot(test_config.stats_cache_path)
        assert isinstance(result, Ok)
        assert result.ok_value.last_computed_date == "2026-01-04"

    def test_missing_file(self, tmp_path: Path) -> None:
        result = load_snapshot(tmp_path / "stats-cache.json")
        assert isinstance(result, Err)
        assert "not found" in result.err_value

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "stats-cache.json"
        path.write_text("{bad-json", encoding="utf-8")
        result = load_snapshot(path)
        assert isinstance(result, Err)
        assert "Failed to read" in result.err_value

    def test_non_utf8_file(self, tmp_path: Path) -> None:
        path = tmp_path / "stats-cache.json"
        path.write_bytes(b'{"lastComputedDate":"\xff"}')
        result = load_snapshot(path)
        assert isinstance(result, Err)
        assert "Failed to read" in result.err_value
