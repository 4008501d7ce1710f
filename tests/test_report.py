import pytest
from pydantic import ValidationError

from genrelens.models.genres import AggregationResult
from genrelens.services.report import build_report, percentage


class TestBuildReport:
    def test_ranks_by_count_with_percentages(self):
        result = AggregationResult(tally={"rock": 2, "pop": 3}, total=5)

        ranked = build_report(result)

        assert [(r.genre, r.count, r.percentage) for r in ranked] == [("pop", 3, 60.0), ("rock", 2, 40.0)]

    def test_ties_are_ordered_by_genre_name(self):
        result = AggregationResult(tally={"soul": 1, "funk": 1, "disco": 2, "afrobeat": 1}, total=5)

        assert [r.genre for r in build_report(result)] == ["disco", "afrobeat", "funk", "soul"]

    def test_genre_names_are_case_sensitive(self):
        result = AggregationResult(tally={"Pop": 1, "pop": 1}, total=2)

        assert [r.genre for r in build_report(result)] == ["Pop", "pop"]

    def test_zero_total_returns_empty(self):
        assert build_report(AggregationResult()) == []

    def test_percentages_sum_to_hundred_within_rounding(self):
        tally = {"a": 1, "b": 1, "c": 1, "d": 4, "e": 7}
        result = AggregationResult(tally=tally, total=sum(tally.values()))

        ranked = build_report(result)

        assert abs(sum(r.percentage for r in ranked) - 100.0) <= 0.01 * len(ranked)

    def test_thirds_round_to_two_places(self):
        result = AggregationResult(tally={"a": 1, "b": 1, "c": 1}, total=3)

        assert [r.percentage for r in build_report(result)] == [33.33, 33.33, 33.33]


class TestPercentage:
    def test_rounds_half_away_from_zero(self):
        # 1/8 = 12.5% exactly; 1/16 = 6.25%; 1/32 = 3.125% -> 3.13
        assert percentage(1, 8) == 12.5
        assert percentage(1, 32) == 3.13

    def test_two_thirds(self):
        assert percentage(2, 3) == 66.67


class TestAggregationResult:
    def test_total_must_match_tally(self):
        with pytest.raises(ValidationError):
            AggregationResult(tally={"pop": 2}, total=3)

    def test_is_frozen(self):
        result = AggregationResult(tally={"pop": 1}, total=1)
        with pytest.raises(ValidationError):
            result.total = 2
