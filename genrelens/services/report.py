from decimal import ROUND_HALF_UP, Decimal

from genrelens.models.genres import AggregationResult, RankedGenre

TWO_PLACES = Decimal("0.01")


def percentage(count: int, total: int) -> float:
    """Share of ``total`` as a percentage, rounded half away from zero to two places."""
    value = Decimal(count) * 100 / Decimal(total)
    return float(value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


def build_report(result: AggregationResult) -> list[RankedGenre]:
    """Rank genres by count, most frequent first; equal counts are ordered by genre name."""
    if result.total == 0:
        return []

    ranked = sorted(result.tally.items(), key=lambda item: (-item[1], item[0]))
    return [
        RankedGenre(genre=genre, count=count, percentage=percentage(count, result.total)) for genre, count in ranked
    ]
