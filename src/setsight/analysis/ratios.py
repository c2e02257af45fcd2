"""
Ratio aggregation across matches.

Ratios from several matches are combined by summing counts and totals,
never by averaging the per-match ratios: a two-opening match must not weigh
as much as a forty-opening one.
"""

from __future__ import annotations

from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Literal

from setsight.analysis.models import RatioAccumulator, RatioObservation, SimpleValue
from setsight.core.constants import NOT_AVAILABLE

RatioKind = Literal["ratio", "count"]


def aggregate_ratios(observations: Iterable[RatioObservation]) -> RatioAccumulator:
    """
    Combine per-match count/total observations into one weighted ratio.

    Args:
        observations: Per-match observations for a single player

    Returns:
        RatioAccumulator with summed count and total; ``ratio`` is None
        when the summed total is zero
    """
    count = 0
    total = 0
    for observation in observations:
        count += observation.count
        total += observation.total

    ratio = count / total if total else None
    return RatioAccumulator(count=count, total=total, ratio=ratio)


def format_fixed(value: float, digits: int) -> str:
    """
    Fixed-point rendering, e.g. ``format_fixed(2.345, 1) -> "2.3"``.

    Exact ties round away from zero (``2.25 -> "2.3"``), not to even.
    """
    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def simple_from_ratio(
    accumulator: RatioAccumulator,
    digits: int,
    kind: RatioKind = "ratio",
) -> SimpleValue:
    """
    Project an accumulator onto its human-readable value.

    ``kind="ratio"`` reports the weighted ratio (``"N/A"`` when undefined);
    ``kind="count"`` reports the summed count.
    """
    if kind == "count":
        return SimpleValue(text=format_fixed(accumulator.count, digits), number=accumulator.count)

    if accumulator.ratio is None:
        return SimpleValue(text=NOT_AVAILABLE, number=None)
    return SimpleValue(text=format_fixed(accumulator.ratio, digits), number=accumulator.ratio)
