"""
Highlight recap ("behind the scenes" summary) for a set.

Picks a short, varied subset of the full stat summary:
  - a fixed core (kill moves, neutral openers, openings/kill, damage done)
  - self-destructs, but only when somebody actually kept falling off
  - a couple of randomly chosen extras

The random source is injected so a fixed seed gives a reproducible recap.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TypeVar

import numpy as np

from setsight.analysis.models import HighlightRecord, StatOutput
from setsight.core.constants import (
    HIGHLIGHT_FIXED_STATS,
    HIGHLIGHT_RANDOM_COUNT,
    SELF_DESTRUCT_HIGHLIGHT_THRESHOLD,
    StatId,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def make_rng(seed: int | None = None) -> np.random.Generator:
    """Random source for highlight selection; pass a seed for repeatable runs."""
    return np.random.default_rng(seed)


def choose_random(items: Sequence[T], k: int, rng: np.random.Generator) -> list[T]:
    """
    Pick ``k`` items uniformly at random without replacement.

    The input is not modified. When ``k`` exceeds the number of items every
    item is returned, in random order.
    """
    k = min(k, len(items))
    if k <= 0:
        return []
    indices = rng.choice(len(items), size=k, replace=False)
    return [items[int(i)] for i in indices]


def to_highlight(output: StatOutput) -> HighlightRecord:
    """Reduce each result to the simple value matching the stat's type."""
    value_type = output.definition.value_type
    return HighlightRecord(
        definition=output.definition,
        results=tuple(r.simple.get(value_type) for r in output.results),
    )


def should_include_self_destructs(
    output: StatOutput | None,
    threshold: int = SELF_DESTRUCT_HIGHLIGHT_THRESHOLD,
) -> bool:
    """True when any player's self-destruct count exceeds the threshold."""
    if output is None:
        return False
    return any(
        r.simple.number is not None and r.simple.number > threshold for r in output.results
    )


def compose_highlights(
    summary: Sequence[StatOutput],
    rng: np.random.Generator,
    fixed_stats: Sequence[StatId] = HIGHLIGHT_FIXED_STATS,
    random_count: int = HIGHLIGHT_RANDOM_COUNT,
    self_destruct_threshold: int = SELF_DESTRUCT_HIGHLIGHT_THRESHOLD,
) -> list[HighlightRecord]:
    """
    Build the highlight recap from the full stat summary.

    Args:
        summary: Stat outputs in catalogue order
        rng: Random source used for the extra picks
        fixed_stats: Stats that always appear, in this order
        random_count: Number of extra stats drawn from the rest
        self_destruct_threshold: Self-destructs are eligible only above this

    Returns:
        Fixed highlights followed by the randomly drawn ones
    """
    by_id = {output.id: output for output in summary}

    highlights = []
    for stat_id in fixed_stats:
        output = by_id.get(stat_id)
        if output is None:
            logger.warning(f"Fixed highlight stat missing from summary: {stat_id}")
            continue
        highlights.append(to_highlight(output))

    include_sds = should_include_self_destructs(
        by_id.get(StatId.SELF_DESTRUCTS), self_destruct_threshold
    )
    candidates = [
        output
        for output in summary
        if output.id not in fixed_stats
        and (output.id != StatId.SELF_DESTRUCTS or include_sds)
    ]

    for output in choose_random(candidates, random_count, rng):
        highlights.append(to_highlight(output))

    return highlights
