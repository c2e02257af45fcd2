"""
Stat Catalogue

The fixed registry of set statistics. Each definition is a pure function of
the filtered match set, a (subject, opponent) pair of player indices and the
definition's rounding digits, so one implementation serves both players.

Categories:
- Ratio stats: summed per-match ratios from the replay's overall block
- Extremal events: earliest kill, latest death, biggest punish
- Most common moves: kill moves and neutral openers
- Self-destructs: stocks lost without an opponent kill credited
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable, Mapping, Sequence
from types import MappingProxyType

from setsight.analysis.models import (
    Conversion,
    MatchRecord,
    MoveCount,
    MoveLanded,
    OverallStats,
    PlayerOrientation,
    PortResult,
    RatioAccumulator,
    RatioObservation,
    SimpleValue,
    StatDefinition,
    StatOutput,
    StatResult,
    Stock,
)
from setsight.analysis.ratios import RatioKind, aggregate_ratios, format_fixed, simple_from_ratio
from setsight.core.constants import (
    NEUTRAL_WIN_OPENING,
    NOT_AVAILABLE,
    TOP_EVENT_COUNT,
    BetterDirection,
    StatId,
    ValueType,
)
from setsight.core.lookup import get_move_name, get_move_short_name

logger = logging.getLogger(__name__)


# =============================================================================
# Ratio Stats
# =============================================================================

# Overall-block field name -> accessor
RATIO_ACCESSORS: Mapping[str, Callable[[OverallStats], RatioObservation]] = MappingProxyType(
    {
        "openingsPerKill": lambda o: o.openings_per_kill,
        "damagePerOpening": lambda o: o.damage_per_opening,
        "neutralWinRatio": lambda o: o.neutral_win_ratio,
        "inputsPerMinute": lambda o: o.inputs_per_minute,
    }
)


def overall_ratio_stat(
    matches: Sequence[MatchRecord],
    player_index: int,
    field: str,
    digits: int,
    kind: RatioKind = "ratio",
) -> StatResult:
    """Sum one overall ratio field for a player across the set."""
    accessor = RATIO_ACCESSORS[field]
    observations = []
    for match in matches:
        overall = match.overall_for(player_index)
        if overall is not None:
            observations.append(accessor(overall))

    accumulated = aggregate_ratios(observations)
    return StatResult(result=accumulated, simple=simple_from_ratio(accumulated, digits, kind))


def _ratio_compute(field: str, kind: RatioKind = "ratio"):
    if field not in RATIO_ACCESSORS:
        raise KeyError(f"Unknown overall ratio field: {field}")

    def compute(matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int) -> StatResult:
        return overall_ratio_stat(matches, subject, field, digits, kind)

    return compute


# =============================================================================
# Event Collection
# =============================================================================


def _ended_stocks(matches: Iterable[MatchRecord], player_index: int) -> list[Stock]:
    return [
        stock
        for match in matches
        for stock in match.stats.stocks
        if stock.player_index == player_index and stock.end_percent is not None
    ]


def _conversions(matches: Iterable[MatchRecord], player_index: int) -> list[Conversion]:
    return [c for match in matches for c in match.stats.conversions if c.player_index == player_index]


def _extremal_result(events: list, key: Callable, digits: int, descending: bool) -> StatResult:
    ordered = sorted(events, key=key, reverse=descending)
    if not ordered:
        return StatResult(result=[], simple=SimpleValue(text=NOT_AVAILABLE, number=None))

    best = key(ordered[0])
    return StatResult(
        result=ordered[:TOP_EVENT_COUNT],
        simple=SimpleValue(text=format_fixed(best, digits), number=best),
    )


def _rank_moves(moves: Iterable[MoveLanded]) -> StatResult:
    counts = Counter(move.move_id for move in moves)
    # most_common() keeps first-seen order between equal counts
    ranked = [
        MoveCount(
            move_id=move_id,
            name=get_move_name(move_id),
            short_name=get_move_short_name(move_id),
            count=count,
        )
        for move_id, count in counts.most_common()
    ]
    if not ranked:
        return StatResult(result=[], simple=SimpleValue(text=NOT_AVAILABLE, number=None))

    top = ranked[0]
    return StatResult(result=ranked, simple=SimpleValue(text=f"{top.name} ({top.count})", number=top.count))


# =============================================================================
# Stat Computations
# =============================================================================


def kill_moves(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    """Rank the last move of every conversion the subject finished with a kill."""
    moves = [c.moves[-1] for c in _conversions(matches, subject) if c.did_kill and c.moves]
    return _rank_moves(moves)


def neutral_opener_moves(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    """Rank the first move of every conversion the subject opened from neutral."""
    moves = [
        c.moves[0]
        for c in _conversions(matches, subject)
        if c.opening_type == NEUTRAL_WIN_OPENING and c.moves
    ]
    return _rank_moves(moves)


def early_kills(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    """Lowest percents the opponent lost a stock at."""
    stocks = _ended_stocks(matches, opponent)
    return _extremal_result(stocks, key=lambda s: s.end_percent, digits=digits, descending=False)


def late_deaths(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    """Highest percents the subject lost a stock at."""
    stocks = _ended_stocks(matches, subject)
    return _extremal_result(stocks, key=lambda s: s.end_percent, digits=digits, descending=True)


def high_damage_punishes(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    punishes = [c for c in _conversions(matches, subject) if c.end_percent is not None]
    return _extremal_result(punishes, key=lambda c: c.damage, digits=digits, descending=True)


def self_destructs(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    """
    Stocks the subject lost that no opponent kill accounts for.

    Per match: ended subject stocks minus opponent conversions that killed.
    A match can contribute a negative amount and the total is not clamped.
    """
    total = 0
    for match in matches:
        lost = len(_ended_stocks([match], subject))
        killed_by_opponent = sum(1 for c in _conversions([match], opponent) if c.did_kill)
        total += lost - killed_by_opponent

    return StatResult(result=total, simple=SimpleValue(text=format_fixed(total, digits), number=total))


def avg_kill_percent(
    matches: Sequence[MatchRecord], subject: int, opponent: int, digits: int
) -> StatResult:
    """Mean percent of the opponent's ended stocks."""
    stocks = _ended_stocks(matches, opponent)
    total = len(stocks)
    count = sum(s.end_percent for s in stocks)
    accumulated = RatioAccumulator(count=count, total=total, ratio=count / total if total else None)
    return StatResult(result=accumulated, simple=simple_from_ratio(accumulated, digits))


# =============================================================================
# Registry
# =============================================================================

STAT_CATALOGUE: tuple[StatDefinition, ...] = (
    StatDefinition(
        id=StatId.OPENINGS_PER_KILL,
        display_name="Openings / Kill",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.LOWER,
        rounding_digits=1,
        compute=_ratio_compute("openingsPerKill"),
    ),
    StatDefinition(
        id=StatId.DAMAGE_PER_OPENING,
        display_name="Damage / Opening",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.HIGHER,
        rounding_digits=1,
        compute=_ratio_compute("damagePerOpening"),
    ),
    StatDefinition(
        id=StatId.NEUTRAL_WINS,
        display_name="Neutral Wins",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.HIGHER,
        rounding_digits=0,
        compute=_ratio_compute("neutralWinRatio", "count"),
    ),
    StatDefinition(
        id=StatId.KILL_MOVES,
        display_name="Most Common Kill Move",
        value_type=ValueType.TEXT,
        compute=kill_moves,
    ),
    StatDefinition(
        id=StatId.NEUTRAL_OPENER_MOVES,
        display_name="Most Common Neutral Opener",
        value_type=ValueType.TEXT,
        compute=neutral_opener_moves,
    ),
    StatDefinition(
        id=StatId.EARLY_KILLS,
        display_name="Earliest Kill",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.LOWER,
        rounding_digits=1,
        compute=early_kills,
    ),
    StatDefinition(
        id=StatId.LATE_DEATHS,
        display_name="Latest Death",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.HIGHER,
        rounding_digits=1,
        compute=late_deaths,
    ),
    StatDefinition(
        id=StatId.SELF_DESTRUCTS,
        display_name="Total Self-Destructs",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.LOWER,
        rounding_digits=0,
        compute=self_destructs,
    ),
    StatDefinition(
        id=StatId.INPUTS_PER_MINUTE,
        display_name="Inputs / Minute",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.HIGHER,
        rounding_digits=1,
        compute=_ratio_compute("inputsPerMinute"),
    ),
    StatDefinition(
        id=StatId.AVG_KILL_PERCENT,
        display_name="Average Kill Percent",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.LOWER,
        rounding_digits=1,
        compute=avg_kill_percent,
    ),
    StatDefinition(
        id=StatId.HIGH_DAMAGE_PUNISHES,
        display_name="Highest Damage Punish",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.HIGHER,
        rounding_digits=1,
        compute=high_damage_punishes,
    ),
    StatDefinition(
        id=StatId.DAMAGE_DONE,
        display_name="Total Damage Done",
        value_type=ValueType.NUMBER,
        better_direction=BetterDirection.HIGHER,
        rounding_digits=1,
        compute=_ratio_compute("damagePerOpening", "count"),
    ),
)

STATS_BY_ID: Mapping[StatId, StatDefinition] = MappingProxyType(
    {definition.id: definition for definition in STAT_CATALOGUE}
)


def get_definition(stat_id: StatId | str) -> StatDefinition:
    """Look up a definition by id; raises ValueError for unknown ids."""
    return STATS_BY_ID[StatId(stat_id)]


def _subject_port(matches: Sequence[MatchRecord], player_index: int) -> int:
    player = matches[0].player(player_index) if matches else None
    return player.port if player is not None else player_index + 1


def compute_stats(
    matches: Sequence[MatchRecord],
    orientations: Sequence[PlayerOrientation],
    definitions: Sequence[StatDefinition] = STAT_CATALOGUE,
) -> list[StatOutput]:
    """
    Evaluate every definition for every orientation.

    Args:
        matches: Filtered match set
        orientations: Player orientations, usually from resolve_orientations()
        definitions: Definitions to evaluate, catalogue order by default

    Returns:
        One StatOutput per definition, results in orientation order
    """
    outputs = []
    for definition in definitions:
        results = tuple(
            PortResult(
                port=_subject_port(matches, o.subject_index),
                stat=definition.evaluate(matches, o.subject_index, o.opponent_index),
            )
            for o in orientations
        )
        outputs.append(StatOutput(definition=definition, results=results))

    logger.debug(f"Computed {len(outputs)} stats for {len(orientations)} orientations")
    return outputs
