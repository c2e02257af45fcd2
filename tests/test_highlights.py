"""Tests for the highlight recap."""

import logging

import pytest

from replay_factory import conversion, make_match, stock
from setsight.analysis.catalogue import STAT_CATALOGUE, compute_stats
from setsight.analysis.highlights import (
    choose_random,
    compose_highlights,
    make_rng,
    should_include_self_destructs,
    to_highlight,
)
from setsight.analysis.orientation import resolve_orientations
from setsight.core.constants import HIGHLIGHT_FIXED_STATS, StatId

# Slippi move ids
UP_SMASH = 11
FORWARD_AIR = 14


def _summary(matches):
    return compute_stats(matches, resolve_orientations(matches))


@pytest.fixture
def quiet_set():
    """A set where nobody self-destructs."""
    return _summary(
        [
            make_match(
                stocks=[stock(1, 60.0)],
                conversions=[conversion(0, [UP_SMASH], did_kill=True)],
            )
        ]
    )


@pytest.fixture
def sd_heavy_set():
    """Port 1 loses three stocks without the opponent killing."""
    return _summary([make_match(stocks=[stock(0, 10.0), stock(0, 20.0), stock(0, 30.0)])])


def _by_id(outputs, stat_id):
    return next(o for o in outputs if o.id == stat_id)


class TestChooseRandom:
    def test_picks_without_replacement(self):
        items = list(range(10))
        picked = choose_random(items, 4, make_rng(1))
        assert len(picked) == 4
        assert len(set(picked)) == 4
        assert set(picked) <= set(items)

    def test_k_larger_than_items(self):
        assert sorted(choose_random(["a", "b"], 5, make_rng(1))) == ["a", "b"]

    def test_zero_and_empty(self):
        assert choose_random([1, 2, 3], 0, make_rng(1)) == []
        assert choose_random([], 2, make_rng(1)) == []

    def test_input_unchanged(self):
        items = [1, 2, 3, 4]
        choose_random(items, 2, make_rng(3))
        assert items == [1, 2, 3, 4]

    def test_seed_is_reproducible(self):
        items = list(range(20))
        assert choose_random(items, 5, make_rng(42)) == choose_random(items, 5, make_rng(42))


class TestSelfDestructGate:
    def test_above_threshold(self, sd_heavy_set):
        assert should_include_self_destructs(_by_id(sd_heavy_set, StatId.SELF_DESTRUCTS))

    def test_at_or_below_threshold(self, quiet_set):
        assert not should_include_self_destructs(_by_id(quiet_set, StatId.SELF_DESTRUCTS))

    def test_checks_both_players(self):
        """Port 2's count is looked at, not just port 1's."""
        summary = _summary([make_match(stocks=[stock(1, 10.0), stock(1, 20.0)])])
        output = _by_id(summary, StatId.SELF_DESTRUCTS)
        assert [r.simple.number for r in output.results] == [0, 2]
        assert should_include_self_destructs(output)

    def test_missing_output(self):
        assert not should_include_self_destructs(None)


class TestComposeHighlights:
    """Fixed core first, then random extras."""

    def test_fixed_stats_first(self, quiet_set):
        highlights = compose_highlights(quiet_set, make_rng(0))

        assert [h.id for h in highlights[:4]] == list(HIGHLIGHT_FIXED_STATS)
        assert len(highlights) == 6

    def test_extras_are_distinct_and_not_fixed(self, quiet_set):
        for seed in range(20):
            extras = [h.id for h in compose_highlights(quiet_set, make_rng(seed))[4:]]
            assert len(set(extras)) == 2
            assert not set(extras) & set(HIGHLIGHT_FIXED_STATS)

    def test_self_destructs_excluded_when_rare(self, quiet_set):
        for seed in range(50):
            ids = [h.id for h in compose_highlights(quiet_set, make_rng(seed))]
            assert StatId.SELF_DESTRUCTS not in ids

    def test_self_destructs_eligible_when_frequent(self, sd_heavy_set):
        seen = {
            h.id
            for seed in range(50)
            for h in compose_highlights(sd_heavy_set, make_rng(seed))
        }
        assert StatId.SELF_DESTRUCTS in seen

    def test_same_seed_same_recap(self, quiet_set):
        first = [h.to_dict() for h in compose_highlights(quiet_set, make_rng(7))]
        second = [h.to_dict() for h in compose_highlights(quiet_set, make_rng(7))]
        assert first == second

    def test_random_count(self, quiet_set):
        assert len(compose_highlights(quiet_set, make_rng(0), random_count=0)) == 4
        # more extras than candidates just takes them all
        all_extras = compose_highlights(quiet_set, make_rng(0), random_count=100)
        assert len(all_extras) == len(STAT_CATALOGUE) - 1

    def test_missing_fixed_stat_skipped(self, quiet_set, caplog):
        partial = [o for o in quiet_set if o.id != StatId.DAMAGE_DONE]
        with caplog.at_level(logging.WARNING):
            highlights = compose_highlights(partial, make_rng(0), random_count=0)
        assert [h.id for h in highlights] == list(HIGHLIGHT_FIXED_STATS[:3])
        assert "damageDone" in caplog.text


class TestToHighlight:
    """Results are reduced to the value matching the stat type."""

    def test_text_stat(self, quiet_set):
        record = to_highlight(_by_id(quiet_set, StatId.KILL_MOVES))
        assert record.results == ("Up Smash (1)", "N/A")

    def test_number_stat(self, quiet_set):
        record = to_highlight(_by_id(quiet_set, StatId.EARLY_KILLS))
        assert record.results == (60.0, None)

    def test_to_dict(self, quiet_set):
        data = to_highlight(_by_id(quiet_set, StatId.EARLY_KILLS)).to_dict()
        assert data["id"] == "earlyKills"
        assert data["results"] == [60.0, None]
