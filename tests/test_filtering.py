"""Tests for match set filtering and player orientations."""

import logging

import pytest

from replay_factory import make_match
from setsight.analysis.filtering import (
    NoValidMatchSetError,
    filter_matches,
    group_by_port_signature,
)
from setsight.analysis.orientation import resolve_orientations
from setsight.core.constants import ExclusionReason


class TestPortSignature:
    """Tests for matchup identity."""

    def test_signature_follows_player_order(self):
        """Signatures are not sorted: 1-2 and 2-1 are different matchups."""
        assert make_match(ports=(1, 2)).settings.port_signature == "1-2"
        assert make_match(ports=(2, 1)).settings.port_signature == "2-1"

    def test_grouping_keeps_first_seen_order(self):
        matches = [make_match(ports=(3, 4)), make_match(ports=(1, 2)), make_match(ports=(3, 4))]
        groups = group_by_port_signature(matches)
        assert list(groups) == ["3-4", "1-2"]
        assert len(groups["3-4"]) == 2


class TestFilterMatches:
    """Tests for selecting the comparable match set."""

    def test_majority_signature_wins(self):
        """Two 1-2 matches beat one 2-1 match, which is reported."""
        a = make_match("a.json", ports=(1, 2))
        b = make_match("b.json", ports=(1, 2))
        c = make_match("c.json", ports=(2, 1))

        result = filter_matches([a, b, c])

        assert result.matches == (a, b)
        assert result.signature == "1-2"
        assert [e.file_path for e in result.exclusions] == ["c.json"]
        assert result.exclusions[0].reason == ExclusionReason.PORT_MISMATCH

    def test_non_singles_excluded(self):
        doubles = make_match("doubles.json", ports=(1, 2, 3, 4))
        singles = make_match("singles.json", ports=(1, 2))

        result = filter_matches([doubles, singles])

        assert result.matches == (singles,)
        excluded = result.excluded_for(ExclusionReason.NOT_SINGLES)
        assert [e.file_path for e in excluded] == ["doubles.json"]
        assert excluded[0].detail == "4 players"

    def test_no_singles_is_fatal(self):
        """Zero singles matches raises the fatal error."""
        with pytest.raises(NoValidMatchSetError):
            filter_matches([make_match(ports=(1, 2, 3)), make_match(ports=(1, 2, 3, 4))])

    def test_empty_batch_is_fatal(self):
        with pytest.raises(NoValidMatchSetError, match="no valid games"):
            filter_matches([])

    def test_fatal_error_is_value_error(self):
        with pytest.raises(ValueError):
            filter_matches([])

    def test_tie_goes_to_first_group(self):
        """Equal-sized groups resolve to the one seen first."""
        first = make_match("first.json", ports=(2, 1))
        second = make_match("second.json", ports=(1, 2))

        result = filter_matches([first, second])

        assert result.matches == (first,)
        assert result.signature == "2-1"

    def test_input_is_not_modified(self):
        matches = [make_match(ports=(1, 2)), make_match(ports=(1, 3))]
        snapshot = list(matches)
        filter_matches(matches)
        assert matches == snapshot

    def test_exclusions_are_logged(self, caplog):
        with caplog.at_level(logging.WARNING):
            filter_matches([make_match("x.json", ports=(1, 2)), make_match("y.json", ports=(1, 2, 3))])
        assert "not singles" in caplog.text
        assert "y.json" in caplog.text

    def test_exclusion_to_dict(self):
        result = filter_matches([make_match("a.json"), make_match("b.json", ports=(3, 4))])
        assert result.exclusions[0].to_dict() == {
            "filePath": "b.json",
            "reason": "port_mismatch",
            "detail": "ports 3-4, expected 1-2",
        }


class TestResolveOrientations:
    """Tests for subject/opponent orderings."""

    def test_two_mirrored_orientations(self):
        forward, backward = resolve_orientations([make_match(ports=(1, 4))])

        assert (forward.subject_index, forward.opponent_index) == (0, 3)
        assert (backward.subject_index, backward.opponent_index) == (3, 0)
        assert backward == forward.mirrored()

    def test_uses_player_order_not_index_order(self):
        forward, _ = resolve_orientations([make_match(ports=(2, 1))])
        assert forward.subject_index == 1

    def test_empty_set_raises(self):
        with pytest.raises(ValueError):
            resolve_orientations([])

    def test_single_player_raises(self):
        with pytest.raises(ValueError):
            resolve_orientations([make_match(ports=(1,))])
