"""Tests for stage, move and character names."""

import pytest

from setsight.core.lookup import (
    get_character_color_name,
    get_character_name,
    get_character_short_name,
    get_move_name,
    get_move_short_name,
    get_stage_name,
)


class TestStages:
    def test_known(self):
        assert get_stage_name(31) == "Battlefield"
        assert get_stage_name(32) == "Final Destination"

    @pytest.mark.parametrize("stage_id", [None, 0, 999])
    def test_unknown(self, stage_id):
        assert get_stage_name(stage_id) == "Unknown Stage"


class TestMoves:
    def test_known(self):
        assert get_move_name(11) == "Up Smash"
        assert get_move_short_name(11) == "usmash"

    def test_jab_variants_share_a_name(self):
        assert get_move_name(2) == get_move_name(3) == get_move_name(4) == "Jab"

    def test_unknown(self):
        assert get_move_name(999) == "Unknown Move"
        assert get_move_short_name(None) == "unknown"


class TestCharacters:
    """Tests for character and costume names."""

    def test_known(self):
        assert get_character_name(2) == "Fox"
        assert get_character_short_name(0) == "Falcon"

    def test_unknown(self):
        assert get_character_name(99) == "Unknown Character"
        assert get_character_short_name(None) == "Unknown"

    def test_color(self):
        assert get_character_color_name(2, 0) == "Default"
        assert get_character_color_name(2, 2) == "Blue"

    @pytest.mark.parametrize("character_id,color", [(2, 17), (2, -1), (2, None), (99, 0)])
    def test_unknown_color(self, character_id, color):
        assert get_character_color_name(character_id, color) == "Unknown"
