"""Per-player match outcome from the game-end event."""

from __future__ import annotations

from setsight.analysis.models import MatchRecord
from setsight.core.constants import GameEndMethod, Outcome


def _opponent_index(match: MatchRecord, player_index: int) -> int | None:
    for player in match.settings.players:
        if player.player_index != player_index:
            return player.player_index
    return None


def _stocks_remaining(match: MatchRecord, player_index: int | None) -> int | None:
    if player_index is None:
        return None
    state = match.latest_frame.for_player(player_index)
    return state.stocks_remaining if state else None


def resolve_outcome(match: MatchRecord, player_index: int) -> Outcome:
    """
    Decide whether a player won or lost a match.

    - TIME! endings are not modelled and resolve to unknown.
    - GAME! endings compare stocks at the last observed frame; the player on
      zero stocks lost. A double KO (both on zero) or a frame where nobody is
      on zero is unknown.
    - LRAS endings make the initiator the loser.
    - Anything else, including a missing game end, is unknown.
    """
    game_end = match.game_end
    if game_end is None:
        return Outcome.UNKNOWN

    method = game_end.game_end_method
    if method == GameEndMethod.TIME:
        return Outcome.UNKNOWN

    if method == GameEndMethod.GAME:
        player_stocks = _stocks_remaining(match, player_index)
        opponent_stocks = _stocks_remaining(match, _opponent_index(match, player_index))
        if player_stocks == 0 and opponent_stocks == 0:
            return Outcome.UNKNOWN
        if player_stocks == 0:
            return Outcome.LOSER
        if opponent_stocks == 0:
            return Outcome.WINNER
        # Neither player observed on zero stocks
        return Outcome.UNKNOWN

    if method == GameEndMethod.NO_CONTEST:
        if game_end.lras_initiator_index == player_index:
            return Outcome.LOSER
        return Outcome.WINNER

    return Outcome.UNKNOWN
