"""Player orientations for symmetric stat evaluation."""

from __future__ import annotations

from collections.abc import Sequence

from setsight.analysis.models import MatchRecord, PlayerOrientation


def resolve_orientations(
    matches: Sequence[MatchRecord],
) -> tuple[PlayerOrientation, PlayerOrientation]:
    """
    Build the two (subject, opponent) orderings of a filtered match set.

    Only the first record is inspected: every record of a filtered set shares
    the same port assignment and therefore the same player indices.

    Raises:
        ValueError: If the set is empty or the first record has fewer than
            two players
    """
    if not matches:
        raise ValueError("Cannot resolve player orientations of an empty match set")

    players = matches[0].settings.players
    if len(players) < 2:
        raise ValueError(f"Expected two players, found {len(players)}")

    forward = PlayerOrientation(players[0].player_index, players[1].player_index)
    return (forward, forward.mirrored())
