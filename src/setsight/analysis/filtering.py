"""
Match Set Filtering

Reduces an arbitrary batch of parsed replays to the single comparable set
that statistics are computed over:
- singles only (exactly two players)
- identical port assignment across every match

Matches that do not qualify are reported, not fatal. Only an empty result
aborts the run.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from setsight.analysis.models import MatchRecord
from setsight.core.constants import ExclusionReason

logger = logging.getLogger(__name__)


class NoValidMatchSetError(ValueError):
    """Raised when no comparable match set remains after filtering."""

    def __init__(self, message: str = "There were no valid games found to compute stats from."):
        super().__init__(message)


@dataclass(frozen=True)
class Exclusion:
    """A match left out of the comparable set."""

    file_path: str | None
    reason: ExclusionReason
    detail: str

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "reason": str(self.reason), "detail": self.detail}


@dataclass(frozen=True)
class FilterResult:
    """The comparable match set plus everything that was left out."""

    matches: tuple[MatchRecord, ...]
    signature: str
    exclusions: tuple[Exclusion, ...] = field(default_factory=tuple)

    def excluded_for(self, reason: ExclusionReason) -> list[Exclusion]:
        return [e for e in self.exclusions if e.reason == reason]


def group_by_port_signature(matches: Sequence[MatchRecord]) -> dict[str, list[MatchRecord]]:
    """Group matches by port signature, keeping first-seen group order."""
    groups: dict[str, list[MatchRecord]] = {}
    for match in matches:
        groups.setdefault(match.settings.port_signature, []).append(match)
    return groups


def filter_matches(matches: Sequence[MatchRecord]) -> FilterResult:
    """
    Select the comparable match set from a batch of replays.

    The largest port-signature group wins. Equal-sized groups resolve to the
    group encountered first in input order.

    Args:
        matches: Parsed match records in load order

    Returns:
        FilterResult with the winning group and the exclusion report

    Raises:
        NoValidMatchSetError: If no singles match remains
    """
    exclusions: list[Exclusion] = []

    singles: list[MatchRecord] = []
    non_singles: list[MatchRecord] = []
    for match in matches:
        (singles if match.is_singles else non_singles).append(match)

    if non_singles:
        logger.warning("The following games have been excluded because they are not singles games:")
        for match in non_singles:
            logger.warning(f"  {match.file_path}")
            exclusions.append(
                Exclusion(
                    file_path=match.file_path,
                    reason=ExclusionReason.NOT_SINGLES,
                    detail=f"{len(match.settings.players)} players",
                )
            )

    groups = group_by_port_signature(singles)
    # max() keeps the first maximal item, i.e. the first group encountered
    signature = max(groups, key=lambda sig: len(groups[sig]), default="")
    selected = groups.get(signature, [])

    mismatched = [m for sig, group in groups.items() if sig != signature for m in group]
    if mismatched:
        logger.warning("The following games have been excluded because the player ports differ:")
        for match in mismatched:
            logger.warning(f"  {match.file_path}")
            exclusions.append(
                Exclusion(
                    file_path=match.file_path,
                    reason=ExclusionReason.PORT_MISMATCH,
                    detail=f"ports {match.settings.port_signature}, expected {signature}",
                )
            )

    if not selected:
        raise NoValidMatchSetError()

    logger.info(f"Including {len(selected)} games for stat calculation...")

    return FilterResult(matches=tuple(selected), signature=signature, exclusions=tuple(exclusions))
