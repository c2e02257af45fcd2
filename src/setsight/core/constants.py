"""
SetSight Melee Set Analyzer - Constants

Defines game-end methods, stat identifiers, outcome labels and the numeric
constants shared by the analysis modules.
"""

from enum import Enum, StrEnum


class GameEndMethod(int, Enum):
    """
    Game end methods recorded in the Slippi game-end event.

    Only the values the outcome resolver understands are listed; any other
    code is treated as an unknown ending.
    """

    TIME = 1  # TIME! ending, stock/percent comparison not modelled
    GAME = 2  # GAME! ending, one player ran out of stocks
    NO_CONTEST = 7  # LRAS (L+R+A+Start) quit-out or disconnect


class Outcome(StrEnum):
    """Per-player result of a single match."""

    WINNER = "winner"
    LOSER = "loser"
    UNKNOWN = "unknown"


class ValueType(StrEnum):
    """Shape of a stat's simple value."""

    NUMBER = "number"
    TEXT = "text"


class BetterDirection(StrEnum):
    """Which way a stat value is considered better."""

    HIGHER = "higher"
    LOWER = "lower"
    NONE = "none"


class StatId(StrEnum):
    """Stable identifiers of the stat catalogue, in output order."""

    OPENINGS_PER_KILL = "openingsPerKill"
    DAMAGE_PER_OPENING = "damagePerOpening"
    NEUTRAL_WINS = "neutralWins"
    KILL_MOVES = "killMoves"
    NEUTRAL_OPENER_MOVES = "neutralOpenerMoves"
    EARLY_KILLS = "earlyKills"
    LATE_DEATHS = "lateDeaths"
    SELF_DESTRUCTS = "selfDestructs"
    INPUTS_PER_MINUTE = "inputsPerMinute"
    AVG_KILL_PERCENT = "avgKillPercent"
    HIGH_DAMAGE_PUNISHES = "highDamagePunishes"
    DAMAGE_DONE = "damageDone"


class ExclusionReason(StrEnum):
    """Why a match was left out of the comparable set."""

    NOT_SINGLES = "not_singles"
    PORT_MISMATCH = "port_mismatch"


# Melee runs at 60 frames per second
FRAMES_PER_SECOND = 60

# Number of players in a singles match
SINGLES_PLAYER_COUNT = 2

# Extremal stats (earliest kill, latest death, ...) keep this many events
TOP_EVENT_COUNT = 5

# Opening type recorded on conversions that started from a neutral win
NEUTRAL_WIN_OPENING = "neutral-win"

# Text shown when a stat has no qualifying data
NOT_AVAILABLE = "N/A"

# Highlight ("behind the scenes") recap composition
HIGHLIGHT_FIXED_STATS = (
    StatId.KILL_MOVES,
    StatId.NEUTRAL_OPENER_MOVES,
    StatId.OPENINGS_PER_KILL,
    StatId.DAMAGE_DONE,
)
HIGHLIGHT_RANDOM_COUNT = 2

# Self-destructs only make the recap when someone has more than this many
SELF_DESTRUCT_HIGHLIGHT_THRESHOLD = 1
