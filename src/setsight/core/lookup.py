"""Melee display names for stages, moves and characters.

Numeric ids are the external ids written by Slippi into replay settings and
stat blocks. Every lookup is a pure function; unknown ids resolve to an
"Unknown ..." placeholder instead of raising.
"""

STAGES = {
    2: "Fountain of Dreams",
    3: "Pokémon Stadium",
    4: "Princess Peach's Castle",
    5: "Kongo Jungle",
    6: "Brinstar",
    7: "Corneria",
    8: "Yoshi's Story",
    9: "Onett",
    10: "Mute City",
    11: "Rainbow Cruise",
    12: "Jungle Japes",
    13: "Great Bay",
    14: "Hyrule Temple",
    15: "Brinstar Depths",
    16: "Yoshi's Island",
    17: "Green Greens",
    18: "Fourside",
    19: "Mushroom Kingdom I",
    20: "Mushroom Kingdom II",
    22: "Venom",
    23: "Poké Floats",
    24: "Big Blue",
    25: "Icicle Mountain",
    26: "Icetop",
    27: "Flat Zone",
    28: "Dream Land N64",
    29: "Yoshi's Island N64",
    30: "Kongo Jungle N64",
    31: "Battlefield",
    32: "Final Destination",
}

# move id -> (name, short name)
MOVES = {
    1: ("Miscellaneous", "misc"),
    2: ("Jab", "jab"),
    3: ("Jab", "jab"),
    4: ("Jab", "jab"),
    5: ("Rapid Jabs", "rapid-jabs"),
    6: ("Dash Attack", "dash"),
    7: ("Forward Tilt", "ftilt"),
    8: ("Up Tilt", "utilt"),
    9: ("Down Tilt", "dtilt"),
    10: ("Forward Smash", "fsmash"),
    11: ("Up Smash", "usmash"),
    12: ("Down Smash", "dsmash"),
    13: ("Neutral Air", "nair"),
    14: ("Forward Air", "fair"),
    15: ("Back Air", "bair"),
    16: ("Up Air", "uair"),
    17: ("Down Air", "dair"),
    18: ("Neutral B", "neutral-b"),
    19: ("Side B", "side-b"),
    20: ("Up B", "up-b"),
    21: ("Down B", "down-b"),
    50: ("Getup Attack", "getup"),
    51: ("Getup Attack (Slow)", "getup-slow"),
    52: ("Grab Pummel", "pummel"),
    53: ("Forward Throw", "fthrow"),
    54: ("Back Throw", "bthrow"),
    55: ("Up Throw", "uthrow"),
    56: ("Down Throw", "dthrow"),
    61: ("Edge Attack (Slow)", "edge-slow"),
    62: ("Edge Attack", "edge"),
}

UNKNOWN_MOVE = ("Unknown Move", "unknown")

# character id -> (name, short name, colour names by costume index)
CHARACTERS = {
    0: ("Captain Falcon", "Falcon", ("Default", "Black", "Red", "White", "Green", "Blue")),
    1: ("Donkey Kong", "DK", ("Default", "Black", "Red", "Blue", "Green")),
    2: ("Fox", "Fox", ("Default", "Red", "Blue", "Green")),
    3: ("Mr. Game & Watch", "G&W", ("Default", "Red", "Blue", "Green")),
    4: ("Kirby", "Kirby", ("Default", "Yellow", "Blue", "Red", "Green", "White")),
    5: ("Bowser", "Bowser", ("Default", "Red", "Blue", "Black")),
    6: ("Link", "Link", ("Default", "Red", "Blue", "Black", "White")),
    7: ("Luigi", "Luigi", ("Default", "White", "Blue", "Red")),
    8: ("Mario", "Mario", ("Default", "Yellow", "Black", "Blue", "Green")),
    9: ("Marth", "Marth", ("Default", "Red", "Green", "Black", "White")),
    10: ("Mewtwo", "Mewtwo", ("Default", "Red", "Blue", "Green")),
    11: ("Ness", "Ness", ("Default", "Yellow", "Blue", "Green")),
    12: ("Peach", "Peach", ("Default", "Daisy", "White", "Blue", "Green")),
    13: ("Pikachu", "Pika", ("Default", "Red", "Party Hat", "Cowboy Hat")),
    14: ("Ice Climbers", "ICs", ("Default", "Green", "Orange", "Red")),
    15: ("Jigglypuff", "Puff", ("Default", "Red", "Blue", "Headband", "Crown")),
    16: ("Samus", "Samus", ("Default", "Pink", "Black", "Green", "Purple")),
    17: ("Yoshi", "Yoshi", ("Default", "Red", "Blue", "Yellow", "Pink", "Cyan")),
    18: ("Zelda", "Zelda", ("Default", "Red", "Blue", "Green", "White")),
    19: ("Sheik", "Sheik", ("Default", "Red", "Blue", "Green", "White")),
    20: ("Falco", "Falco", ("Default", "Red", "Blue", "Green")),
    21: ("Young Link", "YLink", ("Default", "Red", "Blue", "White", "Black")),
    22: ("Dr. Mario", "Doc", ("Default", "Red", "Blue", "Green", "Black")),
    23: ("Roy", "Roy", ("Default", "Red", "Blue", "Green", "Yellow")),
    24: ("Pichu", "Pichu", ("Default", "Red", "Blue", "Green")),
    25: ("Ganondorf", "Ganon", ("Default", "Red", "Blue", "Green", "Purple")),
}


def get_stage_name(stage_id: int | None) -> str:
    """Full stage name, e.g. 31 -> "Battlefield"."""
    return STAGES.get(stage_id, "Unknown Stage")


def get_move_name(move_id: int | None) -> str:
    return MOVES.get(move_id, UNKNOWN_MOVE)[0]


def get_move_short_name(move_id: int | None) -> str:
    return MOVES.get(move_id, UNKNOWN_MOVE)[1]


def get_character_name(character_id: int | None) -> str:
    """Full character name, e.g. 2 -> "Fox"."""
    character = CHARACTERS.get(character_id)
    return character[0] if character else "Unknown Character"


def get_character_short_name(character_id: int | None) -> str:
    character = CHARACTERS.get(character_id)
    return character[1] if character else "Unknown"


def get_character_color_name(character_id: int | None, color: int | None) -> str:
    """
    Costume colour name for a character.

    Args:
        character_id: External character id
        color: Costume index from the player settings

    Returns:
        Colour name, or "Unknown" for ids or indices outside the tables
    """
    character = CHARACTERS.get(character_id)
    if character is None or color is None:
        return "Unknown"

    colors = character[2]
    if not 0 <= color < len(colors):
        return "Unknown"
    return colors[color]
