"""
Demo face table for trying the engine without a data file.
Made-up distributions, not the shipped game dice.
"""
from src.dicepool.models import FaceTable

# ==================== ATTACK DICE ====================
# Mostly hits; orange and yellow trade raw hits for specials and hollow hits

_RED = [
    ["HIT"], ["HIT"], ["HIT", "HIT"], ["HIT", "SPECIAL"],
    ["HOLLOW_HIT"], ["SPECIAL"], [], [],
]
_ORANGE = [
    ["HIT"], ["HIT"], ["HIT", "HOLLOW_HIT"], ["SPECIAL"],
    ["HOLLOW_HIT"], ["HOLLOW_SPECIAL"], ["HIT", "SPECIAL"], [],
]
_YELLOW = [
    ["HIT"], ["HOLLOW_HIT"], ["HOLLOW_HIT"], ["SPECIAL"],
    ["SPECIAL", "SPECIAL"], ["HOLLOW_SPECIAL"], [], [],
]

# ==================== DEFENCE DICE ====================

_GREEN = [
    ["BLOCK"], ["BLOCK"], ["HOLLOW_BLOCK"], ["SPECIAL"],
    ["BLOCK", "SPECIAL"], [], [], [],
]
_BLUE = [
    ["BLOCK"], ["BLOCK"], ["BLOCK", "BLOCK"], ["HOLLOW_BLOCK"],
    ["HOLLOW_SPECIAL"], ["SPECIAL"], [], [],
]
_BLACK = [
    ["BLOCK"], ["BLOCK", "BLOCK"], ["BLOCK", "HOLLOW_BLOCK"], ["BLOCK", "SPECIAL"],
    ["HOLLOW_BLOCK"], ["BLOCK"], ["SPECIAL"], [],
]

DEMO_FACES = {
    "RED": _RED,
    "ORANGE": _ORANGE,
    "YELLOW": _YELLOW,
    "GREEN": _GREEN,
    "BLUE": _BLUE,
    "BLACK": _BLACK,
}


def create_demo_face_table() -> FaceTable:
    """
    Creates the demo table: all six standard colors, 8 faces each.

    Returns:
        FaceTable: Validated and ready to roll against
    """
    return FaceTable.from_mapping(DEMO_FACES)
