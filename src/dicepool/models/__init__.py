from .symbols import (
    SymbolKind,
    SYMBOL_COUNTERS,
    COUNTER_NAMES,
    Face,
    Aggregate,
    DieRoll,
)

from .faces import (
    FACES_PER_DIE,
    ATTACK_COLORS,
    DEFENCE_COLORS,
    STANDARD_COLORS,
    FaceTable,
    normalize_color,
    is_attack_color,
    parse_face,
)

from .rerolls import (
    RerollConditionType,
    PriorityMode,
    RerollCondition,
    RepeatRollConfig,
    RepeatDiceConfig,
    RerollValueWeights,
    RerollStats,
    StateEffects,
    FixedDie,
    RollResult,
)

__all__ = [
    # Symbols
    "SymbolKind",
    "SYMBOL_COUNTERS",
    "COUNTER_NAMES",
    "Face",
    "Aggregate",
    "DieRoll",

    # Faces
    "FACES_PER_DIE",
    "ATTACK_COLORS",
    "DEFENCE_COLORS",
    "STANDARD_COLORS",
    "FaceTable",
    "normalize_color",
    "is_attack_color",
    "parse_face",

    # Rerolls
    "RerollConditionType",
    "PriorityMode",
    "RerollCondition",
    "RepeatRollConfig",
    "RepeatDiceConfig",
    "RerollValueWeights",
    "RerollStats",
    "StateEffects",
    "FixedDie",
    "RollResult",
]
