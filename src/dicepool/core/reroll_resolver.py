import logging
from typing import List, Sequence

from src.dicepool.core.aggregator import count_symbols
from src.dicepool.core.expectation import color_expected_values, pool_expected_value
from src.dicepool.core.random_source import RandomSource, draw_face_index
from src.dicepool.core.roller import Pool
from src.dicepool.models import (
    FACES_PER_DIE,
    Aggregate,
    DieRoll,
    FaceTable,
    PriorityMode,
    RerollCondition,
    RerollConditionType,
    RerollValueWeights,
)

logger = logging.getLogger(__name__)

# ============================================================
# FULL REROLL TRIGGER
# ============================================================

def should_reroll(
    aggregate: Aggregate,
    condition: RerollCondition,
    pool: Pool,
    face_table: FaceTable,
) -> bool:
    """
    Decides whether a completed roll earns its single full reroll.

    BelowExpected compares against the pool's expectation for the symbol,
    MinSymbol against the configured threshold, NoSymbol against zero.
    All comparisons are strict.
    """
    actual = aggregate.get(condition.symbol)

    match condition.type:
        case RerollConditionType.BELOW_EXPECTED:
            expected = pool_expected_value(pool, face_table, condition.symbol)
            return actual < expected
        case RerollConditionType.MIN_SYMBOL:
            return actual < (condition.threshold or 0)
        case RerollConditionType.NO_SYMBOL:
            return actual == 0

    return False


# ============================================================
# SELECTIVE REROLL
# ============================================================

def weights_for_priority(mode: PriorityMode | str, count_hollow_as_filled: bool) -> RerollValueWeights:
    """
    Only the target symbol carries weight. Its hollow counterpart is worth the
    same when hollow symbols count as filled (elite promotion), else nothing.
    """
    symbol = PriorityMode(mode).symbol
    hollow_weight = 1 if count_hollow_as_filled else 0
    return RerollValueWeights(**{
        symbol.counter: 1,
        symbol.hollow.counter: hollow_weight,
    })


def score_die(die: DieRoll, weights: RerollValueWeights, expectations: dict[str, float]) -> float:
    """Weighted value of the die minus its color's expectation. Negative = underperformed."""
    return weights.value_of(die.symbols) - expectations.get(die.color, 0)


def select_dice_to_reroll(
    dice: Sequence[DieRoll],
    max_count: int,
    weights: RerollValueWeights,
    face_table: FaceTable,
) -> List[int]:
    """
    Indices of the worst underperforming dice, worst first, at most `max_count`.
    Dice scoring zero or better are never picked, nor are forced dice.
    """
    if max_count <= 0 or not dice:
        return []

    expectations = color_expected_values(face_table, weights)
    scored = [
        (idx, score_die(die, weights, expectations))
        for idx, die in enumerate(dice)
        if not die.fixed
    ]
    underperforming = [item for item in scored if item[1] < 0]
    # sorted() is stable: equal scores keep roll order
    underperforming = sorted(underperforming, key=lambda item: item[1])

    return [idx for idx, _ in underperforming[:max_count]]


def reroll_dice(
    dice: List[DieRoll],
    indices: Sequence[int],
    face_table: FaceTable,
    rng: RandomSource,
) -> int:
    """
    Redraws the selected dice in place, each independently for its own color.
    Returns how many dice were actually redrawn.
    """
    rerolled = 0
    for idx in indices:
        die = dice[idx]
        faces = face_table.get(die.color)
        if faces is None:
            continue
        face_index = draw_face_index(rng, FACES_PER_DIE)
        dice[idx] = DieRoll(color=die.color, face_index=face_index, symbols=count_symbols(faces[face_index]))
        logger.debug("Rerolled %s die #%d: face %d -> %d", die.color, idx, die.face_index, face_index)
        rerolled += 1
    return rerolled
