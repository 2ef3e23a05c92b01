import logging
from typing import Sequence

from src.dicepool.core.aggregator import aggregate_dice
from src.dicepool.core.expectation import pool_expected_value
from src.dicepool.core.random_source import RandomSource, seeded_source
from src.dicepool.core.reroll_resolver import (
    reroll_dice,
    select_dice_to_reroll,
    should_reroll,
    weights_for_priority,
)
from src.dicepool.core.roller import (
    Pool,
    roll_pool_with_fixed,
    roll_pool_with_fixed_detailed,
)
from src.dicepool.core.state_effects import apply_state_effects
from src.dicepool.models import (
    Aggregate,
    FaceTable,
    FixedDie,
    RepeatDiceConfig,
    RepeatRollConfig,
    RerollStats,
    RollResult,
    StateEffects,
    SymbolKind,
)

logger = logging.getLogger(__name__)

# ============================================================
# RULES ENGINE
# ============================================================

class RulesEngine:
    """
    Central logic for rolling a dice pool: the initial roll, the optional
    full reroll, the optional selective reroll and the combat states that
    cancel a die afterwards.
    """

    def __init__(self, face_table: FaceTable, rng: RandomSource | None = None):
        self.face_table = face_table
        self.rng = rng or seeded_source()

    def roll_pool(self, pool: Pool, fixed_dice: Sequence[FixedDie] = ()) -> Aggregate:
        """Plain roll, aggregate only."""
        return roll_pool_with_fixed(pool, fixed_dice, self.face_table, self.rng)

    def roll_pool_detailed(self, pool: Pool, fixed_dice: Sequence[FixedDie] = ()) -> RollResult:
        """Plain roll keeping every die."""
        return roll_pool_with_fixed_detailed(pool, fixed_dice, self.face_table, self.rng)

    def expected_value(self, pool: Pool, symbol: SymbolKind | str) -> float:
        return pool_expected_value(pool, self.face_table, symbol)

    def roll(
        self,
        pool: Pool,
        repeat_roll: RepeatRollConfig | None = None,
        repeat_dice: RepeatDiceConfig | None = None,
        states: StateEffects | None = None,
        fixed_dice: Sequence[FixedDie] = (),
    ) -> RollResult:
        """
        Executes a full roll:
        1. Initial roll (forced faces applied)
        2. One full reroll if the trigger condition holds
        3. Selective reroll of the worst dice, then re-aggregation
        4. Disarmed, then Vulnerable
        Per-die detail is only tracked when stage 3 or 4 needs it.
        """
        has_repeat_roll = bool(repeat_roll and repeat_roll.enabled)
        has_repeat_dice = bool(repeat_dice and repeat_dice.enabled)
        has_states = bool(states and states.active)
        stats = RerollStats()

        if not (has_repeat_dice or has_states):
            agg = self.roll_pool(pool, fixed_dice)
            if has_repeat_roll and should_reroll(agg, repeat_roll.condition, pool, self.face_table):
                logger.debug("Full reroll triggered by %s on %s", repeat_roll.condition.type.value, agg.as_dict())
                agg = self.roll_pool(pool, fixed_dice)
                stats.full_rerolls_occurred = 1
            return RollResult(aggregate=agg, dice=None, stats=stats)

        # Detailed path
        result = self.roll_pool_detailed(pool, fixed_dice)
        dice, agg = result.dice, result.aggregate

        if has_repeat_roll and should_reroll(agg, repeat_roll.condition, pool, self.face_table):
            logger.debug("Full reroll triggered by %s on %s", repeat_roll.condition.type.value, agg.as_dict())
            result = self.roll_pool_detailed(pool, fixed_dice)
            dice, agg = result.dice, result.aggregate
            stats.full_rerolls_occurred = 1

        if has_repeat_dice:
            weights = weights_for_priority(repeat_dice.priority_mode, repeat_dice.count_hollow_as_filled)
            selected = select_dice_to_reroll(dice, repeat_dice.max_dice_to_reroll, weights, self.face_table)
            stats.dice_rerolled_count = reroll_dice(dice, selected, self.face_table, self.rng)
            agg = aggregate_dice(dice)

        if has_states:
            apply_state_effects(dice, agg, states)

        return RollResult(aggregate=agg, dice=dice, stats=stats)
