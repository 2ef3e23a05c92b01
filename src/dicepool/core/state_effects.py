"""
Combat states that cancel one rolled die after the fact.

Disarmed removes the die with the most filled hits, Vulnerable the die with
the most filled blocks. Only filled symbols decide eligibility and ordering,
but the canceled die loses every symbol it showed, hollow ones included.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence

from src.dicepool.models import Aggregate, DieRoll, StateEffects, SymbolKind

logger = logging.getLogger(__name__)


class Direction(str, Enum):
    MAX = "max"
    MIN = "min"


@dataclass(frozen=True)
class CancellationCriterion:
    symbol: SymbolKind
    direction: Direction = Direction.MAX


@dataclass(frozen=True)
class CancellationPolicy:
    name: str
    required_symbol: SymbolKind             # Die must show at least `required_min` of this
    required_min: int
    criteria: tuple[CancellationCriterion, ...]

    def is_eligible(self, die: DieRoll) -> bool:
        return die.symbols.get(self.required_symbol) >= self.required_min


DISARMED = CancellationPolicy(
    name="Disarmed",
    required_symbol=SymbolKind.HIT,
    required_min=1,
    criteria=(
        CancellationCriterion(SymbolKind.HIT),
        CancellationCriterion(SymbolKind.SPECIAL),
    ),
)

VULNERABLE = CancellationPolicy(
    name="Vulnerable",
    required_symbol=SymbolKind.BLOCK,
    required_min=1,
    criteria=(
        CancellationCriterion(SymbolKind.BLOCK),
        CancellationCriterion(SymbolKind.SPECIAL),
    ),
)


def _beats(candidate: DieRoll, best: DieRoll, criteria: Sequence[CancellationCriterion]) -> bool:
    # The first criterion on which the two dice differ decides
    for criterion in criteria:
        a = candidate.symbols.get(criterion.symbol)
        b = best.symbols.get(criterion.symbol)
        if a == b:
            continue
        return a > b if criterion.direction is Direction.MAX else a < b
    return False


def select_die_to_cancel(dice: Sequence[DieRoll], policy: CancellationPolicy) -> int | None:
    """
    Index of the die the policy cancels, or None when no die is eligible.
    Ties on every criterion keep the earliest die in roll order.
    """
    best: int | None = None
    for idx, die in enumerate(dice):
        if not policy.is_eligible(die):
            continue
        if best is None or _beats(die, dice[best], policy.criteria):
            best = idx
    return best


def apply_cancellation(dice: List[DieRoll], aggregate: Aggregate, policy: CancellationPolicy) -> int | None:
    """
    Cancels at most one die: its symbols are subtracted from the aggregate
    (clamped at zero) and zeroed on the die itself. Returns the canceled
    index, or None when nothing was eligible.
    """
    idx = select_die_to_cancel(dice, policy)
    if idx is None:
        return None

    die = dice[idx]
    logger.debug("%s cancels %s die #%d (%s)", policy.name, die.color, idx, die.symbols.as_dict())
    aggregate.subtract(die.symbols)
    die.symbols.clear()
    return idx


def apply_disarmed(dice: List[DieRoll], aggregate: Aggregate) -> int | None:
    return apply_cancellation(dice, aggregate, DISARMED)


def apply_vulnerable(dice: List[DieRoll], aggregate: Aggregate) -> int | None:
    return apply_cancellation(dice, aggregate, VULNERABLE)


def apply_state_effects(dice: List[DieRoll], aggregate: Aggregate, states: StateEffects) -> None:
    """Disarmed first, then Vulnerable, each choosing from the current dice."""
    if states.disarmed:
        apply_disarmed(dice, aggregate)
    if states.vulnerable:
        apply_vulnerable(dice, aggregate)
