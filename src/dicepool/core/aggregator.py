from typing import Iterable

from src.dicepool.models import Aggregate, SymbolKind


def count_symbols(face: Iterable[SymbolKind]) -> Aggregate:
    """Counts each symbol occurrence on one face. An empty face gives all zeros."""
    counts = Aggregate()
    for symbol in face:
        name = symbol.counter
        setattr(counts, name, getattr(counts, name) + 1)
    return counts


def sum_counts(*counts: Aggregate) -> Aggregate:
    """Elementwise sum as a fresh Aggregate; order of the operands is irrelevant."""
    return Aggregate.sum(counts)


def aggregate_dice(dice) -> Aggregate:
    """Recomputes a roll's aggregate from its per-die list."""
    return Aggregate.sum(die.symbols for die in dice)
