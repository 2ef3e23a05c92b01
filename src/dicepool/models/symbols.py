from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Dict, Iterable

# ========================================================================================
# SYMBOLS: The six kinds of marks a die face can carry. Hollow kinds are the weaker
# variant of their filled counterpart and only count under specific rules.
# ========================================================================================
class SymbolKind(str, Enum):
    HIT = "HIT"
    BLOCK = "BLOCK"
    SPECIAL = "SPECIAL"
    HOLLOW_HIT = "HOLLOW_HIT"
    HOLLOW_BLOCK = "HOLLOW_BLOCK"
    HOLLOW_SPECIAL = "HOLLOW_SPECIAL"

    @property
    def counter(self) -> str:
        """Name of the Aggregate counter this symbol increments."""
        return SYMBOL_COUNTERS[self]

    @property
    def is_hollow(self) -> bool:
        return self.value.startswith("HOLLOW_")

    @property
    def hollow(self) -> "SymbolKind":
        """Hollow counterpart of a filled symbol (hollow symbols return themselves)."""
        return self if self.is_hollow else SymbolKind("HOLLOW_" + self.value)

    @classmethod
    def parse(cls, name: "str | SymbolKind") -> "SymbolKind":
        """
        Resolves a symbol from its tag ('HOLLOW_HIT'), its counter name
        ('hollow_hits') or the camelCase counter name ('hollowHits').
        """
        if isinstance(name, cls):
            return name
        key = str(name).strip()
        normalized = key.replace("_", "").lower()
        for kind in cls:
            if key.upper() == kind.value:
                return kind
            if normalized == kind.counter.replace("_", ""):
                return kind
        raise ValueError(f"Unknown symbol: {name!r}")


SYMBOL_COUNTERS: Dict[SymbolKind, str] = {
    SymbolKind.HIT: "hits",
    SymbolKind.BLOCK: "blocks",
    SymbolKind.SPECIAL: "specials",
    SymbolKind.HOLLOW_HIT: "hollow_hits",
    SymbolKind.HOLLOW_BLOCK: "hollow_blocks",
    SymbolKind.HOLLOW_SPECIAL: "hollow_specials",
}

# A face is zero or more symbol occurrences; order is irrelevant for counting.
Face = tuple[SymbolKind, ...]


# ============================================================
# AGGREGATE
# ============================================================
@dataclass
class Aggregate:
    """Six symbol counters summed over every die counted in a roll."""
    hits: int = 0
    blocks: int = 0
    specials: int = 0
    hollow_hits: int = 0
    hollow_blocks: int = 0
    hollow_specials: int = 0

    def get(self, symbol: SymbolKind | str) -> int:
        return getattr(self, SymbolKind.parse(symbol).counter)

    def set(self, symbol: SymbolKind | str, value: int) -> None:
        setattr(self, SymbolKind.parse(symbol).counter, value)

    def add(self, other: "Aggregate") -> "Aggregate":
        """Elementwise addition in place. Returns self for chaining."""
        for name in COUNTER_NAMES:
            setattr(self, name, getattr(self, name) + getattr(other, name))
        return self

    def subtract(self, other: "Aggregate") -> "Aggregate":
        """Elementwise subtraction in place, never going below zero."""
        for name in COUNTER_NAMES:
            setattr(self, name, max(0, getattr(self, name) - getattr(other, name)))
        return self

    def combine(self, other: "Aggregate") -> "Aggregate":
        """Sum of two aggregates as a new instance; neither operand changes."""
        return self.copy().add(other)

    def copy(self) -> "Aggregate":
        return Aggregate(**self.as_dict())

    def clear(self) -> None:
        for name in COUNTER_NAMES:
            setattr(self, name, 0)

    def as_dict(self) -> Dict[str, int]:
        return {name: getattr(self, name) for name in COUNTER_NAMES}

    @property
    def total_hits(self) -> int:
        return self.hits + self.hollow_hits

    @property
    def total_blocks(self) -> int:
        return self.blocks + self.hollow_blocks

    @property
    def total_specials(self) -> int:
        return self.specials + self.hollow_specials

    @classmethod
    def from_counts(cls, counts: Dict[str, int]) -> "Aggregate":
        """Builds an aggregate from any mapping of symbol name -> count."""
        agg = cls()
        for name, value in counts.items():
            agg.set(name, int(value or 0))
        return agg

    @classmethod
    def sum(cls, counts: Iterable["Aggregate"]) -> "Aggregate":
        total = cls()
        for item in counts:
            total.add(item)
        return total


COUNTER_NAMES = tuple(f.name for f in fields(Aggregate))


# ============================================================
# PER-DIE RESULT
# ============================================================
@dataclass
class DieRoll:
    """One die of a detailed roll: its color, the face drawn and what it shows."""
    color: str                                  # Normalized color key, e.g. "RED"
    face_index: int                             # 0..7
    symbols: Aggregate = field(default_factory=Aggregate)
    fixed: bool = False                         # Face was forced by the caller, not drawn
