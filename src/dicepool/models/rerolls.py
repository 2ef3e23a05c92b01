from dataclasses import dataclass, field
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.dicepool.models.symbols import Aggregate, DieRoll, SymbolKind

# ============================================================
# REROLL CONFIGURATION
# ============================================================
class RerollConditionType(str, Enum):
    """What makes a completed roll eligible for one full reroll"""
    BELOW_EXPECTED = "BelowExpected"        # Symbol count strictly below the pool's expectation
    MIN_SYMBOL = "MinSymbol"                # Symbol count strictly below a fixed threshold
    NO_SYMBOL = "NoSymbol"                  # Symbol absent altogether


class PriorityMode(str, Enum):
    """Which symbol selective rerolls try to improve"""
    HITS = "hits"
    BLOCKS = "blocks"
    SPECIALS = "specials"

    @property
    def symbol(self) -> SymbolKind:
        return SymbolKind.parse(self.value)


class _ConfigModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=False)


class RerollCondition(_ConfigModel):
    type: RerollConditionType
    symbol: SymbolKind
    threshold: float = 0                    # Only read by MinSymbol

    @field_validator("symbol", mode="before")
    @classmethod
    def parse_symbol(cls, value):
        return SymbolKind.parse(value)

    @field_validator("threshold", mode="before")
    @classmethod
    def default_threshold(cls, value):
        return 0 if value is None else value


class RepeatRollConfig(_ConfigModel):
    """Full reroll: roll the whole pool again, once, when the condition holds."""
    enabled: bool = False
    condition: RerollCondition


class RepeatDiceConfig(_ConfigModel):
    """Selective reroll: redraw up to N of the worst individual dice."""
    enabled: bool = False
    max_dice_to_reroll: int = Field(default=0, ge=0, alias="maxDiceToReroll")
    priority_mode: PriorityMode = Field(default=PriorityMode.HITS, alias="priorityMode")
    count_hollow_as_filled: bool = Field(default=False, alias="countHollowAsFilled")


class RerollValueWeights(_ConfigModel):
    """Linear weights used to score a die's symbols against its color's expectation."""
    hits: float = 0
    blocks: float = 0
    specials: float = 0
    hollow_hits: float = Field(default=0, alias="hollowHits")
    hollow_blocks: float = Field(default=0, alias="hollowBlocks")
    hollow_specials: float = Field(default=0, alias="hollowSpecials")

    def value_of(self, symbols: Aggregate) -> float:
        return (
            symbols.hits * self.hits
            + symbols.blocks * self.blocks
            + symbols.specials * self.specials
            + symbols.hollow_hits * self.hollow_hits
            + symbols.hollow_blocks * self.hollow_blocks
            + symbols.hollow_specials * self.hollow_specials
        )


class RerollStats(_ConfigModel):
    """Observability only: what the reroll stages did during one roll"""
    full_rerolls_occurred: int = 0          # 0 or 1
    dice_rerolled_count: int = 0
    total_rolls: int = 1


# ============================================================
# STATE EFFECTS & FORCED DICE
# ============================================================
class StateEffects(_ConfigModel):
    disarmed: bool = False                  # Cancel the die with the most filled hits
    vulnerable: bool = False                # Cancel the die with the most filled blocks

    @property
    def active(self) -> bool:
        return self.disarmed or self.vulnerable


class FixedDie(_ConfigModel):
    """A die whose face is forced by the caller instead of drawn."""
    color: str
    face_index: int = Field(alias="faceIndex")


# ============================================================
# ROLL RESULT
# ============================================================
@dataclass
class RollResult:
    """Outcome of one roll call"""
    aggregate: Aggregate
    dice: List[DieRoll] | None = None       # Only populated on the detailed path
    stats: RerollStats = field(default_factory=RerollStats)
