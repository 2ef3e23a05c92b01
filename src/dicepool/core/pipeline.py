"""
Post-roll symbol pipeline.

A pipeline is an ordered list of steps applied to a finished roll's aggregate:
promoting hollow symbols, adding flat bonuses, trading symbols for others,
and combat trades that spend own symbols to hurt the opponent's aggregate.
Steps are pydantic models, so a pipeline round-trips through plain dicts.
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.dicepool.exceptions import PipelineConfigError
from src.dicepool.models import COUNTER_NAMES, Aggregate, SymbolKind

logger = logging.getLogger(__name__)

Role = Literal["attacker", "defender"]

HOLLOW_TO_FILLED = (
    (SymbolKind.HOLLOW_HIT, SymbolKind.HIT),
    (SymbolKind.HOLLOW_BLOCK, SymbolKind.BLOCK),
    (SymbolKind.HOLLOW_SPECIAL, SymbolKind.SPECIAL),
)

# Multi-symbol costs are limited to two parts
MAX_PARTS = 2


def _parse_delta(value: Any) -> Dict[SymbolKind, int]:
    if not value:
        return {}
    return {SymbolKind.parse(name): int(count or 0) for name, count in dict(value).items()}


# ============================================================
# STEP DEFINITIONS
# ============================================================
class SymbolPart(BaseModel):
    """One component of a multi-symbol cost"""
    symbol: SymbolKind
    units: int = 1

    @field_validator("symbol", mode="before")
    @classmethod
    def parse_symbol(cls, value):
        return SymbolKind.parse(value)

    @field_validator("units", mode="before")
    @classmethod
    def at_least_one(cls, value):
        return max(1, int(value or 0))


class Ratio(BaseModel):
    x: int = 1                              # Symbols spent per group
    y: int = 1                              # Symbols gained per group


class PipelineStep(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    enabled: bool = True
    type: str

    def apply_post(self, aggregate: Aggregate) -> None:
        """Single-roll modification. No-op unless overridden."""

    def apply_combat(self, own: Aggregate, opponent: Aggregate, role: Role) -> None:
        """Modification that needs both sides of a combat. No-op unless overridden."""


class ElitePromotionStep(PipelineStep):
    """Turns hollow symbols into their filled counterparts, up to `max` in total."""
    type: Literal["ElitePromotion"] = "ElitePromotion"
    symbols: List[SymbolKind] = Field(default_factory=lambda: [h for h, _ in HOLLOW_TO_FILLED])
    max_total: int | None = Field(default=None, alias="max")

    @field_validator("symbols", mode="before")
    @classmethod
    def parse_symbols(cls, value):
        return [SymbolKind.parse(name) for name in value or []]

    def apply_post(self, aggregate: Aggregate) -> None:
        remaining = math.inf if self.max_total is None else self.max_total
        for hollow, filled in HOLLOW_TO_FILLED:
            if hollow not in self.symbols:
                continue
            take = min(aggregate.get(hollow), remaining)
            if take <= 0:
                continue
            aggregate.set(hollow, aggregate.get(hollow) - take)
            aggregate.set(filled, aggregate.get(filled) + take)
            remaining -= take
            if remaining <= 0:
                break


class AddSymbolsStep(PipelineStep):
    """Adds a flat per-symbol delta. Counters never drop below zero."""
    type: Literal["AddSymbols"] = "AddSymbols"
    delta: Dict[SymbolKind, int] = Field(default_factory=dict)

    @field_validator("delta", mode="before")
    @classmethod
    def parse_delta(cls, value):
        return _parse_delta(value)

    def apply_post(self, aggregate: Aggregate) -> None:
        for symbol, value in self.delta.items():
            if not value:
                continue
            aggregate.set(symbol, max(0, aggregate.get(symbol) + value))


class SwitchSymbolsStep(PipelineStep):
    """
    Trades symbols: every group of `ratio.x` `from` symbols becomes `ratio.y`
    `to` symbols, up to `max` groups. With `from_parts`, one group costs
    `units * ratio.x` of each part instead.
    """
    type: Literal["SwitchSymbols"] = "SwitchSymbols"
    from_symbol: SymbolKind | None = Field(default=None, alias="from")
    to: SymbolKind
    ratio: Ratio = Field(default_factory=Ratio)
    max_groups: int | None = Field(default=None, alias="max")
    from_parts: List[SymbolPart] | None = Field(default=None, alias="fromParts")

    @field_validator("from_symbol", "to", mode="before")
    @classmethod
    def parse_symbol(cls, value):
        return None if value is None else SymbolKind.parse(value)

    @field_validator("from_parts", mode="after")
    @classmethod
    def limit_parts(cls, value):
        return value[:MAX_PARTS] if value else value

    def apply_post(self, aggregate: Aggregate) -> None:
        spend = max(1, self.ratio.x or 1)
        gain = max(0, self.ratio.y or 0)

        if self.from_parts:
            available = [max(0, aggregate.get(p.symbol)) // (p.units * spend) for p in self.from_parts]
            groups = min(available)
            if self.max_groups is not None:
                groups = min(groups, max(0, self.max_groups))
            if groups <= 0:
                return
            for part in self.from_parts:
                aggregate.set(part.symbol, max(0, aggregate.get(part.symbol) - groups * part.units * spend))
            aggregate.set(self.to, aggregate.get(self.to) + groups * gain)
            return

        if self.from_symbol is None:
            return
        available = aggregate.get(self.from_symbol) // spend
        groups = available if self.max_groups is None else min(available, self.max_groups)
        if groups <= 0:
            return
        aggregate.set(self.from_symbol, aggregate.get(self.from_symbol) - groups * spend)
        aggregate.set(self.to, aggregate.get(self.to) + groups * gain)


class CombatSwitchStep(PipelineStep):
    """
    Spends groups of own symbols to add `self_delta` to the own aggregate and
    strip `opp_delta` from the opponent's, once per group paid.
    """
    type: Literal["CombatSwitch"] = "CombatSwitch"
    cost_symbol: SymbolKind = Field(default=SymbolKind.SPECIAL, alias="costSymbol")
    cost_count: int = Field(default=1, alias="costCount")
    self_delta: Dict[SymbolKind, int] = Field(default_factory=dict, alias="selfDelta")
    opp_delta: Dict[SymbolKind, int] = Field(default_factory=dict, alias="oppDelta")
    max_groups: int | None = Field(default=None, alias="max")
    cost_parts: List[SymbolPart] | None = Field(default=None, alias="costParts")

    @field_validator("self_delta", "opp_delta", mode="before")
    @classmethod
    def parse_deltas(cls, value):
        return _parse_delta(value)

    @field_validator("cost_symbol", mode="before")
    @classmethod
    def fallback_to_specials(cls, value):
        try:
            return SymbolKind.parse(value)
        except ValueError:
            return SymbolKind.SPECIAL

    @field_validator("cost_count", mode="before")
    @classmethod
    def at_least_one(cls, value):
        return max(1, int(value or 0))

    @field_validator("max_groups", mode="before")
    @classmethod
    def non_negative(cls, value):
        return None if value is None else max(0, int(value))

    @field_validator("cost_parts", mode="before")
    @classmethod
    def drop_unknown_parts(cls, value):
        if not value:
            return None
        valid = []
        for part in value:
            try:
                SymbolKind.parse(part.get("symbol") if isinstance(part, dict) else part.symbol)
            except (ValueError, AttributeError):
                continue
            valid.append(part)
        return valid[:MAX_PARTS] or None

    def apply_combat(self, own: Aggregate, opponent: Aggregate, role: Role) -> None:
        parts = self.cost_parts or [SymbolPart(symbol=self.cost_symbol, units=1)]
        costs = [(p.symbol, p.units * self.cost_count) for p in parts]

        groups = min(max(0, own.get(symbol)) // units for symbol, units in costs)
        if self.max_groups is not None:
            groups = min(groups, self.max_groups)
        if groups <= 0:
            return

        for symbol, units in costs:
            own.set(symbol, max(0, own.get(symbol) - groups * units))
        for symbol, value in self.self_delta.items():
            value = max(0, value)
            if value:
                own.set(symbol, own.get(symbol) + value * groups)
        for symbol, value in self.opp_delta.items():
            value = max(0, value)
            if value:
                opponent.set(symbol, max(0, opponent.get(symbol) - value * groups))
        logger.debug("%s %s paid %d group(s) of %s", role, self.id, groups, costs)


STEP_TYPES: Dict[str, type[PipelineStep]] = {
    "ElitePromotion": ElitePromotionStep,
    "AddSymbols": AddSymbolsStep,
    "SwitchSymbols": SwitchSymbolsStep,
    "CombatSwitch": CombatSwitchStep,
}


# ============================================================
# PIPELINE
# ============================================================
class Pipeline:
    """Ordered steps; disabled steps are skipped."""

    def __init__(self, steps: Iterable[PipelineStep] = ()):
        self.steps: List[PipelineStep] = list(steps)

    def _active(self) -> Iterable[PipelineStep]:
        return (step for step in self.steps if step.enabled)

    def apply_post(self, aggregate: Aggregate) -> Aggregate:
        """Runs single-roll steps in place. Returns the same aggregate."""
        for step in self._active():
            step.apply_post(aggregate)
        return aggregate

    def transform(self, aggregate: Aggregate) -> Aggregate:
        """Pipeline result on a copy, leaving the input untouched."""
        return self.apply_post(aggregate.copy())

    def apply_combat(self, own: Aggregate, opponent: Aggregate, role: Role) -> None:
        for step in self._active():
            step.apply_combat(own, opponent, role)
        for agg in (own, opponent):
            for name in COUNTER_NAMES:
                setattr(agg, name, max(0, getattr(agg, name)))


# ============================================================
# SERIALIZATION
# ============================================================
def serialize_pipeline(pipeline: Pipeline) -> List[Dict[str, Any]]:
    return [step.model_dump(mode="json", by_alias=True, exclude_none=True) for step in pipeline.steps]


def build_pipeline(data: Iterable[Dict[str, Any]]) -> Pipeline:
    """
    Rebuilds a pipeline from serialized steps. Steps of an unknown type are
    dropped with a warning.

    Raises:
        PipelineConfigError: If a step of a known type fails validation.
    """
    steps: List[PipelineStep] = []
    for raw in data or []:
        step_cls = STEP_TYPES.get((raw or {}).get("type"))
        if step_cls is None:
            logger.warning("Dropping pipeline step of unknown type: %r", (raw or {}).get("type"))
            continue
        try:
            steps.append(step_cls.model_validate(raw))
        except ValidationError as e:
            raise PipelineConfigError(f"Invalid {raw.get('type')} step {raw.get('id')!r}: {e}") from e
    return Pipeline(steps)
