"""
Random sources for rolling.

A random source is any zero-argument callable returning a float in [0, 1).
Rolling code never touches the global `random` module state, so a caller can
replay a roll exactly by passing a seeded or scripted source.
"""

import math
import random
from typing import Callable, Sequence

RandomSource = Callable[[], float]

# Upper clamp for scripted values so floor(value * 8) never reaches 8
_MAX_SCRIPTED = 0.999999


def seeded_source(seed: int | None = None) -> RandomSource:
    """Per-call RNG isolated from the global random state."""
    return random.Random(seed).random


def scripted_source(values: Sequence[float]) -> RandomSource:
    """
    Returns the given values in order, cycling when exhausted.
    Values are clamped into [0, 0.999999]; an empty sequence always yields 0.0.
    """
    sequence = list(values)
    position = 0

    def next_value() -> float:
        nonlocal position
        if not sequence:
            return 0.0
        value = sequence[position % len(sequence)] or 0.0
        position += 1
        return min(_MAX_SCRIPTED, max(0.0, value))

    return next_value


def draw_face_index(rng: RandomSource, faces: int = 8) -> int:
    """Uniform face index in 0..faces-1 from one draw of the source."""
    index = math.floor(rng() * faces)
    return min(faces - 1, max(0, index))
