import logging

import pytest

from src.dicepool.core import scripted_source
from src.dicepool.models import FaceTable

# RED: single-hit faces at 0 and 2, six blanks
SINGLE_HIT_FACES = {
    "RED": [["HIT"], [], ["HIT"], [], [], [], [], []],
}

COMBAT_FACES = {
    "RED": [
        ["HIT", "HIT"],             # 0
        ["HIT", "SPECIAL"],         # 1
        ["HIT"],                    # 2
        ["HOLLOW_HIT"],             # 3
        ["SPECIAL"],                # 4
        [],                         # 5
        [],                         # 6
        ["HIT", "HOLLOW_HIT"],      # 7
    ],
    "BLUE": [
        {"BLOCK": 2},
        {"BLOCK": 1, "SPECIAL": 1},
        {"BLOCK": 1},
        {"HOLLOW_BLOCK": 1},
        {}, {}, {}, {},
    ],
}


@pytest.fixture
def single_hit_table() -> FaceTable:
    return FaceTable.from_mapping(SINGLE_HIT_FACES)


@pytest.fixture
def combat_table() -> FaceTable:
    return FaceTable.from_mapping(COMBAT_FACES)


@pytest.fixture
def rng_for():
    """Scripted source that lands on the given face indices, in order."""
    def make(*indices: int):
        return scripted_source([(i + 0.5) / 8 for i in indices])
    return make


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger("src.dicepool")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
