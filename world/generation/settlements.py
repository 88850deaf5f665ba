"""Random settlement placement."""

import logging
from collections.abc import Sequence

import numpy as np

from core.errors import ConfigError
from core.types import NodeID, NodeKind, Range, SettlementID
from world.graph.node import Node
from world.graph.settlement import MAX_POPULATION, MIN_POPULATION, Settlement

logger = logging.getLogger(__name__)

DEFAULT_NAME_POOL: tuple[str, ...] = (
    "Ashvale",
    "Brimstead",
    "Cairnhold",
    "Dunford",
    "Eldham",
    "Fairreach",
    "Glenbrook",
    "Highmere",
    "Ironhill",
    "Jorwick",
)


def _check_range(label: str, value: Range) -> None:
    if len(value) != 2:
        raise ConfigError(f"{label} must contain exactly 2 values, got {value!r}")
    if value[0] > value[1]:
        raise ConfigError(f"{label} min must be <= max, got {value!r}")


def generate_settlements(
    count: int,
    x_range: Range,
    y_range: Range,
    name_pool: Sequence[str],
    rng: np.random.Generator,
) -> tuple[list[Settlement], list[Node]]:
    """Create ``count`` settlements at random positions.

    Settlement ``i`` (1-based, in generation order) sits on node ``i``. Names
    are drawn from ``name_pool`` with replacement and fall back to
    ``"Settlement {id}"`` when the pool is empty. For each settlement the
    random source is consumed in a fixed order: name, population, x, y.

    Args:
        count: Number of settlements, must be >= 0
        x_range: [min, max] horizontal bounds
        y_range: [min, max] vertical bounds
        name_pool: Candidate names
        rng: Seeded random source

    Returns:
        Settlements and their nodes, both ordered by id

    Raises:
        ConfigError: If count is negative or a range is inverted
    """
    if count < 0:
        raise ConfigError(f"Settlement count must be non-negative, got {count}")
    _check_range("x_range", x_range)
    _check_range("y_range", y_range)

    settlements: list[Settlement] = []
    nodes: list[Node] = []

    for idx in range(1, count + 1):
        if len(name_pool) > 0:
            name = name_pool[int(rng.integers(len(name_pool)))]
        else:
            name = f"Settlement {idx}"

        population = int(rng.integers(MIN_POPULATION, MAX_POPULATION))
        x = float(rng.uniform(x_range[0], x_range[1]))
        y = float(rng.uniform(y_range[0], y_range[1]))

        node = Node(id=NodeID(idx), position=(x, y), kind=NodeKind.SETTLEMENT)
        nodes.append(node)
        settlements.append(
            Settlement(id=SettlementID(idx), name=name, population=population, node_id=node.id)
        )

    logger.debug(f"Generated {len(settlements)} settlements in {x_range} x {y_range}")
    return settlements, nodes
