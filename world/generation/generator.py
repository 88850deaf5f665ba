"""Settlement placement and road network generation pipeline."""

import logging
from collections.abc import Mapping
from typing import Any

import numpy as np

from world.generation.builder import build_roads, hub_count
from world.generation.params import WorldConfig
from world.generation.repair import ensure_connected, find_components
from world.generation.settlements import generate_settlements
from world.graph.network import RoadNetwork
from world.graph.node import Node
from world.graph.road import Road
from world.graph.settlement import Settlement

logger = logging.getLogger(__name__)


class WorldGenerator:
    """Runs settlement placement, road building and connectivity repair in order."""

    def __init__(self, config: WorldConfig, rng: np.random.Generator | None = None) -> None:
        """Initialize the world generator.

        Args:
            config: Generation parameters (Pydantic model, validates on instantiation)
            rng: Random source; defaults to a generator seeded with ``config.seed``
        """
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)

        # Per-run statistics
        self.hub_count = 0
        self.spoke_count = 0
        self.mesh_count = 0
        self.bridge_count = 0
        self.initial_component_count = 0

    def generate(self) -> RoadNetwork:
        """Generate a complete, connected road network.

        Returns:
            A frozen RoadNetwork

        Raises:
            ConfigError: If settlement placement rejects the bounds or count
            InternalInvariantViolation: If any generated record is inconsistent
        """
        cfg = self.config

        # Step 1: Place settlements
        settlements, nodes = generate_settlements(
            cfg.settlement_count, cfg.x_range, cfg.y_range, cfg.name_pool, self.rng
        )
        node_index = {node.id: node for node in nodes}

        # Step 2: Hub spokes and local mesh
        roads = build_roads(settlements, node_index, cfg.hub_percent, cfg.mesh_distance_threshold)
        self.hub_count = hub_count(len(settlements), cfg.hub_percent)
        self.spoke_count = len(settlements) - self.hub_count
        self.mesh_count = len(roads) - self.spoke_count

        # Step 3: Bridge disconnected clusters
        self.initial_component_count = len(find_components(settlements, node_index, roads))
        bridges = ensure_connected(settlements, node_index, roads)
        self.bridge_count = len(bridges)

        # Step 4: Assemble and hand off
        network = self._assemble(settlements, nodes, roads)

        logger.info(
            f"Generated {network}: {self.hub_count} hubs, {self.spoke_count} spokes, "
            f"{self.mesh_count} mesh roads, {self.bridge_count} bridges "
            f"joining {self.initial_component_count} components"
        )
        return network

    def stats(self) -> dict[str, int]:
        """Counters from the last ``generate()`` call."""
        return {
            "hub_count": self.hub_count,
            "spoke_count": self.spoke_count,
            "mesh_count": self.mesh_count,
            "bridge_count": self.bridge_count,
            "initial_component_count": self.initial_component_count,
        }

    @staticmethod
    def _assemble(
        settlements: list[Settlement], nodes: list[Node], roads: list[Road]
    ) -> RoadNetwork:
        network = RoadNetwork()
        for node in nodes:
            network.add_node(node)
        for settlement in settlements:
            network.add_settlement(settlement)
        for road in roads:
            network.add_road(road)
        network.freeze()
        return network


def generate_world(
    config: WorldConfig | Mapping[str, Any], rng: np.random.Generator | None = None
) -> RoadNetwork:
    """Validate ``config`` and generate a connected road network.

    Raises:
        ConfigError: If the configuration is invalid; nothing is generated
        InternalInvariantViolation: If generation produced inconsistent records
    """
    world_config = WorldConfig.coerce(config)
    return WorldGenerator(world_config, rng=rng).generate()
