"""Hub-and-spoke road layout with a local mesh among smaller settlements."""

import logging
import math
from collections.abc import Iterable, Sequence
from fractions import Fraction

from core.errors import ConfigError, InternalInvariantViolation
from core.types import NodeID, RoadID
from world.generation.metric import distance, pairs_within
from world.graph.lookup import NodeIndex, index_nodes, require_node
from world.graph.node import Node
from world.graph.road import Road
from world.graph.settlement import Settlement

logger = logging.getLogger(__name__)


def validate_build_params(hub_percent: float, mesh_distance_threshold: float) -> None:
    """Raise ConfigError unless hub_percent is in (0, 1] and the threshold is >= 0."""
    if not 0 < hub_percent <= 1:
        raise ConfigError(f"hub_percent must be in (0, 1], got {hub_percent}")
    if not mesh_distance_threshold >= 0:
        raise ConfigError(
            f"mesh_distance_threshold must be non-negative, got {mesh_distance_threshold}"
        )


def hub_count(n: int, hub_percent: float) -> int:
    """Number of hubs for ``n`` settlements: ceil(hub_percent * n), at least 1, at most n.

    Returns 0 only when there are no settlements at all.
    """
    if n <= 0:
        return 0
    # Decimal form keeps products like 0.1 * 30 == 3.0000000000000004 from gaining a hub
    count = max(1, math.ceil(Fraction(str(hub_percent)) * n))
    return min(count, n)


def rank_by_population(settlements: Iterable[Settlement]) -> list[Settlement]:
    """Sort by population, largest first. Equal populations keep their input order."""
    return sorted(settlements, key=lambda s: s.population, reverse=True)


def split_hubs(
    settlements: Iterable[Settlement], hub_percent: float
) -> tuple[list[Settlement], list[Settlement]]:
    """Partition settlements into (hubs, non_hubs), both in population rank order."""
    ranked = rank_by_population(settlements)
    count = hub_count(len(ranked), hub_percent)
    return ranked[:count], ranked[count:]


def _nearest_hub(
    position: tuple[float, float], hubs: Sequence[Settlement], nodes: NodeIndex
) -> Settlement:
    nearest = hubs[0]
    nearest_dist = math.inf
    for hub in hubs:
        dist = distance(position, nodes[hub.node_id].position)
        if dist < nearest_dist:
            nearest = hub
            nearest_dist = dist
    return nearest


def build_roads(
    settlements: Sequence[Settlement],
    nodes: NodeIndex | Iterable[Node],
    hub_percent: float,
    mesh_distance_threshold: float,
) -> list[Road]:
    """Connect settlements with spoke roads to their nearest hub plus a proximity mesh.

    The most populous ``hub_count(N, hub_percent)`` settlements become hubs.
    Every other settlement gets one road to its nearest hub, and every pair
    of non-hubs at most ``mesh_distance_threshold`` apart gets a direct road.

    Road ids start at 1 and follow emission order: all spoke roads first (in
    population rank order of the non-hub), then all mesh roads (in pair order).

    Raises:
        ConfigError: If hub_percent or mesh_distance_threshold is out of range
        InternalInvariantViolation: If a settlement references a missing node or
            two settlements share a node
    """
    validate_build_params(hub_percent, mesh_distance_threshold)
    node_index = index_nodes(nodes)
    seen_nodes: set[NodeID] = set()
    for settlement in settlements:
        require_node(node_index, settlement.node_id, f"Settlement {settlement.id}")
        if settlement.node_id in seen_nodes:
            raise InternalInvariantViolation(
                f"Node {settlement.node_id} hosts more than one settlement"
            )
        seen_nodes.add(settlement.node_id)

    hubs, non_hubs = split_hubs(settlements, hub_percent)
    logger.debug(f"Selected {len(hubs)} hubs out of {len(settlements)} settlements")

    roads: list[Road] = []
    road_id = 1

    # Spokes: every non-hub to its nearest hub
    positions: list[tuple[float, float]] = []
    for settlement in non_hubs:
        node = node_index[settlement.node_id]
        positions.append(node.position)

        hub = _nearest_hub(node.position, hubs, node_index)
        roads.append(
            Road(
                id=RoadID(road_id),
                endpoints=(settlement.node_id, hub.node_id),
                name=f"{settlement.name} to {hub.name}",
            )
        )
        road_id += 1

    spoke_count = len(roads)

    # Local mesh between nearby non-hubs
    for i, j in pairs_within(positions, mesh_distance_threshold):
        a, b = non_hubs[i], non_hubs[j]
        roads.append(
            Road(
                id=RoadID(road_id),
                endpoints=(a.node_id, b.node_id),
                name=f"{a.name} <-> {b.name}",
            )
        )
        road_id += 1

    logger.debug(f"Built {spoke_count} spoke roads and {len(roads) - spoke_count} mesh roads")
    return roads
