"""Connectivity repair: bridge disconnected road clusters until one remains."""

import logging
import math
from collections import deque
from collections.abc import Iterable, Sequence

from core.types import NodeID, RoadID
from world.generation.metric import distance
from world.graph.lookup import NodeIndex, index_nodes, require_node
from world.graph.node import Node
from world.graph.road import Road
from world.graph.settlement import Settlement

logger = logging.getLogger(__name__)

Adjacency = dict[NodeID, set[NodeID]]


def build_adjacency(roads: Iterable[Road], nodes: NodeIndex) -> Adjacency:
    """Undirected adjacency over node ids; every road contributes both directions."""
    adjacency: Adjacency = {}
    for road in roads:
        a, b = road.endpoints
        require_node(nodes, a, f"Road {road.id}")
        require_node(nodes, b, f"Road {road.id}")
        adjacency.setdefault(a, set()).add(b)
        adjacency.setdefault(b, set()).add(a)
    return adjacency


def _collect_component(start: NodeID, adjacency: Adjacency, visited: set[NodeID]) -> set[NodeID]:
    component: set[NodeID] = set()
    stack = [start]

    while stack:
        node_id = stack.pop()
        if node_id in visited:
            continue
        visited.add(node_id)
        component.add(node_id)

        for neighbor in sorted(adjacency.get(node_id, ())):
            if neighbor not in visited:
                stack.append(neighbor)

    return component


def _components(
    settlements: Iterable[Settlement], nodes: NodeIndex, adjacency: Adjacency
) -> list[set[NodeID]]:
    visited: set[NodeID] = set()
    components: list[set[NodeID]] = []

    for settlement in sorted(settlements, key=lambda s: s.id):
        require_node(nodes, settlement.node_id, f"Settlement {settlement.id}")
        if settlement.node_id in visited:
            continue
        components.append(_collect_component(settlement.node_id, adjacency, visited))

    return components


def find_components(
    settlements: Iterable[Settlement],
    nodes: NodeIndex | Iterable[Node],
    roads: Iterable[Road],
) -> list[set[NodeID]]:
    """Connected components reachable from settlement nodes.

    Components are listed in discovery order, scanning settlements by
    ascending id. A settlement with no roads forms a singleton component;
    non-settlement nodes only appear when a road reaches them.
    """
    node_index = index_nodes(nodes)
    return _components(settlements, node_index, build_adjacency(roads, node_index))


def closest_pair(
    component_a: set[NodeID], component_b: set[NodeID], nodes: NodeIndex
) -> tuple[NodeID, NodeID, float]:
    """Closest (a, b) pair across two components.

    Both sides are scanned in ascending id order; the first pair reaching the
    minimum distance wins.
    """
    best_dist = math.inf
    best_pair: tuple[NodeID, NodeID] | None = None

    positions_b = [
        (b, require_node(nodes, b, "Component").position) for b in sorted(component_b)
    ]
    for a in sorted(component_a):
        pos_a = require_node(nodes, a, "Component").position
        for b, pos_b in positions_b:
            dist = distance(pos_a, pos_b)
            if best_pair is None or dist < best_dist:
                best_dist = dist
                best_pair = (a, b)

    if best_pair is None:
        raise ValueError("Cannot bridge an empty component")
    return best_pair[0], best_pair[1], best_dist


def ensure_connected(
    settlements: Sequence[Settlement],
    nodes: NodeIndex | Iterable[Node],
    roads: list[Road],
) -> list[Road]:
    """Append connector roads to ``roads`` until all settlements form one component.

    Components are merged two at a time from the front of the worklist, each
    merge bridged by a new road between the closest node pair; the merged
    component goes to the back. New road ids continue after the highest
    existing id. Calling this on an already connected network adds nothing.

    Returns:
        The roads that were appended, in creation order

    Raises:
        InternalInvariantViolation: If a road or settlement references a missing node
    """
    node_index = index_nodes(nodes)
    adjacency = build_adjacency(roads, node_index)
    worklist = deque(_components(settlements, node_index, adjacency))
    logger.debug(f"Found {len(worklist)} components across {len(settlements)} settlements")

    next_id = max((road.id for road in roads), default=0) + 1
    added: list[Road] = []

    while len(worklist) > 1:
        component_a = worklist.popleft()
        component_b = worklist.popleft()

        a, b, dist = closest_pair(component_a, component_b, node_index)
        road = Road(id=RoadID(next_id), endpoints=(a, b), name=f"Connector {a}-{b}")
        roads.append(road)
        added.append(road)
        next_id += 1
        logger.debug(f"Bridged nodes {a} and {b} with road {road.id} ({dist:.2f})")

        worklist.append(component_a | component_b)
        adjacency.setdefault(a, set()).add(b)
        adjacency.setdefault(b, set()).add(a)

    return added
