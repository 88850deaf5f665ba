from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from core.errors import InternalInvariantViolation
from core.types import NodeID, NodeKind, RoadID, SettlementID
from world.graph.node import Node
from world.graph.road import Road
from world.graph.settlement import Settlement


class RoadNetwork:
    """Nodes, settlements and roads produced by one generation run.

    The network is mutable only while the generation pipeline owns it. Once
    ``freeze()`` is called the mappings become read-only views and every
    ``add_*`` call raises ``InternalInvariantViolation``.
    """

    def __init__(self) -> None:
        self._nodes: dict[NodeID, Node] = {}
        self._settlements: dict[SettlementID, Settlement] = {}
        self._roads: dict[RoadID, Road] = {}
        self._adj: dict[NodeID, list[RoadID]] = {}  # node -> incident roads
        self._settlement_by_node: dict[NodeID, SettlementID] = {}
        self._frozen = False

    @property
    def nodes(self) -> Mapping[NodeID, Node]:
        return MappingProxyType(self._nodes) if self._frozen else self._nodes

    @property
    def settlements(self) -> Mapping[SettlementID, Settlement]:
        return MappingProxyType(self._settlements) if self._frozen else self._settlements

    @property
    def roads(self) -> Mapping[RoadID, Road]:
        return MappingProxyType(self._roads) if self._frozen else self._roads

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Hand the network off as a read-only snapshot."""
        self._frozen = True

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InternalInvariantViolation("Road network is frozen and cannot be modified")

    def add_node(self, node: Node) -> None:
        """Add a node to the network."""
        self._check_mutable()
        if node.id in self._nodes:
            raise InternalInvariantViolation(f"Node {node.id} already exists")

        self._nodes[node.id] = node
        self._adj[node.id] = []

    def add_settlement(self, settlement: Settlement) -> None:
        """Add a settlement whose node is already part of the network."""
        self._check_mutable()
        if settlement.id in self._settlements:
            raise InternalInvariantViolation(f"Settlement {settlement.id} already exists")

        node = self._nodes.get(settlement.node_id)
        if node is None:
            raise InternalInvariantViolation(
                f"Settlement {settlement.id} references missing node {settlement.node_id}"
            )
        if node.kind != NodeKind.SETTLEMENT:
            raise InternalInvariantViolation(
                f"Settlement {settlement.id} placed on {node.kind.value} node {node.id}"
            )
        if settlement.node_id in self._settlement_by_node:
            raise InternalInvariantViolation(
                f"Node {settlement.node_id} already hosts settlement "
                f"{self._settlement_by_node[settlement.node_id]}"
            )

        self._settlements[settlement.id] = settlement
        self._settlement_by_node[settlement.node_id] = settlement.id

    def add_road(self, road: Road) -> None:
        """Add a road between two existing nodes."""
        self._check_mutable()
        if road.id in self._roads:
            raise InternalInvariantViolation(f"Road {road.id} already exists")

        a, b = road.endpoints
        if a == b:
            raise InternalInvariantViolation(f"Road {road.id} is a self-loop on node {a}")
        for node_id in (a, b):
            if node_id not in self._nodes:
                raise InternalInvariantViolation(
                    f"Road {road.id} references missing node {node_id}"
                )

        self._roads[road.id] = road
        self._adj[a].append(road.id)
        self._adj[b].append(road.id)

    def get_node(self, node_id: NodeID) -> Node | None:
        """Get a node by ID."""
        return self._nodes.get(node_id)

    def get_settlement(self, settlement_id: SettlementID) -> Settlement | None:
        """Get a settlement by ID."""
        return self._settlements.get(settlement_id)

    def get_road(self, road_id: RoadID) -> Road | None:
        """Get a road by ID."""
        return self._roads.get(road_id)

    def settlement_for_node(self, node_id: NodeID) -> Settlement | None:
        """Get the settlement located at a node, if any."""
        settlement_id = self._settlement_by_node.get(node_id)
        if settlement_id is None:
            return None
        return self._settlements[settlement_id]

    def get_roads_at(self, node_id: NodeID) -> list[Road]:
        """Get all roads touching a node, in ascending road id order."""
        return sorted((self._roads[rid] for rid in self._adj.get(node_id, [])), key=lambda r: r.id)

    def get_neighbors(self, node_id: NodeID) -> list[NodeID]:
        """Get all nodes sharing a road with ``node_id``, in ascending id order."""
        return sorted({road.other_end(node_id) for road in self.get_roads_at(node_id)})

    def get_node_count(self) -> int:
        return len(self._nodes)

    def get_settlement_count(self) -> int:
        return len(self._settlements)

    def get_road_count(self) -> int:
        return len(self._roads)

    def is_connected(self) -> bool:
        """Check that every settlement node is reachable from every other one."""
        if not self._settlements:
            return True

        start_node = min(self._settlements.values(), key=lambda s: s.id).node_id
        visited: set[NodeID] = set()
        stack = [start_node]

        while stack:
            node_id = stack.pop()
            if node_id in visited:
                continue
            visited.add(node_id)

            for neighbor in self.get_neighbors(node_id):
                if neighbor not in visited:
                    stack.append(neighbor)

        return all(s.node_id in visited for s in self._settlements.values())

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view of the network, each collection ordered by id."""
        return {
            "nodes": [
                {"id": node.id, "x": node.x, "y": node.y, "kind": node.kind.value}
                for node in sorted(self._nodes.values(), key=lambda n: n.id)
            ],
            "settlements": [
                {
                    "id": s.id,
                    "name": s.name,
                    "population": s.population,
                    "node_id": s.node_id,
                }
                for s in sorted(self._settlements.values(), key=lambda s: s.id)
            ],
            "roads": [
                {"id": road.id, "name": road.name, "from_node": road.start, "to_node": road.end}
                for road in sorted(self._roads.values(), key=lambda r: r.id)
            ],
        }

    def __str__(self) -> str:
        return (
            f"RoadNetwork(nodes={len(self._nodes)}, settlements={len(self._settlements)}, "
            f"roads={len(self._roads)})"
        )

    def __repr__(self) -> str:
        return (
            f"RoadNetwork(nodes={list(self._nodes.keys())}, "
            f"settlements={list(self._settlements.keys())}, roads={list(self._roads.keys())})"
        )
