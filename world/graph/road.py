from dataclasses import dataclass

from core.types import NodeID, RoadID


@dataclass(frozen=True)
class Road:
    id: RoadID
    endpoints: tuple[NodeID, NodeID]
    name: str | None = None

    @property
    def start(self) -> NodeID:
        return self.endpoints[0]

    @property
    def end(self) -> NodeID:
        return self.endpoints[1]

    def other_end(self, node_id: NodeID) -> NodeID:
        """Return the endpoint opposite to ``node_id``."""
        if node_id == self.endpoints[0]:
            return self.endpoints[1]
        if node_id == self.endpoints[1]:
            return self.endpoints[0]
        raise ValueError(f"Node {node_id} is not an endpoint of road {self.id}")
