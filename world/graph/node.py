from dataclasses import dataclass

from core.types import NodeID, NodeKind, Position


@dataclass(frozen=True)
class Node:
    id: NodeID
    position: Position
    kind: NodeKind = NodeKind.SETTLEMENT

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]
