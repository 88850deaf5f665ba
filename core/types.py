from enum import Enum
from typing import NewType

# IDs
NodeID = NewType("NodeID", int)
RoadID = NewType("RoadID", int)
SettlementID = NewType("SettlementID", int)

# Geometry
Position = tuple[float, float]
Range = tuple[float, float]


class NodeKind(str, Enum):
    """Role of a point in the spatial graph."""

    NORMAL = "NORMAL"
    JUNCTION = "JUNCTION"
    SETTLEMENT = "SETTLEMENT"
