from dataclasses import dataclass

from core.types import NodeID, SettlementID

MIN_POPULATION = 100
MAX_POPULATION = 10_000  # exclusive


@dataclass(frozen=True)
class Settlement:
    id: SettlementID
    name: str
    population: int
    node_id: NodeID
