"""Plain-data snapshot of a generated network for presentation and simulation layers."""

from typing import Any

import orjson
from pydantic import Field

from world.generation.params import WorldConfig
from world.graph.network import RoadNetwork


class NetworkSnapshot(WorldConfig):
    """Generated network together with the parameters that produced it.

    Inherits every generation parameter from WorldConfig and adds the
    generation results and the complete graph structure, keeping a flat
    field layout.
    """

    # Generation results (additional fields beyond WorldConfig)
    generated_nodes: int = Field(ge=0, description="Number of nodes generated")
    generated_settlements: int = Field(ge=0, description="Number of settlements generated")
    generated_roads: int = Field(ge=0, description="Number of roads generated")
    stats: dict[str, int] = Field(
        default_factory=dict, description="Per-stage counters from the generator"
    )

    # Graph structure
    graph: dict[str, Any] = Field(description="Complete graph structure as dict")


def build_snapshot(
    network: RoadNetwork, config: WorldConfig, stats: dict[str, int] | None = None
) -> NetworkSnapshot:
    """Translate a finished network into a NetworkSnapshot."""
    return NetworkSnapshot(
        **config.model_dump(),
        generated_nodes=network.get_node_count(),
        generated_settlements=network.get_settlement_count(),
        generated_roads=network.get_road_count(),
        stats=dict(stats or {}),
        graph=network.to_dict(),
    )


def dumps_snapshot(snapshot: NetworkSnapshot, indent: bool = False) -> bytes:
    """Serialize a snapshot to JSON bytes."""
    option = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(snapshot.model_dump(mode="json"), option=option)
