"""Validated node lookups used while the network is still being assembled."""

from collections.abc import Iterable, Mapping

from core.errors import InternalInvariantViolation
from core.types import NodeID
from world.graph.node import Node

NodeIndex = Mapping[NodeID, Node]


def index_nodes(nodes: NodeIndex | Iterable[Node]) -> NodeIndex:
    """Accept either an id->Node mapping or a plain collection of nodes."""
    if isinstance(nodes, Mapping):
        return nodes

    index: dict[NodeID, Node] = {}
    for node in nodes:
        if node.id in index:
            raise InternalInvariantViolation(f"Node {node.id} appears more than once")
        index[node.id] = node
    return index


def require_node(nodes: NodeIndex, node_id: NodeID, referenced_by: str) -> Node:
    """Get a node or fail loudly.

    Args:
        nodes: Node index to search
        node_id: ID to resolve
        referenced_by: Description of the record holding the reference, for the error message

    Raises:
        InternalInvariantViolation: If the node does not exist
    """
    node = nodes.get(node_id)
    if node is None:
        raise InternalInvariantViolation(f"{referenced_by} references missing node {node_id}")
    return node
