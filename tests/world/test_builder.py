"""Tests for hub selection, spoke roads and the proximity mesh."""

import unittest

import pytest

from core.errors import ConfigError, InternalInvariantViolation
from core.types import NodeID, NodeKind, SettlementID
from world.generation.builder import build_roads, hub_count, split_hubs
from world.graph.node import Node
from world.graph.settlement import Settlement


def make_world(
    specs: list[tuple[int, tuple[float, float]]],
) -> tuple[list[Settlement], dict[NodeID, Node]]:
    """Build settlements from (population, position) pairs; ids start at 1."""
    settlements = []
    nodes = {}
    for idx, (population, position) in enumerate(specs, start=1):
        node = Node(id=NodeID(idx), position=position, kind=NodeKind.SETTLEMENT)
        nodes[node.id] = node
        settlements.append(
            Settlement(id=SettlementID(idx), name=f"S{idx}", population=population, node_id=node.id)
        )
    return settlements, nodes


@pytest.mark.parametrize(
    ("n", "hub_percent", "expected"),
    [
        (0, 0.5, 0),
        (1, 0.05, 1),
        (5, 0.2, 1),
        (7, 0.5, 4),
        (3, 0.9, 3),
        (10, 1.0, 10),
        (30, 0.1, 3),
        (10, 0.30000000001, 4),
        (100, 0.05, 5),
        (2, 0.01, 1),
    ],
)
def test_hub_count(n: int, hub_percent: float, expected: int) -> None:
    """hub_count is ceil(hub_percent * n), at least 1 and at most n."""
    assert hub_count(n, hub_percent) == expected


class TestSplitHubs(unittest.TestCase):
    """Test population ranking and hub partitioning."""

    def test_largest_become_hubs(self) -> None:
        settlements, _ = make_world(
            [(300, (0, 0)), (9000, (1, 0)), (500, (2, 0)), (8000, (3, 0))]
        )
        hubs, non_hubs = split_hubs(settlements, 0.5)
        self.assertEqual([s.population for s in hubs], [9000, 8000])
        self.assertEqual([s.population for s in non_hubs], [500, 300])

    def test_equal_populations_keep_generation_order(self) -> None:
        settlements, _ = make_world([(1000, (0, 0)), (1000, (1, 0)), (1000, (2, 0))])
        hubs, non_hubs = split_hubs(settlements, 0.3)
        self.assertEqual([s.id for s in hubs], [1])
        self.assertEqual([s.id for s in non_hubs], [2, 3])


class TestBuildRoads(unittest.TestCase):
    """Test spoke and mesh road emission."""

    def test_empty_input(self) -> None:
        self.assertEqual(build_roads([], {}, 0.2, 50.0), [])

    def test_single_settlement_has_no_roads(self) -> None:
        settlements, nodes = make_world([(5000, (10.0, 10.0))])
        self.assertEqual(build_roads(settlements, nodes, 0.05, 50.0), [])

    def test_one_hub_five_settlements(self) -> None:
        """With hub_percent 0.2, four spokes lead to the single hub."""
        settlements, nodes = make_world(
            [
                (5000, (0.0, 0.0)),
                (4000, (100.0, 0.0)),
                (3000, (0.0, 100.0)),
                (2000, (-100.0, 0.0)),
                (1000, (0.0, -100.0)),
            ]
        )
        roads = build_roads(settlements, nodes, 0.2, 50.0)

        self.assertEqual(len(roads), 4)
        self.assertEqual([r.id for r in roads], [1, 2, 3, 4])
        self.assertEqual([r.endpoints for r in roads], [(2, 1), (3, 1), (4, 1), (5, 1)])
        self.assertEqual(roads[0].name, "S2 to S1")

    def test_spokes_pick_nearest_hub(self) -> None:
        settlements, nodes = make_world(
            [
                (9000, (0.0, 0.0)),
                (8000, (1000.0, 0.0)),
                (100, (900.0, 0.0)),
                (200, (50.0, 0.0)),
            ]
        )
        roads = build_roads(settlements, nodes, 0.5, 0.0)
        self.assertEqual([r.endpoints for r in roads], [(4, 1), (3, 2)])

    def test_equidistant_hubs_first_ranked_wins(self) -> None:
        settlements, nodes = make_world(
            [(8000, (-10.0, 0.0)), (9000, (10.0, 0.0)), (100, (0.0, 0.0))]
        )
        roads = build_roads(settlements, nodes, 0.5, 0.0)
        # Settlement 2 outranks settlement 1, so it is scanned first
        self.assertEqual([r.endpoints for r in roads], [(3, 2)])

    def test_mesh_boundary_is_inclusive(self) -> None:
        settlements, nodes = make_world(
            [(9000, (500.0, 500.0)), (200, (0.0, 0.0)), (100, (30.0, 40.0))]
        )
        roads = build_roads(settlements, nodes, 0.2, 50.0)

        self.assertEqual(len(roads), 3)
        mesh = roads[2]
        self.assertEqual(mesh.id, 3)
        self.assertEqual(mesh.endpoints, (2, 3))
        self.assertEqual(mesh.name, "S2 <-> S3")

    def test_mesh_excludes_pairs_beyond_threshold(self) -> None:
        settlements, nodes = make_world(
            [(9000, (500.0, 500.0)), (200, (0.0, 0.0)), (100, (30.0, 40.0))]
        )
        roads = build_roads(settlements, nodes, 0.2, 49.9)
        self.assertEqual(len(roads), 2)

    def test_mesh_never_links_hubs(self) -> None:
        settlements, nodes = make_world(
            [(9000, (0.0, 0.0)), (8000, (1.0, 0.0)), (100, (500.0, 0.0))]
        )
        roads = build_roads(settlements, nodes, 0.5, 1000.0)
        self.assertEqual([r.endpoints for r in roads], [(3, 2)])

    def test_spoke_ids_precede_mesh_ids(self) -> None:
        settlements, nodes = make_world(
            [
                (9000, (0.0, 0.0)),
                (500, (100.0, 0.0)),
                (400, (110.0, 0.0)),
                (300, (120.0, 0.0)),
            ]
        )
        roads = build_roads(settlements, nodes, 0.25, 15.0)

        self.assertEqual([r.id for r in roads], [1, 2, 3, 4, 5])
        self.assertTrue(all(" to " in r.name for r in roads[:3]))
        # Mesh pairs in (i, j) order over the ranked non-hubs
        self.assertEqual([r.endpoints for r in roads[3:]], [(2, 3), (3, 4)])

    def test_identical_coordinates(self) -> None:
        settlements, nodes = make_world([(1000 - i, (5.0, 5.0)) for i in range(4)])
        roads = build_roads(settlements, nodes, 0.25, 0.0)

        self.assertEqual(len(roads), 6)  # 3 spokes + 3 zero-length mesh roads
        for road in roads:
            self.assertNotEqual(road.endpoints[0], road.endpoints[1])

    def test_accepts_node_sequence(self) -> None:
        settlements, nodes = make_world([(5000, (0.0, 0.0)), (100, (3.0, 4.0))])
        roads = build_roads(settlements, list(nodes.values()), 0.5, 0.0)
        self.assertEqual([r.endpoints for r in roads], [(2, 1)])

    def test_invalid_hub_percent(self) -> None:
        settlements, nodes = make_world([(5000, (0.0, 0.0))])
        for hub_percent in (0.0, -0.1, 1.5):
            with self.assertRaises(ConfigError):
                build_roads(settlements, nodes, hub_percent, 10.0)

    def test_negative_threshold(self) -> None:
        settlements, nodes = make_world([(5000, (0.0, 0.0))])
        with self.assertRaises(ConfigError):
            build_roads(settlements, nodes, 0.5, -1.0)

    def test_missing_node_is_invariant_violation(self) -> None:
        settlements, nodes = make_world([(5000, (0.0, 0.0)), (100, (3.0, 4.0))])
        del nodes[NodeID(2)]
        with self.assertRaises(InternalInvariantViolation):
            build_roads(settlements, nodes, 0.5, 10.0)

    def test_shared_node_is_invariant_violation(self) -> None:
        settlements, nodes = make_world([(900, (0.0, 0.0)), (100, (0.0, 0.0))])
        del nodes[NodeID(2)]
        settlements[1] = Settlement(
            id=SettlementID(2), name="S2", population=100, node_id=NodeID(1)
        )
        with self.assertRaises(InternalInvariantViolation):
            build_roads(settlements, nodes, 0.5, 1.0)

    def test_missing_hub_node_rejected_before_any_road(self) -> None:
        settlements, nodes = make_world([(5000, (0.0, 0.0)), (100, (3.0, 4.0))])
        del nodes[NodeID(1)]
        with self.assertRaises(InternalInvariantViolation) as ctx:
            build_roads(settlements, nodes, 0.5, 10.0)
        self.assertIn("Settlement 1", str(ctx.exception))
